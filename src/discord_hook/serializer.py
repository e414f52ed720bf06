"""Conversion of messages into webhook request bodies.

A message without attachments is sent as a single JSON object. With
attachments the same object travels in a ``payload_json`` form part,
followed by one ``files[i]`` part per file, and its ``attachments``
array references each file by index.
"""

from __future__ import annotations

import json
import mimetypes
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final

import aiohttp

from discord_hook.builder import validate_message_parts
from discord_hook.exceptions import AttachmentReadError
from discord_hook.models import Attachment, Embed, Message

__all__ = [
    "FilePart",
    "WebhookRequest",
    "build_form_data",
    "build_request",
    "encode_json",
    "load_attachment",
    "message_payload",
]

JSON_CONTENT_TYPE: Final[str] = "application/json"
_DEFAULT_FILE_CONTENT_TYPE: Final[str] = "application/octet-stream"


@dataclass(slots=True, frozen=True)
class FilePart:
    """Attachment contents resolved for upload."""

    field_name: str
    filename: str
    content: bytes
    content_type: str


@dataclass(slots=True, frozen=True)
class WebhookRequest:
    """Serialized request body: the JSON payload plus any file parts."""

    payload: Mapping[str, object]
    files: tuple[FilePart, ...] = ()

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)


def _embed_payload(embed: Embed) -> dict[str, object]:
    data: dict[str, object] = embed.model_dump(mode="json", exclude_none=True, exclude={"fields"})
    if embed.fields:
        data["fields"] = [
            field.model_dump(mode="json", exclude={"inline"} if not field.inline else None)
            for field in embed.fields
        ]
    return data


def message_payload(
    message: Message,
    attachments: Sequence[Attachment] = (),
) -> dict[str, object]:
    """Build the JSON object for a message.

    Unset optional values are omitted rather than sent as ``null``; ``tts``
    is only included when true and ``embeds`` only when non-empty.

    Args:
        message: Message to serialize
        attachments: Files uploaded with the message, in ``files[i]`` order

    Returns:
        JSON-compatible mapping
    """
    payload: dict[str, object] = message.model_dump(
        mode="json",
        exclude_none=True,
        exclude={"embeds", "attachments", "tts", "allowed_mentions"},
    )
    if message.tts:
        payload["tts"] = True
    if message.embeds:
        payload["embeds"] = [_embed_payload(embed) for embed in message.embeds]
    if message.allowed_mentions is not None:
        payload["allowed_mentions"] = {
            "parse": [mention.value for mention in message.allowed_mentions.parse],
        }
    if attachments:
        metadata: list[dict[str, object]] = []
        for index, attachment in enumerate(attachments):
            entry: dict[str, object] = {"id": index, "filename": attachment.resolved_filename}
            if attachment.description is not None:
                entry["description"] = attachment.description
            metadata.append(entry)
        payload["attachments"] = metadata
    return payload


def load_attachment(index: int, attachment: Attachment) -> FilePart:
    """Read an attachment from disk into a ``files[index]`` part.

    Raises:
        AttachmentReadError: The file is missing, unreadable, or a directory
    """
    try:
        content = attachment.path.read_bytes()
    except OSError as exc:
        raise AttachmentReadError(attachment.path, exc) from exc

    filename = attachment.resolved_filename
    content_type, _ = mimetypes.guess_type(filename)
    return FilePart(
        field_name=f"files[{index}]",
        filename=filename,
        content=content,
        content_type=content_type or _DEFAULT_FILE_CONTENT_TYPE,
    )


def build_request(
    message: Message,
    attachments: Sequence[Attachment] = (),
) -> WebhookRequest:
    """Validate a message and resolve everything needed to send it.

    The message's own attachments come first, followed by ``attachments``.
    Limits are checked before any file is read.

    Raises:
        MessageValidationError: A message limit is violated
        AttachmentReadError: An attachment file cannot be read
    """
    all_attachments = (*message.attachments, *attachments)
    validate_message_parts(
        content=message.content,
        embeds=message.embeds,
        attachments=all_attachments,
    )
    files = tuple(
        load_attachment(index, attachment) for index, attachment in enumerate(all_attachments)
    )
    return WebhookRequest(
        payload=message_payload(message, all_attachments),
        files=files,
    )


def encode_json(payload: Mapping[str, object]) -> bytes:
    """Encode a payload as compact UTF-8 JSON."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_form_data(request: WebhookRequest) -> aiohttp.FormData:
    """Encode a request as ``multipart/form-data``."""
    form = aiohttp.FormData()
    form.add_field(
        "payload_json",
        encode_json(request.payload).decode("utf-8"),
        content_type=JSON_CONTENT_TYPE,
    )
    for part in request.files:
        form.add_field(
            part.field_name,
            part.content,
            filename=part.filename,
            content_type=part.content_type,
        )
    return form
