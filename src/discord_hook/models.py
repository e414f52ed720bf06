"""Data models for outgoing webhook messages and their rich content.

All models are immutable once constructed. Per-value limits (string
lengths, color range) are enforced by Pydantic at construction time;
aggregate limits (embed, field and attachment counts, content length)
are checked by :mod:`discord_hook.builder` so they surface as typed
:class:`~discord_hook.exceptions.MessageValidationError` instances.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Annotated

from multidict import CIMultiDict, CIMultiDictProxy
from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_hook.limits import (
    MAX_AUTHOR_NAME_LENGTH,
    MAX_COLOR,
    MAX_DESCRIPTION_LENGTH,
    MAX_FIELD_NAME_LENGTH,
    MAX_FIELD_VALUE_LENGTH,
    MAX_FOOTER_TEXT_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_USERNAME_LENGTH,
)

__all__ = [
    "AllowedMention",
    "AllowedMentions",
    "Attachment",
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "EmbedMedia",
    "EmbedProvider",
    "Message",
    "WebhookResponse",
]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class EmbedField(_FrozenModel):
    """A name/value pair rendered inside an embed."""

    name: Annotated[str, Field(min_length=1, max_length=MAX_FIELD_NAME_LENGTH)]
    value: Annotated[str, Field(min_length=1, max_length=MAX_FIELD_VALUE_LENGTH)]
    inline: bool = False


class EmbedAuthor(_FrozenModel):
    """Author block shown at the top of an embed."""

    name: Annotated[str, Field(min_length=1, max_length=MAX_AUTHOR_NAME_LENGTH)]
    url: str | None = None
    icon_url: str | None = None


class EmbedFooter(_FrozenModel):
    """Footer block shown at the bottom of an embed."""

    text: Annotated[str, Field(min_length=1, max_length=MAX_FOOTER_TEXT_LENGTH)]
    icon_url: str | None = None


class EmbedMedia(_FrozenModel):
    """Image, thumbnail, or video reference."""

    url: Annotated[str, Field(min_length=1)]
    height: Annotated[int | None, Field(ge=0)] = None
    width: Annotated[int | None, Field(ge=0)] = None


class EmbedProvider(_FrozenModel):
    """Provider attribution for an embed."""

    name: str | None = None
    url: str | None = None


class Embed(_FrozenModel):
    """Structured rich-content block attached to a message."""

    title: Annotated[str | None, Field(max_length=MAX_TITLE_LENGTH)] = None
    description: Annotated[str | None, Field(max_length=MAX_DESCRIPTION_LENGTH)] = None
    url: str | None = None
    color: Annotated[
        int | None,
        Field(
            description="24-bit RGB color serialized as a decimal integer",
            ge=0x000000,
            le=MAX_COLOR,
        ),
    ] = None
    timestamp: str | None = None
    footer: EmbedFooter | None = None
    image: EmbedMedia | None = None
    thumbnail: EmbedMedia | None = None
    video: EmbedMedia | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: tuple[EmbedField, ...] = ()

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, value: int | str | None) -> int | None:
        """Normalize color values, allowing ``#RRGGBB`` and ``0xRRGGBB`` strings."""
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized.startswith("#"):
                normalized = normalized[1:]
            if normalized.startswith("0x"):
                normalized = normalized[2:]
            if not normalized:
                msg = "Embed color string cannot be empty"
                raise ValueError(msg)
            try:
                value = int(normalized, 16)
            except ValueError as exc:  # pragma: no cover - Pydantic attaches context
                msg = f"Invalid embed color string: {value}"
                raise ValueError(msg) from exc
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def normalize_timestamp(cls, value: datetime | str | None) -> str | None:
        """Convert datetimes to ISO-8601 and validate timestamp strings."""
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.isoformat()
        if not isinstance(value, str):  # pyright: ignore[reportUnnecessaryIsInstance]
            return value
        try:
            _ = datetime.fromisoformat(value)
        except ValueError as exc:
            msg = f"Embed timestamp must be ISO-8601: {value}"
            raise ValueError(msg) from exc
        return value


class AllowedMention(StrEnum):
    """Mention types that may trigger notifications."""

    USERS = "users"
    ROLES = "roles"
    EVERYONE = "everyone"


class AllowedMentions(_FrozenModel):
    """Restricts which mentions in the content actually notify.

    An empty ``parse`` suppresses all mentions.
    """

    parse: tuple[AllowedMention, ...] = ()


class Attachment(_FrozenModel):
    """Reference to a local file uploaded alongside a message.

    The file is not touched until the message is sent.
    """

    path: Path
    description: str | None = None
    filename: Annotated[str | None, Field(min_length=1)] = None

    @property
    def resolved_filename(self) -> str:
        """Filename presented to Discord: the override or the path's base name."""
        return self.filename or self.path.name or "attachment"


class Message(_FrozenModel):
    """An outgoing webhook message, normally produced by ``MessageBuilder``."""

    content: str | None = None
    username: Annotated[str | None, Field(min_length=1, max_length=MAX_USERNAME_LENGTH)] = None
    avatar_url: str | None = None
    tts: bool = False
    embeds: tuple[Embed, ...] = ()
    allowed_mentions: AllowedMentions | None = None
    attachments: tuple[Attachment, ...] = ()


@dataclass(slots=True, frozen=True)
class WebhookResponse:
    """Successful HTTP response from the webhook endpoint."""

    status: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # HTTP header names are case-insensitive
        object.__setattr__(self, "headers", CIMultiDictProxy(CIMultiDict(self.headers)))

    def json(self) -> object:
        """Decode the response body; ``None`` for an empty body (e.g. 204)."""
        if not self.body:
            return None
        return json.loads(self.body)  # pyright: ignore[reportAny]
