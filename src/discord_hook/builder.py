"""Fluent construction and validation of webhook messages."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Self

from discord_hook.exceptions import (
    ContentTooLongError,
    EmptyMessageError,
    TooManyAttachmentsError,
    TooManyEmbedsError,
    TooManyFieldsError,
)
from discord_hook.limits import (
    MAX_ATTACHMENTS,
    MAX_CONTENT_LENGTH,
    MAX_EMBED_FIELDS,
    MAX_EMBEDS,
)
from discord_hook.models import (
    AllowedMention,
    AllowedMentions,
    Attachment,
    Embed,
    Message,
)

__all__ = ["MessageBuilder", "validate_message_parts"]


def validate_message_parts(
    *,
    content: str | None,
    embeds: Sequence[Embed],
    attachments: Sequence[Attachment],
) -> None:
    """Check aggregate message limits, raising the first violation found.

    Raises:
        ContentTooLongError: Content exceeds ``MAX_CONTENT_LENGTH``
        TooManyEmbedsError: More than ``MAX_EMBEDS`` embeds
        TooManyFieldsError: An embed has more than ``MAX_EMBED_FIELDS`` fields
        TooManyAttachmentsError: More than ``MAX_ATTACHMENTS`` attachments
        EmptyMessageError: Nothing to send
    """
    if content is not None and len(content) > MAX_CONTENT_LENGTH:
        raise ContentTooLongError(len(content), MAX_CONTENT_LENGTH)

    if len(embeds) > MAX_EMBEDS:
        raise TooManyEmbedsError(len(embeds), MAX_EMBEDS)

    for index, embed in enumerate(embeds):
        if len(embed.fields) > MAX_EMBED_FIELDS:
            raise TooManyFieldsError(len(embed.fields), MAX_EMBED_FIELDS, index)

    if len(attachments) > MAX_ATTACHMENTS:
        raise TooManyAttachmentsError(len(attachments), MAX_ATTACHMENTS)

    # Discord rejects a payload without content, embeds or files
    if not content and not embeds and not attachments:
        raise EmptyMessageError


class MessageBuilder:
    """Mutable accumulator producing an immutable :class:`Message`.

    Setters record values without validating; :meth:`build` checks every
    aggregate limit and returns the message or raises the first failure.

    Example:
        >>> message = (
        ...     MessageBuilder()
        ...     .content("Deploy finished")
        ...     .username("CI")
        ...     .embed(Embed(title="Build #42", color=0x57F287))
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._content: str | None = None
        self._username: str | None = None
        self._avatar_url: str | None = None
        self._tts: bool = False
        self._embeds: list[Embed] = []
        self._mentions: list[AllowedMention] | None = None
        self._attachments: list[Attachment] = []

    def content(self, content: str) -> Self:
        """Set the message text."""
        self._content = content
        return self

    def username(self, username: str) -> Self:
        """Override the webhook's display name."""
        self._username = username
        return self

    def avatar_url(self, url: str) -> Self:
        """Override the webhook's avatar image."""
        self._avatar_url = url
        return self

    def tts(self, tts: bool = True) -> Self:
        """Read the message aloud with text-to-speech."""
        self._tts = tts
        return self

    def embed(self, embed: Embed) -> Self:
        """Append one embed."""
        self._embeds.append(embed)
        return self

    def embeds(self, embeds: Iterable[Embed]) -> Self:
        """Append several embeds in order."""
        self._embeds.extend(embeds)
        return self

    def allow_mention(self, mention: AllowedMention) -> Self:
        """Allow one mention type to notify; repeated calls accumulate."""
        if self._mentions is None:
            self._mentions = []
        if mention not in self._mentions:
            self._mentions.append(mention)
        return self

    def suppress_mentions(self) -> Self:
        """Send an empty allow-list so no mention in the content notifies."""
        self._mentions = []
        return self

    def attachment(self, attachment: Attachment) -> Self:
        """Append one file to upload with the message."""
        self._attachments.append(attachment)
        return self

    def attachments(self, attachments: Iterable[Attachment]) -> Self:
        """Append several files in order."""
        self._attachments.extend(attachments)
        return self

    def build(self) -> Message:
        """Validate accumulated values and produce a :class:`Message`.

        Returns:
            Immutable message ready to send

        Raises:
            MessageValidationError: First aggregate limit violated
            pydantic.ValidationError: A per-value constraint is violated
        """
        validate_message_parts(
            content=self._content,
            embeds=self._embeds,
            attachments=self._attachments,
        )

        allowed_mentions = None
        if self._mentions is not None:
            allowed_mentions = AllowedMentions(parse=tuple(self._mentions))

        return Message(
            content=self._content,
            username=self._username,
            avatar_url=self._avatar_url,
            tts=self._tts,
            embeds=tuple(self._embeds),
            allowed_mentions=allowed_mentions,
            attachments=tuple(self._attachments),
        )
