"""discord-hook - send messages, embeds and files to Discord webhooks.

This package provides immutable message models, a validating
``MessageBuilder`` and an async ``Webhook`` client that posts a message
as JSON or multipart and maps the outcome to a typed result.
"""

from discord_hook._version import __version__
from discord_hook.builder import MessageBuilder
from discord_hook.config import WebhookConfig
from discord_hook.exceptions import (
    AttachmentReadError,
    ContentTooLongError,
    EmptyMessageError,
    InvalidWebhookUrlError,
    MessageValidationError,
    TooManyAttachmentsError,
    TooManyEmbedsError,
    TooManyFieldsError,
    WebhookError,
    WebhookNetworkError,
    WebhookStatusError,
    WebhookTimeoutError,
)
from discord_hook.models import (
    AllowedMention,
    AllowedMentions,
    Attachment,
    Embed,
    EmbedAuthor,
    EmbedField,
    EmbedFooter,
    EmbedMedia,
    EmbedProvider,
    Message,
    WebhookResponse,
)
from discord_hook.transport import AIOHTTPTransport, HTTPTransport
from discord_hook.webhook import Webhook

__all__ = [
    "__version__",
    # Client
    "AIOHTTPTransport",
    "HTTPTransport",
    "Webhook",
    "WebhookConfig",
    # Models
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
    "MessageBuilder",
    "WebhookResponse",
    # Errors
    "AttachmentReadError",
    "ContentTooLongError",
    "EmptyMessageError",
    "InvalidWebhookUrlError",
    "MessageValidationError",
    "TooManyAttachmentsError",
    "TooManyEmbedsError",
    "TooManyFieldsError",
    "WebhookError",
    "WebhookNetworkError",
    "WebhookStatusError",
    "WebhookTimeoutError",
]
