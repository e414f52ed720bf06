"""Error taxonomy for webhook message construction and delivery."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

__all__ = [
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


class WebhookError(Exception):
    """Base exception for all webhook errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportAny] # Flexible error context
        """Initialize WebhookError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message: str = message
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportAny] # Flexible error context


class InvalidWebhookUrlError(WebhookError, ValueError):
    """Raised when a webhook URL fails shape or path validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid webhook URL: {reason}", {"reason": reason})
        self.reason: str = reason


class MessageValidationError(WebhookError, ValueError):
    """Base exception for message structure violations detected before sending."""


class ContentTooLongError(MessageValidationError):
    """Raised when message content exceeds the character limit."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Content too long: {length} characters (max {limit})",
            {"length": length, "limit": limit},
        )
        self.length: int = length
        self.limit: int = limit


class TooManyEmbedsError(MessageValidationError):
    """Raised when a message carries more embeds than allowed."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"Too many embeds: {count} (max {limit})",
            {"count": count, "limit": limit},
        )
        self.count: int = count
        self.limit: int = limit


class TooManyFieldsError(MessageValidationError):
    """Raised when a single embed carries more fields than allowed."""

    def __init__(self, count: int, limit: int, embed_index: int) -> None:
        super().__init__(
            f"Too many fields in embed {embed_index}: {count} (max {limit})",
            {"count": count, "limit": limit, "embed_index": embed_index},
        )
        self.count: int = count
        self.limit: int = limit
        self.embed_index: int = embed_index


class TooManyAttachmentsError(MessageValidationError):
    """Raised when more attachments are supplied than a single send allows."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"Too many attachments: {count} (max {limit})",
            {"count": count, "limit": limit},
        )
        self.count: int = count
        self.limit: int = limit


class EmptyMessageError(MessageValidationError):
    """Raised when a message has no content, embeds, or attachments."""

    def __init__(self) -> None:
        super().__init__("Message requires content, embeds, or attachments")


class AttachmentReadError(WebhookError):
    """Raised when an attachment file cannot be read.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: Path, error: OSError) -> None:
        detail = error.strerror or str(error)
        super().__init__(
            f"Failed to read attachment {path}: {detail}",
            {"path": str(path), "errno": error.errno},
        )
        self.path: Path = path
        self.original_error: OSError = error


class WebhookNetworkError(WebhookError):
    """Raised on transport-level failures (DNS, refused connection, TLS)."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error: Exception | None = original_error


class WebhookTimeoutError(WebhookError, TimeoutError):
    """Raised when no response arrives within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(
            f"Webhook request timed out after {timeout:.1f}s",
            {"timeout": timeout},
        )
        self.timeout: float = timeout


class WebhookStatusError(WebhookError):
    """Raised when the webhook endpoint responds with a non-success status.

    The raw response body is preserved in ``body`` so callers can inspect
    Discord's validation errors (e.g. a malformed embed).
    """

    def __init__(
        self,
        status: int,
        body: str,
        *,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(
            f"Webhook responded with HTTP {status}",
            {"status": status},
        )
        self.status: int = status
        self.body: str = body
        self.retry_after: float | None = retry_after

    def _decoded_body(self) -> dict[str, object]:
        try:
            decoded: object = json.loads(self.body)
        except ValueError:
            return {}
        if not isinstance(decoded, dict):
            return {}
        return {str(key): value for key, value in decoded.items()}  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]

    @property
    def error_message(self) -> str | None:
        """Top-level ``message`` from a JSON error body, if any."""
        message = self._decoded_body().get("message")
        return message if isinstance(message, str) else None

    @property
    def error_code(self) -> int | None:
        """Discord-specific ``code`` from a JSON error body, if any."""
        code = self._decoded_body().get("code")
        if isinstance(code, int) and not isinstance(code, bool):
            return code
        if isinstance(code, str) and code.isdigit():
            return int(code)
        return None
