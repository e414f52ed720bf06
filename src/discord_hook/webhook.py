"""Webhook client: serializes messages and delivers them in a single POST."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Final, override

import aiohttp
from pydantic import ValidationError

from discord_hook.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, WebhookConfig
from discord_hook.exceptions import (
    InvalidWebhookUrlError,
    WebhookNetworkError,
    WebhookStatusError,
    WebhookTimeoutError,
)
from discord_hook.models import Attachment, Message, WebhookResponse
from discord_hook.sanitization import sanitize_exception, sanitize_url
from discord_hook.serializer import WebhookRequest, build_request
from discord_hook.transport import AIOHTTPTransport, HTTPTransport

__all__ = ["Webhook"]

_SUCCESS_STATUSES: Final[range] = range(200, 205)
_RATE_LIMITED: Final[int] = 429


def _validated_config(url: str, timeout: float, user_agent: str) -> WebhookConfig:
    if timeout <= 0:
        msg = "timeout must be positive"
        raise ValueError(msg)
    try:
        return WebhookConfig(url=url, timeout=timeout, user_agent=user_agent)
    except ValidationError as exc:
        error = exc.errors()[0]
        if error["loc"] and error["loc"][0] == "url":
            ctx = error.get("ctx") or {}
            reason = str(ctx.get("error", error["msg"]))  # pyright: ignore[reportAny]
            # Suppress the chained ValidationError: it echoes the URL token
            raise InvalidWebhookUrlError(reason) from None
        raise


class Webhook:
    """Client for a single webhook URL.

    Holds only immutable configuration, so one instance can serve
    concurrent sends. Every send is a single attempt: nothing is retried
    and failures are raised to the caller rather than logged.

    Example:
        >>> webhook = Webhook("https://discord.com/api/webhooks/123/token")
        >>> message = MessageBuilder().content("hello").build()
        >>> await webhook.send(message)
    """

    __slots__ = ("_config", "_logger", "_transport")

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: HTTPTransport | None = None,
    ) -> None:
        """Initialize the webhook client.

        Args:
            url: Discord webhook URL (``/api/webhooks/<id>/<token>``)
            timeout: Seconds to wait for a response
            user_agent: User-Agent header value
            transport: HTTP transport; defaults to :class:`AIOHTTPTransport`

        Raises:
            InvalidWebhookUrlError: If the URL is not a webhook URL
            ValueError: If the timeout is not positive
        """
        self._config: WebhookConfig = _validated_config(url, timeout, user_agent)
        self._transport: HTTPTransport = transport or AIOHTTPTransport()
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def config(self) -> WebhookConfig:
        return self._config

    def with_timeout(self, seconds: float) -> Webhook:
        """Return a copy of this client using a different timeout."""
        return Webhook(
            self._config.url,
            seconds,
            user_agent=self._config.user_agent,
            transport=self._transport,
        )

    async def send(
        self,
        message: Message,
        *,
        wait: bool = False,
        thread_id: int | str | None = None,
    ) -> WebhookResponse:
        """Send a message as JSON, or as multipart if it carries attachments.

        Args:
            message: Message to deliver
            wait: Ask Discord to return the created message in the body
            thread_id: Post into this thread of the webhook's channel

        Returns:
            Response for a 200-204 status

        Raises:
            MessageValidationError: The message violates a limit
            AttachmentReadError: An attachment cannot be read
            WebhookTimeoutError: No response within the timeout
            WebhookNetworkError: Transport failure
            WebhookStatusError: Any other HTTP status
        """
        # File reads run off the event loop
        request = await asyncio.to_thread(build_request, message)
        return await self._execute(request, wait=wait, thread_id=thread_id)

    async def send_with_attachments(
        self,
        message: Message,
        attachments: Sequence[Attachment],
        *,
        wait: bool = False,
        thread_id: int | str | None = None,
    ) -> WebhookResponse:
        """Send a message with files uploaded as a multipart body.

        The attachment count is checked and every file is read before any
        network activity.

        Raises:
            TooManyAttachmentsError: More than ten attachments in total
            AttachmentReadError: An attachment cannot be read

        See :meth:`send` for the remaining errors.
        """
        request = await asyncio.to_thread(build_request, message, attachments)
        return await self._execute(request, wait=wait, thread_id=thread_id)

    async def _execute(
        self,
        request: WebhookRequest,
        *,
        wait: bool,
        thread_id: int | str | None,
    ) -> WebhookResponse:
        params: dict[str, str] = {}
        if wait:
            params["wait"] = "true"
        if thread_id is not None:
            params["thread_id"] = str(thread_id)
        headers = {"User-Agent": self._config.user_agent}

        self._logger.debug(
            "Sending webhook request to %s (multipart=%s, files=%d)",
            sanitize_url(self.url),
            request.is_multipart,
            len(request.files),
        )

        try:
            async with asyncio.timeout(self.timeout):
                response = await self._transport.post(
                    self.url,
                    request,
                    params=params,
                    headers=headers,
                    timeout=self.timeout,
                )
        except TimeoutError as exc:
            raise WebhookTimeoutError(self.timeout) from exc
        except (aiohttp.ClientError, OSError) as exc:
            msg = f"Webhook request failed: {sanitize_exception(exc)}"
            raise WebhookNetworkError(msg, original_error=exc) from exc

        if response.status in _SUCCESS_STATUSES:
            self._logger.debug("Webhook delivered (status=%d)", response.status)
            return response

        raise WebhookStatusError(
            response.status,
            response.body,
            retry_after=self._retry_after(response),
        )

    def _retry_after(self, response: WebhookResponse) -> float | None:
        """Extract the rate limit delay Discord reports on a 429 response."""
        if response.status != _RATE_LIMITED:
            return None
        try:
            body: object = json.loads(response.body)
        except ValueError:
            body = None
        if isinstance(body, dict):
            value: object = body.get("retry_after")  # pyright: ignore[reportUnknownMemberType]
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
        header = response.headers.get("Retry-After")
        if not header:
            return None
        try:
            return float(header)
        except ValueError:
            return None

    @override
    def __repr__(self) -> str:
        return f"Webhook(url='{sanitize_url(self.url)}', timeout={self.timeout})"
