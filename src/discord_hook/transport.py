"""HTTP transport abstraction for webhook delivery.

``Webhook`` talks to the network only through the :class:`HTTPTransport`
protocol, so tests and callers can substitute their own implementation.
The default :class:`AIOHTTPTransport` uses aiohttp and performs exactly one
request per call; it never retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import aiohttp

from discord_hook.models import WebhookResponse
from discord_hook.serializer import (
    JSON_CONTENT_TYPE,
    WebhookRequest,
    build_form_data,
    encode_json,
)

__all__ = ["AIOHTTPTransport", "HTTPTransport"]


@runtime_checkable
class HTTPTransport(Protocol):
    """Protocol for issuing a single webhook POST."""

    async def post(
        self,
        url: str,
        request: WebhookRequest,
        *,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float,
    ) -> WebhookResponse:
        """Send one HTTP POST and return the response, whatever its status.

        Args:
            url: Target webhook URL
            request: Serialized JSON or multipart body
            params: Query string parameters
            headers: Extra request headers
            timeout: Request timeout in seconds (keyword-only)

        Returns:
            Response status, body text and headers

        Raises:
            TimeoutError: If the request exceeds ``timeout``
            aiohttp.ClientError: For connection, DNS or TLS failures
        """
        ...


class AIOHTTPTransport:
    """aiohttp-backed transport.

    Uses the given session when one is supplied (the caller owns its
    lifecycle); otherwise a short-lived session is opened for each request.

    Example:
        >>> async with aiohttp.ClientSession() as session:
        ...     webhook = Webhook(url, transport=AIOHTTPTransport(session))
        ...     await webhook.send(message)
    """

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self._session: aiohttp.ClientSession | None = session
        self._logger: logging.Logger = logging.getLogger(__name__)

    async def post(
        self,
        url: str,
        request: WebhookRequest,
        *,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float,
    ) -> WebhookResponse:
        if self._session is not None:
            return await self._post(self._session, url, request, params=params, headers=headers, timeout=timeout)

        async with aiohttp.ClientSession() as session:
            return await self._post(session, url, request, params=params, headers=headers, timeout=timeout)

    async def _post(
        self,
        session: aiohttp.ClientSession,
        url: str,
        request: WebhookRequest,
        *,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float,
    ) -> WebhookResponse:
        request_headers = dict(headers)
        data: aiohttp.FormData | bytes
        if request.is_multipart:
            # aiohttp sets the multipart content type with its boundary
            data = build_form_data(request)
        else:
            data = encode_json(request.payload)
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        async with session.post(
            url,
            data=data,
            params=dict(params),
            headers=request_headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as response:
            raw = await response.read()
            self._logger.debug("Received HTTP %d (%d bytes)", response.status, len(raw))
            return WebhookResponse(
                status=response.status,
                body=raw.decode("utf-8", errors="replace"),
                headers=response.headers,
            )
