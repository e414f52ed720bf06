"""Webhook client configuration schema."""

from __future__ import annotations

import re
from typing import Annotated, Final
from urllib.parse import urlparse, urlunparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_hook._version import __version__

__all__ = ["DEFAULT_TIMEOUT", "DEFAULT_USER_AGENT", "WebhookConfig"]

DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_USER_AGENT: Final[str] = f"discord-hook/{__version__}"

_ALLOWED_DOMAINS: Final[tuple[str, ...]] = (
    "discord.com",
    "discordapp.com",
)
_WEBHOOK_PATH_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^/api(?:/v\d+)?/webhooks/\d+/[^/\s]+/?$",
)


class WebhookConfig(BaseModel):
    """Pydantic schema for a webhook target."""

    model_config = ConfigDict(frozen=True)

    url: Annotated[
        str,
        Field(
            description="Webhook URL created from the channel's integrations menu",
        ),
    ]
    timeout: Annotated[
        float,
        Field(
            description="Seconds to wait for a response before giving up",
            gt=0,
        ),
    ] = DEFAULT_TIMEOUT
    user_agent: Annotated[
        str,
        Field(
            description="User-Agent header sent with every request",
            min_length=1,
        ),
    ] = DEFAULT_USER_AGENT

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Validate webhook URL scheme, domain and path; strip any query string."""
        cleaned = value.strip()
        parsed = urlparse(cleaned)
        if parsed.scheme.lower() not in ("http", "https"):
            msg = "Webhook URL must be an absolute HTTP(S) URL"
            raise ValueError(msg)
        host = (parsed.hostname or "").lower()
        if not any(host == domain or host.endswith(f".{domain}") for domain in _ALLOWED_DOMAINS):
            msg = (
                "Webhook URL must point to discord.com or discordapp.com "
                "(including canary/ptb subdomains)"
            )
            raise ValueError(msg)
        try:
            _ = parsed.port
        except ValueError:
            msg = "Webhook URL has an invalid port"
            raise ValueError(msg) from None
        if not _WEBHOOK_PATH_PATTERN.match(parsed.path):
            msg = "Webhook URL must include /api/webhooks/<id>/<token> path"
            raise ValueError(msg)
        return urlunparse(parsed._replace(query="", fragment=""))
