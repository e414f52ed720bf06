"""Secret redaction for webhook URLs in logs, reprs and error messages.

The token segment of a webhook URL grants full posting rights, so it must
never appear in diagnostic output.

Examples:
    >>> sanitize_url("https://discord.com/api/webhooks/123/secret_token")
    'https://discord.com/api/webhooks/123/<REDACTED>'

    >>> sanitize_exception(ValueError("bad url https://discord.com/api/webhooks/1/abc"))
    'ValueError: bad url https://discord.com/api/webhooks/1/<REDACTED>'
"""

from __future__ import annotations

import re
from typing import Final

__all__ = ["REDACTED", "sanitize_exception", "sanitize_url"]

REDACTED: Final[str] = "<REDACTED>"

# https://[canary.|ptb.]discord[app].com/api[/v10]/webhooks/<id>/<token>
_WEBHOOK_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(https?://(?:[\w-]+\.)*discord(?:app)?\.com/api(?:/v\d+)?/webhooks/\d+/)([^/?#\s]+)",
    re.IGNORECASE,
)

# Generic token-bearing query parameters
_TOKEN_IN_QUERY: Final[re.Pattern[str]] = re.compile(
    r"([?&](?:token|api[-_]?key|auth|secret)=)([^&#\s]+)",
    re.IGNORECASE,
)


def sanitize_url(url: str) -> str:
    """Redact webhook tokens from a URL or any text containing one.

    Args:
        url: The URL (or free text) to sanitize

    Returns:
        Text with tokens replaced by ``REDACTED``
    """
    if not url:
        return url
    sanitized = _WEBHOOK_TOKEN_PATTERN.sub(rf"\1{REDACTED}", url)
    return _TOKEN_IN_QUERY.sub(rf"\1{REDACTED}", sanitized)


def sanitize_exception(exc: BaseException) -> str:
    """Render an exception as ``Type: message`` with tokens redacted."""
    return f"{type(exc).__name__}: {sanitize_url(str(exc))}"
