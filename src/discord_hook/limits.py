"""Structural limits enforced on outgoing webhook messages.

Lengths are counted in Unicode code points, i.e. ``len(str)``.
"""

from typing import Final

MAX_CONTENT_LENGTH: Final[int] = 6000
MAX_EMBEDS: Final[int] = 10
MAX_EMBED_FIELDS: Final[int] = 25
MAX_ATTACHMENTS: Final[int] = 10

MAX_COLOR: Final[int] = 0xFFFFFF

MAX_USERNAME_LENGTH: Final[int] = 80
MAX_TITLE_LENGTH: Final[int] = 256
MAX_DESCRIPTION_LENGTH: Final[int] = 4096
MAX_FIELD_NAME_LENGTH: Final[int] = 256
MAX_FIELD_VALUE_LENGTH: Final[int] = 1024
MAX_FOOTER_TEXT_LENGTH: Final[int] = 2048
MAX_AUTHOR_NAME_LENGTH: Final[int] = 256
