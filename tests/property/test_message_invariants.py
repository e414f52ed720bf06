"""Property-based tests for message limits and serialization using Hypothesis.

These tests verify properties that must hold for all inputs:
    - Content, embed and field counts fail exactly above their limits
    - Serialized payloads never contain null values
    - Webhook tokens never survive URL sanitization
"""

from __future__ import annotations

from hypothesis import given, settings, strategies as st

from discord_hook.builder import MessageBuilder
from discord_hook.exceptions import ContentTooLongError, TooManyEmbedsError, TooManyFieldsError
from discord_hook.limits import MAX_CONTENT_LENGTH, MAX_EMBED_FIELDS, MAX_EMBEDS
from discord_hook.models import AllowedMention, Embed, EmbedAuthor, EmbedField, EmbedFooter, EmbedMedia
from discord_hook.sanitization import REDACTED, sanitize_url
from discord_hook.serializer import message_payload

_optional_text = st.none() | st.text(min_size=1, max_size=40)
_optional_url = st.none() | st.just("https://example.com/resource.png")

_fields = st.builds(
    EmbedField,
    name=st.text(min_size=1, max_size=20),
    value=st.text(min_size=1, max_size=20),
    inline=st.booleans(),
)

_embeds = st.builds(
    Embed,
    title=_optional_text,
    description=_optional_text,
    url=_optional_url,
    color=st.none() | st.integers(min_value=0, max_value=0xFFFFFF),
    footer=st.none() | st.builds(EmbedFooter, text=st.text(min_size=1, max_size=20), icon_url=_optional_url),
    image=st.none() | st.builds(EmbedMedia, url=st.just("https://example.com/i.png")),
    thumbnail=st.none() | st.builds(EmbedMedia, url=st.just("https://example.com/t.png")),
    author=st.none() | st.builds(EmbedAuthor, name=st.text(min_size=1, max_size=20), url=_optional_url),
    fields=st.lists(_fields, max_size=5).map(tuple),
)


def _contains_none(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, dict):
        return any(_contains_none(item) for item in value.values())  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
    if isinstance(value, list):
        return any(_contains_none(item) for item in value)  # pyright: ignore[reportUnknownVariableType]
    return False


class TestLimitBoundaries:
    """Aggregate limits fail exactly above the boundary."""

    @settings(max_examples=25)
    @given(st.integers(min_value=MAX_CONTENT_LENGTH + 1, max_value=MAX_CONTENT_LENGTH * 2), st.characters())
    def test_long_content_always_rejected(self, length: int, char: str) -> None:
        """Property: content longer than the limit never builds."""
        builder = MessageBuilder().content(char * length)

        try:
            _ = builder.build()
        except ContentTooLongError as exc:
            assert exc.length == length
        else:
            raise AssertionError("content over the limit was accepted")

    @settings(max_examples=25)
    @given(st.integers(min_value=1, max_value=MAX_CONTENT_LENGTH), st.characters())
    def test_content_within_limit_accepted(self, length: int, char: str) -> None:
        """Property: any non-empty content up to the limit builds."""
        message = MessageBuilder().content(char * length).build()

        assert message.content is not None
        assert len(message.content) == length

    @given(st.integers(min_value=0, max_value=MAX_EMBEDS * 2))
    def test_embed_count(self, count: int) -> None:
        """Property: embed count succeeds up to 10 and fails above."""
        builder = MessageBuilder().content("x").embeds([Embed() for _ in range(count)])

        if count <= MAX_EMBEDS:
            assert len(builder.build().embeds) == count
        else:
            try:
                _ = builder.build()
            except TooManyEmbedsError:
                pass
            else:
                raise AssertionError("too many embeds were accepted")

    @given(st.integers(min_value=0, max_value=MAX_EMBED_FIELDS * 2))
    def test_field_count(self, count: int) -> None:
        """Property: field count succeeds up to 25 and fails above."""
        embed = Embed(fields=tuple(EmbedField(name="n", value="v") for _ in range(count)))
        builder = MessageBuilder().content("x").embed(embed)

        if count <= MAX_EMBED_FIELDS:
            assert len(builder.build().embeds[0].fields) == count
        else:
            try:
                _ = builder.build()
            except TooManyFieldsError:
                pass
            else:
                raise AssertionError("too many fields were accepted")


class TestSerializationInvariants:
    """Serialized payloads match the remote contract."""

    @given(
        content=_optional_text,
        username=_optional_text,
        avatar_url=_optional_url,
        tts=st.booleans(),
        embeds=st.lists(_embeds, min_size=1, max_size=3),
        mentions=st.none() | st.lists(st.sampled_from(AllowedMention)),
    )
    def test_payload_never_contains_null(
        self,
        content: str | None,
        username: str | None,
        avatar_url: str | None,
        tts: bool,
        embeds: list[Embed],
        mentions: list[AllowedMention] | None,
    ) -> None:
        """Property: unset optionals are omitted, never sent as null."""
        builder = MessageBuilder().tts(tts).embeds(embeds)
        if content is not None:
            _ = builder.content(content)
        if username is not None:
            _ = builder.username(username)
        if avatar_url is not None:
            _ = builder.avatar_url(avatar_url)
        if mentions is not None:
            _ = builder.suppress_mentions()
            for mention in mentions:
                _ = builder.allow_mention(mention)

        payload = message_payload(builder.build())

        assert not _contains_none(payload)
        assert ("content" in payload) == (content is not None)
        assert ("username" in payload) == (username is not None)
        assert ("tts" in payload) == tts
        assert ("allowed_mentions" in payload) == (mentions is not None)

    @given(_embeds)
    def test_color_is_plain_integer(self, embed: Embed) -> None:
        """Property: color is serialized as the same decimal integer."""
        payload = message_payload(MessageBuilder().embed(embed).build())
        serialized = payload["embeds"]

        assert isinstance(serialized, list)
        if embed.color is None:
            assert "color" not in serialized[0]
        else:
            assert serialized[0]["color"] == embed.color


@st.composite
def discord_webhook_url(draw: st.DrawFn) -> str:
    """Generate Discord webhook URLs with random tokens."""
    webhook_id = draw(st.integers(min_value=1, max_value=999999999999999999))
    token = draw(st.text(alphabet=st.characters(min_codepoint=65, max_codepoint=122), min_size=10, max_size=100))
    return f"https://discord.com/api/webhooks/{webhook_id}/{token}"


class TestSanitizeUrlInvariants:
    """Property-based tests for URL sanitization."""

    @given(discord_webhook_url())
    def test_webhook_token_always_redacted(self, url: str) -> None:
        """Property: webhook tokens are always redacted."""
        sanitized = sanitize_url(url)

        assert sanitized.endswith(REDACTED)
        assert sanitized.rsplit("/", 1)[0] == url.rsplit("/", 1)[0]

    @given(st.text())
    def test_sanitize_url_never_crashes(self, text: str) -> None:
        """Property: sanitize_url handles any string."""
        _ = sanitize_url(text)
