"""Parser configuration for dismark.

A ParseConfig selects which optional rules go into a rule table. It is read
once, when the table is built, and never consulted during a parse.

Usage:
    from dismark import ParseConfig, Parser

    parser = Parser(ParseConfig(masked_links=True))
    doc = parser.parse("[docs](https://example.com)")

Thread Safety:
    ParseConfig is frozen. A config (and any table built from it) can be
    shared freely between threads.

"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable set of feature toggles.

    The field defaults are the configuration regular Discord messages are
    parsed with. Note that ParseConfig() is the default configuration, while a
    config with every field False disables block quotes and mentions too.

    Attributes:
        block_quote: Enable ``>`` and ``>>>`` block quotes
        masked_links: Enable ``[mask](https://url)`` links
        mentions: Enable channel, role, user and @everyone/@here mentions
        forum_markdown: Enable ``#`` headers and ``-``/``*`` bullet lists
            (used by Discord for the first post of forum threads)

    """

    block_quote: bool = True
    masked_links: bool = False
    mentions: bool = True
    forum_markdown: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ParseConfig":
        """Create ParseConfig from a mapping.

        Only keys that are ParseConfig fields are used; unknown keys are
        ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "masked_links": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.masked_links
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: bool(v) for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


DEFAULT_CONFIG: ParseConfig = ParseConfig()

ALL_FEATURES: ParseConfig = ParseConfig(
    block_quote=True,
    masked_links=True,
    mentions=True,
    forum_markdown=True,
)


__all__ = [
    "ALL_FEATURES",
    "DEFAULT_CONFIG",
    "ParseConfig",
]
