"""Rule table for the Discord message parser.

A rule pairs a compiled pattern with an action. The parser tests rules in
table order against the unparsed window and runs the action of the first
one that matches; the action turns the match into a node plus, optionally,
a child span to parse into that node and an explicit resume point.

Order is priority. An earlier rule always wins over a later one on the same
window, even if the later rule would match a longer prefix, so the order of
``build_rule_table`` is what disambiguates the dialect:

    soft hyphen, escape, block quote*, code block, inline code, spoiler,
    masked link*, <url>, url, custom emoji, named emoji, emoticon,
    mentions*, timestamp, header* and list*, newline, bold, underline,
    italics, strikethrough, text

(* optional, see ParseConfig)

Thread Safety:
Rules and RuleTables are frozen and hold no per-parse state. One table can
serve any number of concurrent parses.

"""

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from dismark import patterns
from dismark.config import DEFAULT_CONFIG, ParseConfig
from dismark.nodes import (
    URL,
    BlockQuote,
    Bold,
    BulletList,
    ChannelMention,
    Code,
    CustomEmoji,
    Header,
    Italics,
    Node,
    RoleMention,
    SpecialMention,
    Spoiler,
    Strikethrough,
    Text,
    Timestamp,
    Underline,
    UserMention,
)
from dismark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RuleResult:
    """Outcome of a rule action.

    Attributes:
        node: Node to append to the current parent
        child_span: ``(start, end)`` relative to the window, parsed into
            ``node``'s children; None for leaves
        match_end: Where parsing resumes, relative to the window. None means
            the end of the whole match. Rules whose pattern consumes a
            trailing lookahead character set this to give it back.

    """

    node: Node
    child_span: tuple[int, int] | None = None
    match_end: int | None = None


type RuleAction = Callable[[re.Match[str]], RuleResult]


@dataclass(frozen=True, slots=True)
class Rule:
    """A single recognizable syntax construct.

    Attributes:
        name: Identifier used in logs and errors
        pattern: Compiled pattern, applied with ``match`` at window start
        action: Converts a successful match into a RuleResult
        block: Only eligible at the start of a line, i.e. before anything
            was matched or right after a match that ended in a newline
        block_quote: Opens a block-quote region; skipped while the window
            starts inside the region of a previous block quote

    """

    name: str
    pattern: re.Pattern[str]
    action: RuleAction
    block: bool = False
    block_quote: bool = False


@dataclass(frozen=True, slots=True)
class RuleTable:
    """Ordered, immutable list of rules.

    Built once per configuration with ``build_rule_table`` and reused for
    every parse.

    """

    rules: tuple[Rule, ...]
    config: ParseConfig | None = None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def names(self) -> tuple[str, ...]:
        """Rule names in priority order."""
        return tuple(rule.name for rule in self.rules)


# =============================================================================
# Actions
# =============================================================================


def _soft_hyphen(match: re.Match[str]) -> RuleResult:
    return RuleResult(Text(""))


def _escape(match: re.Match[str]) -> RuleResult:
    return RuleResult(Text(match.group(1)))


def _block_quote(match: re.Match[str]) -> RuleResult:
    # ">>> " with nothing after it leaves both content groups empty
    group = 1 if match.group(1) else 2
    if match.start(group) == -1:
        return RuleResult(BlockQuote())
    return RuleResult(BlockQuote(), child_span=match.span(group))


def _code_block(match: re.Match[str]) -> RuleResult:
    return RuleResult(Code(match.group(3), language=match.group(1)))


def _code_inline(match: re.Match[str]) -> RuleResult:
    return RuleResult(Code(match.group(2) or match.group(1) or ""))


def _spoiler(match: re.Match[str]) -> RuleResult:
    return RuleResult(Spoiler(), child_span=match.span(1))


def _masked_link(match: re.Match[str]) -> RuleResult:
    mask = match.group(1)[1:-1]
    return RuleResult(URL(match.group(2), mask=mask))


def _url(match: re.Match[str]) -> RuleResult:
    return RuleResult(URL(match.group(1)))


def _custom_emoji(match: re.Match[str]) -> RuleResult:
    return RuleResult(
        CustomEmoji(animated=match.group(1) is not None, name=match.group(2), id=match.group(3))
    )


def _named_emoji(match: re.Match[str]) -> RuleResult:
    # Shortcodes are left as written; no emoji table is bundled
    return RuleResult(Text(match.group(0)))


def _emoticon(match: re.Match[str]) -> RuleResult:
    return RuleResult(Text(match.group(1)))


def _channel_mention(match: re.Match[str]) -> RuleResult:
    return RuleResult(ChannelMention(match.group(1)))


def _role_mention(match: re.Match[str]) -> RuleResult:
    return RuleResult(RoleMention(match.group(1)))


def _user_mention(match: re.Match[str]) -> RuleResult:
    return RuleResult(UserMention(match.group(1)))


def _special_mention(match: re.Match[str]) -> RuleResult:
    return RuleResult(SpecialMention(match.group(1)))


def _timestamp(match: re.Match[str]) -> RuleResult:
    return RuleResult(Timestamp(match.group(1), suffix=match.group(2)))


def _header(match: re.Match[str]) -> RuleResult:
    return RuleResult(
        Header(len(match.group(2))),
        child_span=match.span(3),
        match_end=match.end(1),
    )


def _list_item(match: re.Match[str]) -> RuleResult:
    level = 2 if match.group(1) else 1
    return RuleResult(
        BulletList(level=level, includes_newline=bool(match.group(3))),
        child_span=match.span(2),
    )


def _newline(match: re.Match[str]) -> RuleResult:
    return RuleResult(Text("\n"))


def _bold(match: re.Match[str]) -> RuleResult:
    return RuleResult(Bold(), child_span=match.span(2), match_end=match.end(1))


def _underline(match: re.Match[str]) -> RuleResult:
    return RuleResult(Underline(), child_span=match.span(2), match_end=match.end(1))


def _italics(match: re.Match[str]) -> RuleResult:
    # Groups 1-2 are the _underscore_ form, 3-4 the *asterisk* form
    content = 4 if match.group(4) else 2
    total = 3 if match.group(3) else 1
    return RuleResult(Italics(), child_span=match.span(content), match_end=match.end(total))


def _strikethrough(match: re.Match[str]) -> RuleResult:
    return RuleResult(Strikethrough(), child_span=match.span(1))


def _text(match: re.Match[str]) -> RuleResult:
    return RuleResult(Text(match.group(1)), match_end=match.end(1))


# =============================================================================
# Table construction
# =============================================================================


def build_rule_table(config: ParseConfig | None = None) -> RuleTable:
    """Build the ordered rule table for a configuration.

    Disabled features simply leave their rules out. Construction never
    fails, and the resulting table always ends with the catch-all text rule.

    Args:
        config: Feature toggles; None means DEFAULT_CONFIG

    Returns:
        Immutable RuleTable

    Example:
        >>> table = build_rule_table()
        >>> table.names()[:3]
        ('soft_hyphen', 'escape', 'block_quote')

    """
    if config is None:
        config = DEFAULT_CONFIG

    rules: list[Rule] = [
        Rule("soft_hyphen", patterns.SOFT_HYPHEN, _soft_hyphen),
        Rule("escape", patterns.ESCAPE, _escape),
    ]
    if config.block_quote:
        rules.append(
            Rule("block_quote", patterns.BLOCK_QUOTE, _block_quote, block=True, block_quote=True)
        )
    rules += [
        Rule("code_block", patterns.CODE_BLOCK, _code_block),
        Rule("code_inline", patterns.CODE_INLINE, _code_inline),
        Rule("spoiler", patterns.SPOILER, _spoiler),
    ]
    if config.masked_links:
        rules.append(Rule("masked_link", patterns.MASKED_LINK, _masked_link))
    rules += [
        Rule("url_no_embed", patterns.URL_NO_EMBED, _url),
        Rule("url", patterns.URL, _url),
        Rule("custom_emoji", patterns.CUSTOM_EMOJI, _custom_emoji),
        Rule("named_emoji", patterns.NAMED_EMOJI, _named_emoji),
        Rule("emoticon", patterns.EMOTICON, _emoticon),
    ]
    if config.mentions:
        rules += [
            Rule("channel_mention", patterns.CHANNEL_MENTION, _channel_mention),
            Rule("role_mention", patterns.ROLE_MENTION, _role_mention),
            Rule("user_mention", patterns.USER_MENTION, _user_mention),
            Rule("special_mention", patterns.SPECIAL_MENTION, _special_mention),
        ]
    rules.append(Rule("timestamp", patterns.TIMESTAMP, _timestamp))
    if config.forum_markdown:
        rules += [
            Rule("header", patterns.HEADER, _header, block=True),
            Rule("list_item", patterns.LIST_ITEM, _list_item),
        ]
    rules += [
        Rule("newline", patterns.NEWLINE, _newline, block=True),
        Rule("bold", patterns.BOLD, _bold),
        Rule("underline", patterns.UNDERLINE, _underline),
        Rule("italics", patterns.ITALICS, _italics),
        Rule("strikethrough", patterns.STRIKETHROUGH, _strikethrough),
        Rule("text", patterns.TEXT, _text),
    ]

    logger.debug("Built rule table with %d rules for %r", len(rules), config)
    return RuleTable(rules=tuple(rules), config=config)


__all__ = [
    "Rule",
    "RuleAction",
    "RuleResult",
    "RuleTable",
    "build_rule_table",
]
