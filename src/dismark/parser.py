"""Stack-driven parser for Discord messages.

The parser keeps an explicit last-in-first-out stack of pending spans, each
one a slice of the source plus the node its results attach to. Popping a
span runs the first matching rule on it; the rule's node is appended to the
span's parent, the remainder of the span is pushed back as a sibling span,
and the rule's child span (if any) is pushed on top so it is parsed first.
Appending in that order yields children in source order without any
reordering afterwards.

Two pieces of state carry over between iterations:

- ``last_capture``: the text consumed by the previous match. Block rules
  only fire when it is empty or ends with a newline.
- ``block_quote_end``: end offset of the most recent block quote's content.
  Block-quote rules are skipped while a window starts before it, so quotes
  never nest.

Both live in the ``parse`` call, never on a shared object.

Thread Safety:
``parse`` allocates all of its state per call. A Parser only holds an
immutable RuleTable and can be shared between threads.

"""

from collections.abc import Iterable
from dataclasses import dataclass

from dismark.config import ParseConfig
from dismark.errors import StalledRuleError, UnmatchedInputError
from dismark.nodes import Document, Node
from dismark.rules import RuleTable, build_rule_table
from dismark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PendingSpan:
    """Deferred work: parse ``source[start:end]`` into ``parent.children``."""

    parent: Node
    start: int
    end: int


def parse(rules: RuleTable, source: str) -> Document:
    """Parse a message into a tree.

    Args:
        rules: Rule table from ``build_rule_table``
        source: Message text (may be empty)

    Returns:
        Document root; empty input yields a root without children

    Raises:
        UnmatchedInputError: No rule matched a non-empty window. Cannot
            happen with a table ending in the text rule.
        StalledRuleError: A rule matched without consuming input.

    Example:
        >>> doc = parse(build_rule_table(), "**hi**")
        >>> doc.children
        [Bold(children=[Text(children=[], content='hi')])]

    """
    root = Document()
    pending: list[PendingSpan] = []
    if source:
        pending.append(PendingSpan(root, 0, len(source)))

    last_capture = ""
    block_quote_end = 0

    while pending:
        span = pending.pop()
        if span.start >= span.end:
            logger.debug("Discarding empty span at offset %d", span.start)
            continue

        window = source[span.start : span.end]
        offset = span.start
        at_line_start = not last_capture or last_capture.endswith("\n")

        for rule in rules:
            if rule.block and not at_line_start:
                continue
            if rule.block_quote and span.start < block_quote_end:
                continue
            match = rule.pattern.match(window)
            if match is not None:
                break
        else:
            logger.error("No rule matched window at offset %d", offset)
            raise UnmatchedInputError(source, offset, window)

        result = rule.action(match)
        match_end = match.end() if result.match_end is None else result.match_end
        if match_end <= 0:
            raise StalledRuleError(rule.name, offset)

        span.parent.add_child(result.node)

        if offset + match_end != span.end:
            pending.append(PendingSpan(span.parent, offset + match_end, span.end))

        if result.child_span is not None:
            child_start, child_end = result.child_span
            pending.append(PendingSpan(result.node, offset + child_start, offset + child_end))
            region_end = offset + child_end
        else:
            region_end = offset + match_end
        if rule.block_quote:
            block_quote_end = region_end

        last_capture = window[:match_end]

    return root


class Parser:
    """Reusable parser bound to one rule table.

    Usage:
        >>> parser = Parser()
        >>> doc = parser.parse("*hi* @everyone")

        >>> # Forum first posts also support headers and lists
        >>> forum = Parser(ParseConfig(forum_markdown=True))
        >>> forum("## Rules")
        Document(children=[Header(children=[Text(children=[], content='Rules')], level=2)])

    Thread Safety:
        The rule table is immutable and every parse gets fresh state, so one
        Parser can be used from many threads at once.

    """

    __slots__ = ("_rules",)

    def __init__(self, config: ParseConfig | None = None) -> None:
        """Initialize parser.

        Args:
            config: Feature toggles; None means the default configuration
                (block quotes and mentions on, masked links and forum
                markdown off)
        """
        self._rules = build_rule_table(config)

    @classmethod
    def from_rules(cls, rules: RuleTable) -> "Parser":
        """Create a parser around an existing (possibly hand-built) table."""
        parser = cls.__new__(cls)
        parser._rules = rules
        return parser

    @property
    def rules(self) -> RuleTable:
        return self._rules

    @property
    def config(self) -> ParseConfig | None:
        return self._rules.config

    def parse(self, source: str) -> Document:
        """Parse a message into a tree. See ``parse``."""
        return parse(self._rules, source)

    def __call__(self, source: str) -> Document:
        return parse(self._rules, source)

    def parse_many(self, sources: Iterable[str]) -> list[Document]:
        """Parse several messages with the same table.

        Example:
            >>> docs = Parser().parse_many(["hi", "**there**"])
            >>> len(docs)
            2
        """
        return [parse(self._rules, source) for source in sources]


__all__ = [
    "Parser",
    "PendingSpan",
    "parse",
]
