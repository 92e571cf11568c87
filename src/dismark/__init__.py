"""
dismark — Discord message markdown to a typed AST

Parses messages written in Discord's markdown dialect into a tree of typed
nodes, reproducing the Discord client's parsing quirks rather than
CommonMark semantics: emphasis versus stray asterisks, when a line starts a
block, where a block quote ends.

Quick Start:
    >>> from dismark import Parser, debug
    >>> parser = Parser()
    >>> doc = parser.parse("**hi** @everyone")
    >>> debug(doc)
    '[[bold [text "hi"]] [text " "] [specialmention "everyone"]]'

    >>> # The two-step API: build a rule table once, parse many messages
    >>> from dismark import build_rule_table, parse
    >>> rules = build_rule_table()
    >>> doc = parse(rules, "||spoiler||")

Walking the tree:
    >>> from dismark import Bold, Text, walk
    >>> out = []
    >>> def to_irc(node, entering):
    ...     if isinstance(node, Text) and entering:
    ...         out.append(node.content)
    ...     elif isinstance(node, Bold):
    ...         out.append("\\x02")
    >>> walk(Parser().parse("**hi** there"), to_irc)
    >>> "".join(out)
    '\\x02hi\\x02 there'

    See examples/basic/hello_discord.py for a complete renderer.

Installation:
    pip install dismark
"""

from dismark.config import ALL_FEATURES, DEFAULT_CONFIG, ParseConfig
from dismark.debug import debug
from dismark.errors import DismarkError, StalledRuleError, UnmatchedInputError
from dismark.nodes import (
    URL,
    BlockQuote,
    Bold,
    BulletList,
    ChannelMention,
    Code,
    CustomEmoji,
    Document,
    Header,
    Inline,
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
from dismark.parser import Parser, PendingSpan, parse
from dismark.rules import Rule, RuleResult, RuleTable, build_rule_table
from dismark.serialization import from_dict, from_json, to_dict, to_json
from dismark.text import extract_text
from dismark.visitor import BaseVisitor, iter_nodes, walk

__version__ = "0.1.0"


__all__ = [
    # Configuration
    "ALL_FEATURES",
    "DEFAULT_CONFIG",
    "ParseConfig",
    # Parsing
    "Parser",
    "PendingSpan",
    "Rule",
    "RuleResult",
    "RuleTable",
    "build_rule_table",
    "parse",
    # Nodes
    "URL",
    "BlockQuote",
    "Bold",
    "BulletList",
    "ChannelMention",
    "Code",
    "CustomEmoji",
    "Document",
    "Header",
    "Inline",
    "Italics",
    "Node",
    "RoleMention",
    "SpecialMention",
    "Spoiler",
    "Strikethrough",
    "Text",
    "Timestamp",
    "Underline",
    "UserMention",
    # Traversal and output
    "BaseVisitor",
    "debug",
    "extract_text",
    "iter_nodes",
    "walk",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Errors
    "DismarkError",
    "StalledRuleError",
    "UnmatchedInputError",
]
