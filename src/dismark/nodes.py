"""Typed AST nodes for dismark.

Every node is a slotted dataclass that owns an ordered list of children.
The parser appends to ``children`` while it builds the tree; leaf variants
keep the list empty. Insertion order is source order.

Node Hierarchy:
Node (base)
├── Document          anonymous root container
├── Containers (children hold formatted content)
│   ├── BlockQuote    >>> quote / > quote
│   ├── Spoiler       ||spoiler||
│   ├── Header        # header (forum markdown)
│   ├── BulletList    - item (forum markdown)
│   ├── Bold          **bold**
│   ├── Underline     __underline__
│   ├── Italics       *italics* / _italics_
│   └── Strikethrough ~~strikethrough~~
└── Leaves
    ├── Text
    ├── Code          `code` / ```lang\ncode```
    ├── URL           https://... / <https://...> / [mask](https://...)
    ├── CustomEmoji   <:name:id> / <a:name:id>
    ├── ChannelMention, RoleMention, UserMention
    ├── SpecialMention
    └── Timestamp     <t:stamp:suffix>

The variant set is closed: consumers are expected to match on the node
type and ignore variants they do not handle.

Thread Safety:
A tree belongs to the parse that produced it. Nodes are mutable while the
parser runs; treat them as read-only afterwards if they are shared.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(slots=True)
class Node:
    """Base class for all AST nodes."""

    leaf: ClassVar[bool] = False

    children: list[Node] = field(default_factory=list, kw_only=True)

    def add_child(self, node: Node) -> None:
        self.children.append(node)


@dataclass(slots=True)
class Document(Node):
    """Anonymous root container returned by every parse."""


# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(slots=True)
class Text(Node):
    """Plain text content.

    A Text node does not mean unformatted text per se: a Text inside a Bold
    node is displayed in bold.

    """

    leaf: ClassVar[bool] = True

    content: str


@dataclass(slots=True)
class Code(Node):
    """Inline code or a fenced code block.

    Discord: `code`, ``code`` or ```lang\\ncode```
    Only fenced blocks can carry a language.

    """

    leaf: ClassVar[bool] = True

    content: str
    language: str | None = None


@dataclass(slots=True)
class URL(Node):
    """A link.

    Discord: https://example.com, <https://example.com> (no embed) or
    [mask](https://example.com) when masked links are enabled.

    """

    leaf: ClassVar[bool] = True

    target: str
    mask: str | None = None


@dataclass(slots=True)
class CustomEmoji(Node):
    """A custom guild emoji.

    Discord: <:name:id> or <a:name:id> for animated emoji.

    """

    leaf: ClassVar[bool] = True

    animated: bool
    name: str
    id: str


@dataclass(slots=True)
class ChannelMention(Node):
    """Discord: <#id>"""

    leaf: ClassVar[bool] = True

    id: str


@dataclass(slots=True)
class RoleMention(Node):
    """Discord: <@&id>"""

    leaf: ClassVar[bool] = True

    id: str


@dataclass(slots=True)
class UserMention(Node):
    """Discord: <@id> or <@!id>"""

    leaf: ClassVar[bool] = True

    id: str


@dataclass(slots=True)
class SpecialMention(Node):
    """Mention of a group of users: @everyone or @here.

    ``target`` holds the name without the ``@``.

    """

    leaf: ClassVar[bool] = True

    target: str


@dataclass(slots=True)
class Timestamp(Node):
    """A timestamp displayed in the reader's local time.

    Discord: <t:1234567890> or <t:1234567890:R>

    """

    leaf: ClassVar[bool] = True

    stamp: str
    suffix: str | None = None


# =============================================================================
# Container Nodes
# =============================================================================


@dataclass(slots=True)
class BlockQuote(Node):
    """Block quote, possibly multi-line.

    Discord: >>> rest of message, or > single line

    """


@dataclass(slots=True)
class Spoiler(Node):
    """Discord: ||hidden||"""


@dataclass(slots=True)
class Header(Node):
    """Markdown header (forum markdown only).

    Discord: ## header
    ``level`` is the number of ``#`` characters.

    """

    level: int


@dataclass(slots=True)
class BulletList(Node):
    """A single bullet list item (forum markdown only).

    Discord: - item or * item

    ``level`` is 2 when the marker is indented, 1 otherwise.
    ``includes_newline`` records whether the item consumed its line break.

    """

    level: int = 1
    includes_newline: bool = False


@dataclass(slots=True)
class Bold(Node):
    """Discord: **bold**"""


@dataclass(slots=True)
class Underline(Node):
    """Discord: __underline__"""


@dataclass(slots=True)
class Italics(Node):
    """Discord: *italics* or _italics_"""


@dataclass(slots=True)
class Strikethrough(Node):
    """Discord: ~~strikethrough~~"""


# PEP 695 type alias for every node that can appear below the root
type Inline = (
    Text
    | Code
    | URL
    | CustomEmoji
    | ChannelMention
    | RoleMention
    | UserMention
    | SpecialMention
    | Timestamp
    | BlockQuote
    | Spoiler
    | Header
    | BulletList
    | Bold
    | Underline
    | Italics
    | Strikethrough
)

LEAF_TYPES: tuple[type[Node], ...] = (
    Text,
    Code,
    URL,
    CustomEmoji,
    ChannelMention,
    RoleMention,
    UserMention,
    SpecialMention,
    Timestamp,
)

CONTAINER_TYPES: tuple[type[Node], ...] = (
    Document,
    BlockQuote,
    Spoiler,
    Header,
    BulletList,
    Bold,
    Underline,
    Italics,
    Strikethrough,
)


__all__ = [
    "CONTAINER_TYPES",
    "LEAF_TYPES",
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
]
