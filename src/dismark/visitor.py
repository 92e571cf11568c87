"""Tree traversal for dismark ASTs.

``walk`` is the primitive: a depth-first walk that calls a walker once when
entering a node (before its children) and once when leaving it (after its
children), root included. It runs on an explicit stack, so trees nested
deeper than the interpreter's recursion limit walk fine.

Example, rendering to IRC formatting codes:

    def to_irc(node: Node, entering: bool) -> None:
        match node:
            case Text(content=content) if entering:
                out.append(content)
            case Bold():
                out.append("\\x02")

    walk(doc, to_irc)

Example, collecting mentions:

    class MentionCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.ids: list[str] = []

        def visit_user_mention(self, node: UserMention) -> None:
            self.ids.append(node.id)

    collector = MentionCollector()
    collector.visit(doc)

Thread Safety:
    ``walk`` and ``iter_nodes`` keep their state per call. Visitors may
    accumulate state; create one per thread.

"""

from collections.abc import Callable, Iterator

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

type Walker = Callable[[Node, bool], None]


def walk(node: Node, walker: Walker) -> None:
    """Walk ``node`` depth-first, calling ``walker(n, entering)`` around each node.

    Args:
        node: Root of the (sub)tree to walk
        walker: Called with ``entering=True`` before a node's children and
            ``entering=False`` after them

    """
    stack: list[tuple[Node, bool]] = [(node, True)]
    while stack:
        current, entering = stack.pop()
        walker(current, entering)
        if entering:
            stack.append((current, False))
            stack.extend((child, True) for child in reversed(current.children))


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. ``depart`` is
    called when leaving every node, after its children were visited.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Visit ``node`` and its whole subtree.

        Returns the result of the ``visit_*`` call for ``node`` itself.

        """
        results: list[T] = []

        def _walker(current: Node, entering: bool) -> None:
            if not entering:
                self.depart(current)
                return
            result = self._dispatch(current)
            if not results:
                results.append(result)

        walk(node, _walker)
        return results[0]

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    def depart(self, node: Node) -> None:
        """Called when leaving ``node``. No-op by default."""

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    # -- Leaf visitors ---------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_url(self, node: URL) -> T:
        return self.visit_default(node)

    def visit_custom_emoji(self, node: CustomEmoji) -> T:
        return self.visit_default(node)

    def visit_channel_mention(self, node: ChannelMention) -> T:
        return self.visit_default(node)

    def visit_role_mention(self, node: RoleMention) -> T:
        return self.visit_default(node)

    def visit_user_mention(self, node: UserMention) -> T:
        return self.visit_default(node)

    def visit_special_mention(self, node: SpecialMention) -> T:
        return self.visit_default(node)

    def visit_timestamp(self, node: Timestamp) -> T:
        return self.visit_default(node)

    # -- Container visitors ----------------------------------------------------

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_spoiler(self, node: Spoiler) -> T:
        return self.visit_default(node)

    def visit_header(self, node: Header) -> T:
        return self.visit_default(node)

    def visit_bullet_list(self, node: BulletList) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_underline(self, node: Underline) -> T:
        return self.visit_default(node)

    def visit_italics(self, node: Italics) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: Strikethrough) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Text():
                return self.visit_text(node)
            case Code():
                return self.visit_code(node)
            case URL():
                return self.visit_url(node)
            case CustomEmoji():
                return self.visit_custom_emoji(node)
            case ChannelMention():
                return self.visit_channel_mention(node)
            case RoleMention():
                return self.visit_role_mention(node)
            case UserMention():
                return self.visit_user_mention(node)
            case SpecialMention():
                return self.visit_special_mention(node)
            case Timestamp():
                return self.visit_timestamp(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case Spoiler():
                return self.visit_spoiler(node)
            case Header():
                return self.visit_header(node)
            case BulletList():
                return self.visit_bullet_list(node)
            case Bold():
                return self.visit_bold(node)
            case Underline():
                return self.visit_underline(node)
            case Italics():
                return self.visit_italics(node)
            case Strikethrough():
                return self.visit_strikethrough(node)
            case _:
                return self.visit_default(node)


__all__ = [
    "BaseVisitor",
    "Walker",
    "iter_nodes",
    "walk",
]
