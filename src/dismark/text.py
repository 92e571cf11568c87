"""Extract plain text from dismark AST nodes.

Example:
    >>> from dismark import Parser, extract_text
    >>> extract_text(Parser().parse("**Hello** <@1234>"))
    'Hello <@1234>'
"""

from dismark.nodes import (
    URL,
    ChannelMention,
    Code,
    CustomEmoji,
    Node,
    RoleMention,
    SpecialMention,
    Text,
    Timestamp,
    UserMention,
)
from dismark.visitor import iter_nodes


def leaf_text(node: Node) -> str:
    """Plain-text form of a single leaf; containers contribute nothing."""
    match node:
        case Text(content=content):
            return content
        case Code(content=content):
            return content
        case URL(target=target, mask=mask):
            return mask if mask is not None else target
        case CustomEmoji(name=name):
            return f":{name}:"
        case ChannelMention(id=channel_id):
            return f"<#{channel_id}>"
        case RoleMention(id=role_id):
            return f"<@&{role_id}>"
        case UserMention(id=user_id):
            return f"<@{user_id}>"
        case SpecialMention(target=target):
            return f"@{target}"
        case Timestamp(stamp=stamp, suffix=suffix):
            return f"<t:{stamp}:{suffix}>" if suffix else f"<t:{stamp}>"
        case _:
            return ""


def extract_text(node: Node) -> str:
    """Concatenate the text of every leaf below ``node`` in source order.

    Formatting delimiters consumed by rules (``**``, ``||``, ``>>>``...) are
    not part of the tree and do not appear in the result.

    Args:
        node: Any AST node, usually a Document

    Returns:
        Concatenated plain text

    """
    return "".join(leaf_text(n) for n in iter_nodes(node))


__all__ = ["extract_text", "leaf_text"]
