"""Human-readable dump of a dismark tree.

Every node prints as ``[tag payload... children...]`` and the root prints
as a bare pair of brackets, e.g.::

    >>> debug(Parser().parse("**hi** <#1234>"))
    '[[bold [text "hi"]] [text " "] [channelmention "1234"]]'

Strings are JSON-quoted, booleans print as ``true``/``false`` and absent
optional payloads print as ``""``. The output is deterministic, which makes
it convenient for tests, but it is not a stable format: walk the tree to
process it programmatically.
"""

import json

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
from dismark.visitor import walk


def _quote(value: str | None) -> str:
    return json.dumps(value or "", ensure_ascii=False)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _label(node: Node) -> str | None:
    """Tag and payload for ``node``; None for the anonymous root."""
    match node:
        case Document():
            return None
        case Text(content=content):
            return f"text {_quote(content)}"
        case BlockQuote():
            return "blockquote"
        case Code(content=content, language=language):
            return f"code {_quote(language)} {_quote(content)}"
        case Spoiler():
            return "spoiler"
        case URL(target=target, mask=mask):
            return f"url {_quote(mask)} {_quote(target)}"
        case CustomEmoji(animated=animated, name=name, id=emoji_id):
            return f"emoji {_flag(animated)} {_quote(name)} {_quote(emoji_id)}"
        case ChannelMention(id=channel_id):
            return f"channelmention {_quote(channel_id)}"
        case RoleMention(id=role_id):
            return f"rolemention {_quote(role_id)}"
        case UserMention(id=user_id):
            return f"usermention {_quote(user_id)}"
        case SpecialMention(target=target):
            return f"specialmention {_quote(target)}"
        case Timestamp(stamp=stamp, suffix=suffix):
            return f"timestamp {_quote(stamp)} {_quote(suffix)}"
        case Header(level=level):
            return f"header {level}"
        case BulletList(level=level, includes_newline=includes_newline):
            return f"list {level} {_flag(includes_newline)}"
        case Bold():
            return "bold"
        case Underline():
            return "underline"
        case Italics():
            return "italics"
        case Strikethrough():
            return "strikethrough"
        case _:
            raise TypeError(f"invalid node type: {type(node).__name__}")


def debug(node: Node) -> str:
    """Dump ``node`` and its subtree to a bracketed string."""
    parts: list[str] = []
    no_space = True

    def _walker(current: Node, entering: bool) -> None:
        nonlocal no_space
        if not entering:
            parts.append("]")
            return
        if no_space:
            no_space = False
        else:
            parts.append(" ")
        parts.append("[")
        label = _label(current)
        if label is None:
            no_space = True
        else:
            parts.append(label)

    walk(node, _walker)
    return "".join(parts)


__all__ = ["debug"]
