"""Parse a Discord message and render it with IRC formatting codes."""

from dismark import Bold, Italics, Node, Parser, Text, Underline, walk
from dismark.text import leaf_text

IRC_CODES = {Bold: "\x02", Italics: "\x1d", Underline: "\x1f"}

out: list[str] = []


def to_irc(node: Node, entering: bool) -> None:
    match node:
        case Bold() | Italics() | Underline():
            out.append(IRC_CODES[type(node)])
        case Text(content=content) if entering:
            out.append(content)
        case _ if entering and node.leaf:
            out.append(leaf_text(node))


doc = Parser().parse("**Hello** __there__, <@1234>! *Welcome* to <#42>.")
walk(doc, to_irc)
print(repr("".join(out)))
