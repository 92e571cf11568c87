"""Compiled patterns for Discord message syntax.

Every pattern is applied with ``Pattern.match`` to the unparsed window, so
each one only ever matches a prefix of it. Patterns are compiled with
``re.ASCII`` so ``\\w``, ``\\d`` and ``\\b`` follow the ASCII classes the
Discord client uses, and ``\\Z`` marks the end of the window. Whitespace is
spelled out as ``[\\t\\n\\f\\r ]`` instead of ``\\s``, which also matches
``\\v`` in Python but not in the client.

Thread Safety:
Compiled patterns are immutable and safe to share across threads.

"""

import re

_FLAGS = re.ASCII

# Class body for whitespace, without the brackets
_WS = r"\t\n\f\r "
_SPACE = rf"[{_WS}]"
_NON_SPACE = rf"[^{_WS}]"

SOFT_HYPHEN = re.compile("\u00ad")

ESCAPE = re.compile(rf"\\([^0-9A-Za-z{_WS}])", _FLAGS)

BLOCK_QUOTE = re.compile(r"(?: *>>> +(.*)| *> +([^\n]*\n?))", _FLAGS | re.DOTALL)

CODE_BLOCK = re.compile(
    rf"```(?:([\w+\-.]+?)?({_SPACE}*\n))?([^\n].*?)\n*```", _FLAGS | re.DOTALL
)

CODE_INLINE = re.compile(r"``([^`]*)``|`([^`]*)`", _FLAGS | re.DOTALL)

SPOILER = re.compile(r"\|\|([\s\S]+?)\|\|", _FLAGS)

# Mask: "[" then bracket-free runs and "[...]" groups up to the closing "]",
# optionally followed by one more "...]" segment. Each "]" inside the mask
# must close a "[" opened after the previous "]".
MASKED_LINK = re.compile(
    r"(\[(?:[^\[\]]*\[[^\]]*\])*[^\]]*\](?:[^\[]*\])?)"
    rf"\({_SPACE}*<?((?:[^{_WS}\\]|\\.)*?)>?(?:{_SPACE}+['\"]([\s\S]*?)['\"])?{_SPACE}*\)",
    _FLAGS,
)

URL_NO_EMBED = re.compile(rf"<(https?://[^{_WS}<]+[^<.,:;\"')\]{_WS}])>", _FLAGS)

URL = re.compile(rf"(https?://[^{_WS}<]+[^<.,:;\"')\]{_WS}])", _FLAGS)

CUSTOM_EMOJI = re.compile(r"<(a)?:([a-zA-Z_0-9]+):(\d+)>", _FLAGS)

NAMED_EMOJI = re.compile(rf":([^{_WS}:]+?(?:::skin-tone-\d)?):", _FLAGS)

EMOTICON = re.compile(r"(¯\\_\(ツ\)_/¯)")

CHANNEL_MENTION = re.compile(r"<#(\d+)>", _FLAGS)

ROLE_MENTION = re.compile(r"<@&(\d+)>", _FLAGS)

USER_MENTION = re.compile(r"<@!?(\d+)>", _FLAGS)

SPECIAL_MENTION = re.compile(r"@(everyone|here)")

TIMESTAMP = re.compile(r"<t:(-?\d{1,17})(?::([tTdDfFR]))?>", _FLAGS)

HEADER = re.compile(rf"({_SPACE}*(#+)[ \t](.*) *)(?:\n|\Z)", _FLAGS)

# Indent is whitespace other than line breaks. The trailing class is
# literally "\n", "|" or "$".
LIST_ITEM = re.compile(rf"([\t\f ]*)[*-][ {_WS}]+(.*)([\n|$])?", _FLAGS)

NEWLINE = re.compile(r"(?:\n *)*\n", _FLAGS)

BOLD = re.compile(r"(\*\*([\s\S]+?)\*\*)(?:[^*]|\Z)", _FLAGS)

UNDERLINE = re.compile(r"(__([\s\S]+?)__)(?:[^_]|\Z)", _FLAGS)

ITALICS = re.compile(
    r"(\b_((?:__|\\[\s\S]|[^\\_])+?)_\b)"
    rf"|(\*((?:\*\*|[^{_WS}*])(?:\*\*|{_SPACE}+(?:[^*{_WS}]|\*\*)|[^{_WS}*])*?)\*)(?:[^*]|\Z)",
    _FLAGS,
)

STRIKETHROUGH = re.compile(
    rf"~~({_NON_SPACE}|{_NON_SPACE}[\s\S]*?{_NON_SPACE})~~", _FLAGS
)

# Text stops before punctuation, a newline, a hard break, or a word that
# starts a scheme ("https:/"), so the rules above get a chance there. The
# hard-break and scheme checks only run where a space run or a word begins
# (or at offset 1 when the window starts inside one), which keeps a text
# match linear in its length.
TEXT = re.compile(
    rf"([\s\S]+?)(?:[^0-9A-Za-z{_WS}\u00c0-\uffff]|\n"
    r"|(?:(?<! )|(?<=\A )) {2,}\n"
    rf"|(?:(?<!\w)|(?<=\A\w))\w++:{_NON_SPACE}|\Z)",
    _FLAGS,
)
