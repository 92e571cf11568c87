"""Exception classes for dismark.

Malformed messages are never an error: anything that cannot be classified
becomes a Text node. The exceptions below signal a broken rule table, which
is a bug in the table rather than in the message being parsed.
"""

from __future__ import annotations


class DismarkError(Exception):
    """Base exception for all dismark errors."""

    pass


class UnmatchedInputError(DismarkError):
    """No rule matched a non-empty window.

    The built-in table ends with a catch-all text rule, so this is raised only
    for hand-built tables that lack one.
    """

    def __init__(self, source: str, offset: int, window: str) -> None:
        """Initialize with the offending input.

        Args:
            source: Full message being parsed
            offset: Absolute offset of the window start in source
            window: The slice of source that no rule matched
        """
        self.source = source
        self.offset = offset
        self.window = window
        super().__init__(
            f"failed to find rule to match source at offset {offset}: {window!r} (source: {source!r})"
        )


class StalledRuleError(DismarkError):
    """A rule matched without consuming any input."""

    def __init__(self, rule: str, offset: int) -> None:
        self.rule = rule
        self.offset = offset
        super().__init__(f"Rule '{rule}' matched an empty prefix at offset {offset}")
