"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

REAL_WORLD_MESSAGES = [
    "gm everyone :wave:",
    "**PSA**: the server restarts at <t:1700000000:t>, @here",
    ">>> quoting the whole thing\nwith *two* lines",
    "> single line quote\nand a reply <@!123456789012345678>",
    "check <https://example.com/docs> and https://example.com/blog.",
    "||spoilers|| for ~~the movie~~ the __show__",
    "```py\nfor i in range(10):\n    print(i)\n```",
    "snake_case_names and 2*3*4 and a \\*literal\\* star",
    "<a:dance:123456> <:pepe:654321> <#42> <@&7>",
]


@pytest.fixture
def real_world_messages() -> list[str]:
    """Short messages covering every rule family."""
    return REAL_WORLD_MESSAGES


@pytest.fixture
def long_message() -> str:
    """A message at Discord's 4000-character limit."""
    message = " ".join(REAL_WORLD_MESSAGES)
    return (message * (4000 // len(message) + 1))[:4000]


@pytest.fixture
def forum_post() -> str:
    """A forum first post using headers and lists."""
    sections = []
    for i in range(20):
        sections.append(f"## Section {i}\n- point **{i}**\n  - nested *{i}*\n")
    return "\n".join(sections)
