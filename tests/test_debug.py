"""Tests for the debug dump format."""

import pytest

from dismark import (
    URL,
    BlockQuote,
    BulletList,
    ChannelMention,
    Code,
    CustomEmoji,
    Document,
    Header,
    Node,
    SpecialMention,
    Text,
    Timestamp,
    debug,
)


class TestDebug:
    def test_empty_root(self) -> None:
        assert debug(Document()) == "[]"

    def test_root_has_no_tag(self) -> None:
        assert debug(Document(children=[Text("a"), Text("b")])) == '[[text "a"] [text "b"]]'

    def test_non_root_node(self) -> None:
        assert debug(BlockQuote(children=[Text("q")])) == '[blockquote [text "q"]]'

    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            (Code("x"), '[code "" "x"]'),
            (Code("x", language="py"), '[code "py" "x"]'),
            (URL("https://a.io"), '[url "" "https://a.io"]'),
            (URL("https://a.io", mask="a"), '[url "a" "https://a.io"]'),
            (CustomEmoji(animated=False, name="e", id="1"), '[emoji false "e" "1"]'),
            (ChannelMention("9"), '[channelmention "9"]'),
            (SpecialMention("here"), '[specialmention "here"]'),
            (Timestamp("1"), '[timestamp "1" ""]'),
            (Timestamp("1", suffix="R"), '[timestamp "1" "R"]'),
            (Header(2), "[header 2]"),
            (BulletList(level=2, includes_newline=True), "[list 2 true]"),
        ],
    )
    def test_payloads(self, node: Node, expected: str) -> None:
        assert debug(node) == expected

    def test_strings_are_json_quoted(self) -> None:
        assert debug(Text('a"b\\c\n')) == '[text "a\\"b\\\\c\\n"]'

    def test_non_ascii_is_not_escaped(self) -> None:
        assert debug(Text("ツ")) == '[text "ツ"]'

    def test_unknown_node_type(self) -> None:
        with pytest.raises(TypeError, match="invalid node type"):
            debug(Node())
