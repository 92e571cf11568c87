"""Tests for the stack parser: Discord's parsing quirks, end to end."""

import time
from dataclasses import FrozenInstanceError

import pytest

from dismark import (
    ALL_FEATURES,
    BlockQuote,
    Bold,
    Document,
    ParseConfig,
    Parser,
    PendingSpan,
    Strikethrough,
    Text,
    build_rule_table,
    debug,
    extract_text,
    parse,
)
from dismark.visitor import iter_nodes


def _dump(source: str, config: ParseConfig | None = None) -> str:
    return debug(Parser(config).parse(source))


# Every toggle on, as the upstream client test-suite runs.
UPSTREAM_CASES = [
    (">>> hi", '[[blockquote [text "hi"]]]'),
    ("<#1234>", '[[channelmention "1234"]]'),
    ("<@&1234>", '[[rolemention "1234"]]'),
    ("<@!1234>", '[[usermention "1234"]]'),
    ("@everyone", '[[specialmention "everyone"]]'),
    ("@here", '[[specialmention "here"]]'),
    ("<a:that:1234>", '[[emoji true "that" "1234"]]'),
    ("<:that:1234>", '[[emoji false "that" "1234"]]'),
    (":grin:", '[[text ":grin:"]]'),
    ("¯\\_(ツ)_/¯", '[[text "¯\\\\_(ツ)_/¯"]]'),
    ("<t:1234567890:t>", '[[timestamp "1234567890" "t"]]'),
    ("https://example.com", '[[url "" "https://example.com"]]'),
    ("[example](https://example.com)", '[[url "example" "https://example.com"]]'),
    ("<https://example.com>", '[[url "" "https://example.com"]]'),
    ("­", '[[text ""]]'),
    ("||flushed||", '[[spoiler [text "flushed"]]]'),
    ("- list", '[[list 1 false [text "list"]]]'),
    ("### header", '[[header 3 [text "header"]]]'),
    ("**bold**", '[[bold [text "bold"]]]'),
    ("*hi*", '[[italics [text "hi"]]]'),
    ("_hi_", '[[italics [text "hi"]]]'),
    ("__hi__", '[[underline [text "hi"]]]'),
    ("~~hi~~", '[[strikethrough [text "hi"]]]'),
    ("\n \n", '[[text "\\n"]]'),
    ("hi", '[[text "hi"]]'),
    ("\\*hi\\*", '[[text "*"] [text "hi"] [text "*"]]'),
    ("`hello`", '[[code "" "hello"]]'),
    ("```sx\nhello\n```", '[[code "sx" "hello"]]'),
]


class TestUpstreamScenarios:
    """The reference client's own expectations, every feature enabled."""

    @pytest.mark.parametrize(("source", "expected"), UPSTREAM_CASES)
    def test_scenario(self, source: str, expected: str) -> None:
        assert _dump(source, ALL_FEATURES) == expected

    def test_two_step_api(self) -> None:
        """build_rule_table + parse gives the same tree as Parser."""
        rules = build_rule_table(ALL_FEATURES)
        assert debug(parse(rules, "**bold**")) == '[[bold [text "bold"]]]'


class TestBasics:
    """Root node, empty input and plain text."""

    def test_empty_input_yields_empty_root(self) -> None:
        doc = Parser().parse("")
        assert isinstance(doc, Document)
        assert doc.children == []
        assert debug(doc) == "[]"

    def test_plain_text_is_one_node(self) -> None:
        doc = Parser().parse("hello world")
        assert doc.children == [Text("hello world")]

    def test_non_ascii_letters_stay_in_one_node(self) -> None:
        assert _dump("héllo wörld") == '[[text "héllo wörld"]]'

    def test_astral_characters_are_never_split(self) -> None:
        """Characters outside the BMP end a text run but stay whole."""
        assert _dump("hi 😀 there") == '[[text "hi "] [text "😀 there"]]'

    def test_callable_parser(self) -> None:
        parser = Parser()
        assert parser("**a**") == parser.parse("**a**")

    def test_parse_many(self) -> None:
        docs = Parser().parse_many(["a", "**b**", ""])
        assert [debug(d) for d in docs] == ['[[text "a"]]', '[[bold [text "b"]]]', "[]"]


class TestRulePriority:
    """Earlier rules win, even over a later rule with a longer match."""

    def test_code_block_beats_inline_code(self) -> None:
        assert _dump("```x```") == '[[code "" "x"]]'

    def test_escape_beats_inline_code(self) -> None:
        assert _dump("\\`a`") == '[[text "`"] [text "a"] [text "`"]]'

    def test_bold_beats_italics(self) -> None:
        assert _dump("***x***") == "[[bold [italics [text \"x\"]]]]"

    def test_list_item_beats_italics_in_forum_mode(self) -> None:
        config = ParseConfig(forum_markdown=True)
        assert _dump("* item", config) == '[[list 1 false [text "item"]]]'

    def test_angle_bracket_url_suppresses_embed(self) -> None:
        assert _dump("<https://a.io>") == '[[url "" "https://a.io"]]'


class TestResumption:
    """Rules that consume a lookahead character give it back."""

    def test_bold_returns_trailing_character(self) -> None:
        assert _dump("**a**b") == '[[bold [text "a"]] [text "b"]]'

    def test_italics_returns_trailing_character(self) -> None:
        assert _dump("*a*b") == '[[italics [text "a"]] [text "b"]]'

    def test_underline_returns_trailing_character(self) -> None:
        assert _dump("__a__b") == '[[underline [text "a"]] [text "b"]]'

    def test_header_returns_trailing_newline(self) -> None:
        config = ParseConfig(forum_markdown=True)
        assert _dump("# a\nb", config) == '[[header 1 [text "a"]] [text "\\nb"]]'

    def test_consecutive_headers(self) -> None:
        config = ParseConfig(forum_markdown=True)
        assert _dump("# a\n# b", config) == (
            '[[header 1 [text "a"]] [text "\\n"] [header 1 [text "b"]]]'
        )

    def test_text_stops_before_punctuation(self) -> None:
        assert _dump("see https://x.com.") == (
            '[[text "see "] [url "" "https://x.com"] [text "."]]'
        )


class TestBlockRules:
    """Block rules only fire at the start of a line."""

    def test_block_quote_mid_line_is_text(self) -> None:
        assert _dump("a >>> b") == '[[text "a "] [text ">"] [text ">"] [text "> b"]]'

    def test_block_quote_after_newline(self) -> None:
        assert _dump("a\n>>> b") == '[[text "a"] [text "\\n"] [blockquote [text "b"]]]'

    def test_single_line_quotes(self) -> None:
        assert _dump("> a\n> b") == (
            '[[blockquote [text "a"] [text "\\n"]] [blockquote [text "b"]]]'
        )

    def test_empty_block_quote(self) -> None:
        assert _dump(">>> ") == "[[blockquote]]"

    def test_blank_lines_collapse_to_one_newline(self) -> None:
        assert _dump("\n  \n\n") == '[[text "\\n"]]'

    def test_block_quote_disabled(self) -> None:
        config = ParseConfig(block_quote=False)
        assert _dump(">>> hi", config) == '[[text ">"] [text ">"] [text "> hi"]]'


class TestBlockQuoteFlattening:
    """Quotes never nest: markers inside an open quote region stay text."""

    def test_multi_line_quote_swallows_inner_marker(self) -> None:
        assert _dump(">>> a\n>>> b") == (
            '[[blockquote [text "a"] [text "\\n"] [text ">"] [text ">"] [text "> b"]]]'
        )

    def test_single_line_quote_with_inner_marker(self) -> None:
        assert _dump("> > a") == '[[blockquote [text "> a"]]]'

    def test_no_block_quote_inside_block_quote(self) -> None:
        doc = Parser().parse(">>> x\n> y\n>>> z")
        quotes = [n for n in iter_nodes(doc) if isinstance(n, BlockQuote)]
        assert len(quotes) == 1
        inner = list(iter_nodes(quotes[0]))[1:]
        assert not any(isinstance(n, BlockQuote) for n in inner)


class TestEmphasis:
    """Bold, italics and stray asterisks or underscores."""

    def test_italics_containing_bold(self) -> None:
        assert _dump("*a **b** c*") == (
            '[[italics [text "a "] [bold [text "b"]] [text " c"]]]'
        )

    def test_spaced_asterisks_are_text(self) -> None:
        assert _dump("2 * 3 * 4") == '[[text "2 "] [text "* 3 "] [text "* 4"]]'

    def test_tight_asterisks_are_italics(self) -> None:
        assert _dump("2*3*4") == '[[text "2"] [italics [text "3"]] [text "4"]]'

    def test_underscores_inside_words_are_text(self) -> None:
        assert _dump("snake_case_name") == '[[text "snake"] [text "_case"] [text "_name"]]'

    def test_strikethrough_needs_tight_delimiters(self) -> None:
        doc = Parser().parse("~~ a~~")
        assert not any(isinstance(n, Strikethrough) for n in iter_nodes(doc))

    def test_spoiler_containing_bold(self) -> None:
        assert _dump("||**a**||") == '[[spoiler [bold [text "a"]]]]'


class TestEscapesAndSpecialText:
    """Escapes, soft hyphens, emoji placeholders."""

    def test_escaped_asterisks(self) -> None:
        assert _dump("\\*hi\\*") == '[[text "*"] [text "hi"] [text "*"]]'

    def test_escaped_letter_is_not_an_escape(self) -> None:
        assert _dump("\\n") == '[[text "\\\\n"]]'

    def test_soft_hyphen_is_elided(self) -> None:
        assert _dump("a­b") == '[[text "a"] [text ""] [text "b"]]'

    def test_named_emoji_with_skin_tone_stays_text(self) -> None:
        assert _dump(":wave::skin-tone-2:") == '[[text ":wave::skin-tone-2:"]]'

    def test_vertical_tab_can_be_escaped(self) -> None:
        """Only tab, newline, form feed, carriage return and space are whitespace."""
        assert Parser().parse("\\\v").children == [Text("\v")]

    def test_vertical_tab_does_not_separate_list_marker(self) -> None:
        doc = Parser(ALL_FEATURES).parse("-\vx")
        assert doc.children == [Text("-"), Text("\vx")]


class TestCode:
    def test_code_block_without_language(self) -> None:
        assert _dump("```\ncode\n```") == '[[code "" "code"]]'

    def test_multi_line_code_block(self) -> None:
        assert _dump("```py\nprint(1)\nprint(2)\n```") == (
            '[[code "py" "print(1)\\nprint(2)"]]'
        )

    def test_double_backtick_inline_code(self) -> None:
        assert _dump("``a b``") == '[[code "" "a b"]]'

    def test_unterminated_fence_is_text(self) -> None:
        assert _dump("```abc") == '[[code "" ""] [text "`abc"]]'


class TestLinks:
    def test_masked_link_disabled_by_default(self) -> None:
        assert _dump("[a](https://x.com)") == (
            '[[text "[a"] [text "]"] [text "("] [url "" "https://x.com"] [text ")"]]'
        )

    def test_masked_link_with_title(self) -> None:
        config = ParseConfig(masked_links=True)
        assert _dump('[a](https://x.com "title")', config) == '[[url "a" "https://x.com"]]'

    def test_masked_link_with_nested_brackets(self) -> None:
        config = ParseConfig(masked_links=True)
        assert _dump("[[a]](https://x.com)", config) == '[[url "[a]" "https://x.com"]]'


class TestMentionsAndTimestamps:
    def test_mentions_disabled(self) -> None:
        config = ParseConfig(mentions=False)
        assert _dump("<#1234>", config) == '[[text "<"] [text "#1234"] [text ">"]]'
        assert _dump("@here", config) == '[[text "@here"]]'

    def test_user_mention_without_nickname_marker(self) -> None:
        assert _dump("<@42>") == '[[usermention "42"]]'

    def test_timestamp_without_suffix(self) -> None:
        assert _dump("<t:123>") == '[[timestamp "123" ""]]'

    def test_negative_timestamp(self) -> None:
        assert _dump("<t:-5:R>") == '[[timestamp "-5" "R"]]'


class TestForumMarkdown:
    """Headers and lists, only with forum_markdown enabled."""

    CONFIG = ParseConfig(forum_markdown=True)

    def test_list_items_and_trailing_newline(self) -> None:
        assert _dump("- a\n- b", self.CONFIG) == (
            '[[list 1 true [text "a"]] [list 1 false [text "b"]]]'
        )

    def test_indented_list_item_is_nested(self) -> None:
        assert _dump("  - b", self.CONFIG) == '[[list 2 false [text "b"]]]'

    def test_header_disabled_by_default(self) -> None:
        assert _dump("# a") == '[[text "# a"]]'

    def test_empty_header_content_is_skipped(self) -> None:
        """An empty child span is discarded and parsing carries on."""
        assert _dump("# \nhi", self.CONFIG) == '[[header 1] [text "\\nhi"]]'


class TestDeepNesting:
    def test_deeply_nested_underlines(self) -> None:
        """Nesting depth does not depend on the interpreter stack."""
        doc = Parser().parse("_" * 3000)
        kinds = [type(n).__name__ for n in iter_nodes(doc)]
        assert kinds.count("Underline") == 749
        assert kinds.count("Italics") == 1
        assert debug(doc).startswith("[[underline [underline")

    def test_bold_node_children_are_ordered(self) -> None:
        doc = Parser().parse("**a *b* c**")
        bold = doc.children[0]
        assert isinstance(bold, Bold)
        assert debug(bold) == '[bold [text "a "] [italics [text "b"]] [text " c"]]'


class TestPendingSpan:
    def test_is_immutable(self) -> None:
        span = PendingSpan(Document(), 0, 1)
        with pytest.raises(FrozenInstanceError):
            span.end = 2  # type: ignore[misc]


class TestLinearTime:
    """Text matches stay linear on long runs of word characters or spaces."""

    @pytest.mark.parametrize(
        "source",
        [
            "a" * 64000,
            "_" + "a" * 64000,
            "a" + " " * 64000 + "b",
        ],
        ids=["word", "underscore-word", "space-run"],
    )
    def test_long_runs_parse_quickly(self, source: str) -> None:
        start = time.perf_counter()
        doc = Parser().parse(source)
        elapsed = time.perf_counter() - start
        assert extract_text(doc) == source
        assert elapsed < 2.0, f"parse took {elapsed:.2f}s"
