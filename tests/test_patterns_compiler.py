"""Tests for the evidence pattern compiler."""

from __future__ import annotations

import pytest

from logverdict.patterns.compiler import (
    NeverMatcher,
    PatternError,
    RegexMatcher,
    TokenKind,
    compile_pattern,
    render_regex,
    tokenize,
)


class TestTokenize:
    """Lexing of raw patterns."""

    def test_plain_text_is_one_literal(self) -> None:
        tokens = tokenize("SceneTransitionCompleted")
        assert [t.kind for t in tokens] == [TokenKind.LITERAL]
        assert tokens[0].text == "SceneTransitionCompleted"

    def test_wildcard_splits_literals(self) -> None:
        tokens = tokenize("Fade...completed")
        assert [t.kind for t in tokens] == [
            TokenKind.LITERAL,
            TokenKind.WILDCARD,
            TokenKind.LITERAL,
        ]

    def test_whitespace_run_is_one_token(self) -> None:
        tokens = tokenize("a   \t b")
        assert [t.kind for t in tokens] == [
            TokenKind.LITERAL,
            TokenKind.WHITESPACE,
            TokenKind.LITERAL,
        ]

    def test_quotes_and_arrow(self) -> None:
        tokens = tokenize("token='x' → y")
        kinds = [t.kind for t in tokens]
        assert kinds.count(TokenKind.QUOTE) == 2
        assert TokenKind.ARROW in kinds

    def test_two_dots_stay_literal(self) -> None:
        tokens = tokenize("a..b")
        assert [t.kind for t in tokens] == [TokenKind.LITERAL]


class TestRenderRegex:
    """Rendering tokens as a regular expression."""

    def test_literal_metacharacters_are_escaped(self) -> None:
        assert render_regex(tokenize("[Baseline](x)")) == r"\[Baseline\]\(x\)"

    def test_wildcard_is_lazy(self) -> None:
        assert render_regex(tokenize("a...b")) == "a.*?b"


class TestCompilePattern:
    """compile_pattern produces matchers with the dialect's semantics."""

    def test_empty_pattern_never_matches(self) -> None:
        matcher = compile_pattern("")
        assert isinstance(matcher, NeverMatcher)
        assert matcher("") is False
        assert matcher("anything") is False

    def test_matching_is_case_insensitive(self) -> None:
        matcher = compile_pattern("scenetransitioncompleted")
        assert isinstance(matcher, RegexMatcher)
        assert matcher("[Info] SceneTransitionCompleted at 1.2")

    def test_matching_is_unanchored(self) -> None:
        matcher = compile_pattern("ScenesReady")
        assert matcher("... SceneTransitionScenesReady recebido ...")

    def test_wildcard_matches_empty_and_long_spans(self) -> None:
        matcher = compile_pattern("Fade...completed")
        assert matcher("Fadecompleted")
        assert matcher("FadeIn step 3 of 3 completed")
        assert not matcher("completed Fade")

    def test_whitespace_matches_any_run(self) -> None:
        matcher = compile_pattern("Reset completed")
        assert matcher("Reset \t   completed")
        assert not matcher("Resetcompleted")

    def test_quote_matches_either_quote_mark(self) -> None:
        matcher = compile_pattern("Acquire token='flow.scene_transition'")
        assert matcher('Acquire token="flow.scene_transition"')
        assert matcher("Acquire token='flow.scene_transition'")

    def test_arrow_matches_glyph_and_digraph(self) -> None:
        matcher = compile_pattern("Boot → Menu")
        assert matcher("Boot → Menu")
        assert matcher("Boot -> Menu")

    def test_regex_metacharacters_are_literal(self) -> None:
        matcher = compile_pattern("[Baseline][FAIL]")
        assert matcher("x [Baseline][FAIL] y")
        assert not matcher("B")

    @pytest.mark.parametrize("raw", ["...", "   ", "... ...", "......"])
    def test_pattern_without_literal_text_raises(self, raw: str) -> None:
        with pytest.raises(PatternError, match="no literal text"):
            compile_pattern(raw)

    def test_pattern_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compile_pattern("...")

    def test_pattern_error_keeps_raw(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            compile_pattern(" ... ")
        assert exc_info.value.raw == " ... "
