"""Evidence pattern compiler -- turns authored text into a line matcher.

Raw characters are lexed left-to-right into tokens:

- ``...``          -> WILDCARD   (any substring, including empty)
- whitespace run   -> WHITESPACE (one or more whitespace characters)
- ``'`` or ``"``   -> QUOTE      (either quote mark)
- ``→``            -> ARROW      (the glyph or the ``->`` digraph)
- anything else    -> LITERAL    (matched literally)

Matching is case-insensitive and unanchored: a matcher reports whether a
line *contains* a match.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

WILDCARD_TEXT = "..."
ARROW_GLYPH = "→"
QUOTE_CHARS = frozenset({"'", '"'})


class PatternError(ValueError):
    """Raised when a raw pattern cannot be turned into a useful matcher."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid pattern {raw!r}: {reason}")


class TokenKind(str, Enum):
    """Lexical categories of the pattern dialect."""

    WILDCARD = "wildcard"
    WHITESPACE = "whitespace"
    QUOTE = "quote"
    ARROW = "arrow"
    LITERAL = "literal"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


def tokenize(raw: str) -> list[Token]:
    """Lex a raw pattern into tokens. Adjacent literals are merged."""
    tokens: list[Token] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if raw.startswith(WILDCARD_TEXT, i):
            tokens.append(Token(TokenKind.WILDCARD, WILDCARD_TEXT))
            i += len(WILDCARD_TEXT)
            continue
        if ch.isspace():
            start = i
            while i < len(raw) and raw[i].isspace():
                i += 1
            tokens.append(Token(TokenKind.WHITESPACE, raw[start:i]))
            continue
        if ch in QUOTE_CHARS:
            tokens.append(Token(TokenKind.QUOTE, ch))
        elif ch == ARROW_GLYPH:
            tokens.append(Token(TokenKind.ARROW, ch))
        elif tokens and tokens[-1].kind is TokenKind.LITERAL:
            tokens[-1] = Token(TokenKind.LITERAL, tokens[-1].text + ch)
        else:
            tokens.append(Token(TokenKind.LITERAL, ch))
        i += 1
    return tokens


_RENDERERS = {
    TokenKind.WILDCARD: lambda _text: ".*?",
    TokenKind.WHITESPACE: lambda _text: r"\s+",
    TokenKind.QUOTE: lambda _text: "['\"]",
    TokenKind.ARROW: lambda _text: f"(?:{ARROW_GLYPH}|->)",
    TokenKind.LITERAL: re.escape,
}


def render_regex(tokens: list[Token]) -> str:
    """Render tokens as a Python ``re`` expression body."""
    return "".join(_RENDERERS[token.kind](token.text) for token in tokens)


class Matcher(ABC):
    """Reports whether a normalized line contains a match."""

    raw: str

    @abstractmethod
    def matches(self, text: str) -> bool:
        """Return True when *text* contains a match."""

    def __call__(self, text: str) -> bool:
        return self.matches(text)


class NeverMatcher(Matcher):
    """Matcher for an empty pattern. Never matches anything."""

    def __init__(self, raw: str = "") -> None:
        self.raw = raw

    def matches(self, text: str) -> bool:
        return False

    def __repr__(self) -> str:
        return "NeverMatcher()"


class RegexMatcher(Matcher):
    """Matcher backed by a compiled ``re`` pattern, searched unanchored."""

    def __init__(self, raw: str, expression: str) -> None:
        self.raw = raw
        self.expression = expression
        self._regex = re.compile(expression, re.IGNORECASE)

    def matches(self, text: str) -> bool:
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self.raw!r})"


def compile_pattern(raw: str) -> Matcher:
    """Compile a raw authored pattern into a Matcher.

    An empty pattern yields a NeverMatcher so that a blank rule can never
    pass vacuously.

    Raises:
        PatternError: If the pattern has content but no literal text
            (e.g. only ``...`` and spaces), which would match every line.
    """
    if raw == "":
        return NeverMatcher(raw)

    tokens = tokenize(raw)
    if not any(t.kind is not TokenKind.WILDCARD and t.kind is not TokenKind.WHITESPACE for t in tokens):
        raise PatternError(raw, "pattern has no literal text and would match every line")

    expression = render_regex(tokens)
    try:
        return RegexMatcher(raw, expression)
    except re.error as exc:
        raise PatternError(raw, str(exc)) from exc
