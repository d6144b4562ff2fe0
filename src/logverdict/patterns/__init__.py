"""Pattern dialect for evidence and order rules."""

from logverdict.patterns.compiler import (
    Matcher,
    NeverMatcher,
    PatternError,
    RegexMatcher,
    compile_pattern,
    tokenize,
)

__all__ = [
    "Matcher",
    "NeverMatcher",
    "PatternError",
    "RegexMatcher",
    "compile_pattern",
    "tokenize",
]
