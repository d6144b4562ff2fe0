"""Log normalizer -- splits captured entries and strips volatile decoration.

Captured entries may carry rich-text markup (``<color=#ff0>...</color>``,
``<b>``), a trailing timing annotation such as ``(@ 9,97s)`` and embedded
line breaks from attached stack traces. Matching runs against the
normalized text; the original text is kept for reporting.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from logverdict.models.log import LogDocument, LogLine

logger = logging.getLogger(__name__)

RICH_TEXT_TAGS = (
    "align", "alpha", "b", "color", "font", "i", "indent", "link", "mark",
    "material", "noparse", "quad", "s", "size", "sprite", "style", "sub",
    "sup", "u",
)
MARKUP_TAG = re.compile(
    r"</?(?:" + "|".join(RICH_TEXT_TAGS) + r")(?:\s*=\s*[^<>]*)?>", re.IGNORECASE
)
TIMING_SUFFIX = re.compile(r"\s*\(@\s*[^)]*s\)\s*$")
LINE_BREAK = re.compile(r"\r\n|\r|\n")
TRAILING_BREAK = re.compile(r"(?:\r\n|\r|\n)\Z")

STARTED_PREFIX = "startedutc:"
CAPTURE_PREFIX = "captureid:"


def split_entries(entries: Iterable[str]) -> list[str]:
    """Split multi-line entries into physical lines (any line-ending variant)."""
    physical: list[str] = []
    for entry in entries:
        physical.extend(LINE_BREAK.split(entry))
    return physical


def strip_markup(text: str) -> str:
    """Remove rich-text open/close tags; other angle-bracket text is kept."""
    return MARKUP_TAG.sub("", text)


def strip_timing(text: str) -> str:
    """Remove a trailing ``(@ <number>s)`` annotation."""
    return TIMING_SUFFIX.sub("", text)


def normalize_line(text: str) -> str:
    return strip_timing(strip_markup(text))


def normalize_lines(entries: Iterable[str]) -> list[LogLine]:
    """Split and normalize entries into 1-based LogLines."""
    return [
        LogLine(number=number, text=normalize_line(original), original=original)
        for number, original in enumerate(split_entries(entries), 1)
    ]


def _header_value(lines: list[LogLine], prefix: str) -> str | None:
    for line in lines:
        text = line.text.strip()
        if text.lower().startswith(prefix):
            value = text[len(prefix):].strip()
            return value or None
    return None


def parse_log(text: str, source: str = "<string>") -> LogDocument:
    """Normalize an in-memory log snapshot."""
    text = TRAILING_BREAK.sub("", text)
    lines = normalize_lines([text]) if text else []
    doc = LogDocument(source=source, lines=lines)
    doc.started_utc = _header_value(lines, STARTED_PREFIX)
    doc.capture_id = _header_value(lines, CAPTURE_PREFIX)
    if not lines:
        doc.diagnostics.append("Log is empty")
    return doc


def load_log(path: Path) -> LogDocument:
    """Load and normalize a log file. Never raises for I/O problems.

    A missing or unreadable file yields ``loaded=False`` with a diagnostic.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return LogDocument(source=str(path), loaded=False, diagnostics=[f"Log not found: {path}"])
    except OSError as exc:
        logger.warning("Could not read log %s: %s", path, exc)
        return LogDocument(
            source=str(path),
            loaded=False,
            diagnostics=[f"Log read failed: {type(exc).__name__}: {exc}"],
        )
    return parse_log(text, str(path))
