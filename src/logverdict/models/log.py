"""Captured log model: normalized physical lines plus capture metadata."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogLine:
    """One physical log line.

    ``text`` is the normalized form used for matching; ``original`` is kept
    verbatim for reporting.
    """

    number: int
    text: str
    original: str


@dataclass
class LogDocument:
    """A loaded log snapshot.

    ``loaded`` is False when the file was missing or unreadable; the
    reason is recorded in ``diagnostics``.
    """

    source: str = "<string>"
    lines: list[LogLine] = field(default_factory=list)
    loaded: bool = True
    diagnostics: list[str] = field(default_factory=list)
    started_utc: str | None = None
    capture_id: str | None = None

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def usable(self) -> bool:
        return self.loaded and bool(self.lines)
