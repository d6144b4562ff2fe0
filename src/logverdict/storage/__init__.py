"""Report rendering and persistence."""

from logverdict.storage.report_writer import (
    load_report,
    render_markdown,
    render_report,
    write_report,
)

__all__ = ["load_report", "render_markdown", "render_report", "write_report"]
