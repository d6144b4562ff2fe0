"""Spec diagnostic formatter with dual-mode output (human and CI concise).

Produces annotated messages with the offending source line in human mode
and concise ``file:line -- kind: message`` lines in CI mode.
"""

from __future__ import annotations

import os

from logverdict.models.spec import DiagnosticKind, SpecDiagnostic

ERROR_CODES: dict[DiagnosticKind, str] = {
    DiagnosticKind.input_missing: "E001",
    DiagnosticKind.spec_malformed: "E002",
    DiagnosticKind.spec_empty: "E003",
}

ERROR_DESCRIPTIONS: dict[str, str] = {
    "E001": "spec input missing",
    "E002": "malformed rule",
    "E003": "no rules",
}


class DiagnosticFormatter:
    """Formats spec diagnostics for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        if ci_mode is None:
            self.ci_mode = os.environ.get("CI", "").lower() in ("true", "1", "yes")
        else:
            self.ci_mode = ci_mode

    def format_diagnostic(
        self,
        diagnostic: SpecDiagnostic,
        source_lines: list[str],
        filename: str,
    ) -> str:
        if self.ci_mode:
            return self._format_ci(diagnostic, filename)
        return self._format_human(diagnostic, source_lines, filename)

    def _format_ci(self, diagnostic: SpecDiagnostic, filename: str) -> str:
        line = diagnostic.line if diagnostic.line is not None else 0
        return f"{filename}:{line} -- {diagnostic.kind.value}: {diagnostic.message}"

    def _format_human(
        self,
        diagnostic: SpecDiagnostic,
        source_lines: list[str],
        filename: str,
    ) -> str:
        """Format like:

            error[E002]: malformed rule
              --> contract.md:12
               |
            12 | - `k` :: `...`
               | Invalid hard evidence `k`: pattern has no literal text
        """
        code = ERROR_CODES.get(diagnostic.kind, "E999")
        description = ERROR_DESCRIPTIONS.get(code, "spec problem")

        lines = [f"error[{code}]: {description}"]
        if diagnostic.line is not None:
            lines.append(f"  --> {filename}:{diagnostic.line}")
            line_idx = diagnostic.line - 1
            if 0 <= line_idx < len(source_lines):
                number = str(diagnostic.line)
                padding = " " * len(number)
                lines.append(f" {padding} |")
                lines.append(f" {number} | {source_lines[line_idx].rstrip()}")
                lines.append(f" {padding} | {diagnostic.message}")
            else:
                lines.append("   |")
                lines.append(f"   | {diagnostic.message}")
        else:
            lines.append(f"  --> {filename}")
            lines.append("   |")
            lines.append(f"   | {diagnostic.message}")
        return "\n".join(lines)

    def format_all(
        self,
        diagnostics: list[SpecDiagnostic],
        source: str,
        filename: str,
    ) -> str:
        source_lines = source.splitlines()
        return "\n\n".join(
            self.format_diagnostic(d, source_lines, filename) for d in diagnostics
        )

    def print_success(self, filename: str, rule_count: int) -> None:
        print(f"  {filename} ... valid ({rule_count} rules)")
