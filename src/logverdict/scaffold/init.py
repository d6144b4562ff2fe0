"""Project scaffolding for `logverdict init`.

Writes logverdict.yaml plus one example spec per dialect under specs/,
creates the logs/ and reports/ work directories and keeps reports out of
version control.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

console = Console()

# Template files to generate: (template_name, output_path)
_FILE_MAP: list[tuple[str, str]] = [
    ("logverdict.yaml", "logverdict.yaml"),
    ("contract.md", "specs/contract.md"),
    ("checklist.md", "specs/checklist.md"),
]

_GITIGNORE_ENTRY = "reports/"


class ProjectExistsError(Exception):
    """Raised when scaffold_project would overwrite existing files."""

    def __init__(self, conflicting_files: list[str]) -> None:
        self.conflicting_files = conflicting_files
        files_str = ", ".join(conflicting_files)
        super().__init__(f"Files already exist: {files_str}")


def _get_templates_dir() -> Path:
    """Return the path to the templates directory within the package."""
    return Path(__file__).parent / "templates"


def scaffold_project(directory: Path, force: bool = False) -> list[str]:
    """Generate a logverdict project in the given directory.

    Args:
        directory: Target directory for the project.
        force: If True, overwrite existing files. If False, raise
            ProjectExistsError when any target file already exists.

    Returns:
        List of created file paths (relative to directory).

    Raises:
        ProjectExistsError: If target files exist and force is False.
    """
    directory = directory.resolve()
    templates_dir = _get_templates_dir()

    if not force:
        conflicts = [out for _, out in _FILE_MAP if (directory / out).exists()]
        if conflicts:
            raise ProjectExistsError(conflicts)

    for sub in ("specs", "logs", "reports"):
        (directory / sub).mkdir(parents=True, exist_ok=True)

    created: list[str] = []
    for template_name, output_path in _FILE_MAP:
        target = directory / output_path
        target.write_text(
            (templates_dir / template_name).read_text(encoding="utf-8"),
            encoding="utf-8",
        )
        created.append(output_path)

    gitignore_path = directory / ".gitignore"
    if gitignore_path.exists():
        content = gitignore_path.read_text(encoding="utf-8")
        if _GITIGNORE_ENTRY not in content.splitlines():
            if content and not content.endswith("\n"):
                content += "\n"
            content += _GITIGNORE_ENTRY + "\n"
            gitignore_path.write_text(content, encoding="utf-8")
            created.append(".gitignore (updated)")
    else:
        gitignore_path.write_text(_GITIGNORE_ENTRY + "\n", encoding="utf-8")
        created.append(".gitignore")

    console.print("[green][bold]Project initialized successfully![/bold][/green]")
    for path in created:
        console.print(f"  [green]✓[/green] {path}")

    return created
