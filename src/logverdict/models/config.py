"""Project configuration model for logverdict.

Captures logverdict.yaml fields with defaults for the spec, log and
report locations, the spec dialect and the optional fail marker.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel

CONFIG_FILENAME = "logverdict.yaml"
DEFAULT_CHECKLIST_HEADER = "## Evidências hard (log — strings exatas)"


class ProjectConfig(BaseModel):
    """Project-level configuration loaded from logverdict.yaml."""

    model_config = {"extra": "forbid"}

    spec_path: str = "Docs/Reports/Observability-Contract.md"
    log_path: str = "Docs/Reports/Smoke-LastRun.log"
    output_path: str = "Docs/Reports/Verification-LastRun.md"
    dialect: Literal["auto", "contract", "checklist"] = "auto"
    checklist_header: str = DEFAULT_CHECKLIST_HEADER
    fail_marker: str | None = None
    ci_mode: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    def resolve(self, project_root: Path, value: str) -> Path:
        """Resolve a configured path against the project root."""
        path = Path(value)
        return path if path.is_absolute() else project_root / path


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for logverdict.yaml.

    Returns:
        The directory containing logverdict.yaml, or cwd if none is found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return Path.cwd()


def load_project_config(project_root: Path | None = None) -> ProjectConfig:
    """Load ProjectConfig from logverdict.yaml. Returns defaults if not found.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the file does not match the schema.
    """
    if project_root is None:
        project_root = find_project_root()
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return ProjectConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return ProjectConfig()
    return ProjectConfig.model_validate(raw)
