"""Runtime settings for the projectseed CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from projectseed import __version__


PACKAGED_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    template_dir: Path
    log_dir: Path
    cli_version: str = __version__

    @property
    def telemetry_file(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir() -> Path:
    override = os.environ.get("PROJECTSEED_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".projectseed"


def load_settings() -> RuntimeSettings:
    base = _default_home_dir()
    template_override = os.environ.get("PROJECTSEED_TEMPLATE_DIR")
    template_dir = Path(template_override).expanduser() if template_override else PACKAGED_TEMPLATE_DIR
    return RuntimeSettings(
        home_dir=base,
        template_dir=template_dir,
        log_dir=base / "logs",
    )


SETTINGS = load_settings()
