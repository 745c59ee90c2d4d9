"""Domain model for template bundles stored on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


MANIFEST_FILENAME = "package.json"
HIDDEN_SUFFIX = ".hidden"


def materialized_name(name: str) -> str:
    """Map ``foo.hidden`` to ``.foo``; every other name is returned unchanged.

    Packaging pipelines may drop dotfiles, so templates ship them with the
    ``.hidden`` suffix instead. A bare ``.hidden`` is not marked.
    """

    if len(name) > len(HIDDEN_SUFFIX) and name.endswith(HIDDEN_SUFFIX):
        return "." + name[: -len(HIDDEN_SUFFIX)]
    return name


@dataclass(frozen=True)
class TemplateDescriptor:
    template_id: str
    root_dir: Path
    description: str = ""
    entry_point: str = "index.js"

    @property
    def manifest_path(self) -> Path:
        return self.root_dir / MANIFEST_FILENAME

    def validate(self) -> None:
        if not self.root_dir.is_dir():
            raise FileNotFoundError(f"Template directory missing: {self.root_dir}")
        if not self.manifest_path.is_file():
            raise FileNotFoundError(f"Template manifest missing: {self.manifest_path}")


@dataclass(frozen=True)
class HookBundleDescriptor:
    root_dir: Path
    destination: str = ".husky"

    def validate(self) -> None:
        if not self.root_dir.is_dir():
            raise FileNotFoundError(f"Hook bundle directory missing: {self.root_dir}")
