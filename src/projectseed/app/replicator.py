"""Recursive copy of template trees with dotfile renaming."""

from __future__ import annotations

import shutil
from pathlib import Path

from projectseed.domain.template import materialized_name


class DirectoryReplicator:
    """Mirror a template directory into a destination.

    Entries named ``<name>.hidden`` land as ``.<name>``. File bytes are copied
    verbatim together with their permission bits. Errors raised by the file
    system propagate; nothing already written is removed.
    """

    def replicate(self, source: Path, destination: Path) -> list[Path]:
        destination.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for entry in source.iterdir():
            target = destination / materialized_name(entry.name)
            if entry.is_dir():
                written.extend(self.replicate(entry, target))
            else:
                shutil.copy2(entry, target)
                written.append(target)
        return written
