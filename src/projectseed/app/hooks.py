"""Optional git-hook bundle injection."""

from __future__ import annotations

from pathlib import Path

from projectseed.domain.config import ScaffoldConfig
from projectseed.domain.template import HookBundleDescriptor

from .replicator import DirectoryReplicator


NODE_CHECKS_MARKER = "<node-checks>"
PRE_COMMIT_SCRIPT = "pre-commit"
NODE_CHECKS_SCRIPT = "node-checks.sh"
NODE_CHECKS_INCLUDE = f'. "$(dirname "$0")/{NODE_CHECKS_SCRIPT}"'


def patch(content: str, marker: str, replacement: str) -> str:
    """Replace the first line consisting solely of ``marker``.

    An empty replacement removes the line. Content without the marker is
    returned as is.
    """

    line = f"\n{marker}\n"
    substitute = f"\n{replacement}\n" if replacement else "\n"
    return content.replace(line, substitute, 1)


class HookInjector:
    def __init__(self, replicator: DirectoryReplicator | None = None) -> None:
        self._replicator = replicator or DirectoryReplicator()

    def inject(self, bundle: HookBundleDescriptor, destination: Path, config: ScaffoldConfig) -> list[Path]:
        bundle.validate()
        hooks_dir = destination / bundle.destination
        written = self._replicator.replicate(bundle.root_dir, hooks_dir)

        pre_commit = hooks_dir / PRE_COMMIT_SCRIPT
        replacement = NODE_CHECKS_INCLUDE if config.has_engine_constraints else ""
        content = pre_commit.read_text(encoding="utf-8")
        pre_commit.write_text(patch(content, NODE_CHECKS_MARKER, replacement), encoding="utf-8", newline="\n")
        return written
