"""Application service sequencing a scaffold run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from projectseed.domain.config import ScaffoldConfig
from projectseed.domain.template import TemplateDescriptor
from projectseed.ports.template_repo import TemplateRepository

from .hooks import HookInjector
from .manifest import ManifestComposer
from .replicator import DirectoryReplicator


ProgressFn = Callable[[str], None]


class ScaffoldError(RuntimeError):
    """Base class for precondition failures detected before any write."""


class DestinationExistsError(ScaffoldError):
    def __init__(self, path: Path) -> None:
        super().__init__(f'Folder "{path.name}" already exists.')
        self.path = path


class ScaffoldState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SCAFFOLDING = "scaffolding"
    SUCCESS = "success"
    FAILED = "failed"


_TRANSITIONS: dict[ScaffoldState, frozenset[ScaffoldState]] = {
    ScaffoldState.IDLE: frozenset({ScaffoldState.VALIDATING}),
    ScaffoldState.VALIDATING: frozenset({ScaffoldState.SCAFFOLDING, ScaffoldState.FAILED}),
    ScaffoldState.SCAFFOLDING: frozenset({ScaffoldState.SUCCESS, ScaffoldState.FAILED}),
    ScaffoldState.SUCCESS: frozenset(),
    ScaffoldState.FAILED: frozenset(),
}


@dataclass(frozen=True)
class ScaffoldResult:
    project_dir: Path
    template: TemplateDescriptor
    manifest_path: Path
    files_written: list[Path] = field(default_factory=list)
    hooks_installed: bool = False


class ScaffoldService:
    """Runs one scaffold start to finish.

    Order is fixed: main template, hook bundle (when enabled), manifest. The
    manifest goes last because it is composed from the template's base
    manifest and references the hook manager installed above. Failures after
    validation leave whatever was written in place.
    """

    def __init__(
        self,
        template_repo: TemplateRepository,
        *,
        replicator: DirectoryReplicator | None = None,
        composer: ManifestComposer | None = None,
        injector: HookInjector | None = None,
        progress: ProgressFn | None = None,
    ) -> None:
        self._templates = template_repo
        self._replicator = replicator or DirectoryReplicator()
        self._composer = composer or ManifestComposer()
        self._injector = injector or HookInjector(self._replicator)
        self._progress = progress or (lambda message: None)
        self._state = ScaffoldState.IDLE

    @property
    def state(self) -> ScaffoldState:
        return self._state

    def scaffold(self, config: ScaffoldConfig, parent_dir: Path) -> ScaffoldResult:
        self._transition(ScaffoldState.VALIDATING)
        try:
            template = self._templates.ensure_available(config.template_id)
            project_dir = parent_dir / config.project_name
            if project_dir.exists():
                raise DestinationExistsError(project_dir)
        except Exception:
            self._transition(ScaffoldState.FAILED)
            raise

        self._transition(ScaffoldState.SCAFFOLDING)
        self._progress(f'Scaffolding project "{template.template_id}"...')
        try:
            written = self._replicator.replicate(template.root_dir, project_dir)
            if config.use_hooks:
                written.extend(self._injector.inject(self._templates.hook_bundle(), project_dir, config))
            manifest_path = self._composer.write(template, project_dir, config)
        except Exception:
            self._transition(ScaffoldState.FAILED)
            raise

        self._transition(ScaffoldState.SUCCESS)
        self._progress(f'Project "{config.package_name}" created at {project_dir}')
        if manifest_path not in written:
            written.append(manifest_path)
        return ScaffoldResult(
            project_dir=project_dir,
            template=template,
            manifest_path=manifest_path,
            files_written=written,
            hooks_installed=config.use_hooks,
        )

    def _transition(self, target: ScaffoldState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise RuntimeError(f"Illegal scaffold transition {self._state.value} -> {target.value}")
        self._state = target
