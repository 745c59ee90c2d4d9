from __future__ import annotations

import json
from pathlib import Path

import pytest

from projectseed.adapters.fs_template_repo import FSTemplateRepository
from projectseed.app.manifest import ManifestComposer
from projectseed.app.scaffold_service import (
    DestinationExistsError,
    ScaffoldService,
    ScaffoldState,
)
from projectseed.domain.config import ScaffoldConfig
from projectseed.ports.template_repo import TemplateNotFoundError

from tests._template_utils import seed_templates


@pytest.fixture()
def repo(tmp_path: Path) -> FSTemplateRepository:
    return FSTemplateRepository(seed_templates(tmp_path / "templates"))


def test_scaffold_without_hooks(tmp_path: Path, repo: FSTemplateRepository) -> None:
    messages: list[str] = []
    service = ScaffoldService(repo, progress=messages.append)
    workspace = tmp_path / "workspace"
    workspace.mkdir()

    result = service.scaffold(ScaffoldConfig(project_name="demo", template_id="node-cli"), workspace)

    project = workspace / "demo"
    assert result.project_dir == project
    assert service.state is ScaffoldState.SUCCESS
    assert (project / ".gitignore").exists()
    assert (project / "src" / "main.js").exists()
    assert not (project / ".husky").exists()
    manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "demo"
    assert manifest["bin"] == {"demo": "index.js"}
    assert "repository" not in manifest
    assert "engines" not in manifest
    assert messages[0] == 'Scaffolding project "node-cli"...'
    assert messages[-1].startswith('Project "demo" created at')
    assert result.manifest_path in result.files_written
    assert not result.hooks_installed


def test_scaffold_with_hooks_and_engines(tmp_path: Path, repo: FSTemplateRepository) -> None:
    config = ScaffoldConfig(
        project_name="cli",
        template_id="node-cli",
        scope_name="acme",
        node_version="^18.0.0",
        use_hooks=True,
    )
    result = ScaffoldService(repo).scaffold(config, tmp_path)

    project = tmp_path / "cli"
    manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "@acme/cli"
    assert manifest["engines"] == {"node": "^18.0.0"}
    assert manifest["devDependencies"]["husky"] == "^8.0.3"
    assert manifest["scripts"]["postinstall"] == "husky install"
    assert manifest["scripts"]["test"] == "node --test"
    pre_commit = (project / ".husky" / "pre-commit").read_text(encoding="utf-8")
    assert "node-checks.sh" in pre_commit
    assert result.hooks_installed


def test_scaffold_rejects_existing_destination(tmp_path: Path, repo: FSTemplateRepository) -> None:
    existing = tmp_path / "demo"
    existing.mkdir()
    (existing / "keep.txt").write_text("mine", encoding="utf-8")
    service = ScaffoldService(repo)

    with pytest.raises(DestinationExistsError, match='Folder "demo" already exists.'):
        service.scaffold(ScaffoldConfig(project_name="demo", template_id="node-cli"), tmp_path)

    assert service.state is ScaffoldState.FAILED
    assert [p.name for p in existing.iterdir()] == ["keep.txt"]


def test_scaffold_rejects_unknown_template(tmp_path: Path, repo: FSTemplateRepository) -> None:
    service = ScaffoldService(repo)
    with pytest.raises(TemplateNotFoundError, match='Template "react" not found.'):
        service.scaffold(ScaffoldConfig(project_name="demo", template_id="react"), tmp_path)
    assert service.state is ScaffoldState.FAILED
    assert not (tmp_path / "demo").exists()


def test_scaffold_io_failure_leaves_partial_output(tmp_path: Path, repo: FSTemplateRepository) -> None:
    class BrokenComposer(ManifestComposer):
        def write(self, template, destination, config):  # type: ignore[override]
            raise PermissionError("read-only file system")

    service = ScaffoldService(repo, composer=BrokenComposer())
    with pytest.raises(PermissionError):
        service.scaffold(ScaffoldConfig(project_name="demo", template_id="node-cli"), tmp_path)

    assert service.state is ScaffoldState.FAILED
    assert (tmp_path / "demo" / "index.js").exists()


def test_service_runs_once(tmp_path: Path, repo: FSTemplateRepository) -> None:
    service = ScaffoldService(repo)
    service.scaffold(ScaffoldConfig(project_name="one", template_id="node-cli"), tmp_path)
    with pytest.raises(RuntimeError, match="Illegal scaffold transition"):
        service.scaffold(ScaffoldConfig(project_name="two", template_id="node-cli"), tmp_path)
