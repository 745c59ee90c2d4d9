from __future__ import annotations

from pathlib import Path

from projectseed.app.hooks import NODE_CHECKS_INCLUDE, HookInjector, patch
from projectseed.domain.config import ScaffoldConfig
from projectseed.domain.template import HookBundleDescriptor

from tests._template_utils import seed_templates


def test_patch_replaces_first_marker_line_only() -> None:
    content = "a\n<m>\nb\n<m>\n"
    assert patch(content, "<m>", "X") == "a\nX\nb\n<m>\n"


def test_patch_with_empty_replacement_drops_line() -> None:
    assert patch("a\n\n<m>\n\nb\n", "<m>", "") == "a\n\n\nb\n"


def test_patch_ignores_inline_marker() -> None:
    content = "echo <m> here\n"
    assert patch(content, "<m>", "X") == content


def _inject(tmp_path: Path, **config: str) -> str:
    templates = seed_templates(tmp_path / "templates")
    destination = tmp_path / "demo"
    destination.mkdir()
    bundle = HookBundleDescriptor(root_dir=templates / "husky", destination=".husky")
    HookInjector().inject(
        bundle,
        destination,
        ScaffoldConfig(project_name="demo", template_id="node-cli", use_hooks=True, **config),
    )
    assert (destination / ".husky" / "node-checks.sh").exists()
    return (destination / ".husky" / "pre-commit").read_text(encoding="utf-8")


def test_inject_without_constraints_removes_marker(tmp_path: Path) -> None:
    script = _inject(tmp_path)
    assert "<node-checks>" not in script
    assert "node-checks.sh" not in script
    assert script.endswith('husky.sh"\n\n\nnpm test\n')


def test_inject_with_node_constraint_adds_include(tmp_path: Path) -> None:
    script = _inject(tmp_path, node_version="^18.0.0")
    assert "<node-checks>" not in script
    assert f"\n{NODE_CHECKS_INCLUDE}\n" in script


def test_inject_with_npm_constraint_adds_include(tmp_path: Path) -> None:
    script = _inject(tmp_path, npm_version="9")
    assert "node-checks.sh" in script


def test_inject_writes_lf_line_endings(tmp_path: Path) -> None:
    _inject(tmp_path, node_version="^18.0.0")
    raw = (tmp_path / "demo" / ".husky" / "pre-commit").read_bytes()
    assert b"\r\n" not in raw
    assert raw.startswith(b"#!/usr/bin/env sh\n")


def test_inject_leaves_bundle_untouched(tmp_path: Path) -> None:
    _inject(tmp_path, node_version="18")
    source = (tmp_path / "templates" / "husky" / "pre-commit").read_text(encoding="utf-8")
    assert "<node-checks>" in source
