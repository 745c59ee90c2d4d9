"""Compose the destination ``package.json`` from a template manifest."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Mapping

from projectseed.domain.config import ScaffoldConfig
from projectseed.domain.template import MANIFEST_FILENAME, TemplateDescriptor


HOOK_MANAGER = "husky"
HOOK_MANAGER_VERSION = "^8.0.3"
HOOK_INSTALL_SCRIPT = "husky install"
PACKAGE_MANAGER = "npm"


class ManifestError(RuntimeError):
    """Raised when a template manifest cannot be parsed."""


class ManifestComposer:
    """Inject configuration answers into a template's base manifest.

    Every rule adds or overwrites a known key; unrelated keys keep their
    value and position.
    """

    def load(self, path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ManifestError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"{path} must contain a JSON object")
        return data

    def compose(
        self,
        template_manifest: Mapping[str, Any],
        config: ScaffoldConfig,
        *,
        entry_point: str = "index.js",
    ) -> dict[str, Any]:
        manifest = copy.deepcopy(dict(template_manifest))

        manifest["name"] = config.package_name

        if isinstance(manifest.get("bin"), dict):
            manifest["bin"][config.project_name] = entry_point

        if config.has_author:
            repository: dict[str, str] = {}
            if config.author_email:
                repository["email"] = config.author_email
            if config.author_name:
                repository["name"] = config.author_name
            manifest["repository"] = repository

        if config.has_engine_constraints:
            engines: dict[str, str] = {}
            if config.node_version:
                engines["node"] = config.node_version
            if config.npm_version:
                engines[PACKAGE_MANAGER] = config.npm_version
            manifest["engines"] = engines

        if config.use_hooks:
            manifest.setdefault("devDependencies", {})[HOOK_MANAGER] = HOOK_MANAGER_VERSION
            manifest.setdefault("scripts", {})["postinstall"] = HOOK_INSTALL_SCRIPT

        return manifest

    def render(self, manifest: Mapping[str, Any]) -> str:
        return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"

    def write(self, template: TemplateDescriptor, destination: Path, config: ScaffoldConfig) -> Path:
        """Read the template manifest, compose it and write it once into ``destination``."""

        manifest = self.compose(
            self.load(template.manifest_path),
            config,
            entry_point=template.entry_point,
        )
        target = destination / MANIFEST_FILENAME
        target.write_text(self.render(manifest), encoding="utf-8")
        return target
