"""Filesystem-backed template repository driven by ``registry.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import yaml

from projectseed.domain.template import HookBundleDescriptor, TemplateDescriptor
from projectseed.ports.template_repo import (
    TemplateNotFoundError,
    TemplateRegistryError,
    TemplateRepository,
)


REGISTRY_FILENAME = "registry.yaml"


class FSTemplateRepository(TemplateRepository):
    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._registry = self._load_registry()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def ensure_available(self, template_id: str) -> TemplateDescriptor:
        entry = self._registry["templates"].get(template_id)
        if entry is None:
            raise TemplateNotFoundError(template_id)
        descriptor = self._descriptor_from_entry(template_id, entry)
        try:
            descriptor.validate()
        except FileNotFoundError as exc:
            raise TemplateNotFoundError(template_id, str(exc)) from exc
        return descriptor

    def list_templates(self) -> Sequence[TemplateDescriptor]:
        return [
            self._descriptor_from_entry(template_id, entry)
            for template_id, entry in sorted(self._registry["templates"].items())
        ]

    def hook_bundle(self) -> HookBundleDescriptor:
        hooks = self._registry.get("hooks") or {}
        directory = str(hooks.get("directory", "husky"))
        destination = str(hooks.get("destination", ".husky"))
        return HookBundleDescriptor(root_dir=self._base_dir / directory, destination=destination)

    def _descriptor_from_entry(self, template_id: str, entry: dict[str, Any]) -> TemplateDescriptor:
        directory = str(entry.get("directory", template_id))
        return TemplateDescriptor(
            template_id=template_id,
            root_dir=self._base_dir / directory,
            description=str(entry.get("description", "")).strip(),
            entry_point=str(entry.get("entry_point", "index.js")),
        )

    def _load_registry(self) -> dict[str, Any]:
        registry_path = self._base_dir / REGISTRY_FILENAME
        if not registry_path.exists():
            raise TemplateRegistryError(f"Template registry missing: {registry_path}")
        try:
            data = yaml.safe_load(registry_path.read_text("utf-8")) or {}
        except yaml.YAMLError as exc:
            raise TemplateRegistryError(f"Template registry invalid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise TemplateRegistryError("Template registry must be a mapping")
        templates = data.get("templates")
        if not isinstance(templates, dict):
            raise TemplateRegistryError("Template registry must define a 'templates' mapping")
        hooks = data.get("hooks")
        if hooks is not None and not isinstance(hooks, dict):
            raise TemplateRegistryError("Template registry 'hooks' must be a mapping")
        normalised: dict[str, dict[str, Any]] = {}
        for template_id, entry in templates.items():
            if entry is None:
                entry = {}
            if not isinstance(entry, dict):
                raise TemplateRegistryError(f"Template entry '{template_id}' must be a mapping")
            normalised[str(template_id)] = entry
        data["templates"] = normalised
        return data
