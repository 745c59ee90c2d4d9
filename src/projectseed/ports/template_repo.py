"""Port definitions for template storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from projectseed.domain.template import HookBundleDescriptor, TemplateDescriptor


class TemplateNotFoundError(RuntimeError):
    def __init__(self, template_id: str, reason: str | None = None) -> None:
        message = f'Template "{template_id}" not found.'
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.template_id = template_id


class TemplateRegistryError(RuntimeError):
    pass


class TemplateRepository(ABC):
    @abstractmethod
    def ensure_available(self, template_id: str) -> TemplateDescriptor:
        """Return the descriptor registered under ``template_id``."""

    @abstractmethod
    def list_templates(self) -> Sequence[TemplateDescriptor]:
        """List registered templates ordered by id."""

    @abstractmethod
    def hook_bundle(self) -> HookBundleDescriptor:
        """Return the optional git-hook bundle shipped with the templates."""
