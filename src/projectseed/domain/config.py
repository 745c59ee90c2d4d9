"""Configuration record collected before a scaffold run."""

from __future__ import annotations

from dataclasses import dataclass

from .naming import describe_name_error, describe_version_error


class InvalidConfigError(ValueError):
    """Raised when a configuration record violates the naming rules."""


@dataclass(frozen=True)
class ScaffoldConfig:
    """Immutable answers used to materialise one project."""

    project_name: str
    template_id: str
    scope_name: str = ""
    author_name: str = ""
    author_email: str = ""
    node_version: str = ""
    npm_version: str = ""
    use_hooks: bool = False

    def __post_init__(self) -> None:
        for field_name in (
            "project_name",
            "template_id",
            "scope_name",
            "author_name",
            "author_email",
            "node_version",
            "npm_version",
        ):
            value = getattr(self, field_name) or ""
            object.__setattr__(self, field_name, value.strip())
        object.__setattr__(self, "use_hooks", bool(self.use_hooks))

        problems = [
            describe_name_error(self.project_name, required=True, label="project"),
            describe_name_error(self.scope_name, required=False, label="scope"),
            describe_version_error(self.node_version),
            describe_version_error(self.npm_version),
        ]
        problems = [problem for problem in problems if problem]
        if problems:
            raise InvalidConfigError("; ".join(dict.fromkeys(problems)))
        if not self.template_id:
            raise InvalidConfigError("template_id must be provided")

    @property
    def package_name(self) -> str:
        if self.scope_name:
            return f"@{self.scope_name}/{self.project_name}"
        return self.project_name

    @property
    def has_author(self) -> bool:
        return bool(self.author_email or self.author_name)

    @property
    def has_engine_constraints(self) -> bool:
        return bool(self.node_version or self.npm_version)

    def as_dict(self) -> dict[str, object]:
        return {
            "project_name": self.project_name,
            "template_id": self.template_id,
            "scope_name": self.scope_name,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "node_version": self.node_version,
            "npm_version": self.npm_version,
            "use_hooks": self.use_hooks,
        }
