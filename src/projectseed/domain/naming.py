"""Format rules for project/scope names and version constraints."""

from __future__ import annotations

import re


# Letters and hyphens only, never starting or ending with a hyphen. Digits are
# rejected although npm accepts them.
NAME_PATTERN = re.compile(r"(?!-)(?!.*-$)[a-zA-Z-]+", re.ASCII)

_NUMERIC = r"(?:0|[1-9]\d*)"
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
VERSION_PATTERN = re.compile(
    r"[<>]?"
    r"[\^~]?"
    rf"{_NUMERIC}(?:\.{_NUMERIC})?(?:\.{_NUMERIC})?"
    rf"(?:-{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*)?"
    r"(?:\+[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*)?",
    re.ASCII,
)

PROJECT_NAME_REQUIRED = "Project name is required"
INVALID_PROJECT_NAME = "Invalid project name"
INVALID_SCOPE_NAME = "Invalid scope name"
INVALID_VERSION = "Invalid version"


def validate_name(text: str) -> bool:
    """Return True when ``text`` is a non-empty letters/hyphens name."""

    return bool(text) and NAME_PATTERN.fullmatch(text) is not None


def validate_version_constraint(text: str) -> bool:
    """Return True for an empty string or a semver-like range such as ``^18.0.0``."""

    if not text:
        return True
    return VERSION_PATTERN.fullmatch(text) is not None


def describe_name_error(text: str, *, required: bool, label: str = "project") -> str | None:
    if not text:
        return PROJECT_NAME_REQUIRED if required else None
    if validate_name(text):
        return None
    return INVALID_PROJECT_NAME if label == "project" else INVALID_SCOPE_NAME


def describe_version_error(text: str) -> str | None:
    return None if validate_version_constraint(text) else INVALID_VERSION


__all__ = [
    "NAME_PATTERN",
    "VERSION_PATTERN",
    "validate_name",
    "validate_version_constraint",
    "describe_name_error",
    "describe_version_error",
]
