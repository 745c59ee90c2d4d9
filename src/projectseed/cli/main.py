#!/usr/bin/env python3
"""Entry point for the projectseed CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from collections import deque
from pathlib import Path
from textwrap import dedent
from typing import Callable, NoReturn, Sequence

from projectseed import __version__
from projectseed.adapters.fs_template_repo import FSTemplateRepository
from projectseed.app.manifest import ManifestError
from projectseed.app.scaffold_service import ScaffoldError, ScaffoldResult, ScaffoldService
from projectseed.domain.config import InvalidConfigError, ScaffoldConfig
from projectseed.domain.naming import describe_name_error, describe_version_error
from projectseed.domain.template import TemplateDescriptor
from projectseed.ports.template_repo import TemplateNotFoundError, TemplateRegistryError
from projectseed.settings import SETTINGS
from projectseed.utils.telemetry import clear as telemetry_clear
from projectseed.utils.telemetry import iter_events as telemetry_iter
from projectseed.utils.telemetry import record_event
from projectseed.utils.telemetry import summarize as telemetry_summarize


HELP_OVERVIEW = dedent(
    """
    Quick start:
      - projectseed create            - answer the prompts, get ./<name>/
      - projectseed create --no-input --name demo --template node-cli

    Other commands:
      - projectseed templates         - list bundled templates
      - projectseed telemetry report  - summarise the local event log

    The destination folder must not exist yet; nothing is overwritten.
    """
)

Validator = Callable[[str], "str | None"]


def _default_parent_dir(dest_arg: str | None) -> Path:
    if dest_arg:
        return Path(dest_arg).expanduser().resolve()
    return Path(os.getcwd())


def _build_template_repo() -> FSTemplateRepository:
    return FSTemplateRepository(SETTINGS.template_dir)


def _prompt_text(prompt: str, validate: Validator) -> str:
    while True:
        response = input(f"{prompt} ").strip()
        error = validate(response)
        if error is None:
            return response
        print(error)


def _prompt_confirm(prompt: str, *, default: bool = True) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"
    while True:
        response = input(f"{prompt} {suffix} ").strip().lower()
        if not response:
            return default
        if response in {"y", "yes"}:
            return True
        if response in {"n", "no"}:
            return False
        print("Please answer y or n.")


def _prompt_template_selection(templates: Sequence[TemplateDescriptor]) -> str:
    if not templates:
        raise TemplateRegistryError("No templates registered")
    print("Choose a project template:")
    for index, descriptor in enumerate(templates, start=1):
        suffix = f" - {descriptor.description}" if descriptor.description else ""
        print(f"  {index}. {descriptor.template_id}{suffix}")
    while True:
        choice = input("Select template [1]: ").strip()
        if not choice:
            return templates[0].template_id
        if choice.isdigit():
            index = int(choice)
            if 1 <= index <= len(templates):
                return templates[index - 1].template_id
        print(f"Enter a value between 1 and {len(templates)}.")


def _resolve_answer(value: str | None, *, no_input: bool, prompt: str, validate: Validator) -> str:
    if value is not None:
        value = value.strip()
        error = validate(value)
        if error is not None:
            raise InvalidConfigError(error)
        return value
    if no_input:
        error = validate("")
        if error is not None:
            raise InvalidConfigError(error)
        return ""
    return _prompt_text(prompt, validate)


def _collect_config(args: argparse.Namespace, repo: FSTemplateRepository) -> ScaffoldConfig:
    no_input = args.no_input

    def accept_any(_: str) -> None:
        return None

    project_name = _resolve_answer(
        args.name,
        no_input=no_input,
        prompt="Enter the project name:",
        validate=lambda text: describe_name_error(text, required=True, label="project"),
    )
    scope_name = _resolve_answer(
        args.scope,
        no_input=no_input,
        prompt="(Optional) Enter the project scope name:",
        validate=lambda text: describe_name_error(text, required=False, label="scope"),
    )
    author_email = _resolve_answer(
        args.author_email, no_input=no_input, prompt="(Optional) Enter the author email:", validate=accept_any
    )
    author_name = _resolve_answer(
        args.author_name, no_input=no_input, prompt="(Optional) Enter the author name:", validate=accept_any
    )
    node_version = _resolve_answer(
        args.node_version, no_input=no_input, prompt="(Optional) Node version:", validate=describe_version_error
    )
    npm_version = _resolve_answer(
        args.npm_version, no_input=no_input, prompt="(Optional) NPM version:", validate=describe_version_error
    )

    if args.hooks is not None:
        use_hooks = args.hooks
    elif no_input:
        use_hooks = True
    else:
        use_hooks = _prompt_confirm("Setup Husky?", default=True)

    if args.template:
        template_id = args.template
    elif no_input:
        templates = repo.list_templates()
        if not templates:
            raise TemplateRegistryError("No templates registered")
        template_id = templates[0].template_id
    else:
        template_id = _prompt_template_selection(repo.list_templates())

    return ScaffoldConfig(
        project_name=project_name,
        template_id=template_id,
        scope_name=scope_name,
        author_name=author_name,
        author_email=author_email,
        node_version=node_version,
        npm_version=npm_version,
        use_hooks=use_hooks,
    )


def _record(
    event: str,
    payload: dict[str, object],
    *,
    level: str = "info",
    status: str | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append a telemetry event; an unwritable log never changes the exit code."""

    try:
        record_event(SETTINGS, event, payload, level=level, status=status, duration_ms=duration_ms)
    except OSError as exc:
        print(f"telemetry unavailable: {exc}", file=sys.stderr)


def _result_payload(result: ScaffoldResult, config: ScaffoldConfig) -> dict[str, object]:
    return {
        "project": config.package_name,
        "path": str(result.project_dir),
        "template": result.template.template_id,
        "manifest": str(result.manifest_path),
        "files": len(result.files_written),
        "hooks": result.hooks_installed,
    }


def _create_cmd(args: argparse.Namespace) -> int:
    try:
        repo = _build_template_repo()
        config = _collect_config(args, repo)
    except TemplateRegistryError as exc:
        print(f"template registry error: {exc}", file=sys.stderr)
        return 1
    except InvalidConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):  # pragma: no cover - interactive interruption
        print("\nScaffold cancelled.")
        return 1

    if args.json:
        def progress(message: str) -> None:
            print(message, file=sys.stderr)
    else:
        progress = print

    service = ScaffoldService(repo, progress=progress)
    parent_dir = _default_parent_dir(args.dest)
    started = time.monotonic()
    event_payload = {"template": config.template_id, "hooks": config.use_hooks}
    try:
        result = service.scaffold(config, parent_dir)
    except (TemplateNotFoundError, ScaffoldError) as exc:
        print(str(exc), file=sys.stderr)
        _record("scaffold", {**event_payload, "reason": type(exc).__name__}, level="error", status="error")
        return 1
    except (ManifestError, OSError) as exc:
        print(f"scaffold failed: {exc}", file=sys.stderr)
        _record("scaffold", {**event_payload, "reason": type(exc).__name__}, level="error", status="error")
        return 1

    duration_ms = (time.monotonic() - started) * 1000
    _record(
        "scaffold",
        {**event_payload, "files": len(result.files_written)},
        status="ok",
        duration_ms=duration_ms,
    )
    if args.json:
        print(json.dumps(_result_payload(result, config), ensure_ascii=False, indent=2))
    return 0


def _templates_cmd(args: argparse.Namespace) -> int:
    try:
        templates = _build_template_repo().list_templates()
    except TemplateRegistryError as exc:
        print(f"template registry error: {exc}", file=sys.stderr)
        return 1
    if not templates:
        print("No templates registered", file=sys.stderr)
        return 1
    if args.json:
        payload = [
            {"id": item.template_id, "description": item.description, "entry_point": item.entry_point}
            for item in templates
        ]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for item in templates:
            suffix = f"\t{item.description}" if item.description else ""
            print(f"{item.template_id}{suffix}")
    _record("templates", {"count": len(templates)})
    return 0


def _telemetry_cmd(args: argparse.Namespace) -> int:
    if args.telemetry_command == "report":
        recent = getattr(args, "recent", 0)
        if recent and recent > 0:
            events = list(deque(telemetry_iter(SETTINGS), maxlen=recent))
        else:
            events = list(telemetry_iter(SETTINGS))
        print(json.dumps(telemetry_summarize(events), indent=2, ensure_ascii=False))
        return 0
    if args.telemetry_command == "clear":
        telemetry_clear(SETTINGS)
        print("Telemetry log cleared")
        return 0
    if args.telemetry_command == "tail":
        for evt in deque(telemetry_iter(SETTINGS), maxlen=args.limit):
            print(json.dumps(evt, ensure_ascii=False))
        return 0
    print("Unsupported telemetry command", file=sys.stderr)
    return 2


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors are invalid input: exit 1 like every other rejected answer."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="projectseed",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"projectseed {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    create_cmd = sub.add_parser("create", help="Scaffold a new project from a template")
    create_cmd.add_argument("--name", help="Project name (letters and hyphens)")
    create_cmd.add_argument("--scope", help="npm scope without the leading @")
    create_cmd.add_argument("--author-email", dest="author_email")
    create_cmd.add_argument("--author-name", dest="author_name")
    create_cmd.add_argument("--node-version", dest="node_version", help="engines.node constraint, e.g. ^18.0.0")
    create_cmd.add_argument("--npm-version", dest="npm_version", help="engines.npm constraint")
    create_cmd.add_argument(
        "--hooks",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Install the husky git-hook bundle",
    )
    create_cmd.add_argument("--template", help="Template id (see `projectseed templates`)")
    create_cmd.add_argument("--dest", help="Parent directory (default: current directory)")
    create_cmd.add_argument("--no-input", dest="no_input", action="store_true", help="Never prompt; use flags and defaults")
    create_cmd.add_argument("--json", action="store_true", help="Emit machine-readable summary output")
    create_cmd.set_defaults(func=_create_cmd)

    templates_cmd = sub.add_parser("templates", help="List bundled templates")
    templates_cmd.add_argument("--json", action="store_true")
    templates_cmd.set_defaults(func=_templates_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect local telemetry logs")
    telemetry_sub = telemetry_cmd.add_subparsers(dest="telemetry_command", required=True)
    telemetry_report = telemetry_sub.add_parser("report", help="Print aggregated telemetry stats")
    telemetry_report.add_argument(
        "--recent",
        type=int,
        default=0,
        help="Limit aggregation to the last N telemetry events",
    )
    telemetry_tail = telemetry_sub.add_parser("tail", help="Print the last telemetry events")
    telemetry_tail.add_argument("--limit", type=int, default=20)
    telemetry_sub.add_parser("clear", help="Delete the telemetry log")
    telemetry_cmd.set_defaults(func=_telemetry_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
