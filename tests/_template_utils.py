from __future__ import annotations

import json
from pathlib import Path

BASE_MANIFEST = {
    "name": "template",
    "version": "0.1.0",
    "bin": {},
    "scripts": {"test": "node --test"},
    "devDependencies": {"prettier": "^3.1.0"},
    "license": "MIT",
}

PRE_COMMIT = '#!/usr/bin/env sh\n. "$(dirname -- "$0")/_/husky.sh"\n\n<node-checks>\n\nnpm test\n'


def seed_templates(base: Path, *, manifest: dict | None = None) -> Path:
    """Write a minimal template tree with a registry, one template and a hook bundle."""

    base.mkdir(parents=True, exist_ok=True)
    (base / "registry.yaml").write_text(
        "templates:\n"
        "  node-cli:\n"
        "    directory: node-cli\n"
        "    description: Sample CLI\n"
        "    entry_point: index.js\n"
        "hooks:\n"
        "  directory: husky\n"
        "  destination: .husky\n",
        encoding="utf-8",
    )
    template = base / "node-cli"
    (template / "src").mkdir(parents=True, exist_ok=True)
    (template / "package.json").write_text(json.dumps(manifest or BASE_MANIFEST, indent=2), encoding="utf-8")
    (template / "index.js").write_text("import './src/main.js';\n", encoding="utf-8")
    (template / "src" / "main.js").write_text("console.log('hi');\n", encoding="utf-8")
    (template / "gitignore.hidden").write_text("node_modules/\n", encoding="utf-8")
    hooks = base / "husky"
    hooks.mkdir(parents=True, exist_ok=True)
    (hooks / "pre-commit").write_text(PRE_COMMIT, encoding="utf-8")
    (hooks / "node-checks.sh").write_text("#!/usr/bin/env sh\nnpx check-node-version --package\n", encoding="utf-8")
    return base
