from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = ROOT / ".test_place" / "home"
os.environ.setdefault("PROJECTSEED_HOME", str(SANDBOX_HOME))
os.environ.setdefault("PROJECTSEED_TELEMETRY", "0")
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
