from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parent

root_path = str(ROOT_DIR)
if root_path not in sys.path:
    sys.path.insert(0, root_path)


def _ensure_test_env() -> None:
    # Settings are read once at import; pin them before any kualitas import.
    if not Path("/.dockerenv").exists():
        os.environ.setdefault("DOCKER_CONTAINER", "false")
    os.environ.setdefault("KUALITAS_ENVIRONMENT", "test")
    os.environ.setdefault("KUALITAS_LOG_LEVEL", "WARNING")


_ensure_test_env()
