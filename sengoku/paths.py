"""
Centralised path constants for Sengoku Chronicles.

All directories are resolved relative to PROJECT_ROOT so that the game works
the same whether it is launched via the CLI or the FastAPI server.
"""

from __future__ import annotations

import sys
from pathlib import Path


def _find_project_root() -> Path:
    """
    Resolve the project root at import time.

    - In a PyInstaller onefile bundle, sys._MEIPASS is the extraction directory
      which contains all bundled resources.
    - In normal use, the project root is two levels up from this file
      (sengoku/paths.py → sengoku/ → project root).
    """
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS)  # type: ignore[attr-defined]
    return Path(__file__).parent.parent


# ── Root ──────────────────────────────────────────────────────────────────────

PROJECT_ROOT: Path = _find_project_root()

# ── Input directories ─────────────────────────────────────────────────────────

CONFIG_DIR: Path = PROJECT_ROOT / "config"
FALLBACK_CONFIG_DIR: Path = CONFIG_DIR / "fallback_config_files"

# ── Output directories ────────────────────────────────────────────────────────

# One JSON file per character plus the append-only event history
SAVE_DIR: Path = PROJECT_ROOT / "saves"
