#!/usr/bin/env python3
"""
paths.py
-------------------
Default filesystem locations for Solo Insight.

All per-user data lives under a single base directory:

    BASE_DIR/
    ├── data/          # Local storage database (solo_insight.db)
    ├── logs/          # Application logs
    ├── backups/       # Exported backup files
    └── config.yaml    # Optional user configuration

BASE_DIR defaults to ~/.local/share/solo-insight and can be overridden
with the SOLO_INSIGHT_HOME environment variable. Paths are resolved at
import time; directories are created lazily by the code that uses them.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

ENV_HOME = "SOLO_INSIGHT_HOME"


def _get_base_dir() -> Path:
    """
    Determine the base data directory.

    Returns:
        SOLO_INSIGHT_HOME if set, else ~/.local/share/solo-insight
    """
    env = os.environ.get(ENV_HOME)
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".local" / "share" / "solo-insight").resolve()


# ----- Base directory -----
BASE_DIR: Path = _get_base_dir()

# ---- Storage ----
DATA_DIR = BASE_DIR / "data"
DB_PATH = DATA_DIR / "solo_insight.db"

# ---- Logs & Backups ----
LOG_DIR = BASE_DIR / "logs"
BACKUP_DIR = BASE_DIR / "backups"

# ---- Configuration ----
CONFIG_PATH = BASE_DIR / "config.yaml"
