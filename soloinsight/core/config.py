#!/usr/bin/env python3
"""
config.py
-------------------
User configuration for Solo Insight.

Settings come from an optional YAML file; CLI options override them.

Example config.yaml:

    db_path: ~/journal/solo_insight.db
    log_dir: ~/journal/logs
    remote_url: postgresql://user@host/insight
    user: 3f9c0c1e
    language: zh

Unknown keys are ignored. A file that is not a YAML mapping raises
ValidationError.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from soloinsight.database.models.enums import Language
from .exceptions import ValidationError
from .paths import BACKUP_DIR, CONFIG_PATH, DB_PATH, LOG_DIR
from .validators import DataValidator


@dataclass
class Config:
    """
    Resolved configuration values.

    Attributes:
        db_path: Local storage database file
        log_dir: Directory for log files
        backup_dir: Default directory for exported backups
        remote_url: SQLAlchemy URL of the remote document store (optional)
        user: Authenticated user id for the remote store (optional)
        language: Preferred language for a fresh install
    """

    db_path: Path = DB_PATH
    log_dir: Path = LOG_DIR
    backup_dir: Path = BACKUP_DIR
    remote_url: Optional[str] = None
    user: Optional[str] = None
    language: str = "en"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Build a Config from a mapping, ignoring unknown keys.

        Raises:
            ValidationError: If language is not supported
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}

        for key in ("db_path", "log_dir", "backup_dir"):
            if key in values:
                values[key] = Path(str(values[key])).expanduser()

        DataValidator.validate_choice(
            values.get("language", "en"), Language.choices(), "language in config"
        )

        return cls(**values)


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file path (default: paths.CONFIG_PATH)

    Returns:
        Config with file values applied; defaults if the file is missing

    Raises:
        ValidationError: If the file is not valid YAML or not a mapping
    """
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        return Config()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(f"Cannot parse config file {path}: {e}")

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValidationError(f"Config file {path} must contain a mapping")

    return Config.from_dict(data)
