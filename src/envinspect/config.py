"""Scan configuration: defaults, optional .envinspect.yml, environment overrides."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".envinspect.yml"

# Files larger than this are skipped, never read
MAX_FILE_SIZE = 1024 * 1024


class ScanConfig(BaseModel):
    """Options that shape a repository scan."""

    exclude: list[str] = Field(default_factory=list, description="Extra exclusion globs")
    max_files: Optional[int] = Field(default=None, ge=0, description="Cap on files scanned (None = unlimited)")
    max_workers: int = Field(default=4, ge=1, description="Thread pool size for file scanning")
    max_file_size: int = Field(default=MAX_FILE_SIZE, ge=0, description="Skip files larger than this (bytes)")


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: expected a mapping, got {type(data).__name__}")
        return {}
    return data


def load_config(repo_root: str | Path) -> ScanConfig:
    """Load .envinspect.yml from repo_root (if present) and merge with defaults.

    List values are merged with the defaults, keeping user additions last.
    ENVINSPECT_MAX_WORKERS overrides the worker count. A malformed file falls
    back to defaults with a warning.
    """
    values = ScanConfig().model_dump()

    path = Path(repo_root) / CONFIG_FILE_NAME
    if path.is_file():
        user = _read_config_file(path)
        for key, value in user.items():
            if key not in values:
                logger.warning(f"Unknown key '{key}' in {path}")
                continue
            if isinstance(values[key], list) and isinstance(value, list):
                values[key] = list(dict.fromkeys(values[key] + value))
            else:
                values[key] = value

    workers = os.environ.get("ENVINSPECT_MAX_WORKERS")
    if workers:
        try:
            values["max_workers"] = int(workers)
        except ValueError:
            logger.warning(f"Ignoring ENVINSPECT_MAX_WORKERS={workers!r}: not an integer")

    try:
        return ScanConfig(**values)
    except ValidationError as e:
        logger.warning(f"Invalid configuration, using defaults: {e}")
        return ScanConfig()
