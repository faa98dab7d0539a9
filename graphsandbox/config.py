"""Configuration loader — graphsandbox.yml parsing and defaults."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from graphsandbox.logger import logger
from graphsandbox.model import SandboxConfig

CONFIG_ENV_VAR = "GRAPHSANDBOX_CONFIG"


def load_config(path: Path | None = None) -> SandboxConfig:
    """Load config from YAML, falling back to defaults on any problem.

    When *path* is None the ``GRAPHSANDBOX_CONFIG`` environment variable is
    consulted; with neither set the defaults are returned.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            logger.debug("No config file provided, using defaults")
            return SandboxConfig()
        path = Path(env_path)

    raw = _read_mapping(Path(str(path)))
    if raw is None:
        return SandboxConfig()

    try:
        return SandboxConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid config in %s: %s; using defaults", path, e)
        return SandboxConfig()


def _read_mapping(path: Path) -> dict[str, Any] | None:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Config file not found: %s; using defaults", path)
        return None
    except OSError as e:
        logger.warning("Cannot read config file %s: %s; using defaults", path, e)
        return None

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("Malformed YAML in %s: %s; using defaults", path, e)
        return None

    if raw is None:
        # empty file
        return {}
    if not isinstance(raw, dict):
        logger.warning("Config file %s is not a YAML mapping; using defaults", path)
        return None
    return raw
