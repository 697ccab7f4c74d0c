"""Runtime configuration: where cargo keeps its state and how to call it.

Precedence, lowest to highest: built-in defaults (``$CARGO_HOME`` or
``~/.cargo``), the YAML config file, CLI overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from sync.models import LoadError

logger = logging.getLogger(__name__)


@dataclass
class SyncConfig:
    """Filesystem locations and executable used by a sync run."""
    record_path: str
    binary_directory: str
    cargo_executable: str = Constants.CARGO_EXECUTABLE

    @classmethod
    def for_cargo_home(cls, cargo_home: str, cargo_executable: str = Constants.CARGO_EXECUTABLE) -> "SyncConfig":
        """Derive record and binary locations from a cargo home directory."""
        return cls(
            record_path=os.path.join(cargo_home, Constants.RECORD_FILE),
            binary_directory=os.path.join(cargo_home, Constants.BIN_DIR),
            cargo_executable=cargo_executable,
        )


def default_cargo_home() -> str:
    """``$CARGO_HOME`` if set, otherwise ``~/.cargo``."""
    env_home = os.environ.get(Constants.ENV_CARGO_HOME)
    if env_home and env_home.strip():
        return os.path.expanduser(env_home.strip())
    return os.path.join(os.path.expanduser("~"), Constants.CARGO_HOME_DIR)


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML config file, returning {} when there is none.

    An explicitly requested file that is missing or invalid raises LoadError;
    the default location is optional.
    """
    explicit = bool(config_path)
    path = config_path or os.environ.get(Constants.ENV_CONFIG) or Constants.DEFAULT_CONFIG_PATH
    path = os.path.expanduser(path)
    if not os.path.isfile(path):
        if explicit:
            raise LoadError(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise LoadError(f"Failed to load config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LoadError(f"Config file {path} must contain a mapping")
    logger.debug("Loaded config from %s", path)
    return data


def build_config(args: Any = None) -> SyncConfig:
    """Resolve the effective SyncConfig from config file and CLI args."""
    file_cfg = load_config_file(getattr(args, "CONFIG", None))

    cargo_home = getattr(args, "CARGO_HOME", None) or file_cfg.get("cargo_home")
    cargo_home = os.path.expanduser(cargo_home) if cargo_home else default_cargo_home()
    cargo_executable = (
        getattr(args, "CARGO", None)
        or file_cfg.get("cargo_executable")
        or Constants.CARGO_EXECUTABLE
    )

    config = SyncConfig.for_cargo_home(cargo_home, cargo_executable)
    if not getattr(args, "CARGO_HOME", None):
        if file_cfg.get("record_path"):
            config.record_path = os.path.expanduser(file_cfg["record_path"])
        if file_cfg.get("binary_directory"):
            config.binary_directory = os.path.expanduser(file_cfg["binary_directory"])
    return config
