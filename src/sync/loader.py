"""Loading of the installed-package state from cargo's ``.crates2.json``."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping

from common.logging_utils import extra_context, is_debug_enabled

from .identifier import parse_identifier
from .models import (
    LoadError,
    Package,
    SourceKind,
    field_bool,
    field_optional_str,
    field_str_list,
)

logger = logging.getLogger(__name__)


def read_record(record_path: str) -> Dict[str, Any]:
    """Read and decode the installation record.

    Raises:
        LoadError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(record_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise LoadError(f"Installation record not found: {record_path}") from e
    except OSError as e:
        raise LoadError(f"Could not read installation record {record_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Installation record {record_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(f"Installation record {record_path} must contain a JSON object")
    return data


def load_installed(record: Mapping[str, Any]) -> List[Package]:
    """Normalize an installation record into a list of packages.

    Accepts either the whole record (``{"installs": {...}}``) or the bare
    ``installs`` mapping. Git-sourced installs are left out. Any identifier
    that fails to parse fails the whole load.
    """
    installs = record.get("installs", record) if isinstance(record, Mapping) else None
    if not isinstance(installs, Mapping):
        raise LoadError("Installation record has no 'installs' mapping")

    packages: List[Package] = []
    for raw_id, install in installs.items():
        parsed = parse_identifier(raw_id)
        if parsed.source_kind is SourceKind.GIT:
            if is_debug_enabled(logger):
                logger.debug(
                    "Skipping git-sourced package",
                    extra=extra_context(
                        event="decision",
                        component="loader",
                        action="skip",
                        target=parsed.name,
                    )
                )
            continue
        if not isinstance(install, Mapping):
            raise LoadError(f"Install entry for '{raw_id}' must be an object")
        where = f"Install entry for '{raw_id}'"
        profile = field_optional_str(install, "profile", where)
        if profile is None:
            raise LoadError(f"{where} is missing 'profile'")
        packages.append(Package(
            name=parsed.name,
            version=parsed.version,
            features=field_str_list(install, "features", where),
            all_features=field_bool(install, "all_features", where),
            no_default_features=field_bool(install, "no_default_features", where),
            profile=profile,
            target=field_optional_str(install, "target", where),
            version_req=field_optional_str(install, "version_req", where),
            bins=field_str_list(install, "bins", where),
            source_path=parsed.source_path,
        ))

    logger.debug("Loaded %d installed packages", len(packages))
    return packages


def get_installed_packages(record_path: str) -> List[Package]:
    """Read ``record_path`` and return the installed packages it lists."""
    return load_installed(read_record(record_path))
