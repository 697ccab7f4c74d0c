"""Reading and writing of the backup manifest (desired state)."""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

from sync.models import LoadError, Package

logger = logging.getLogger(__name__)


def write_backup(packages: Iterable[Package], path: str) -> None:
    """Write ``packages`` to ``path`` as ``{"packages": [...]}``, sorted by name.

    Raises:
        OSError: If the file cannot be written.
    """
    entries = [p.to_dict() for p in sorted(packages, key=lambda p: p.name)]
    with open(path, "w", encoding="utf-8") as fh:
        json.dump({"packages": entries}, fh, indent=4)
        fh.write("\n")
    logger.info("Backup of %d packages written to %s", len(entries), path)


def read_backup(path: str) -> List[Package]:
    """Load the desired packages from a backup manifest.

    Both ``{"packages": [...]}`` and a bare list are accepted.

    Raises:
        LoadError: Missing or unreadable file, invalid JSON, malformed
            entries or duplicate package names.
        InvalidVersion: An entry carries an invalid version.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise LoadError(f"Backup file not found: {path}") from e
    except OSError as e:
        raise LoadError(f"Could not read backup file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Backup file {path} is not valid JSON: {e}") from e

    entries = data.get("packages") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise LoadError(f"Backup file {path} must contain a list of packages")

    packages = [Package.from_dict(entry) for entry in entries]
    seen = set()
    for package in packages:
        if package.name in seen:
            raise LoadError(f"Package '{package.name}' is listed more than once in {path}")
        seen.add(package.name)
    logger.debug("Loaded %d packages from %s", len(packages), path)
    return packages
