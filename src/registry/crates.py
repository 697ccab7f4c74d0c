"""crates.io client: look up published versions for registry packages."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional

import semantic_version

from common.http_client import get_json
from constants import Constants
from sync.models import Package

logger = logging.getLogger(__name__)


def fetch_versions(name: str, url: str = Constants.REGISTRY_URL_CRATES) -> List[str]:
    """Return the non-yanked versions crates.io lists for ``name``.

    An unknown crate or a failed request yields an empty list.
    """
    status_code, _, data = get_json(f"{url}{name}")
    if status_code != 200 or not isinstance(data, dict):
        logger.debug("No version data for %s (status %s)", name, status_code)
        return []
    return [
        v["num"]
        for v in data.get("versions", [])
        if isinstance(v, dict) and v.get("num") and not v.get("yanked", False)
    ]


def resolve_latest(candidates: Iterable[str], include_prerelease: bool = False) -> Optional[str]:
    """Pick the highest semantic version among ``candidates``."""
    parsed = []
    for v in candidates:
        try:
            ver = semantic_version.Version(v)
        except ValueError:
            continue  # Skip invalid versions
        if ver.prerelease and not include_prerelease:
            continue
        parsed.append(ver)
    if not parsed:
        return None
    return str(max(parsed))


def with_latest_versions(packages: Iterable[Package]) -> List[Package]:
    """Return copies of ``packages`` bumped to the newest published version.

    Local-path packages, crates without a newer release and failed lookups
    are returned unchanged.
    """
    result = []
    for package in packages:
        if package.source_path:
            result.append(package)
            continue
        latest = resolve_latest(fetch_versions(package.name))
        if latest is None:
            logger.warning("Could not determine the latest version of %s", package.name)
            result.append(package)
            continue
        latest_version = semantic_version.Version(latest)
        if latest_version > package.version:
            logger.info("%s: %s -> %s", package.name, package.version, latest)
            result.append(dataclasses.replace(package, version=latest_version))
        else:
            result.append(package)
    return result
