"""Data models and error kinds for package reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import semantic_version

from constants import Constants


class SyncError(ValueError):
    """Base class for failures that abort a sync run."""


class MalformedIdentifier(SyncError):
    """Raised when an installation identifier does not have three tokens."""


class InvalidVersion(SyncError):
    """Raised when a version string is not a valid semantic version."""


class LoadError(SyncError):
    """Raised when the installation record or backup manifest cannot be loaded."""


class SourceKind(Enum):
    """Where an installed package's content came from."""
    REGISTRY = "registry"
    LOCAL = "local"
    GIT = "git"


def parse_version(raw: str) -> semantic_version.Version:
    """Parse a strict semantic version, raising InvalidVersion on failure."""
    try:
        return semantic_version.Version(str(raw))
    except ValueError as exc:
        raise InvalidVersion(f"Invalid version '{raw}': {exc}") from exc


def field_bool(data: Mapping[str, Any], key: str, where: str, default: Optional[bool] = None) -> bool:
    """Read a boolean field; a missing key falls back to ``default``.

    Raises:
        LoadError: The value is not a bool, or it is missing without a default.
    """
    if key not in data:
        if default is None:
            raise LoadError(f"{where} is missing '{key}'")
        return default
    value = data[key]
    if not isinstance(value, bool):
        raise LoadError(f"{where}: '{key}' must be true or false, got {value!r}")
    return value


def field_str_list(data: Mapping[str, Any], key: str, where: str) -> List[str]:
    """Read an optional list of strings; missing or null means empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise LoadError(f"{where}: '{key}' must be a list of strings, got {value!r}")
    return list(value)


def field_optional_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    """Read an optional string field."""
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise LoadError(f"{where}: '{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class ParsedIdentifier:
    """Fields recovered from a ``"<name> <version> (<origin>)"`` identifier."""
    name: str
    version: semantic_version.Version
    source_kind: SourceKind
    source_path: Optional[str] = None


@dataclass
class Package:
    """A package as declared in a backup or recorded as installed."""
    name: str
    version: semantic_version.Version
    features: List[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False
    profile: str = Constants.DEFAULT_PROFILE
    target: Optional[str] = None
    version_req: Optional[str] = None
    bins: List[str] = field(default_factory=list)
    source_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the backup manifest entry shape."""
        data: Dict[str, Any] = {
            "name": self.name,
            "features": list(self.features),
            "all_features": self.all_features,
            "no_default_features": self.no_default_features,
            "version": str(self.version),
            "profile": self.profile,
            "target": self.target,
            "version_req": self.version_req,
            "bins": list(self.bins),
        }
        if self.source_path is not None:
            data["source_path"] = self.source_path
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        """Build a Package from a backup manifest entry.

        Raises:
            LoadError: If ``name`` or ``version`` is missing, or a field has
                the wrong type.
            InvalidVersion: If ``version`` is not a semantic version.
        """
        if not isinstance(data, dict):
            raise LoadError(f"Package entry must be an object, got {type(data).__name__}")
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise LoadError(f"Package entry without a name: {data!r}")
        if data.get("version") is None:
            raise LoadError(f"Package '{name}' has no version")
        where = f"Package '{name}'"
        return cls(
            name=name,
            version=parse_version(data["version"]),
            features=field_str_list(data, "features", where),
            all_features=field_bool(data, "all_features", where, default=False),
            no_default_features=field_bool(data, "no_default_features", where, default=False),
            profile=field_optional_str(data, "profile", where) or Constants.DEFAULT_PROFILE,
            target=field_optional_str(data, "target", where),
            version_req=field_optional_str(data, "version_req", where),
            bins=field_str_list(data, "bins", where),
            source_path=field_optional_str(data, "source_path", where),
        )


@dataclass
class SyncOptions:
    """Switches that disable individual reconciliation passes."""
    skip_install: bool = False
    skip_update: bool = False
    skip_remove: bool = False


@dataclass
class ActionSet:
    """Reconciliation outcome: what to install, update and remove."""
    to_install: List[Package] = field(default_factory=list)
    to_update: List[Package] = field(default_factory=list)
    to_remove: List[Package] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when the installed state already matches the backup."""
        return not (self.to_install or self.to_update or self.to_remove)
