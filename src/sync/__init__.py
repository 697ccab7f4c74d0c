"""Reconciliation of installed cargo packages against a backup manifest."""

from .models import (
    ActionSet,
    InvalidVersion,
    LoadError,
    MalformedIdentifier,
    Package,
    ParsedIdentifier,
    SourceKind,
    SyncError,
    SyncOptions,
)
from .identifier import parse_identifier
from .loader import get_installed_packages, load_installed, read_record
from .bins import check_bins_installed
from .reconcile import reconcile

__all__ = [
    "ActionSet",
    "InvalidVersion",
    "LoadError",
    "MalformedIdentifier",
    "Package",
    "ParsedIdentifier",
    "SourceKind",
    "SyncError",
    "SyncOptions",
    "check_bins_installed",
    "get_installed_packages",
    "load_installed",
    "parse_identifier",
    "read_record",
    "reconcile",
]
