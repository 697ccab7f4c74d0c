"""Human-readable summary of a reconciliation result."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from constants import Constants

from .models import ActionSet, Package


def describe(package: Package) -> str:
    """One-line description of a package, e.g. ``foo 0.2.0 (features: a, b)``."""
    details = []
    if package.source_path:
        details.append(f"path: {package.source_path}")
    if package.all_features:
        details.append("all features")
    elif package.features:
        details.append("features: " + ", ".join(package.features))
    if package.no_default_features:
        details.append("no default features")
    if package.profile != Constants.DEFAULT_PROFILE:
        details.append(f"profile: {package.profile}")
    if package.target:
        details.append(f"target: {package.target}")
    line = f"{package.name} {package.version}"
    if details:
        line += " (" + "; ".join(details) + ")"
    return line


def format_summary(actions: ActionSet) -> str:
    """Render the three action lists, or the in-sync message when all are empty."""
    if actions.is_empty():
        return Constants.IN_SYNC_MESSAGE

    lines: List[str] = []
    for title, packages in (
        ("To install", actions.to_install),
        ("To update", actions.to_update),
        ("To remove", actions.to_remove),
    ):
        if not packages:
            continue
        lines.append(f"{title} ({len(packages)}):")
        lines.extend(f"  {describe(p)}" for p in sorted(packages, key=lambda p: p.name))
    return "\n".join(lines)


def print_summary(actions: ActionSet, stream: Optional[TextIO] = None) -> None:
    """Write the summary to ``stream`` (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(format_summary(actions) + "\n")
