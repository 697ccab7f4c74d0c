"""Shared fixtures for the cargo-backup test suite."""

import os
import shutil
from typing import List, Optional

import pytest
import semantic_version

from sync.models import Package

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def make_package(name: str, version: str = "0.1.0", bins: Optional[List[str]] = None, **kwargs) -> Package:
    """Helper to create packages with sensible defaults."""
    return Package(
        name=name,
        version=semantic_version.Version(version),
        bins=list(bins) if bins is not None else [name],
        **kwargs
    )


@pytest.fixture
def bin_dir(tmp_path):
    """An empty binary directory."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def cargo_home(tmp_path):
    """A cargo home with the fixture record and binaries for every non-git install."""
    home = tmp_path / "cargo"
    (home / "bin").mkdir(parents=True)
    shutil.copy(os.path.join(FIXTURES, "crates2.json"), home / ".crates2.json")
    for name in ("foo", "local-tool", "package", "package-subcmd"):
        (home / "bin" / name).write_text("")
    return home
