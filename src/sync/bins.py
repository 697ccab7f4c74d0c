"""Binary presence check for installed packages."""

from __future__ import annotations

import os
from typing import Sequence


def check_bins_installed(bins: Sequence[str], bin_dir: str) -> bool:
    """Return True if every declared binary exists in ``bin_dir``.

    A package that declares no binaries is never considered verified.
    """
    if not bins:
        return False
    return all(os.path.exists(os.path.join(bin_dir, name)) for name in bins)
