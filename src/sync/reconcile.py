"""Three-pass reconciliation of a backup against installed packages."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled

from .bins import check_bins_installed
from .models import ActionSet, Package, SyncOptions

logger = logging.getLogger(__name__)


def _by_name(packages: Sequence[Package]) -> Dict[str, Package]:
    return {p.name: p for p in packages}


def reconcile(
    desired: Sequence[Package],
    actual: Sequence[Package],
    bin_dir: str,
    options: Optional[SyncOptions] = None,
) -> ActionSet:
    """Compute the actions that converge ``actual`` onto ``desired``.

    The passes are independent:

    * install: desired packages that are not installed, or whose installed
      binaries are missing from ``bin_dir`` (reinstalled with the desired
      metadata);
    * update: installed packages whose desired version is strictly newer;
      names already scheduled for reinstall are left out;
    * remove: installed packages the backup does not mention.

    Inputs are not modified.
    """
    options = options or SyncOptions()
    installed = _by_name(actual)
    wanted = _by_name(desired)
    actions = ActionSet()

    if not options.skip_install:
        for package in desired:
            current = installed.get(package.name)
            if current is None:
                actions.to_install.append(package)
            elif not check_bins_installed(current.bins, bin_dir):
                logger.warning("%s: binaries missing, will reinstall", current.name)
                actions.to_install.append(package)

    reinstalling = {p.name for p in actions.to_install}

    if not options.skip_update:
        for current in actual:
            package = wanted.get(current.name)
            if package is None or package.name in reinstalling:
                continue
            if package.version > current.version:
                actions.to_update.append(package)

    if not options.skip_remove:
        actions.to_remove = [p for p in actual if p.name not in wanted]

    if is_debug_enabled(logger):
        logger.debug(
            "Reconciliation finished",
            extra=extra_context(
                event="decision",
                component="reconcile",
                action="reconcile",
                install=len(actions.to_install),
                update=len(actions.to_update),
                remove=len(actions.to_remove),
            )
        )
    return actions

