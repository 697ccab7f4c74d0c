"""Drive cargo to apply a reconciliation result.

Each action becomes one ``cargo install`` or ``cargo uninstall`` process, run
sequentially with the user's terminal attached.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from enum import Enum
from typing import List, Optional, TextIO

from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants
from sync.models import ActionSet, Package, SyncError

logger = logging.getLogger(__name__)


class ExecutionError(SyncError):
    """Raised when a cargo command cannot be started or exits non-zero."""


class CommandType(Enum):
    """Kind of cargo invocation."""
    INSTALL = "install"
    REMOVE = "uninstall"


def build_command(
    package: Package,
    command_type: CommandType,
    cargo: str = Constants.CARGO_EXECUTABLE,
) -> List[str]:
    """Build the argv for installing or removing ``package``."""
    if command_type is CommandType.REMOVE:
        return [cargo, "uninstall", package.name]

    cmd = [cargo, "install"]
    if package.source_path:
        cmd += ["--path", package.source_path]
    else:
        cmd += [package.name, "--version", str(package.version)]

    if package.all_features:
        cmd.append("--all-features")
    elif package.features:
        cmd += ["--features", ",".join(package.features)]
    if package.no_default_features:
        cmd.append("--no-default-features")

    if package.profile == "debug":
        cmd.append("--debug")
    elif package.profile and package.profile != Constants.DEFAULT_PROFILE:
        cmd += ["--profile", package.profile]
    if package.target:
        cmd += ["--target", package.target]

    # Overwrite whatever is left of a broken install.
    cmd.append("--force")
    return cmd


def execute_cmd(
    package: Package,
    command_type: CommandType,
    cargo: str = Constants.CARGO_EXECUTABLE,
) -> None:
    """Run one cargo command for ``package``.

    Raises:
        ExecutionError: cargo could not be started or returned non-zero.
    """
    cmd = build_command(package, command_type, cargo)
    logger.info("Running: %s", " ".join(cmd))
    with Timer() as t:
        try:
            result = subprocess.run(cmd, check=False)
        except OSError as e:
            raise ExecutionError(f"Could not run {cmd[0]}: {e}") from e
    if is_debug_enabled(logger):
        logger.debug(
            "cargo finished",
            extra=extra_context(
                event="subprocess",
                component="executor",
                action=command_type.value,
                target=package.name,
                status_code=result.returncode,
                duration_ms=t.duration_ms(),
            )
        )
    if result.returncode != 0:
        raise ExecutionError(
            f"cargo {command_type.value} {package.name} failed with exit code {result.returncode}"
        )


def apply_actions(actions: ActionSet, cargo: str = Constants.CARGO_EXECUTABLE) -> None:
    """Install, then update, then remove; the first failure stops the run."""
    for package in actions.to_install:
        execute_cmd(package, CommandType.INSTALL, cargo)
    for package in actions.to_update:
        execute_cmd(package, CommandType.INSTALL, cargo)
    for package in actions.to_remove:
        execute_cmd(package, CommandType.REMOVE, cargo)


def confirm(prompt: str = "Proceed?", stream: Optional[TextIO] = None) -> bool:
    """Ask a yes/no question on stdin; anything but y/yes (or EOF) means no."""
    stream = stream or sys.stdin
    sys.stdout.write(f"{prompt} [y/N] ")
    sys.stdout.flush()
    answer = stream.readline()
    return answer.strip().lower() in ("y", "yes")
