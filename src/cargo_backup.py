"""cargo-backup - declarative sync of packages installed with ``cargo install``.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from backup import read_backup, write_backup
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import build_config
from constants import ExitCodes
from executor import ExecutionError, apply_actions, confirm
from registry.crates import with_latest_versions
from sync import SyncError, SyncOptions, get_installed_packages, reconcile
from sync.report import print_summary

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging from --loglevel and --logfile.

    Returns the file handler added for --logfile, or None.

    Raises:
        OSError: The log file cannot be opened.
    """
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if not log_file:
        return None
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    ))
    logging.getLogger().addHandler(file_handler)
    logger.info("Logging to file: %s", log_file)
    return file_handler


def run_backup(args, config):
    """Write the currently installed packages to the backup file."""
    packages = get_installed_packages(config.record_path)
    try:
        write_backup(packages, args.BACKUP_FILE)
    except OSError as e:
        logger.error("Backup file couldn't be written to disk: %s", e)
        return ExitCodes.FILE_ERROR.value
    return ExitCodes.SUCCESS.value


def plan_sync(args, config):
    """Load both states and reconcile them."""
    desired = read_backup(args.BACKUP_FILE)
    if getattr(args, "LATEST", False):
        desired = with_latest_versions(desired)
    actual = get_installed_packages(config.record_path)
    options = SyncOptions(
        skip_install=args.SKIP_INSTALL,
        skip_update=args.SKIP_UPDATE,
        skip_remove=args.SKIP_REMOVE,
    )
    return reconcile(desired, actual, config.binary_directory, options)


def run_diff(args, config):
    """Print the planned actions."""
    print_summary(plan_sync(args, config))
    return ExitCodes.SUCCESS.value


def run_restore(args, config):
    """Print the planned actions, confirm, and apply them."""
    actions = plan_sync(args, config)
    print_summary(actions)
    if actions.is_empty():
        return ExitCodes.SUCCESS.value

    if not (args.YES or confirm("Proceed?")):
        logger.info("Aborted, nothing was changed.")
        return ExitCodes.SUCCESS.value

    try:
        apply_actions(actions, config.cargo_executable)
    except ExecutionError as e:
        logger.error("%s", e)
        return ExitCodes.EXECUTION_ERROR.value
    logger.info("Restore finished.")
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "backup": run_backup,
    "restore": run_restore,
    "diff": run_diff,
}


def run(args):
    """Dispatch a parsed command line and return the exit code."""
    try:
        file_handler = _setup_logging(args)
    except OSError as e:
        logger.error("Log file couldn't be opened: %s", e)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        config = build_config(args)
        logger.debug("Using record %s and binaries in %s",
                     config.record_path, config.binary_directory)
        return COMMANDS[args.action](args, config)
    except SyncError as e:
        logger.error("%s, aborting", e)
        return ExitCodes.FILE_ERROR.value
    finally:
        if file_handler is not None:
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()


def main(argv=None):
    """Main function of the program."""
    sys.exit(run(parse_args(argv)))


if __name__ == "__main__":
    main()
