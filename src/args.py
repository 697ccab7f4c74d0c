"""Argument parsing functionality for cargo-backup."""

import argparse

from constants import Constants


def _add_common_args(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default="INFO")
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--cargo-home",
                        dest="CARGO_HOME",
                        help="Cargo home directory (default: $CARGO_HOME or ~/.cargo)",
                        action="store",
                        type=str)
    parser.add_argument("--cargo",
                        dest="CARGO",
                        help="cargo executable to run",
                        action="store",
                        type=str)


def _add_skip_args(parser):
    parser.add_argument("--skip-install",
                        dest="SKIP_INSTALL",
                        help="Do not install packages missing from this machine.",
                        action="store_true")
    parser.add_argument("--skip-update",
                        dest="SKIP_UPDATE",
                        help="Do not update packages older than the backup.",
                        action="store_true")
    parser.add_argument("--skip-remove",
                        dest="SKIP_REMOVE",
                        help="Do not remove packages absent from the backup.",
                        action="store_true")
    parser.add_argument("--latest",
                        dest="LATEST",
                        help="Look up crates.io and target the newest published version of each package.",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cargo-backup",
        description="Back up and restore packages installed with cargo install",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    backup = subparsers.add_parser("backup", help="Write the installed packages to a backup file")
    _add_common_args(backup)
    backup.add_argument("-o", "--out",
                        dest="BACKUP_FILE",
                        help=f"Backup file to write (default: {Constants.DEFAULT_BACKUP_FILE})",
                        action="store",
                        type=str,
                        default=Constants.DEFAULT_BACKUP_FILE)

    restore = subparsers.add_parser("restore", help="Install, update and remove packages to match a backup")
    _add_common_args(restore)
    _add_skip_args(restore)
    restore.add_argument("BACKUP_FILE",
                         help=f"Backup file to restore (default: {Constants.DEFAULT_BACKUP_FILE})",
                         nargs="?",
                         default=Constants.DEFAULT_BACKUP_FILE)
    restore.add_argument("-y", "--yes",
                         dest="YES",
                         help="Apply changes without asking for confirmation.",
                         action="store_true")

    diff = subparsers.add_parser("diff", help="Show what restore would change, without changing anything")
    _add_common_args(diff)
    _add_skip_args(diff)
    diff.add_argument("BACKUP_FILE",
                      help=f"Backup file to compare (default: {Constants.DEFAULT_BACKUP_FILE})",
                      nargs="?",
                      default=Constants.DEFAULT_BACKUP_FILE)

    return parser.parse_args(argv)
