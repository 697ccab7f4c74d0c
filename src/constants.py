"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXECUTION_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CARGO_HOME_DIR = ".cargo"
    CARGO_EXECUTABLE = "cargo"
    RECORD_FILE = ".crates2.json"
    BIN_DIR = "bin"
    DEFAULT_BACKUP_FILE = "backup.json"
    DEFAULT_PROFILE = "release"

    ENV_CARGO_HOME = "CARGO_HOME"
    ENV_CONFIG = "CARGO_BACKUP_CONFIG"
    ENV_LOG_LEVEL = "CARGO_BACKUP_LOG_LEVEL"
    DEFAULT_CONFIG_PATH = "~/.config/cargo-backup/config.yml"

    REGISTRY_URL_CRATES = "https://crates.io/api/v1/crates/"
    USER_AGENT = "cargo-backup (https://github.com/cargo-backup/cargo-backup)"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300

    IN_SYNC_MESSAGE = (
        "No packages to install, update, or remove. "
        "Your system is already in sync with the backup."
    )
