"""
Logging Configuration

Module-specific settings for logging.
"""
import os

# =========================
# Logger Names
# =========================

CLIENT_LOGGER_NAME = "i18n_client"

# =========================
# Log Directory
# =========================

# No file logging unless a directory is configured
LOG_OUTPUT_DIR = os.getenv("I18N_LOG_OUTPUT_DIR")

# =========================
# File Handler Settings
# =========================

# Maximum log file size in bytes (default: 10MB)
LOG_MAX_BYTES = int(os.getenv("I18N_LOG_MAX_BYTES", str(10 * 1024 * 1024)))

# Number of backup files to keep
LOG_BACKUP_COUNT = int(os.getenv("I18N_LOG_BACKUP_COUNT", "5"))

LOG_FILE_NAME = os.getenv("I18N_LOG_FILE", "i18n_client.log")

# =========================
# Log Content Settings
# =========================

# Preview length for texts in log lines
LOG_PREVIEW_LENGTH = int(os.getenv("I18N_LOG_PREVIEW_LENGTH", "80"))

# =========================
# Log Formats
# =========================

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(request_id)-32s | "
    "%(name)-25s | %(funcName)-20s | %(message)s"
)

LOG_SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)-32s | %(message)s"
