"""Constants for project-snapshot."""

# Directory (under the project root) that receives snapshot outputs
OUTPUT_DIR = "snapshots"

# Snapshot output naming: snapshot-<timestamp>.json / .txt
OUTPUT_PREFIX = "snapshot-"
OUTPUT_SUFFIXES = (".json", ".txt")
OUTPUT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

# Optional per-project files
CONFIG_FILE = ".project-snapshot.yaml"
IGNORE_FILE = ".snapshotignore"

# Content caps
DEFAULT_MAX_CONTENT_BYTES = 200 * 1024  # 200KB, per file attached to a record
DEFAULT_MAX_TEXT_BYTES = 500 * 1024     # 500KB, per file body in the text report

# Seconds to wait for `git status` before treating git as unavailable
DEFAULT_VCS_TIMEOUT = 30.0

# Sentinels for files whose attributes cannot be read
UNKNOWN_ATTR = "?"
UNKNOWN_LANGUAGE = "unknown"

MODIFIED_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Version
SNAPSHOT_VERSION = "0.1.0"
