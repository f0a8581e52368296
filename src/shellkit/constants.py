"""Application-level constants for shellkit.

This module keeps only cross-cutting app/file/path constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "shellkit"
APP_VERSION = "0.1.0"

# ============================================================================
# Default directories and paths
# ============================================================================

# User data directory (created in home directory)
USER_DATA_DIR = f"~/.{APP_NAME}"

# Startup configuration (alias/set lines), used only when it exists
DEFAULT_CONFIG_FILE = f"{USER_DATA_DIR}/shell_config.txt"

SCRIPT_FILE_SUFFIXES = (".txt", ".script")

# ============================================================================
# Shell behaviour
# ============================================================================

DEFAULT_PROMPT = "shell> "
VARIABLE_SIGIL = "$"
PROMPT_VARIABLE = "prompt"
COMMENT_PREFIX = "#"

# Tab completion prints at most this many candidates before "+N more"
COMPLETION_DISPLAY_LIMIT = 10

EXIT_MESSAGE = "Goodbye!"
