"""Centralized constants for the application."""

# Sequence configuration
MAX_SEQUENCE_HOLE = 1000
NO_VIEW = -1
DEFAULT_FRAME_NUMBER = 0

# Placeholder characters
HASH_CHAR = "#"
PRINTF_CHAR = "%"
PRINTF_TERMINATORS = {"d", "v", "V"}

# View naming, index 0 is the left view and index 1 the right view
SHORT_VIEW_NAMES = ("l", "r")
LONG_VIEW_NAMES = ("left", "right")
VIEW_PREFIX = "view"

# Environment
ENV_PREFIX = "SEQPARSE_"
