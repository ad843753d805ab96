"""
Deterministic quote-repair rules.

This file exists to make the heuristics' thresholds explicit and enforceable.
"""

APP_TITLE = "quote-repair"
APP_VERSION = "0.1.0"

FORMAT_BY_EXTENSION = {
    ".csv": "csv",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}

# Uploads beyond this size are rejected before they reach the scanners.
MAX_UPLOAD_BYTES = 5 * 1024 * 1024

# YAML key-line classifier: longer or wordier "keys" are prose, not keys.
MAX_KEY_LENGTH = 20
MAX_KEY_WORDS = 3

# JSON: characters that may legally follow a closing string delimiter.
JSON_BOUNDARY_CHARS = "}],:"
# JSON: characters that may start a non-string array element / property value.
JSON_VALUE_START_CHARS = "[{tfn0123456789-"
