"""Configuration constants.

Defaults shared by the config models and the CLI, plus fixed values of the
capture and profile formats that are not user-configurable.
"""

# =============================================================================
# Output Defaults
# =============================================================================

DEFAULT_PROFILE_PATH = "cover.txt"
"""Default destination of the merged coverage profile."""

DEFAULT_REPORT_PATH = "cover.html"
"""Default destination of the rendered HTML report."""

# =============================================================================
# Source Layout Defaults
# =============================================================================

DEFAULT_SOURCE_PREFIX = "go/src"
"""Profile file names are import paths living under GOPATH/src."""

DEFAULT_GO_BINARY = "go"

DEFAULT_GOPATH = "go"

# =============================================================================
# Format Constants
# =============================================================================

CAPTURE_ID_SEPARATOR = "."
"""Capture identifiers end in <timestamp>.<revision>."""

REVISION_SUFFIX_SEPARATOR = "."
"""Renamed file variants are <file_name>.<revision>."""
