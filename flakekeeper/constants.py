"""
Centralized constants for flakekeeper.

This module defines immutable values used across flakekeeper, including
the supported lock format, provider defaults, file names, configuration
defaults, and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Lock file format
# ---------------------------------------------------------------------------

#: Name of the lock file that sits next to a ``flake.nix`` package file.
LOCK_FILE_NAME: Final[str] = "flake.lock"

#: Name of the package file whose sibling lock file is extracted.
PACKAGE_FILE_NAME: Final[str] = "flake.nix"

#: The only lock graph format version this tool understands.
SUPPORTED_LOCK_VERSION: Final[int] = 7

# ---------------------------------------------------------------------------
# Datasource and provider defaults
# ---------------------------------------------------------------------------

#: Datasource tag shared by every extracted dependency. All providers are
#: resolved through plain git references, differentiated by package name.
GIT_REFS_DATASOURCE: Final[str] = "git-refs"

#: Canonical host per forge provider, used when the original input does not
#: carry (or may not carry) an explicit ``host``.
DEFAULT_PROVIDER_HOSTS: Final[Mapping[str, str]] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "sourcehut": "git.sr.ht",
}

#: Tarball archive URLs that can be mapped back to a git remote.
TARBALL_ARCHIVE_PATTERN: Final[str] = (
    r"^(?P<base>https://[^/]+/[^/]+/[^/]+)/archive/(?P<rev>[^/]+)\.tar\.gz$"
)

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Skip nodes that are not declared as inputs of the root node.
DEFAULT_CHECK_ROOT_INPUTS: Final[bool] = True

#: Reject lock files whose version differs from ``SUPPORTED_LOCK_VERSION``.
DEFAULT_ENFORCE_LOCK_VERSION: Final[bool] = True

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading lock files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Numeric level for entry/exit tracing, below ``logging.DEBUG``.
TRACE: Final[int] = 5

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
