"""
flakekeeper: find updatable inputs in Nix flake lock files

flakekeeper reads the ``flake.lock`` next to a ``flake.nix`` (or lock
content handed over directly), validates it, and reports every input
that an update engine can bump: its declared branch or tag, its pinned
revision, and the git remote to query for newer revisions.

Features include:
    • Strict validation of the version 7 lock graph format
    • GitHub, GitLab, SourceHut, plain git and tarball inputs
    • Custom forge hosts
    • Table, simple and JSON output
"""

from __future__ import annotations

from flakekeeper.__version__ import __version__
from flakekeeper.core import extract_lock_content, extract_package_file
from flakekeeper.models import DependencyRecord, PackageFileContent

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "flakekeeper Contributors"
__license__ = "Apache-2.0"
__description__ = "Find updatable inputs in Nix flake lock files."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "extract_lock_content",
    "extract_package_file",
    "DependencyRecord",
    "PackageFileContent",
]
