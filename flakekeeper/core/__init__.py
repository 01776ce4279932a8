"""
Core functionality exports for flakekeeper.

This module provides convenient access to the extraction pipeline.
Importing from here keeps user-facing imports clean and stable:

    from flakekeeper.core import extract_lock_content, extract_package_file
"""

from __future__ import annotations

from flakekeeper.core.schema import parse_lock_graph, validate_lock_graph
from flakekeeper.core.walker import iter_updatable_inputs
from flakekeeper.core.classifier import classify_input, tarball_remote_url
from flakekeeper.core.extractor import (
    ExtractOptions,
    assemble_dependencies,
    extract_lock_content,
    extract_package_file,
)

__all__ = [
    "parse_lock_graph",
    "validate_lock_graph",
    "iter_updatable_inputs",
    "classify_input",
    "tarball_remote_url",
    "ExtractOptions",
    "assemble_dependencies",
    "extract_lock_content",
    "extract_package_file",
]
