"""
flakekeeper version information.

Single source of truth for the package version, read by packaging and
reported by ``flakekeeper --version``.
"""

__version__ = "0.1.0.dev0"
