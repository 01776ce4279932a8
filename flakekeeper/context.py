"""
Shared context object for flakekeeper CLI commands.

The CLI group loads configuration once and stores it here together with
the global switches. Commands ask the context for the extraction options
of their input mode instead of reading configuration themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from flakekeeper.config import FlakeKeeperConfig
from flakekeeper.core.extractor import ExtractOptions


class FlakeKeeperContext:
    """Global context object for flakekeeper CLI commands.

    Attributes:
        config: Loaded configuration; defaults when no file was found.
        verbose: Number of ``-v`` flags (0=WARNING, 1=INFO, 2=DEBUG, 3+=TRACE).
        color: Whether colored terminal output is enabled.
    """

    __slots__ = ("config", "verbose", "color")

    def __init__(
        self,
        config: Optional[FlakeKeeperConfig] = None,
        *,
        verbose: int = 0,
        color: bool = True,
    ) -> None:
        self.config = config if config is not None else FlakeKeeperConfig()
        self.verbose = verbose
        self.color = color

    @property
    def config_path(self) -> Optional[Path]:
        """File the configuration was loaded from, if any."""
        return self.config.source_path

    def extract_options(
        self,
        *,
        inline: bool,
        allow_custom_host: Optional[bool] = None,
    ) -> ExtractOptions:
        """Extraction options for one input mode.

        ``allow_custom_host`` is the command-line override; it wins over
        the configuration, which wins over the mode preset.
        """
        return ExtractOptions.from_config(
            self.config,
            inline=inline,
            allow_custom_host=allow_custom_host,
        )


#: Click decorator for injecting :class:`FlakeKeeperContext` into commands.
pass_context = click.make_pass_decorator(FlakeKeeperContext, ensure=True)
