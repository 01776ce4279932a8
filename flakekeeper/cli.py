"""
Command-line interface for flakekeeper.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Optional

import click

from flakekeeper.config import load_config
from flakekeeper.__version__ import __version__
from flakekeeper.context import FlakeKeeperContext
from flakekeeper.exceptions import ConfigError, FlakeKeeperError
from flakekeeper.utils.logger import get_logger, setup_logging
from flakekeeper.utils.console import configure_console, print_error, print_warning

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="FLAKEKEEPER_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv, -vvv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="FLAKEKEEPER_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="flakekeeper",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """flakekeeper: find updatable inputs in Nix flake lock files.

    \b
    Available commands:
      flakekeeper extract          List updatable flake inputs

    \b
    Examples:
      flakekeeper extract
      flakekeeper extract path/to/flake.nix --format json
      flakekeeper -vv extract --inline flake.lock

    Use ``flakekeeper COMMAND --help`` for command-specific options.
    """
    configure_console(color=color)
    level = setup_logging(verbosity=verbose, color=color)
    logger.debug("flakekeeper v%s, log level %s", __version__, logging.getLevelName(level))

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    ctx.obj = FlakeKeeperContext(loaded_config, verbose=verbose, color=color)
    logger.debug("Config path: %s", ctx.obj.config_path)


# Register CLI subcommands
from flakekeeper.commands.extract import extract  # noqa: E402

cli.add_command(extract)


def main() -> int:
    """Main entry point for the flakekeeper CLI.

    Extraction problems inside a lock file are logged, not raised, so an
    error reaching this function means a file could not be read or the
    configuration is unusable.

    Returns:
        Exit code:
            0   Success, including runs that found nothing to update
            1   Unreadable file, bad configuration or unexpected error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        # standalone_mode=False returns the exit code of ctx.exit()
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Extraction cancelled by user")
        return 130

    except FlakeKeeperError as exc:
        print_error(exc.message)
        if exc.details:
            logger.debug("Error details: %s", exc.details, exc_info=True)
        return 1

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
