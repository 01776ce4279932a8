"""Extract command implementation for flakekeeper.

Lists the updatable inputs recorded in Nix flake lock files, in the shape
an update engine consumes (dependency name, current reference, pinned
digest, datasource and remote URL).

Two input modes are supported:

1. **Package file mode** (default): each PATH is a ``flake.nix`` (or a
   directory searched for them) and the sibling ``flake.lock`` is read.
2. **Inline mode** (``--inline``): each PATH is a lock file whose content
   is extracted directly.

Package files are extracted concurrently; each extraction is independent.

Typical usage::

    # Extract the flake in the current directory
    $ flakekeeper extract

    # Every flake below a directory, as JSON
    $ flakekeeper extract ./infra --format json

    # A lock file on its own
    $ flakekeeper extract --inline vendor/flake.lock
"""

from __future__ import annotations

import json
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import click

from flakekeeper.constants import LOCK_FILE_NAME, PACKAGE_FILE_NAME
from flakekeeper.context import pass_context, FlakeKeeperContext
from flakekeeper.exceptions import FileOperationError, FlakeKeeperError
from flakekeeper.models import PackageFileContent
from flakekeeper.core import (
    ExtractOptions,
    extract_lock_content,
    extract_package_file,
)
from flakekeeper.utils import (
    find_package_files,
    get_logger,
    print_dependencies,
    print_error,
    print_extraction_summary,
    read_local_file,
)

logger = get_logger("commands.extract")

#: ``(path, extraction result)`` for each processed file.
ExtractionResult = Tuple[Path, Optional[PackageFileContent]]

#: Extraction results that produced dependencies.
FoundDependencies = Tuple[Path, PackageFileContent]


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--inline",
    is_flag=True,
    help="Treat PATHS as lock files and extract their content directly.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--allow-custom-host/--no-allow-custom-host",
    default=None,
    help="Honor host overrides on inputs and recognize tarball inputs.",
)
@pass_context
def extract(
    ctx: FlakeKeeperContext,
    paths: Tuple[Path, ...],
    inline: bool,
    format: str,
    allow_custom_host: Optional[bool],
) -> None:
    """List updatable flake inputs.

    PATHS are ``flake.nix`` files or directories containing them (default:
    ``flake.nix`` in the current directory). With ``--inline``, PATHS are
    lock files instead (default: ``flake.lock``).

    Exits 0 when extraction completes, even if nothing is updatable, and 1
    when a file cannot be read.
    """
    options = ctx.extract_options(inline=inline, allow_custom_host=allow_custom_host)
    targets = _resolve_targets(paths, inline=inline)
    logger.debug("Extraction targets: %s", [str(t) for t in targets])

    try:
        results = asyncio.run(_extract_async(targets, options, inline=inline))
    except FlakeKeeperError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    show_progress = format == "table" or ctx.verbose > 0
    found: List[FoundDependencies] = [
        (path, result) for path, result in results if result is not None
    ]

    if format == "table":
        print_dependencies(found)
    elif format == "simple":
        _display_simple(found)
    else:
        _display_json(found)

    if show_progress:
        print_extraction_summary(found)


def _resolve_targets(paths: Sequence[Path], *, inline: bool) -> List[Path]:
    """Expand directories and apply the default target."""
    default_name = LOCK_FILE_NAME if inline else PACKAGE_FILE_NAME
    if not paths:
        return [Path(default_name)]

    targets: List[Path] = []
    for path in paths:
        if not path.is_dir():
            targets.append(path)
        elif inline:
            targets.append(path / LOCK_FILE_NAME)
        else:
            targets.extend(find_package_files(path))
    return targets


# ---------------------------------------------------------------------------
# Async orchestration
# ---------------------------------------------------------------------------


async def _extract_async(
    targets: Sequence[Path],
    options: ExtractOptions,
    *,
    inline: bool,
) -> List[ExtractionResult]:
    """Extract every target concurrently.

    Raises:
        FileOperationError: An inline lock file does not exist or a lock
            file cannot be read.
    """
    if inline:
        coros = [_extract_inline(target, options) for target in targets]
    else:
        coros = [extract_package_file(target, options=options) for target in targets]

    results = await asyncio.gather(*coros)
    return list(zip(targets, results))


async def _extract_inline(
    lock_file: Path,
    options: ExtractOptions,
) -> Optional[PackageFileContent]:
    content = await read_local_file(lock_file)
    if content is None:
        raise FileOperationError(
            f"Lock file not found: {lock_file}",
            file_path=str(lock_file),
            operation="read",
        )
    return extract_lock_content(content, str(lock_file), options=options)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_simple(found: Sequence[FoundDependencies]) -> None:
    """Render one line per dependency, suitable for piping."""
    for path, result in found:
        for dep in result.deps:
            click.echo(
                f"{path}: {dep.dep_name:20} {dep.current_value or '-':15} "
                f"{dep.current_digest}  {dep.package_name}"
            )


def _display_json(found: Sequence[FoundDependencies]) -> None:
    """Render results as JSON, one object per package file."""
    data = []
    for path, result in found:
        data.append({"packageFile": str(path), **result.to_json()})
    click.echo(json.dumps(data, indent=2))
