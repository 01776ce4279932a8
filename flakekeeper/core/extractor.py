"""Dependency extraction for Nix flake lock files.

Runs the full pipeline for one package file:

1. **Schema validation**: :func:`parse_lock_graph` turns text into a
   :class:`LockGraph` or rejects it whole.
2. **Graph walk**: :func:`iter_updatable_inputs` drops root, undeclared,
   empty and indirect nodes.
3. **Classification**: :func:`classify_input` maps each remaining input
   to a :class:`DependencyRecord`.
4. **Assembly**: :func:`assemble_dependencies` wraps the records, or
   reports ``None`` when nothing qualifies.

Two entry points cover the two ways lock content arrives:

- :func:`extract_lock_content` takes the lock text directly (inline mode).
- :func:`extract_package_file` takes a ``flake.nix`` path and reads the
  sibling ``flake.lock`` through an injectable async reader.

Neither raises for a bad lock file; problems are reported to the logger
and surface as ``None``. All functions are pure apart from logging, so
independent package files can be extracted concurrently.

Typical usage::

    result = extract_lock_content(text, "flake.lock")
    if result is not None:
        for dep in result.deps:
            print(dep.package_name, dep.current_digest)

    result = await extract_package_file("flake.nix")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional, Union
from pathlib import Path

from flakekeeper.config import FlakeKeeperConfig
from flakekeeper.core.schema import parse_lock_graph
from flakekeeper.core.walker import iter_updatable_inputs
from flakekeeper.core.classifier import classify_input
from flakekeeper.models.dependency import DependencyRecord, PackageFileContent
from flakekeeper.exceptions import LockFileValidationError, UnsupportedLockVersionError
from flakekeeper.utils.filesystem import get_sibling_file_name, read_local_file
from flakekeeper.utils.logger import get_logger
from flakekeeper.constants import (
    DEFAULT_CHECK_ROOT_INPUTS,
    DEFAULT_ENFORCE_LOCK_VERSION,
    LOCK_FILE_NAME,
    SUPPORTED_LOCK_VERSION,
    TRACE,
)

logger = get_logger("core.extractor")

#: Async collaborator returning file text, or ``None`` if the file is absent.
FileReader = Callable[[Union[str, Path]], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class ExtractOptions:
    """Behavior switches for one extraction.

    Attributes:
        allow_custom_host: Honor ``original.host`` and recognize tarballs.
        check_root_inputs: Skip nodes root does not declare as inputs.
        enforce_lock_version: Reject graphs whose version is not
            :data:`SUPPORTED_LOCK_VERSION`.
    """

    allow_custom_host: bool = True
    check_root_inputs: bool = DEFAULT_CHECK_ROOT_INPUTS
    enforce_lock_version: bool = DEFAULT_ENFORCE_LOCK_VERSION

    @classmethod
    def inline(cls) -> "ExtractOptions":
        """Options for lock content handed over directly."""
        return cls(allow_custom_host=False)

    @classmethod
    def sibling(cls) -> "ExtractOptions":
        """Options for lock files read next to a ``flake.nix``."""
        return cls(allow_custom_host=True)

    @classmethod
    def from_config(
        cls,
        config: FlakeKeeperConfig,
        *,
        inline: bool = False,
        allow_custom_host: Optional[bool] = None,
    ) -> "ExtractOptions":
        """Build options from loaded configuration.

        Precedence for ``allow_custom_host``: command line, then config,
        then the preset of the input mode.

        Args:
            config: Loaded configuration.
            inline: Whether lock content is extracted directly.
            allow_custom_host: Command-line override for the config value.
        """
        preset = cls.inline() if inline else cls.sibling()
        if allow_custom_host is None:
            allow_custom_host = config.allow_custom_host
        if allow_custom_host is None:
            allow_custom_host = preset.allow_custom_host

        return cls(
            allow_custom_host=allow_custom_host,
            check_root_inputs=config.check_root_inputs,
            enforce_lock_version=config.enforce_lock_version,
        )


def assemble_dependencies(
    records: Iterable[DependencyRecord],
    *,
    package_file: Optional[str] = None,
) -> Optional[PackageFileContent]:
    """Wrap classified records into a result envelope.

    Returns:
        The envelope, or ``None`` when there are no records.
    """
    deps = list(records)
    if not deps:
        return None
    return PackageFileContent(deps=deps, package_file=package_file)


def extract_lock_content(
    content: str,
    package_file: str,
    *,
    options: Optional[ExtractOptions] = None,
    observer: Optional[logging.Logger] = None,
) -> Optional[PackageFileContent]:
    """Extract updatable dependencies from lock text.

    Args:
        content: Raw ``flake.lock`` text.
        package_file: File the content belongs to, for diagnostics.
        options: Behavior switches; defaults to :meth:`ExtractOptions.inline`.
        observer: Logger for diagnostics; defaults to the module logger.

    Returns:
        The dependencies found, or ``None`` if there are none or the lock
        file was rejected.
    """
    log = observer or logger
    opts = options or ExtractOptions.inline()

    log.log(TRACE, "extract_lock_content(%s)", package_file)

    try:
        graph = parse_lock_graph(
            content,
            package_file=package_file,
            supported_version=(
                SUPPORTED_LOCK_VERSION if opts.enforce_lock_version else None
            ),
        )
    except LockFileValidationError as exc:
        log.error("Invalid flake.lock file %s: %s", package_file, exc.diagnostic)
        return None
    except UnsupportedLockVersionError as exc:
        log.debug(
            "Unsupported flake lock version %s in %s (supported: %s)",
            exc.version,
            package_file,
            exc.supported_version,
        )
        return None

    records = []
    for name, locked, original in iter_updatable_inputs(
        graph,
        check_root_inputs=opts.check_root_inputs,
        package_file=package_file,
        observer=log,
    ):
        record = classify_input(
            name,
            locked,
            original,
            allow_custom_host=opts.allow_custom_host,
            package_file=package_file,
            observer=log,
        )
        if record is not None:
            records.append(record)

    result = assemble_dependencies(records, package_file=package_file)
    log.log(
        TRACE,
        "extract_lock_content(%s) found %d dependencies",
        package_file,
        len(result) if result else 0,
    )
    return result


async def extract_package_file(
    package_file: Union[str, Path],
    *,
    options: Optional[ExtractOptions] = None,
    read_file: Optional[FileReader] = None,
    observer: Optional[logging.Logger] = None,
) -> Optional[PackageFileContent]:
    """Extract updatable dependencies for a ``flake.nix`` package file.

    The lock graph is read from the ``flake.lock`` next to
    ``package_file``.

    Args:
        package_file: Path to the package file.
        options: Behavior switches; defaults to :meth:`ExtractOptions.sibling`.
        read_file: Async reader; defaults to :func:`read_local_file`.
        observer: Logger for diagnostics; defaults to the module logger.

    Returns:
        The dependencies found, or ``None`` if there is no lock file, it
        has no updatable inputs, or it was rejected.

    Raises:
        FileOperationError: The lock file exists but cannot be read.
    """
    log = observer or logger
    reader = read_file or read_local_file

    log.log(TRACE, "extract_package_file(%s)", package_file)

    lock_file = get_sibling_file_name(package_file, LOCK_FILE_NAME)
    content = await reader(lock_file)
    if content is None:
        log.debug("No %s found next to %s", LOCK_FILE_NAME, package_file)
        return None

    return extract_lock_content(
        content,
        str(package_file),
        options=options or ExtractOptions.sibling(),
        observer=log,
    )
