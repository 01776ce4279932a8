from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Generator, List, Optional, Tuple
from unittest.mock import patch

import pytest
from rich.console import Console

import flakekeeper.utils.console as console_module
from flakekeeper.models.dependency import DependencyRecord, PackageFileContent
from flakekeeper.utils.console import (
    FLAKEKEEPER_THEME,
    _should_use_color,
    configure_console,
    dependency_table,
    get_console,
    print_dependencies,
    print_error,
    print_extraction_summary,
    print_success,
    print_warning,
    short_digest,
)

NIXPKGS_REV = "5e4fbfb6b3de1aa2872b76d49fafc942626e2add"


def _record(
    name: str,
    package_name: str,
    current_value: Optional[str] = "main",
    rev: str = NIXPKGS_REV,
) -> DependencyRecord:
    return DependencyRecord(
        dep_name=name,
        current_value=current_value,
        current_digest=rev,
        replace_string=rev,
        datasource="git-refs",
        package_name=package_name,
    )


@pytest.fixture(autouse=True)
def reset_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without a shared console."""
    monkeypatch.setattr(console_module, "_console", None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that affect color detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


@pytest.fixture
def recording_console() -> Generator[io.StringIO, None, None]:
    """Route console output into a buffer."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        theme=FLAKEKEEPER_THEME,
        no_color=True,
        width=200,
    )
    with patch.object(console_module, "_console", console):
        yield buffer


@pytest.fixture
def found() -> List[Tuple[Path, PackageFileContent]]:
    """Two package files with one and two extracted inputs."""
    return [
        (
            Path("flake.nix"),
            PackageFileContent(
                deps=[_record("nixpkgs", "https://github.com/NixOS/nixpkgs", "nixos-unstable")]
            ),
        ),
        (
            Path("hosts/alpha/flake.nix"),
            PackageFileContent(
                deps=[
                    _record("crane", "https://git.corp/ipetkov/crane", None, rev="deadbeef"),
                    _record("fenix", "https://gitlab.com/infra/fenix"),
                ]
            ),
        ),
    ]


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color."""

    def test_no_color(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test NO_COLOR disables color."""
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_ci(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test CI disables color."""
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    @pytest.mark.parametrize("is_tty", [True, False])
    def test_follows_tty(self, clean_env: None, is_tty: bool) -> None:
        """Test color follows stdout being a terminal."""
        with patch.object(sys.stdout, "isatty", return_value=is_tty):
            assert _should_use_color() is is_tty


@pytest.mark.unit
class TestConsoleLifecycle:
    """Tests for configure_console and get_console."""

    def test_get_console_is_shared(self) -> None:
        """Test the same console is returned on every call."""
        assert get_console() is get_console()

    def test_configure_replaces_console(self) -> None:
        """Test each CLI invocation gets a fresh console."""
        first = get_console()
        second = configure_console(color=True)

        assert second is not first
        assert get_console() is second

    def test_color_switch_off(self) -> None:
        """Test --no-color disables color even on a terminal."""
        with patch.object(console_module, "_should_use_color", return_value=True):
            assert configure_console(color=False).no_color is True

    def test_color_switch_on(self) -> None:
        """Test --color enables color when the environment allows it."""
        with patch.object(console_module, "_should_use_color", return_value=True):
            assert configure_console(color=True).no_color is False

    def test_environment_wins_over_switch(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test NO_COLOR disables color even with --color."""
        monkeypatch.setenv("NO_COLOR", "1")

        assert configure_console(color=True).no_color is True


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_success(self, recording_console: io.StringIO) -> None:
        """Test success messages use the OK prefix."""
        print_success("Found 3 updatable input(s) in 1 file(s)")

        assert recording_console.getvalue() == (
            "[OK] Found 3 updatable input(s) in 1 file(s)\n"
        )

    def test_error(self, recording_console: io.StringIO) -> None:
        """Test error messages use the ERROR prefix."""
        print_error("Lock file not found: flake.lock")

        assert recording_console.getvalue().startswith("[ERROR] Lock file not found")

    def test_brackets_not_markup(self, recording_console: io.StringIO) -> None:
        """Test bracketed text in messages is printed literally."""
        print_error("Failed to read [dim]flake.lock")

        assert recording_console.getvalue() == "[ERROR] Failed to read [dim]flake.lock\n"

    def test_warning_custom_prefix(self, recording_console: io.StringIO) -> None:
        """Test the prefix can be replaced."""
        print_warning("careful", prefix="!!")

        assert recording_console.getvalue() == "!! careful\n"


@pytest.mark.unit
class TestDependencyTable:
    """Tests for dependency_table and print_dependencies."""

    def test_one_row_per_input(self, found: List[Tuple[Path, PackageFileContent]]) -> None:
        """Test rows follow file order, then extraction order."""
        table = dependency_table(found)

        assert table.title == "Flake Inputs"
        assert [column.header for column in table.columns] == [
            "File",
            "Input",
            "Package",
            "Current",
            "Digest",
            "Datasource",
        ]
        assert table.row_count == 3
        assert list(table.columns[1].cells) == ["nixpkgs", "crane", "fenix"]

    def test_digest_shortened(self, found: List[Tuple[Path, PackageFileContent]]) -> None:
        """Test full revisions are shortened and short ones kept."""
        digests = list(dependency_table(found).columns[4].cells)

        assert digests == ["5e4fbfb6b3de", "deadbeef", "5e4fbfb6b3de"]

    def test_missing_current_value(
        self, found: List[Tuple[Path, PackageFileContent]]
    ) -> None:
        """Test inputs without a declared ref show a dash."""
        current = list(dependency_table(found).columns[3].cells)

        assert current == ["nixos-unstable", "-", "main"]

    def test_print_renders_table(
        self,
        recording_console: io.StringIO,
        found: List[Tuple[Path, PackageFileContent]],
    ) -> None:
        """Test the printed table holds the remote URLs."""
        print_dependencies(found)

        output = recording_console.getvalue()
        assert "Flake Inputs" in output
        assert "https://github.com/NixOS/nixpkgs" in output
        assert "hosts/alpha/flake.nix" in output

    def test_print_nothing_found(self, recording_console: io.StringIO) -> None:
        """Test an empty result prints no table."""
        print_dependencies([])

        assert recording_console.getvalue() == ""


@pytest.mark.unit
class TestExtractionSummary:
    """Tests for print_extraction_summary."""

    def test_counts_inputs_and_files(
        self,
        recording_console: io.StringIO,
        found: List[Tuple[Path, PackageFileContent]],
    ) -> None:
        """Test the summary counts inputs across package files."""
        print_extraction_summary(found)

        assert recording_console.getvalue() == (
            "[OK] Found 3 updatable input(s) in 2 file(s)\n"
        )

    def test_nothing_found(self, recording_console: io.StringIO) -> None:
        """Test an empty run is a warning."""
        print_extraction_summary([])

        assert recording_console.getvalue() == (
            "[WARNING] No updatable flake inputs found\n"
        )


@pytest.mark.unit
class TestShortDigest:
    """Tests for short_digest."""

    def test_truncates_long_digest(self) -> None:
        """Test full revisions are shortened."""
        assert short_digest(NIXPKGS_REV) == "5e4fbfb6b3de"

    def test_keeps_short_digest(self) -> None:
        """Test short revisions are returned unchanged."""
        assert short_digest("deadbeef") == "deadbeef"

    def test_custom_length(self) -> None:
        """Test the length can be chosen."""
        assert short_digest("abcdef", length=3) == "abc"
