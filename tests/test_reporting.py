"""
Tests for the dual-mode reporters and step output files.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from sync_upstream.core.config import RuntimeEnvironment
from sync_upstream.core.reporting import (
    LocalOutputFile,
    LocalReporter,
    OutputFile,
    PlatformReporter,
    create_output_file,
    create_reporter,
)


def emit_sample_run(reporter) -> None:
    """The same semantic events the pipeline emits, in miniature."""
    reporter.banner()
    with reporter.group("Validating environment and input parameters"):
        reporter.log("Branch: feature-x")
    with reporter.group("Fetching changes from upstream repository org/upstream"):
        reporter.warning("Shallow fetch with depth 1 failed")
        reporter.info("Fetched")


# ==============================================================================
# Platform Reporter
# ==============================================================================


class TestPlatformReporter:
    """Test GitHub Actions workflow command rendering."""

    def test_levels(self, platform_reporter, platform_stream):
        platform_reporter.log("debug line")
        platform_reporter.info("info line")
        platform_reporter.warning("warning line")
        platform_reporter.error("error line")

        assert platform_stream.getvalue().splitlines() == [
            "::debug::debug line",
            "::notice::info line",
            "::warning::warning line",
            "::error::error line",
        ]

    def test_groups(self, platform_reporter, platform_stream):
        emit_sample_run(platform_reporter)

        assert platform_stream.getvalue().splitlines() == [
            "::group::Validating environment and input parameters",
            "::debug::Branch: feature-x",
            "::endgroup::",
            "::group::Fetching changes from upstream repository org/upstream",
            "::warning::Shallow fetch with depth 1 failed",
            "::notice::Fetched",
            "::endgroup::",
        ]

    def test_mask(self, platform_reporter, platform_stream):
        platform_reporter.mask("ghs_secret")
        platform_reporter.mask("")

        assert platform_stream.getvalue() == "::add-mask::ghs_secret\n"

    def test_multiline_messages_stay_on_one_line(self, platform_reporter, platform_stream):
        platform_reporter.error("fatal: one\nfatal: two 100%")

        assert platform_stream.getvalue() == "::error::fatal: one%0Afatal: two 100%25\n"

    def test_defaults_to_stdout(self, capsys):
        PlatformReporter().info("hello")

        assert capsys.readouterr().out == "::notice::hello\n"

    def test_group_left_open_on_error(self, platform_reporter, platform_stream):
        with pytest.raises(RuntimeError):
            with platform_reporter.group("Pushing"):
                raise RuntimeError("push failed")

        assert platform_stream.getvalue() == "::group::Pushing\n"


# ==============================================================================
# Local Reporter
# ==============================================================================


class TestLocalReporter:
    """Test indented human-readable output."""

    def test_indentation(self, local_reporter, local_console):
        emit_sample_run(local_reporter)

        assert local_console.file.getvalue().splitlines() == [
            "",
            "Validating environment and input parameters",
            "  Branch: feature-x",
            "",
            "Fetching changes from upstream repository org/upstream",
            "  Shallow fetch with depth 1 failed",
            "  Fetched",
            "",
        ]

    def test_nested_groups(self, local_reporter, local_console):
        local_reporter.group_start("outer")
        local_reporter.group_start("inner")
        local_reporter.log("deep")
        assert local_reporter.indentation == "    "
        local_reporter.group_end()
        local_reporter.log("back")
        local_reporter.group_end()

        assert local_reporter.indentation == ""
        assert local_console.file.getvalue().splitlines() == [
            "outer",
            "  inner",
            "    deep",
            "",
            "  back",
            "",
        ]

    def test_group_end_without_group(self, local_reporter):
        local_reporter.group_end()

        assert local_reporter.indentation == ""

    def test_indentation_is_per_instance(self, local_console):
        first = LocalReporter(console=local_console)
        second = LocalReporter(console=local_console)

        first.group_start("group")

        assert first.indentation == "  "
        assert second.indentation == ""

    def test_markup_is_not_interpreted(self, local_reporter, local_console):
        local_reporter.info("[bold]literal[/bold]")

        assert local_console.file.getvalue() == "[bold]literal[/bold]\n"

    def test_debug_banner(self, local_console):
        LocalReporter(console=local_console, debug=True).banner()

        assert local_console.file.getvalue().splitlines() == ["", "! DEBUG MODE ENABLED !"]

    def test_mask_is_noop(self, local_reporter, local_console):
        local_reporter.mask("ghs_secret")

        assert local_console.file.getvalue() == ""


# ==============================================================================
# Output Files
# ==============================================================================


class TestOutputFile:
    """Test step output files."""

    def test_appends_outputs(self, output_path):
        output_path.write_text("previous=1\n")

        with OutputFile(output_path) as outputs:
            outputs.set_output("synced", "true")

        assert output_path.read_text() == "previous=1\nsynced=true\n"

    def test_missing_path_warns(self, platform_reporter, platform_stream):
        OutputFile(None, reporter=platform_reporter).set_output("synced", "false")

        assert platform_stream.getvalue() == (
            "::warning::GITHUB_OUTPUT is not set, output not recorded: synced=false\n"
        )


class TestLocalOutputFile:
    """Test the temporary output file of local runs."""

    def test_dumps_and_removes_on_close(self, local_console):
        outputs = LocalOutputFile(console=local_console)
        path = outputs.path
        assert path is not None and path.exists()

        outputs.set_output("synced", "true")
        outputs.close()

        assert not path.exists()
        assert local_console.file.getvalue().splitlines() == ["", "GITHUB_OUTPUT:", "synced=true"]

    def test_dumps_on_failure(self, local_console):
        with pytest.raises(RuntimeError):
            with LocalOutputFile(console=local_console) as outputs:
                path = outputs.path
                raise RuntimeError("boom")

        assert not path.exists()
        assert "GITHUB_OUTPUT:" in local_console.file.getvalue()

    def test_close_is_idempotent(self, local_console):
        outputs = LocalOutputFile(console=local_console)
        outputs.close()
        outputs.close()

        assert local_console.file.getvalue().count("GITHUB_OUTPUT:") == 1


# ==============================================================================
# Backend Selection
# ==============================================================================


class TestBackendSelection:
    """Backends are chosen once from the runtime environment."""

    def test_platform_mode(self, tmp_path: Path):
        env = RuntimeEnvironment(ci=True, github_output=tmp_path / "out")
        reporter = create_reporter(env)
        outputs = create_output_file(env, reporter)

        assert isinstance(reporter, PlatformReporter)
        assert type(outputs) is OutputFile
        assert outputs.path == tmp_path / "out"

    def test_local_mode(self):
        console = Console(file=io.StringIO())
        env = RuntimeEnvironment(debug=True)
        reporter = create_reporter(env, console=console)
        outputs = create_output_file(env, reporter, console=console)

        assert isinstance(reporter, LocalReporter)
        assert reporter.debug
        assert isinstance(outputs, LocalOutputFile)
        outputs.close()
