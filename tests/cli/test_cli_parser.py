"""
Tests for CLI argument parser and command dispatch.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from setup_tytanic.cli.parser import CLI
from setup_tytanic.core.exceptions import UnresolvableVersionError
from setup_tytanic.toolchain.installer import InstallResult


@pytest.fixture
def runner_files(temp_dir, monkeypatch):
    """Point GITHUB_OUTPUT and GITHUB_PATH at files in a temp directory."""
    output = temp_dir / "output"
    path_file = temp_dir / "path"
    output.touch()
    path_file.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setenv("GITHUB_PATH", str(path_file))
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.chdir(temp_dir)
    return output, path_file


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "setup-tytanic" in capsys.readouterr().out


class TestArguments:
    """Test subcommand parsing."""

    def test_install_defaults(self):
        args = CLI().parse_args(["install"])

        assert args.command == "install"
        assert args.tytanic_version is None
        assert args.allow_prereleases is None
        assert args.github_token is None
        assert args.cache_dir is None

    def test_install_all_options(self):
        args = CLI().parse_args(
            [
                "--config",
                "ci.yaml",
                "install",
                "--tytanic-version",
                "^0.2",
                "--allow-prereleases",
                "--github-token",
                "tok",
                "--cache-dir",
                "/cache",
            ]
        )

        assert args.config == Path("ci.yaml")
        assert args.tytanic_version == "^0.2"
        assert args.allow_prereleases is True
        assert args.github_token == "tok"
        assert args.cache_dir == Path("/cache")

    def test_list_has_no_version_option(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["list", "--tytanic-version", "1.0.0"])


class TestLoggingConfiguration:
    """Test logging setup."""

    def test_default_logging(self):
        cli = CLI()
        cli._configure_logging(cli.parse_args(["list"]))
        assert logging.getLogger().level == logging.INFO

    def test_quiet_logging(self):
        cli = CLI()
        cli._configure_logging(cli.parse_args(["-q", "list"]))
        assert logging.getLogger().level == logging.ERROR

    def test_runner_debug_enables_verbose(self, monkeypatch):
        monkeypatch.setenv("RUNNER_DEBUG", "1")
        cli = CLI()
        args = cli.parse_args(["list"])

        cli._configure_logging(args)

        assert logging.getLogger().level == logging.DEBUG
        assert args.verbose is True


class TestCommandDispatch:
    """Test command dispatch system."""

    @patch("setup_tytanic.cli.commands.resolve.run", return_value=0)
    def test_dispatch_resolve(self, mock_run):
        assert CLI().run(["resolve"]) == 0
        mock_run.assert_called_once()

    @patch(
        "setup_tytanic.cli.commands.resolve.run",
        side_effect=UnresolvableVersionError("^9", False),
    )
    def test_error_exit_code(self, mock_run):
        assert CLI().run(["resolve"]) == 1

    @patch(
        "setup_tytanic.cli.commands.list_cached.run",
        side_effect=RuntimeError("boom"),
    )
    def test_unexpected_error_exit_code(self, mock_run, capsys):
        assert CLI().run(["list"]) == 1
        assert "Error: boom" in capsys.readouterr().err

    @patch("setup_tytanic.cli.commands.install.run", side_effect=KeyboardInterrupt)
    def test_interrupt_exit_code(self, mock_run):
        assert CLI().run(["install"]) == 130


class TestInstallCommand:
    """End-to-end install command with the pipeline mocked out."""

    def test_cache_miss_outputs(self, runner_files, temp_dir):
        output, path_file = runner_files
        cached = temp_dir / "tool-cache" / "tytanic" / "0.2.1" / "x64"
        result = InstallResult(version="0.2.1", path=cached, cache_hit=False)

        with patch(
            "setup_tytanic.cli.commands.install.install", return_value=result
        ) as mock_install:
            code = CLI().run(
                ["install", "--tytanic-version", "^0.2", "--cache-dir", str(temp_dir)]
            )

        assert code == 0
        assert mock_install.call_args.args[0] == "^0.2"
        assert output.read_text() == "tytanic-version=0.2.1\n"
        assert path_file.read_text() == f"{cached}\n"
        assert os.environ["PATH"].startswith(str(cached))

    def test_cache_hit_output(self, runner_files, temp_dir):
        output, _ = runner_files
        cached = temp_dir / "cached"
        result = InstallResult(version="0.2.1", path=cached, cache_hit=True)

        with patch("setup_tytanic.cli.commands.install.install", return_value=result):
            code = CLI().run(["install", "--cache-dir", str(temp_dir)])

        assert code == 0
        lines = output.read_text().splitlines()
        assert f"cache-hit={cached}" in lines
        assert "tytanic-version=0.2.1" in lines

    def test_environment_inputs_used(self, runner_files, temp_dir, monkeypatch):
        monkeypatch.setenv("INPUT_TYTANIC-VERSION", "~0.1")
        monkeypatch.setenv("INPUT_ALLOW-PRERELEASES", "TRUE")
        result = InstallResult(version="0.1.3", path=temp_dir, cache_hit=False)

        with patch(
            "setup_tytanic.cli.commands.install.install", return_value=result
        ) as mock_install:
            CLI().run(["install", "--cache-dir", str(temp_dir)])

        assert mock_install.call_args.args[:2] == ("~0.1", True)

    def test_invalid_boolean_input_fails(self, runner_files, monkeypatch):
        monkeypatch.setenv("INPUT_ALLOW-PRERELEASES", "maybe")

        with patch("setup_tytanic.cli.commands.install.install") as mock_install:
            assert CLI().run(["install"]) == 1

        mock_install.assert_not_called()


class TestOtherCommands:
    def test_resolve_prints_version(self, runner_files, capsys):
        with patch(
            "setup_tytanic.cli.commands.resolve.resolve", return_value="0.2.1"
        ):
            assert CLI().run(["resolve", "--tytanic-version", "^0.2"]) == 0

        assert capsys.readouterr().out.strip() == "0.2.1"

    def test_list_cached_versions(self, runner_files, temp_dir, capsys):
        cache_root = temp_dir / "tool-cache"
        with patch(
            "setup_tytanic.core.cache.ToolCache.list_versions",
            return_value=["0.1.0", "0.2.1"],
        ):
            assert CLI().run(["list", "--cache-dir", str(cache_root)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert [line.split("\t")[0] for line in lines] == ["0.1.0", "0.2.1"]
