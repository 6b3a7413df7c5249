"""
Tests for the CLI interface.
"""
import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ctx_statusline.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL
from ctx_statusline.config import loader

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_default_config(tmp_path, monkeypatch):
    """Keep the user's own config file out of the tests."""
    monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", tmp_path / "no-config.yaml")


@pytest.fixture
def mock_branch():
    """Mock the git branch lookup."""
    with patch('ctx_statusline.statusline.current_branch', return_value="main") as mock:
        yield mock


class TestRender:
    """Test the default status line command."""

    def test_no_session(self, tmp_path, mock_branch):
        """Test that a missing transcript root prints the degraded line."""
        result = runner.invoke(app, ["--root", str(tmp_path / "missing"), "--plain"])

        assert result.exit_code == EXIT_CODE_PASS
        assert result.output == "[--] Ctx: --% | $0.00\n"

    def test_plain_session(self, session_lines, write_transcript, mock_branch):
        path = write_transcript(session_lines, name="projects/p/s.jsonl")

        result = runner.invoke(app, ["--root", str(path.parent.parent), "--plain"])

        assert result.exit_code == EXIT_CODE_PASS
        assert result.output == "[Opus 4.5] 🟢 Ctx: 6% | 1K↓ 2K↑ 45K⚡ | 🧠 | $0.36 | main\n"

    def test_coloured_session(self, session_lines, write_transcript, mock_branch):
        path = write_transcript(session_lines)

        result = runner.invoke(app, ["--root", str(path.parent)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "\x1b[" in result.output
        assert "Opus 4.5" in result.output
        assert "$0.36" in result.output

    def test_config_file_applied(self, session_lines, write_transcript, tmp_path, mock_branch):
        """Test that prices and context limit come from the config file."""
        path = write_transcript(session_lines, name="sessions/s.jsonl")
        config_path = tmp_path / "statusline.yaml"
        config_path.write_text(
            f"context_limit: 12100\ntranscript_root: {path.parent}\n"
            "pricing:\n  input: 0\n  output: 0\n  cache_read: 0\n  cache_write: 0\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["--config", str(config_path), "--plain"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "🔴 Ctx: 100%" in result.output
        assert "$0.00" in result.output

    def test_invalid_config_falls_back_to_defaults(self, tmp_path, mock_branch):
        config_path = tmp_path / "statusline.yaml"
        config_path.write_text("bogus_key: 1\n", encoding="utf-8")

        result = runner.invoke(
            app, ["--config", str(config_path), "--root", str(tmp_path / "none"), "--plain"]
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "[--] Ctx: --% | $0.00" in result.output

    def test_missing_config_falls_back_to_defaults(self, tmp_path, mock_branch):
        result = runner.invoke(
            app,
            ["--config", str(tmp_path / "absent.yaml"), "--root", str(tmp_path / "none"), "--plain"],
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "[--] Ctx: --% | $0.00" in result.output

    def test_config_directory_falls_back_to_defaults(self, tmp_path, mock_branch):
        """Test that a config path that cannot be opened does not stop rendering."""
        config_dir = tmp_path / "statusline.yaml"
        config_dir.mkdir()

        result = runner.invoke(
            app, ["--config", str(config_dir), "--root", str(tmp_path / "none"), "--plain"]
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "[--] Ctx: --% | $0.00" in result.output

    def test_unreadable_default_config_falls_back_to_defaults(self, tmp_path, mock_branch):
        with patch('ctx_statusline.cli.main.load_default_config',
                   side_effect=PermissionError(13, "Permission denied")):
            result = runner.invoke(app, ["--root", str(tmp_path / "none"), "--plain"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "[--] Ctx: --% | $0.00" in result.output

    def test_deeply_nested_transcript_line_is_skipped(self, session_lines, write_transcript,
                                                      mock_branch):
        path = write_transcript(["[" * 100_000] + session_lines)

        result = runner.invoke(app, ["--root", str(path.parent), "--plain"])

        assert result.exit_code == EXIT_CODE_PASS
        assert result.output == "[Opus 4.5] 🟢 Ctx: 6% | 1K↓ 2K↑ 45K⚡ | 🧠 | $0.36 | main\n"

    def test_output_is_stable(self, session_lines, write_transcript, mock_branch):
        path = write_transcript(session_lines)
        args = ["--root", str(path.parent), "--plain"]

        assert runner.invoke(app, args).output == runner.invoke(app, args).output


class TestInstall:
    """Test the install command."""

    def test_install_creates_settings(self, tmp_path):
        settings = tmp_path / "settings.json"

        result = runner.invoke(app, ["install", "--settings", str(settings)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Created" in result.output
        assert json.loads(settings.read_text())["statusLine"]["command"] == "ctx-statusline"

    def test_install_already_configured(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"statusLine": {"type": "command", "command": "x"}}))

        result = runner.invoke(app, ["install", "--settings", str(settings)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "already configured" in result.output

    def test_install_custom_command(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text("{}")

        result = runner.invoke(
            app, ["install", "--settings", str(settings), "--command", "ctx-statusline --plain"]
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "Added statusLine" in result.output
        assert json.loads(settings.read_text())["statusLine"]["command"] == "ctx-statusline --plain"

    def test_install_invalid_settings_fails(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text("{broken")

        result = runner.invoke(app, ["install", "--settings", str(settings)])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Error installing status line" in result.output
