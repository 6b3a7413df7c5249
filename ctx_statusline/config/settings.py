"""
Host settings integration.

Registers the status line command in the host application's settings.json.
"""

import json
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Union

DEFAULT_SETTINGS_PATH = Path.home() / ".claude" / "settings.json"
DEFAULT_COMMAND = "ctx-statusline"


class InstallOutcome(Enum):
    """Result of registering the status line."""
    CREATED = "created"                         # New settings file written
    ADDED = "added"                             # statusLine added to existing file
    ALREADY_CONFIGURED = "already_configured"   # Existing statusLine left alone


def statusline_entry(command: str) -> dict:
    return {"type": "command", "command": command}


def install_statusline(
    settings_path: Union[str, Path] = DEFAULT_SETTINGS_PATH,
    command: str = DEFAULT_COMMAND,
) -> InstallOutcome:
    """Add a ``statusLine`` block to the host settings file.

    An existing ``statusLine`` entry is never overwritten; every other
    key in the file is preserved.

    Args:
        settings_path: Path to the host's settings.json
        command: Command the host should run to render the status line

    Returns:
        What was done to the settings file

    Raises:
        ValueError: If the command is empty or the settings file is not a JSON object
        OSError: If the settings file cannot be read or written
    """
    if not command or not command.strip():
        raise ValueError("command is required and cannot be empty")

    path = Path(settings_path).expanduser()

    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_settings(path, {"statusLine": statusline_entry(command)})
        return InstallOutcome.CREATED

    try:
        settings = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Settings file {path} is not valid JSON: {e}")

    if not isinstance(settings, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")

    if "statusLine" in settings:
        return InstallOutcome.ALREADY_CONFIGURED

    settings["statusLine"] = statusline_entry(command)
    _write_settings(path, settings)
    return InstallOutcome.ADDED


def _write_settings(path: Path, settings: dict) -> None:
    """Replace the settings file atomically so a failed write leaves it intact."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(settings, indent=2) + "\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
