"""
Session transcript discovery.

Finds the most recently modified transcript under a root directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

TRANSCRIPT_PATTERN = "*.jsonl"


def locate_latest(root: Union[str, Path]) -> Optional[Path]:
    """Return the newest transcript file under ``root``.

    Scans recursively for ``*.jsonl`` files and picks the one with the
    greatest modification time. A missing root is not an error.

    Args:
        root: Directory holding session transcripts

    Returns:
        Path of the newest transcript, or None if there is none
    """
    root_path = Path(root).expanduser()
    if not root_path.is_dir():
        logger.debug("Transcript root %s does not exist", root_path)
        return None

    latest = None
    latest_mtime = None
    for candidate in root_path.rglob(TRANSCRIPT_PATTERN):
        try:
            if not candidate.is_file():
                continue
            mtime = candidate.stat().st_mtime
        except OSError as e:
            # File vanished or is unreadable between listing and stat
            logger.debug("Skipping %s: %s", candidate, e)
            continue
        if latest_mtime is None or mtime > latest_mtime:
            latest = candidate
            latest_mtime = mtime

    if latest is None:
        logger.debug("No transcripts found under %s", root_path)
    return latest
