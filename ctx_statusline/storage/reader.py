"""
Bounded transcript reading.

Transcripts grow for the whole life of a session, so reads are capped.
"""

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

DEFAULT_MAX_READ_BYTES = 64 * 1024 * 1024


def read_transcript_lines(path: Path, max_bytes: int = DEFAULT_MAX_READ_BYTES) -> List[str]:
    """Read a transcript file into lines.

    When the file is larger than ``max_bytes`` only its tail is read and
    the first, possibly partial, line is dropped.

    Args:
        path: Transcript file
        max_bytes: Maximum number of bytes to read

    Returns:
        Decoded lines; empty if the file cannot be read

    Raises:
        ValueError: If max_bytes is not positive
    """
    if max_bytes <= 0:
        raise ValueError("max_bytes must be > 0")

    try:
        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            truncated = size > max_bytes
            if truncated:
                f.seek(size - max_bytes)
            data = f.read(max_bytes)
    except OSError as e:
        logger.warning("Could not read transcript %s: %s", path, e)
        return []

    lines = data.decode("utf-8", errors="replace").splitlines()
    if truncated:
        logger.warning(
            "Transcript %s is %d bytes; reading only the last %d", path, size, max_bytes
        )
        lines = lines[1:]
    return lines
