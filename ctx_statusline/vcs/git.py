"""
Git branch lookup.

Asks the git CLI for the current branch; any failure yields a placeholder.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

NO_BRANCH = "--"
GIT_TIMEOUT_SECONDS = 2


def current_branch(cwd: Optional[Union[str, Path]] = None) -> str:
    """Return the current git branch name, or "--" if it cannot be found.

    Args:
        cwd: Directory to query (defaults to the process working directory)
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("git branch lookup failed: %s", e)
        return NO_BRANCH

    branch = result.stdout.strip()
    if result.returncode != 0 or not branch:
        logger.debug("git rev-parse exited %d: %s", result.returncode, result.stderr.strip())
        return NO_BRANCH
    return branch
