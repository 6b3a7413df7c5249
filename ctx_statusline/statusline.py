"""
Status line assembly.

Wires locator, parser, calculator, branch lookup and renderer together.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from rich.text import Text

from ctx_statusline.config.loader import StatuslineConfig
from ctx_statusline.core.metrics import build_metrics
from ctx_statusline.core.transcript import TranscriptParser
from ctx_statusline.render.line import render_line, render_no_session
from ctx_statusline.storage.locator import locate_latest
from ctx_statusline.vcs.git import current_branch

logger = logging.getLogger(__name__)


def build_status_line(
    config: StatuslineConfig,
    locate: Optional[Callable[[Path], Optional[Path]]] = None,
    branch_lookup: Optional[Callable[[], str]] = None,
) -> Text:
    """Build the status line for the newest session under the configured root.

    Args:
        config: Status line configuration
        locate: Returns the newest transcript under a root, or None
            (defaults to locate_latest)
        branch_lookup: Returns the current branch name or a placeholder
            (defaults to current_branch)

    Returns:
        Rendered line; the degraded line when no transcript or no records exist
    """
    locate = locate or locate_latest
    branch_lookup = branch_lookup or current_branch

    session_path = locate(config.transcript_root)
    if session_path is None:
        logger.debug("No session transcript under %s", config.transcript_root)
        return render_no_session()

    logger.debug("Reading session transcript %s", session_path)
    parser = TranscriptParser.from_path(session_path, config.max_read_bytes)
    if not parser.records:
        logger.debug("Transcript %s has no readable records", session_path)
        return render_no_session()

    metrics = build_metrics(parser, config, branch_lookup())
    return render_line(metrics)
