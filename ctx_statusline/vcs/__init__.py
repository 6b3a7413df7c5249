"""
Version-control lookups for ctx-statusline.
"""

from .git import current_branch

__all__ = ["current_branch"]
