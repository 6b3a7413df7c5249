"""
ctx-statusline.

Renders a one-line session summary for an assistant's status bar.
"""

__version__ = "0.1.0"
