"""
Core modules for ctx-statusline.

This package contains transcript parsing, token accounting, pricing
and the metrics derived from them.
"""
