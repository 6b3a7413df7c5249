"""
Command-line interface for ctx-statusline.
"""
