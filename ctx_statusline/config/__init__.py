"""
Configuration for ctx-statusline.

Loads the optional YAML config and patches the host's settings file.
"""
