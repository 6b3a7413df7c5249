"""
Status line rendering.
"""
