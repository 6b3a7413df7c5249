"""
Filesystem access for session transcripts.

Locates the newest transcript and reads it with a size cap.
"""
