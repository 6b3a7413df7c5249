"""
Shared fixtures for ctx-statusline tests.
"""

import json

import pytest


def assistant_line(model=None, usage=None, thinking=False, **extra) -> str:
    """Build a transcript line shaped like the host's assistant records."""
    message = {"role": "assistant", "content": [{"type": "text", "text": "ok"}]}
    if model is not None:
        message["model"] = model
    if usage is not None:
        message["usage"] = usage
    if thinking:
        message["content"].insert(0, {"type": "thinking", "thinking": "hmm"})
    record = {"type": "assistant", "message": message}
    record.update(extra)
    return json.dumps(record)


@pytest.fixture
def session_lines():
    """A small session: two assistant turns, one with thinking, plus noise."""
    return [
        json.dumps({"type": "user", "message": {"role": "user", "content": "hi"}}),
        assistant_line(
            model="claude-sonnet-4-20250514",
            usage={"input_tokens": 100, "output_tokens": 2000,
                   "cache_read_input_tokens": 30_000, "cache_creation_input_tokens": 4000},
        ),
        "{not json",
        assistant_line(
            model="claude-opus-4-5-20251101",
            usage={"input_tokens": 1100, "output_tokens": 500,
                   "cache_read_input_tokens": 10_000, "cache_creation_input_tokens": 1000},
            thinking=True,
        ),
        json.dumps({"type": "summary", "summary": "greeting"}),
    ]


@pytest.fixture
def write_transcript(tmp_path):
    """Write lines to a transcript file under tmp_path and return its path."""
    def _write(lines, name="session.jsonl"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
