"""
Transcript parsing.

Reads a session transcript (one JSON object per line) and extracts the
model, usage snapshots and thinking markers from each record.

Parsing is best-effort and line-local: a line that is not valid JSON, or
not a JSON object, is skipped and never stops the rest of the file from
being read.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .token_counter import USAGE_FIELDS, TokenTotals, UsageSnapshot
from ctx_statusline.storage.reader import DEFAULT_MAX_READ_BYTES, read_transcript_lines

logger = logging.getLogger(__name__)

THINKING_TYPE = "thinking"


@dataclass(frozen=True)
class TranscriptRecord:
    """The parts of one transcript line this tool cares about."""
    index: int
    model: Optional[str] = None
    usages: Tuple[UsageSnapshot, ...] = ()
    thinking: bool = False


def _walk(node: Any) -> Iterator[dict]:
    """Yield every JSON object nested in ``node``, in document order."""
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk(item)


def parse_record(index: int, raw: dict) -> TranscriptRecord:
    """Extract model, usage and thinking markers from a decoded line.

    Fields may sit at any depth; the host nests them under ``message``.
    """
    model = None
    usages = []
    thinking = False

    for obj in _walk(raw):
        value = obj.get("model")
        if isinstance(value, str) and value:
            model = value
        usage = obj.get("usage")
        if isinstance(usage, dict):
            usages.append(UsageSnapshot.from_mapping(usage))
        if obj.get("type") == THINKING_TYPE:
            thinking = True

    return TranscriptRecord(
        index=index,
        model=model,
        usages=tuple(usages),
        thinking=thinking,
    )


def parse_lines(lines: Iterable[str]) -> List[TranscriptRecord]:
    """Parse transcript lines into records, skipping anything malformed."""
    records = []
    for index, line in enumerate(lines):
        line = line.strip()
        if not line:
            continue
        try:
            # JSONDecodeError, oversized integers and overly deep nesting
            raw = json.loads(line)
        except (ValueError, RecursionError) as e:
            logger.debug("Skipping malformed transcript line %d: %s", index, e)
            continue
        if not isinstance(raw, dict):
            logger.debug("Skipping non-object transcript line %d", index)
            continue
        try:
            records.append(parse_record(index, raw))
        except RecursionError:
            logger.debug("Skipping overly nested transcript line %d", index)
    return records


class TranscriptParser:
    """Query interface over the records of one transcript.

    Each extraction is independent: a record contributing to one field
    need not carry any of the others.
    """

    def __init__(self, records: Iterable[TranscriptRecord]):
        self.records = list(records)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TranscriptParser":
        return cls(parse_lines(lines))

    @classmethod
    def from_path(
        cls,
        path: Path,
        max_bytes: int = DEFAULT_MAX_READ_BYTES,
    ) -> "TranscriptParser":
        """Read and parse a transcript file.

        Args:
            path: Transcript file to read
            max_bytes: Read at most this many trailing bytes

        Returns:
            Parser over whatever records could be read
        """
        return cls.from_lines(read_transcript_lines(path, max_bytes))

    def __len__(self) -> int:
        return len(self.records)

    def latest_model(self) -> str:
        """Model identifier from the last record that declares one, or ''."""
        for record in reversed(self.records):
            if record.model:
                return record.model
        return ""

    def latest_usage(self) -> UsageSnapshot:
        """Most recent usage snapshot, or an all-zero snapshot."""
        for record in reversed(self.records):
            if record.usages:
                return record.usages[-1]
        return UsageSnapshot()

    def sum_field(self, name: str) -> int:
        """Sum a usage field across every snapshot of every record.

        Raises:
            ValueError: If ``name`` is not a usage field
        """
        if name not in USAGE_FIELDS:
            raise ValueError(f"Unknown usage field: {name}")
        return sum(
            getattr(usage, name)
            for record in self.records
            for usage in record.usages
        )

    def count_thinking(self) -> int:
        """Number of records carrying thinking content."""
        return sum(1 for record in self.records if record.thinking)

    def totals(self) -> TokenTotals:
        return TokenTotals(
            input=self.sum_field("input_tokens"),
            output=self.sum_field("output_tokens"),
            cache_read=self.sum_field("cache_read_input_tokens"),
            cache_create=self.sum_field("cache_creation_input_tokens"),
        )
