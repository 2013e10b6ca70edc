"""Newline-delimited JSON telemetry stream — one compact record per line."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Iterator
from typing import IO, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from fand.errors import ReplayParseError


class TelemetryRecord(BaseModel):
    """Minimum shape of a replay record. Extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    name: str


def dumps(record: dict[str, Any]) -> str:
    """Compact JSON; strings that are not valid UTF-8 get replacement characters."""
    text = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    return text.encode("utf-8", errors="replace").decode("utf-8")


def fingerprint(record: dict[str, Any]) -> str:
    """Content hash of the canonical (sorted, compact) form of a record."""
    canonical = json.dumps(record, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8", errors="replace")).hexdigest()


def write_records(records: Iterable[dict[str, Any]], out: IO[str]) -> int:
    n = 0
    for record in records:
        out.write(dumps(record) + "\n")
        n += 1
    return n


def parse_line(line: str, lineno: int) -> dict[str, Any]:
    """Parse and validate one line. Raises ReplayParseError."""
    try:
        raw = json.loads(line)
    except ValueError as e:
        raise ReplayParseError(lineno, f"invalid JSON: {e}") from e
    try:
        record = TelemetryRecord.model_validate(raw)
    except ValidationError as e:
        raise ReplayParseError(lineno, f"not a telemetry record: {e.errors()[0]['msg']}") from e
    return record.model_dump()


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield (line number, text) for non-blank lines."""
    for lineno, line in enumerate(stream, start=1):
        line = line.strip()
        if line:
            yield lineno, line
