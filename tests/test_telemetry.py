"""Tests for the telemetry stream codec."""

from __future__ import annotations

import io
import json

import pytest

from fand.errors import ReplayParseError
from fand.orchestrator import telemetry


class TestDumps:
    def test_compact_single_line(self) -> None:
        line = telemetry.dumps({"name": "a", "data": {"x": [1, 2]}})
        assert line == '{"name":"a","data":{"x":[1,2]}}'

    def test_invalid_utf8_is_replaced(self) -> None:
        # a lone surrogate, as produced by os.fsdecode() for undecodable bytes
        line = telemetry.dumps({"name": "fs", "data": {"mount": "/mnt/\udcff"}})
        assert json.loads(line)["data"]["mount"] == "/mnt/?"

    def test_write_records(self) -> None:
        out = io.StringIO()
        n = telemetry.write_records([{"name": "a"}, {"name": "b"}], out)
        assert n == 2
        assert out.getvalue() == '{"name":"a"}\n{"name":"b"}\n'


class TestFingerprint:
    def test_key_order_does_not_matter(self) -> None:
        a = {"name": "x", "data": {"a": 1, "b": 2}}
        b = {"data": {"b": 2, "a": 1}, "name": "x"}
        assert telemetry.fingerprint(a) == telemetry.fingerprint(b)

    def test_content_changes_fingerprint(self) -> None:
        assert telemetry.fingerprint({"name": "x", "data": 1}) != telemetry.fingerprint(
            {"name": "x", "data": 2}
        )


class TestParseLine:
    def test_valid_record_keeps_extra_keys(self) -> None:
        record = telemetry.parse_line('{"name": "sysconf", "data": {"n": 4}, "timestamp": "t"}', 1)
        assert record == {"name": "sysconf", "data": {"n": 4}, "timestamp": "t"}

    @pytest.mark.parametrize(
        "line",
        ['{"name": ', '{"data": {}}', '{"name": 5}', "[1, 2]", "null"],
    )
    def test_malformed(self, line: str) -> None:
        with pytest.raises(ReplayParseError) as exc:
            telemetry.parse_line(line, 7)
        assert exc.value.lineno == 7

    def test_iter_lines_skips_blanks(self) -> None:
        assert list(telemetry.iter_lines(["a\n", "\n", "  b  \n"])) == [(1, "a"), (3, "b")]
