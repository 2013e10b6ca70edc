"""Tests for the built-in checks."""

from __future__ import annotations

import pytest

from fand.checks import CoreCount, PercentFree, PhysicalSize, RulesEngine
from fand.config import lookup
from fand.errors import CheckExecutionError
from fand.result import Issue, Priority

from .fakes import FakeCheck


def _record(name: str, data) -> dict:
    return {"name": name, "timestamp": "2024-01-01T00:00:00+00:00", "data": data}


class TestCoreCount:
    def test_enough(self) -> None:
        r = CoreCount(4).apply(_record("sysconf", {"nprocessors_onln": 4}))
        assert r.issue is Issue.NO
        assert r.priority is Priority.INFO
        assert r.brief == "Checking number of CPU cores"

    def test_too_few(self) -> None:
        r = CoreCount(4).apply(_record("sysconf", {"nprocessors_onln": 2}))
        assert r.issue is Issue.YES
        assert r.priority is Priority.WARNING
        assert "2" in r.detail

    @pytest.mark.parametrize("payload", [None, _record("sysconf", None), _record("sysconf", {})])
    def test_unknown(self, payload) -> None:
        r = CoreCount(4).apply(payload)
        assert r.issue is Issue.MAYBE
        assert r.detail == "Unable to perform check"


class TestPercentFree:
    def _payload(self, free: int, total: int = 100) -> dict:
        return _record(
            "filesystems", {"mounts": [{"mountpoint": "/", "total": total, "free": free}]}
        )

    def test_enough_free(self) -> None:
        assert PercentFree("/", 5).apply(self._payload(5)).issue is Issue.NO

    def test_too_little_free(self) -> None:
        r = PercentFree("/", 5).apply(self._payload(4))
        assert r.issue is Issue.YES
        assert "4.0%" in r.detail

    def test_missing_filesystem(self) -> None:
        assert PercentFree("/home", 5).apply(self._payload(50)).issue is Issue.MAYBE

    def test_zero_size(self) -> None:
        assert PercentFree("/", 5).apply(self._payload(0, total=0)).issue is Issue.MAYBE

    def test_brief_names_filesystem(self) -> None:
        assert PercentFree("/scratch", 5).brief == "Checking free space on /scratch"


class TestPhysicalSize:
    def _payload(self, pages: int) -> dict:
        return _record("sysconf", {"phys_pages": pages, "pagesize": 4096})

    def test_within_tolerance(self) -> None:
        check = PhysicalSize(4096 * 1000, tolerance=4096)
        assert check.apply(self._payload(999)).issue is Issue.NO

    def test_outside_tolerance(self) -> None:
        check = PhysicalSize(4096 * 1000, tolerance=4095)
        assert check.apply(self._payload(999)).issue is Issue.YES

    def test_unknown(self) -> None:
        assert PhysicalSize(1).apply(_record("sysconf", {"pagesize": 1})).issue is Issue.MAYBE


class TestRulesEngine:
    def _engine(self) -> RulesEngine:
        engine = RulesEngine("Checking STREAM performance", "too slow", "no data", "fast enough")
        engine.add_rule(lambda j: float(lookup(j, "/data/triad", 0.0)) >= 12000.0)
        return engine

    def test_pass(self) -> None:
        r = self._engine().apply(_record("stream", {"triad": 15000.0}))
        assert (r.issue, r.detail) == (Issue.NO, "fast enough")

    def test_fail(self) -> None:
        r = self._engine().apply(_record("stream", {"triad": 9000.0}))
        assert (r.issue, r.detail) == (Issue.YES, "too slow")

    def test_missing_value_fails(self) -> None:
        assert self._engine().apply(_record("stream", {})).issue is Issue.YES

    def test_null_payload(self) -> None:
        r = self._engine().apply(None)
        assert (r.issue, r.detail) == (Issue.MAYBE, "no data")

    def test_rule_error_is_unknown(self) -> None:
        engine = self._engine()
        assert engine.apply(_record("stream", {"triad": "fast"})).issue is Issue.MAYBE

    def test_all_rules_must_pass(self) -> None:
        engine = self._engine()
        engine.add_rule(lambda j: j["data"]["copy"] > 100)
        assert engine.apply(_record("stream", {"triad": 13000, "copy": 50})).issue is Issue.YES


class TestRun:
    def test_success(self) -> None:
        outcome = FakeCheck().run(None)
        assert outcome.error is None
        assert outcome.result is not None

    def test_exception_becomes_error(self) -> None:
        outcome = FakeCheck("bad", raises=True).run({"name": "x"})
        assert outcome.error is not None
        assert outcome.result is None
        assert isinstance(outcome.error, CheckExecutionError)
        assert outcome.error.check == "bad"
