"""Tests for settings, configuration documents and options."""

from __future__ import annotations

from pathlib import Path

import pytest

from fand.config import Settings, lookup, read_config
from fand.errors import ConfigError
from fand.options import DEFAULT_CATEGORIES, Category, Options, parse_categories


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for var in ("FAND_SYSTEM", "FAND_LOG_LEVEL", "FAND_MAX_WORKERS"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.system == ""
        assert s.log_level == "warning"
        assert s.fallback_width == 72

    def test_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("FAND_SYSTEM", "linux_custom")
        monkeypatch.setenv("FAND_MAX_WORKERS", "3")
        s = Settings(_env_file=None)
        assert s.system == "linux_custom"
        assert s.max_workers == 3


class TestReadConfig:
    def test_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("a:\n  b: 1\n")
        assert read_config(path) == {"a": {"b": 1}}

    def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert read_config(path) == {}

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="error reading"):
            read_config(tmp_path / "absent.yaml")

    def test_json_with_comments(self, tmp_path: Path) -> None:
        path = tmp_path / "c.json"
        path.write_text('{\n\t"a": {\n\t\t"b": 1 // one\n\t}\n\t/* done */\n}\n')
        assert read_config(path) == {"a": {"b": 1}}

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "c.json"
        path.write_text('{"a": ')
        with pytest.raises(ConfigError, match="error parsing"):
            read_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            read_config(path)


class TestLookup:
    doc = {"a": {"b": [10, {"c": 3}]}, "x/y": 1}

    def test_nested(self) -> None:
        assert lookup(self.doc, "/a/b/1/c") == 3

    def test_missing(self) -> None:
        assert lookup(self.doc, "/a/z", "dflt") == "dflt"
        assert lookup(self.doc, "/a/b/9") is None
        assert lookup(self.doc, "/a/b/1/c/d") is None

    def test_escaped(self) -> None:
        assert lookup(self.doc, "/x~1y") == 1

    def test_root(self) -> None:
        assert lookup(self.doc, "") is self.doc


class TestOptions:
    def test_parse_categories(self) -> None:
        assert parse_categories("CPU, memory,,Network") == {
            Category.CPU, Category.MEMORY, Category.NETWORK,
        }

    def test_unknown_category(self) -> None:
        with pytest.raises(ValueError, match="unknown category 'gpu'"):
            parse_categories("cpu,gpu")

    def test_defaults_exclude_performance(self) -> None:
        assert Category.PERFORMANCE not in DEFAULT_CATEGORIES
        assert Options(system="x").categories == DEFAULT_CATEGORIES

    def test_immutable(self) -> None:
        opts = Options(system="x")
        with pytest.raises(AttributeError):
            opts.system = "y"
