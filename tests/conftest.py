"""Shared test fixtures."""

from __future__ import annotations

import pytest

from fand.options import Options
from fand.orchestrator import Orchestrator
from fand.registry import base as registry_base
from fand.result import Result


@pytest.fixture
def options() -> Options:
    return Options(system="fake")


@pytest.fixture
def root() -> Result:
    return Result(brief="Overall system health status")


@pytest.fixture
def orchestrator(options: Options) -> Orchestrator:
    return Orchestrator(options, max_workers=8)


@pytest.fixture
def clean_registry(monkeypatch):
    """An empty profile registry that skips the built-in profiles."""
    monkeypatch.setattr(registry_base, "_registry", {})
    monkeypatch.setattr(registry_base, "_initialized", True)
    return registry_base._registry
