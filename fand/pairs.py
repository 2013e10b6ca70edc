"""Check pairs — a check bound to the data source it consumes."""

from __future__ import annotations

from dataclasses import dataclass

from fand.checks.base import Check
from fand.data.base import DataSource
from fand.options import Category
from fand.result import Result


@dataclass
class CheckPair:
    check: Check
    data: DataSource
    category: Category | None = None
    result: Result | None = None  # set when the pair is added to the orchestrator
