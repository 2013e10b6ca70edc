from __future__ import annotations

from typing import Any

from fand.checks.base import Check, payload_data
from fand.result import Issue, Result


class PhysicalSize(Check):
    """Physical memory equals ``mem_size`` bytes within ``tolerance`` (sysconf data)."""

    name = "memory.physical_size"
    brief = "Checking physical memory size"

    def __init__(self, mem_size: int, tolerance: int = 0) -> None:
        self.mem_size = int(mem_size)
        self.tolerance = int(tolerance)

    def apply(self, payload: dict[str, Any] | None) -> Result:
        data = payload_data(payload)
        if not isinstance(data, dict) or not {"phys_pages", "pagesize"} <= data.keys():
            return self.make_result(Issue.MAYBE)

        size = int(data["phys_pages"]) * int(data["pagesize"])
        if abs(size - self.mem_size) <= self.tolerance:
            return self.make_result(Issue.NO, f"Physical memory is {size} bytes")
        return self.make_result(
            Issue.YES,
            f"Physical memory {size} bytes differs from the expected {self.mem_size} bytes",
        )
