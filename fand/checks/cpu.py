from __future__ import annotations

from typing import Any

from fand.checks.base import Check, payload_data
from fand.result import Issue, Result


class CoreCount(Check):
    """At least ``num_cores`` online processors (sysconf data)."""

    name = "cpu.core_count"
    brief = "Checking number of CPU cores"

    def __init__(self, num_cores: int) -> None:
        self.num_cores = int(num_cores)

    def apply(self, payload: dict[str, Any] | None) -> Result:
        data = payload_data(payload)
        if not isinstance(data, dict) or "nprocessors_onln" not in data:
            return self.make_result(Issue.MAYBE)

        cores = int(data["nprocessors_onln"])
        if cores >= self.num_cores:
            return self.make_result(Issue.NO, f"Number of CPU cores is {cores}")
        return self.make_result(
            Issue.YES,
            f"Number of CPU cores {cores} is less than the expected value {self.num_cores}",
        )
