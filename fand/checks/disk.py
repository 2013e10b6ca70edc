from __future__ import annotations

from typing import Any

from fand.checks.base import Check, payload_data
from fand.result import Issue, Result


class PercentFree(Check):
    """A filesystem keeps at least ``percent`` % of its space free (filesystems data)."""

    name = "disk.percent_free"

    def __init__(self, filesystem: str, percent: float) -> None:
        self.filesystem = filesystem
        self.percent = float(percent)
        self.brief = f"Checking free space on {filesystem}"

    def apply(self, payload: dict[str, Any] | None) -> Result:
        data = payload_data(payload)
        if not isinstance(data, dict):
            return self.make_result(Issue.MAYBE)

        mount = next(
            (m for m in data.get("mounts", []) if m.get("mountpoint") == self.filesystem),
            None,
        )
        if mount is None:
            return self.make_result(Issue.MAYBE, f"Filesystem {self.filesystem} not found")

        total = mount.get("total") or 0
        if total <= 0:
            return self.make_result(Issue.MAYBE, f"Filesystem {self.filesystem} reports no size")

        free = 100.0 * mount.get("free", 0) / total
        if free >= self.percent:
            return self.make_result(Issue.NO, f"{self.filesystem} is {free:.1f}% free")
        return self.make_result(
            Issue.YES,
            f"{self.filesystem} is {free:.1f}% free, less than the minimum {self.percent:g}%",
        )
