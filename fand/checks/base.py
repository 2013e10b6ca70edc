"""Check base class.

A check turns the portable record of a data source (``{"name", "timestamp",
"data"}``, or ``None`` when the data could not be resolved) into a Result.
``run()`` is the orchestrator-facing entry point: it never raises and
reports failures as a ``CheckExecutionError`` in the returned outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from fand.errors import CheckExecutionError
from fand.result import Issue, Priority, Result

PRIORITY_FOR_ISSUE = {
    Issue.NO: Priority.INFO,
    Issue.MAYBE: Priority.NOTICE,
    Issue.YES: Priority.WARNING,
}


@dataclass
class CheckOutcome:
    result: Result | None = None
    error: CheckExecutionError | None = None


class Check(ABC):
    """Base class for checks. Thresholds are fixed at construction."""

    name: str = "unknown"

    brief: str = ""
    fail_detail: str = ""
    unknown_detail: str = "Unable to perform check"
    pass_detail: str = ""

    @abstractmethod
    def apply(self, payload: dict[str, Any] | None) -> Result:
        """Evaluate the payload. May raise."""

    def run(self, payload: dict[str, Any] | None) -> CheckOutcome:
        try:
            return CheckOutcome(result=self.apply(payload))
        except Exception as e:
            return CheckOutcome(error=CheckExecutionError(self.name, f"{type(e).__name__}: {e}"))

    def make_result(self, issue: Issue, detail: str | None = None) -> Result:
        if detail is None:
            detail = {
                Issue.NO: self.pass_detail,
                Issue.MAYBE: self.unknown_detail,
                Issue.YES: self.fail_detail,
            }[issue]
        return Result(
            brief=self.brief,
            detail=detail,
            priority=PRIORITY_FOR_ISSUE[issue],
            issue=issue,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def payload_data(payload: dict[str, Any] | None) -> Any:
    """The ``data`` member of a portable record, or None."""
    if not isinstance(payload, dict):
        return None
    return payload.get("data")
