"""Generic rules engine check.

Each rule is a predicate over the portable record. All rules passing gives
issue NO; any rule failing gives YES; a missing payload or a rule that
raises gives MAYBE.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fand.checks.base import Check
from fand.result import Issue, Result

logger = logging.getLogger(__name__)

Rule = Callable[[dict[str, Any]], bool]


class RulesEngine(Check):
    name = "rules_engine"

    def __init__(
        self,
        brief: str,
        fail_detail: str,
        unknown_detail: str,
        pass_detail: str,
    ) -> None:
        self.brief = brief
        self.fail_detail = fail_detail
        self.unknown_detail = unknown_detail
        self.pass_detail = pass_detail
        self.rules: list[Rule] = []

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def apply(self, payload: dict[str, Any] | None) -> Result:
        if payload is None:
            return self.make_result(Issue.MAYBE)

        for rule in self.rules:
            try:
                passed = rule(payload)
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("rule %r could not be evaluated: %s", rule, e)
                return self.make_result(Issue.MAYBE)
            if not passed:
                return self.make_result(Issue.YES)

        return self.make_result(Issue.NO)
