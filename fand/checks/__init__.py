from fand.checks.base import Check, CheckOutcome
from fand.checks.cpu import CoreCount
from fand.checks.disk import PercentFree
from fand.checks.memory import PhysicalSize
from fand.checks.rules import RulesEngine

__all__ = [
    "Check",
    "CheckOutcome",
    "CoreCount",
    "PercentFree",
    "PhysicalSize",
    "RulesEngine",
]
