"""Hierarchical check results with worst-of rollup."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Priority(IntEnum):
    """Severity of a result, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    ALERT = 5
    EMERGENCY = 6


class Issue(IntEnum):
    """Whether a result indicates a problem. NO = fine, MAYBE = unknown, YES = problem."""

    NO = 0
    MAYBE = 1
    YES = 2


@dataclass
class Result:
    """A node in the result tree.

    Children may be appended from several threads at once; ``add_child`` and
    ``children`` are guarded by a per-node lock.
    """

    brief: str = ""
    detail: str = ""
    priority: Priority = Priority.DEBUG
    issue: Issue = Issue.NO
    _children: list[Result] = field(default_factory=list, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_child(self, child: Result) -> None:
        with self._lock:
            self._children.append(child)

    @property
    def children(self) -> list[Result]:
        """Snapshot of the children in append order."""
        with self._lock:
            return list(self._children)

    def max_priority(self) -> Priority:
        """Worst priority among the children, or the node's own when it has none."""
        children = self.children
        if not children:
            return self.priority
        return max(c.priority for c in children)

    def max_issue(self) -> Issue:
        """Worst issue among the children; a childless node has no issue."""
        return max((c.issue for c in self.children), default=Issue.NO)

    def rollup(self) -> None:
        """Derive this node's priority and issue from its children."""
        self.priority = self.max_priority()
        self.issue = self.max_issue()

    def to_dict(self) -> dict[str, Any]:
        return {
            "brief": self.brief,
            "detail": self.detail,
            "priority": self.priority.name,
            "issue": self.issue.name,
            "children": [c.to_dict() for c in self.children],
        }
