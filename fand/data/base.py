"""Data source base class — memoized, thread-safe telemetry collection.

A data source is evaluated at most once per instance. The same instance is
usually shared by several check pairs that run concurrently, so the
collected-check and the evaluation happen under one per-instance lock.
A failed evaluation is remembered too and is not retried.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from fand.errors import DataError, DataSourceDisabled, DataSourceEvaluationError

logger = logging.getLogger(__name__)


@dataclass
class DataOutcome:
    """Resolved payload of a data source, or the reason there is none."""

    payload: dict[str, Any] | None = None
    error: DataError | None = None


class DataSource(ABC):
    """Base class for telemetry producers.

    Subclasses set ``name`` and implement ``_collect()``, returning a JSON
    serializable mapping.
    """

    name: str = "unknown"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._collected = False
        self._error: DataSourceEvaluationError | None = None
        self._data: Any = None
        self.timestamp = ""

    def enabled(self) -> bool:
        """Whether this source applies to the current host."""
        return True

    def collected(self) -> bool:
        with self._lock:
            return self._collected

    @property
    def data(self) -> Any:
        return self._data

    @abstractmethod
    def _collect(self) -> Any:
        """Gather the telemetry. May raise."""

    def evaluate(self) -> None:
        """Collect the telemetry unless it is already collected or has failed.

        Raises ``DataSourceEvaluationError`` if this or an earlier attempt failed.
        """
        with self._lock:
            if self._collected:
                return
            if self._error is not None:
                raise self._error

            try:
                data = self._collect()
            except Exception as e:
                self._error = DataSourceEvaluationError(self.name, f"{type(e).__name__}: {e}")
                raise self._error from e

            self._data = data
            self.timestamp = datetime.now(timezone.utc).isoformat()
            self._collected = True

    def resolve(self) -> DataOutcome:
        """Return the portable payload, evaluating the source first if needed."""
        if not self.enabled():
            return DataOutcome(error=DataSourceDisabled(self.name))

        if self.collected():
            logger.info("data source %s has already been collected", self.name)
        else:
            logger.info("evaluating data source %s", self.name)
            try:
                self.evaluate()
            except DataSourceEvaluationError as e:
                return DataOutcome(error=e)

        return DataOutcome(payload=self.to_portable())

    def to_portable(self) -> dict[str, Any]:
        """Serialize to a JSON record: name, timestamp and data."""
        with self._lock:
            return {
                "name": self.name,
                "timestamp": self.timestamp or None,
                "data": self._data,
            }

    def from_portable(self, record: dict[str, Any]) -> None:
        """Hydrate from a record produced by ``to_portable`` and mark collected."""
        if record.get("name") != self.name:
            raise ValueError(f"record for '{record.get('name')}' cannot hydrate '{self.name}'")
        with self._lock:
            if self._collected:
                raise ValueError(f"data source {self.name} is already collected")
            self._data = self._validate(record.get("data"))
            self.timestamp = record.get("timestamp") or ""
            self._collected = True

    def _validate(self, data: Any) -> Any:
        """Check the shape of replayed data. Subclasses may tighten this."""
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, collected={self._collected})"
