"""Error kinds raised or reported by the orchestrator.

Only ``ConfigError`` aborts a run. Every other kind is isolated at the
check-pair boundary: it is logged, recorded on the orchestrator and the
affected pair degrades without touching its siblings.
"""

from __future__ import annotations


class FandError(Exception):
    """Base class for all fand errors."""


class ConfigError(FandError):
    """Unknown profile, missing or malformed configuration document."""


class DataError(FandError):
    """Base class for data-source failures."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class DataSourceDisabled(DataError):
    """The data source does not apply to this host."""

    def __init__(self, source: str) -> None:
        super().__init__(source, "data source is not enabled")


class DataSourceEvaluationError(DataError):
    """Evaluating the data source raised."""


class CheckExecutionError(FandError):
    """Applying a check to its payload raised."""

    def __init__(self, check: str, message: str) -> None:
        super().__init__(f"{check}: {message}")
        self.check = check


class ReplayParseError(FandError):
    """A replay line is not a valid telemetry record."""

    def __init__(self, lineno: int, message: str) -> None:
        super().__init__(f"line {lineno}: {message}")
        self.lineno = lineno
