from fand.orchestrator.engine import Orchestrator
from fand.orchestrator.telemetry import TelemetryRecord

__all__ = ["Orchestrator", "TelemetryRecord"]
