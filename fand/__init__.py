"""fand — host health analyzer.

Pairs checks with the data sources they consume, runs them against live or
previously collected telemetry, and rolls the outcomes into one result tree.
"""

__version__ = "0.4.0"
