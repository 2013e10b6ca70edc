"""Processor and memory configuration from ``os.sysconf``."""

from __future__ import annotations

import os
from typing import Any

from fand.data.base import DataSource

_NAMES = {
    "nprocessors_conf": "SC_NPROCESSORS_CONF",
    "nprocessors_onln": "SC_NPROCESSORS_ONLN",
    "pagesize": "SC_PAGESIZE",
    "phys_pages": "SC_PHYS_PAGES",
}


class Sysconf(DataSource):
    name = "sysconf"

    def enabled(self) -> bool:
        return hasattr(os, "sysconf")

    def _collect(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, sc_name in _NAMES.items():
            if sc_name in os.sysconf_names:
                data[key] = os.sysconf(sc_name)
        return data

    def _validate(self, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("sysconf data must be an object")
        return data
