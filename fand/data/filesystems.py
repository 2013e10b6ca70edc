"""Mounted filesystems and their usage, via psutil."""

from __future__ import annotations

import logging
from typing import Any

import psutil

from fand.data.base import DataSource

logger = logging.getLogger(__name__)


class Filesystems(DataSource):
    name = "filesystems"

    def _collect(self) -> dict[str, Any]:
        mounts = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as e:
                logger.debug("skipping %s: %s", part.mountpoint, e)
                continue
            mounts.append(
                {
                    "device": part.device,
                    "mountpoint": part.mountpoint,
                    "fstype": part.fstype,
                    "total": usage.total,
                    "used": usage.used,
                    "free": usage.free,
                }
            )
        return {"mounts": mounts}

    def _validate(self, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("mounts"), list):
            raise ValueError("filesystems data must contain a 'mounts' list")
        return data
