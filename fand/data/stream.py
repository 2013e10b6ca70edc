"""Sustainable memory bandwidth, measured with the STREAM kernels on numpy arrays.

Reports the best of ``ntimes`` runs for each kernel in MB/s, counting bytes
the way STREAM does (copy/scale move two arrays, add/triad move three).
"""

from __future__ import annotations

import logging
import time
from typing import Any

import numpy as np

from fand.config import settings
from fand.data.base import DataSource

logger = logging.getLogger(__name__)


class Stream(DataSource):
    name = "stream"

    def __init__(self, array_size: int | None = None, ntimes: int | None = None) -> None:
        super().__init__()
        self.array_size = array_size or settings.stream_array_size
        self.ntimes = max(ntimes or settings.stream_ntimes, 2)

    def _collect(self) -> dict[str, Any]:
        n = self.array_size
        scalar = 3.0
        a = np.full(n, 1.0)
        b = np.full(n, 2.0)
        c = np.zeros(n)
        word = a.itemsize

        kernels = {
            "copy": (2, lambda: np.copyto(c, a)),
            "scale": (2, lambda: np.multiply(c, scalar, out=b)),
            "add": (3, lambda: np.add(a, b, out=c)),
            "triad": (3, lambda: np.add(b, scalar * c, out=a)),
        }
        best = {k: float("inf") for k in kernels}

        for _ in range(self.ntimes):
            for key, (_, kernel) in kernels.items():
                t0 = time.perf_counter()
                kernel()
                best[key] = min(best[key], time.perf_counter() - t0)

        data: dict[str, Any] = {"array_size": n, "ntimes": self.ntimes}
        for key, (arrays, _) in kernels.items():
            data[key] = round(arrays * word * n / max(best[key], 1e-9) / 1e6, 1)
        logger.debug("stream: %s", data)
        return data
