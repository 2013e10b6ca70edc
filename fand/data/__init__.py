from fand.data.base import DataOutcome, DataSource
from fand.data.filesystems import Filesystems
from fand.data.stream import Stream
from fand.data.sysconf import Sysconf

__all__ = [
    "DataOutcome",
    "DataSource",
    "Filesystems",
    "Stream",
    "Sysconf",
]
