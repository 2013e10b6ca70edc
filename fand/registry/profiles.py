"""Built-in host profiles."""

from __future__ import annotations

from fand.checks import CoreCount, PercentFree, PhysicalSize, RulesEngine
from fand.config import lookup, read_config
from fand.data import Filesystems, Stream, Sysconf
from fand.errors import ConfigError
from fand.options import Category, Options
from fand.pairs import CheckPair
from fand.registry.base import ProfileBuilder, register

GiB = 1024 * 1024 * 1024
MiB = 1024 * 1024


class MacBookPro10_2(ProfileBuilder):
    """Retina MacBook Pro, mid 2012. Thresholds are fixed."""

    profile_id = "MacBookPro10,2"
    description = "MacBook Pro (Retina, 15-inch, Mid 2012)"

    def make_pairs(self, options: Options) -> list[CheckPair]:
        # one instance per source so it is evaluated once for all its checks
        filesystems = Filesystems()
        stream = Stream()
        sysconf = Sysconf()

        triad = RulesEngine(
            "Checking STREAM performance",
            "Observed performance is less than 12000 MB/s",
            "Unable to perform check",
            "Observed performance is more than 12000 MB/s",
        )
        triad.add_rule(lambda j: float(lookup(j, "/data/triad", 0.0)) >= 12000.0)

        return [
            CheckPair(CoreCount(4), sysconf, Category.CPU),
            CheckPair(PercentFree("/", 5), filesystems, Category.FILESYSTEM),
            CheckPair(PhysicalSize(8 * GiB, 1 * MiB), sysconf, Category.MEMORY),
            CheckPair(triad, stream, Category.PERFORMANCE),
        ]


class LinuxCustom(ProfileBuilder):
    """Generic Linux host; every threshold comes from the configuration file.

    Recognized keys::

        cpu:
          core_count: {num_cores: 8}
        disk:
          percent_free:
            - {filesystem: /, percent: 10}
        memory:
          physical_size: {mem_size: 17179869184, tolerance: 1048576}

    A check is only added when its keys are present.
    """

    profile_id = "linux_custom"
    description = "Linux host configured by --config"

    def make_pairs(self, options: Options) -> list[CheckPair]:
        if options.config_file is None:
            raise ConfigError(f"system {self.profile_id} requires a configuration file (--config)")
        config = read_config(options.config_file)

        filesystems = Filesystems()
        sysconf = Sysconf()
        pairs: list[CheckPair] = []

        num_cores = lookup(config, "/cpu/core_count/num_cores")
        if num_cores is not None:
            pairs.append(CheckPair(CoreCount(_number(num_cores, "num_cores")), sysconf, Category.CPU))

        percent_free = lookup(config, "/disk/percent_free") or []
        if not isinstance(percent_free, list):
            raise ConfigError("configuration value 'disk.percent_free' must be a list")
        for fs in percent_free:
            if isinstance(fs, dict) and "filesystem" in fs and "percent" in fs:
                check = PercentFree(str(fs["filesystem"]), _number(fs["percent"], "percent"))
                pairs.append(CheckPair(check, filesystems, Category.FILESYSTEM))

        mem_size = lookup(config, "/memory/physical_size/mem_size")
        tolerance = lookup(config, "/memory/physical_size/tolerance")
        if mem_size is not None and tolerance is not None:
            check = PhysicalSize(_number(mem_size, "mem_size"), _number(tolerance, "tolerance"))
            pairs.append(CheckPair(check, sysconf, Category.MEMORY))

        return pairs


def _number(value, key: str):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"configuration value '{key}' must be a number, got {value!r}")
    return value


def register_builtin_profiles() -> None:
    for builder in (MacBookPro10_2(), LinuxCustom()):
        register(builder.profile_id, builder)
