"""Run options shared by the CLI, the profile builders and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Category(str, Enum):
    """Categories of checks. A profile tags each check pair with one."""

    CPU = "cpu"
    FILESYSTEM = "filesystem"
    MEMORY = "memory"
    NETWORK = "network"
    PERFORMANCE = "performance"


DEFAULT_CATEGORIES = frozenset(
    {Category.CPU, Category.FILESYSTEM, Category.MEMORY, Category.NETWORK}
)


def parse_categories(value: str) -> frozenset[Category]:
    """Parse a comma separated, case-insensitive category list."""
    categories = set()
    for item in value.split(","):
        item = item.strip().lower()
        if not item:
            continue
        try:
            categories.add(Category(item))
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            raise ValueError(f"unknown category '{item}' (choose from {valid})") from None
    return frozenset(categories)


@dataclass(frozen=True)
class Options:
    """Immutable configuration for a single invocation."""

    system: str
    categories: frozenset[Category] = field(default=DEFAULT_CATEGORIES)
    config_file: Path | None = None
    input_file: Path | None = None
    output_file: Path | None = None
    json_result: bool = False
    log_level: str = "warning"
