from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import json5
import yaml
from pydantic_settings import BaseSettings

from fand.errors import ConfigError

logger = logging.getLogger(__name__)

# Below DEBUG; used to dump raw JSON payloads
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}


class Settings(BaseSettings):
    """Process-wide defaults loaded from environment / .env file."""

    model_config = {
        "env_prefix": "FAND_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Default host profile when --system is not given (FAND_SYSTEM)
    system: str = ""

    # Logging
    log_level: str = "warning"

    # Upper bound on threads used to evaluate check pairs
    max_workers: int = 8

    # Output width when stdout is not a terminal (80 - len("UNKNOWN") - 1)
    fallback_width: int = 72

    # STREAM benchmark sizing
    stream_array_size: int = 5_000_000
    stream_ntimes: int = 5


settings = Settings()


JSON_SUFFIXES = (".json", ".jsonc", ".json5")


def read_config(path: str | Path) -> dict[str, Any]:
    """Load a profile configuration document.

    ``.json`` documents may carry ``//`` and ``/* */`` comments and tab
    indentation; anything else is read as YAML.
    """
    path = Path(path)
    logger.debug("reading configuration file '%s'", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"error reading configuration file '{path}': {e}") from e

    try:
        if path.suffix.lower() in JSON_SUFFIXES:
            raw = json5.loads(text) if text.strip() else None
        else:
            raw = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"error parsing configuration file '{path}': {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"configuration file '{path}' must contain a mapping, got {type(raw).__name__}"
        )
    return raw


def lookup(document: Any, pointer: str, default: Any = None) -> Any:
    """Resolve a JSON pointer such as ``/cpu/core_count/num_cores``.

    Returns ``default`` when any segment is missing.
    """
    if pointer in ("", "/"):
        return document
    node = document
    for token in pointer.lstrip("/").split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict):
            if token not in node:
                return default
            node = node[token]
        elif isinstance(node, list):
            try:
                node = node[int(token)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    return node
