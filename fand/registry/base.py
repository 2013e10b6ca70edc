"""Profile registry — maps a host profile id to the builder of its check pairs.

The table is process-wide, filled once on first use with the built-in
profiles, and append-only afterwards. Ids are matched case-insensitively.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

from fand.errors import ConfigError
from fand.options import Options
from fand.pairs import CheckPair

logger = logging.getLogger(__name__)

_registry: dict[str, ProfileBuilder] = {}
_lock = threading.RLock()
_initialized = False


class ProfileBuilder(ABC):
    """Builds the ordered check pairs for one host profile."""

    profile_id: str = ""
    description: str = ""

    @abstractmethod
    def make_pairs(self, options: Options) -> list[CheckPair]:
        """Return every pair for the profile, in display order.

        Data sources shared by several checks should be a single instance.
        Raise ConfigError when a prerequisite is missing.
        """

    def build(self, options: Options) -> list[CheckPair]:
        logger.debug("making check pairs for system %s", self.profile_id)
        pairs = [
            p for p in self.make_pairs(options)
            if p.category is None or p.category in options.categories
        ]
        logger.debug("%d check pairs selected for %s", len(pairs), self.profile_id)
        return pairs


def _key(profile_id: str) -> str:
    return profile_id.strip().lower()


def register(profile_id: str, builder: ProfileBuilder) -> None:
    """Add a builder. Raises ``ValueError`` if the id is already registered."""
    key = _key(profile_id)
    if not key:
        raise ValueError("profile id is required")
    with _lock:
        if key in _registry:
            raise ValueError(f"profile '{profile_id}' is already registered")
        builder.profile_id = builder.profile_id or profile_id
        _registry[key] = builder


def _ensure_builtins() -> None:
    global _initialized
    with _lock:
        if _initialized:
            return
        _initialized = True
        from fand.registry import profiles

        profiles.register_builtin_profiles()


def get(profile_id: str) -> ProfileBuilder:
    """Look up a builder. Raises ConfigError for an unknown id."""
    _ensure_builtins()
    with _lock:
        builder = _registry.get(_key(profile_id or ""))
    if builder is None:
        known = ", ".join(profile_ids()) or "none"
        if not profile_id:
            raise ConfigError(f"no system specified (known systems: {known})")
        raise ConfigError(f"unknown system '{profile_id}' (known systems: {known})")
    return builder


def profile_ids() -> list[str]:
    _ensure_builtins()
    with _lock:
        return sorted((b.profile_id for b in _registry.values()), key=str.lower)


def build(profile_id: str, options: Options) -> list[CheckPair]:
    """Build the check pairs of a profile, filtered by the selected categories."""
    return get(profile_id).build(options)

