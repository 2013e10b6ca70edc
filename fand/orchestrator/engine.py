"""Orchestrator — evaluates check pairs and collects or replays telemetry.

check:   every pair runs in a thread pool; each resolves its data source
         (shared sources are evaluated once), applies its check and appends
         the result to the pair's result node, which is rolled up at the end.
collect: every distinct data source is evaluated in the thread pool, then
         serialized in pair order with duplicates removed.
load_data: hydrates pending data sources from a telemetry stream so that
         check runs without live collection.

Failures of a single pair are logged and recorded in ``errors``; they never
stop the other pairs.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from fand.config import TRACE, settings
from fand.data.base import DataOutcome, DataSource
from fand.errors import DataSourceDisabled, FandError, ReplayParseError
from fand.options import Options
from fand.orchestrator import telemetry
from fand.pairs import CheckPair
from fand.registry import build
from fand.result import Result

logger = logging.getLogger(__name__)


class Orchestrator:
    """Holds the check pairs of one run."""

    def __init__(self, options: Options, max_workers: int | None = None) -> None:
        self.options = options
        self.max_workers = max_workers or settings.max_workers
        self.pairs: list[CheckPair] = []
        self.errors: list[FandError] = []
        self._errors_lock = threading.Lock()

    # ── Setup ────────────────────────────────────────────────────────────────

    def add_check_pair(self, pair: CheckPair, result: Result) -> None:
        logger.debug("adding check pair %s / %s", pair.check.name, pair.data.name)
        pair.result = result
        self.pairs.append(pair)

    def make_check_pairs(self, result: Result) -> None:
        """Build the pairs for the configured profile and attach them to ``result``."""
        for pair in build(self.options.system, self.options):
            self.add_check_pair(pair, result)

    def sources(self) -> list[DataSource]:
        """Distinct data sources in first-reference order."""
        seen: dict[int, DataSource] = {}
        for pair in self.pairs:
            seen.setdefault(id(pair.data), pair.data)
        return list(seen.values())

    # ── check ────────────────────────────────────────────────────────────────

    def check(self) -> None:
        """Run every check pair, then roll up each result node."""
        logger.debug("invoking check subcommand for %d pairs", len(self.pairs))

        self._fan_out(self._check_pair, self.pairs, "check pair")

        slots: dict[int, Result] = {}
        for pair in self.pairs:
            if pair.result is not None:
                slots.setdefault(id(pair.result), pair.result)
        for slot in slots.values():
            slot.rollup()

    def _check_pair(self, pair: CheckPair) -> None:
        logger.info("performing check %s", pair.check.name)

        outcome = self.get_data(pair.data)
        if isinstance(outcome.error, DataSourceDisabled):
            return

        checked = pair.check.run(outcome.payload)
        if checked.error is not None:
            logger.error("error performing check %s: '%s'", pair.check.name, checked.error)
            self._record(checked.error)
            return

        logger.log(TRACE, "%s", checked.result.to_dict())
        if pair.result is not None:
            pair.result.add_child(checked.result)

    def get_data(self, source: DataSource) -> DataOutcome:
        """Resolve a data source, logging and recording any failure."""
        outcome = source.resolve()
        if outcome.error is not None:
            logger.error("%s", outcome.error)
            self._record(outcome.error)
        else:
            logger.log(TRACE, "%s", outcome.payload)
        return outcome

    # ── collect ──────────────────────────────────────────────────────────────

    def collect(self) -> list[dict[str, Any]]:
        """Evaluate every data source and return the deduplicated records."""
        logger.debug("invoking collect subcommand for %d pairs", len(self.pairs))

        self._fan_out(self.get_data, self.sources(), "data source")

        records: list[dict[str, Any]] = []
        seen: set[str] = set()
        for pair in self.pairs:
            if not pair.data.collected():
                continue
            record = pair.data.to_portable()
            # the same data source may back several pairs; keep the first copy
            digest = telemetry.fingerprint(record)
            if digest in seen:
                continue
            seen.add(digest)
            records.append(record)
        return records

    # ── replay ───────────────────────────────────────────────────────────────

    def load_data(self, stream: Iterable[str]) -> int:
        """Hydrate pending data sources from a telemetry stream.

        Each record fills the first not-yet-collected source with the same
        name, in pair order. Records with no pending match are ignored and
        malformed lines are logged and skipped. Returns the number of sources
        hydrated.
        """
        logger.debug("loading data")
        loaded = 0

        for lineno, line in telemetry.iter_lines(stream):
            try:
                record = telemetry.parse_line(line, lineno)
            except ReplayParseError as e:
                logger.warning("skipping malformed telemetry record: %s", e)
                self._record(e)
                continue
            logger.log(TRACE, "read %s", line)

            for pair in self.pairs:
                source = pair.data
                if source.collected() or source.name != record["name"]:
                    continue
                try:
                    source.from_portable(record)
                except ValueError as e:
                    err = ReplayParseError(lineno, f"cannot load {source.name}: {e}")
                    logger.warning("skipping telemetry record: %s", err)
                    self._record(err)
                else:
                    logger.info("loaded data for %s", source.name)
                    loaded += 1
                break

        return loaded

    # ── helpers ──────────────────────────────────────────────────────────────

    def _fan_out(self, fn, items: list, what: str) -> None:
        if not items:
            return
        n_workers = min(self.max_workers, len(items))
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            futures = {executor.submit(fn, item): item for item in items}
            for future in as_completed(futures):
                try:
                    future.result()
                except Exception:
                    logger.exception("unexpected error in %s %r", what, futures[future])

    def _record(self, error: FandError) -> None:
        with self._errors_lock:
            self.errors.append(error)

