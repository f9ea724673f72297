"""Freshness-gated cache in front of the server list provider.

The cache keeps exactly one :class:`~gmtracker.models.Snapshot`. Within the
TTL it is served as-is; afterwards the next caller refreshes it. A failed
refresh leaves the stored snapshot (and its timestamp) untouched so the
following call retries immediately instead of waiting a full TTL.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from datetime import UTC, datetime, timedelta
from typing import Protocol

from gmtracker.errors import ProviderError
from gmtracker.models import ServerRecord, Snapshot

logger = logging.getLogger(__name__)

CACHE_TTL = timedelta(minutes=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ServerListProvider(Protocol):
    def fetch(self) -> Sequence[ServerRecord]: ...


class FreshnessCache:
    """Single-entry TTL cache around a :class:`ServerListProvider`.

    *clock* is sampled once per :meth:`get` call for the freshness check; a
    new snapshot is stamped with the time its fetch completed.
    *stale_warning_after*, when set, logs a warning whenever a refresh fails
    and the snapshot being served is older than that.

    At most one fetch runs at a time. Callers that find the snapshot stale
    while a fetch is in flight wait for it and share its outcome, success or
    failure, instead of issuing their own.
    """

    def __init__(
        self,
        provider: ServerListProvider,
        *,
        ttl: timedelta = CACHE_TTL,
        clock: Clock = utc_now,
        stale_warning_after: timedelta | None = None,
    ) -> None:
        self._provider = provider
        self._ttl = ttl
        self._clock = clock
        self._stale_warning_after = stale_warning_after
        self._snapshot = Snapshot()
        # Guards _snapshot and _inflight; never held across network I/O.
        self._lock = threading.Lock()
        self._inflight: Future[tuple[Snapshot, ProviderError | None]] | None = None

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def peek(self) -> Snapshot:
        """Return the stored snapshot without refreshing it."""
        with self._lock:
            return self._snapshot

    def _is_fresh(self, snapshot: Snapshot, now: datetime) -> bool:
        # The boundary itself counts as fresh.
        return snapshot.fetched_at is not None and now <= snapshot.fetched_at + self._ttl

    def get(self) -> tuple[Snapshot, ProviderError | None]:
        """Return the current snapshot, refreshing it first if it is stale.

        Returns ``(snapshot, None)`` on a cache hit or a successful refresh,
        and ``(previous_snapshot, error)`` when the refresh failed. The
        previous snapshot may be the empty one if nothing was ever fetched.
        """
        now = self._clock()
        with self._lock:
            snapshot = self._snapshot
            if self._is_fresh(snapshot, now):
                return snapshot, None
            existing = self._inflight
            if existing is None:
                future: Future[tuple[Snapshot, ProviderError | None]] = Future()
                self._inflight = future

        if existing is not None:
            return existing.result()

        try:
            outcome = self._refresh(snapshot, now)
        except Exception as exc:
            with self._lock:
                self._inflight = None
            future.set_exception(exc)
            raise
        future.set_result(outcome)
        return outcome

    def _refresh(self, previous: Snapshot, now: datetime) -> tuple[Snapshot, ProviderError | None]:
        try:
            servers = self._provider.fetch()
        except ProviderError as exc:
            with self._lock:
                self._inflight = None
            self._warn_if_too_stale(previous, now)
            return previous, exc

        fresh = Snapshot(servers=tuple(servers), fetched_at=self._clock())
        # Publish and clear the in-flight marker in one step.
        with self._lock:
            self._snapshot = fresh
            self._inflight = None
        logger.info("Server list refreshed: %d servers", len(fresh.servers))
        return fresh, None

    def _warn_if_too_stale(self, snapshot: Snapshot, now: datetime) -> None:
        if self._stale_warning_after is None:
            return
        if snapshot.fetched_at is None:
            logger.warning("Server list has never been fetched successfully")
        elif now - snapshot.fetched_at > self._stale_warning_after:
            logger.warning(
                "Serving server list last refreshed at %s (%s ago)",
                snapshot.fetched_at.isoformat(),
                now - snapshot.fetched_at,
            )
