"""Stale-while-revalidate data source."""

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol

from app.logging_config import logger

Fetcher = Callable[[str], Awaitable[Any]]
Listener = Callable[["Snapshot"], None]

_background_tasks: set = set()


class Cache(Protocol):
    def get_weather(self, location: str) -> Optional[dict]: ...

    def save_weather(self, location: str, weather_data: dict) -> None: ...


@dataclass(frozen=True)
class Snapshot:
    """One emission of a RevalidatingSource.

    `sequence` is 0 for data served from the cache and the number of the
    fetch that produced it otherwise.
    """

    data: Any
    sequence: int = 0


class RevalidatingSource:
    """Serve cached data immediately, then refetch and notify watchers.

    Each fetch is numbered. A result that finishes after a newer one has
    already been emitted is dropped, so late responses never overwrite
    fresher data.
    """

    def __init__(self, key: str, fetcher: Fetcher, cache: Cache):
        self.key = key
        self.fetcher = fetcher
        self.cache = cache
        self.snapshot: Optional[Snapshot] = None
        self._listeners: list = []
        self._issued = 0
        self._emitted = 0
        self._inflight: Optional[asyncio.Future] = None

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def watch(self, listener: Listener) -> Callable[[], None]:
        """Subscribe to emissions.

        Args:
            listener: Called with every Snapshot.

        Returns:
            A callable that removes the subscription.
        """
        self._listeners.append(listener)

        def unwatch():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unwatch

    def _emit(self, snapshot: Snapshot):
        self.snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def serve_stale(self) -> bool:
        """Emit cached data for the key, if any.

        Returns:
            True when cached data was emitted.
        """
        data = self.cache.get_weather(self.key)
        if data is None:
            logger.info("CACHED_WEATHER_MISS", location=self.key)
            return False
        logger.info("CACHED_WEATHER_HIT", location=self.key)
        self._emit(Snapshot(data=data))
        return True

    async def _fetch(self, sequence: int) -> Snapshot:
        data = await self.fetcher(self.key)
        snapshot = Snapshot(data=data, sequence=sequence)
        if sequence < self._emitted:
            logger.info(
                "REVALIDATE_OUT_OF_ORDER",
                location=self.key,
                sequence=sequence,
                emitted=self._emitted,
            )
            return snapshot
        self._emitted = sequence
        self.cache.save_weather(self.key, data)
        self._emit(snapshot)
        return snapshot

    async def revalidate(self, force: bool = False) -> Snapshot:
        """Fetch fresh data, store it and notify watchers.

        Calls made while a fetch is in flight share its result unless
        `force` is set, in which case a new fetch is started alongside it.

        Args:
            force: Start a new fetch even if one is in flight.

        Returns:
            The Snapshot built from the fetched data.
        """
        if not force and self.is_fetching:
            return await asyncio.shield(self._inflight)
        self._issued += 1
        fetch = asyncio.ensure_future(self._fetch(self._issued))
        self._inflight = fetch
        return await fetch

    def revalidate_in_background(self) -> asyncio.Task:
        """Schedule revalidate() without waiting for it."""
        task = asyncio.create_task(self.revalidate())
        _background_tasks.add(task)
        task.add_done_callback(self._background_done)
        return task

    def _background_done(self, task: asyncio.Task):
        _background_tasks.discard(task)
        if task.cancelled():
            return
        if exc := task.exception():
            logger.error("REVALIDATE_FAILED", location=self.key, error=str(exc))

    async def start(self) -> Snapshot:
        """Serve stale data, then revalidate.

        With cached data the refetch runs in the background and the stale
        Snapshot is returned at once. Without it the fetch is awaited, so
        fetch errors reach the caller.

        Returns:
            The first Snapshot emitted.
        """
        if self.serve_stale():
            self.revalidate_in_background()
            return self.snapshot
        return await self.revalidate()


class SourceRegistry:
    """Shares one RevalidatingSource per key across requests.

    Requests for one key share the source's in-flight fetch and its
    sequence guard. Idle sources beyond `maxsize` are evicted oldest
    first; a source with a fetch in flight is never evicted.
    """

    def __init__(self, maxsize: int = 256):
        self.maxsize = maxsize
        self._sources: OrderedDict = OrderedDict()

    def __len__(self):
        return len(self._sources)

    def get(self, key, factory: Callable[[], RevalidatingSource]) -> RevalidatingSource:
        """Return the source for `key`, building it with `factory` if needed."""
        source = self._sources.get(key)
        if source is None:
            source = factory()
            self._sources[key] = source
            self._evict()
        else:
            self._sources.move_to_end(key)
        return source

    def _evict(self):
        for key in list(self._sources)[:-1]:
            if len(self._sources) <= self.maxsize:
                return
            if not self._sources[key].is_fetching:
                del self._sources[key]

    def clear(self):
        self._sources.clear()
