"""Playback session state and the periodic rate driver."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from dancerate.analysis.models import AnalysisSnapshot, Beat
from dancerate.config import settings
from dancerate.rate.config import RateConfig
from dancerate.rate.engine import NEUTRAL_RATE, compute_rate
from dancerate.rate.intervals import last_started

logger = logging.getLogger(__name__)


class AnalysisUnavailableError(Exception):
    """The analysis provider had no data yet; worth retrying shortly."""


class SnapshotHandle:
    """Holds the snapshot for the song that is currently playing.

    The (track_id, snapshot) pair is replaced with a single attribute
    assignment, so readers on any thread see either the old song or the
    new one, never a mix.
    """

    def __init__(self) -> None:
        self._current: tuple[str | None, AnalysisSnapshot | None] = (None, None)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def replace(self, track_id: str | None, snapshot: AnalysisSnapshot | None) -> None:
        self._current = (track_id, snapshot)
        logger.info(f"Snapshot replaced for track {track_id}")

    @property
    def current(self) -> tuple[str | None, AnalysisSnapshot | None]:
        return self._current

    @property
    def track_id(self) -> str | None:
        return self._current[0]

    @property
    def snapshot(self) -> AnalysisSnapshot | None:
        return self._current[1]


async def fetch_with_retry(
    fetch: Callable[[], Awaitable[AnalysisSnapshot]],
    retry_delay: float = settings.fetch_retry_delay_ms / 1000,
    max_retries: int = settings.fetch_max_retries,
) -> AnalysisSnapshot | None:
    """Call *fetch* until it succeeds or the retries run out.

    Only ``AnalysisUnavailableError`` is retried; anything else propagates.

    Parameters
    ----------
    fetch:
        Coroutine function returning the snapshot for the current song.
    retry_delay:
        Seconds to wait between attempts.
    max_retries:
        Retries after the first attempt. Returns None once exhausted.
    """
    for attempt in range(max_retries + 1):
        try:
            return await fetch()
        except AnalysisUnavailableError as e:
            if attempt == max_retries:
                logger.warning(f"Analysis still unavailable after {attempt + 1} attempts: {e}")
                return None
            logger.info(f"Analysis not ready, retrying in {retry_delay:.2f}s ({attempt + 1}/{max_retries})")
            await asyncio.sleep(retry_delay)
    return None


def delay_until_next_beat(position_ms: float, beats: Sequence[Beat] | None) -> float | None:
    """Seconds from *position_ms* until the next beat starts.

    Returns None when no beat lies ahead, so the caller can restart the clip
    right away.
    """
    if not beats:
        return None
    position_seconds = position_ms / 1000.0
    idx = last_started(beats, position_seconds) + 1
    if idx >= len(beats):
        return None
    return max(0.0, beats[idx].start - position_seconds)


class RateDriver:
    """Feeds the engine from a position source at a fixed tick.

    Parameters
    ----------
    handle:
        Snapshot holder shared with whoever reacts to song changes.
    config:
        Engine configuration. Defaults to the app settings.
    tick_interval:
        Seconds between ticks. Defaults to ``settings.tick_interval_ms``.
    """

    def __init__(
        self,
        handle: SnapshotHandle | None = None,
        config: RateConfig | None = None,
        tick_interval: float | None = None,
    ) -> None:
        self.handle = handle or SnapshotHandle()
        self.config = config or settings.rate_config()
        self.tick_interval = tick_interval if tick_interval is not None else settings.tick_interval_ms / 1000
        self.last_rate = NEUTRAL_RATE

    def tick(self, position_ms: float) -> float:
        """Compute the rate for one position against the current snapshot."""
        self.last_rate = compute_rate(position_ms, self.handle.snapshot, config=self.config)
        return self.last_rate

    async def change_song(
        self,
        track_id: str | None,
        fetch: Callable[[], Awaitable[AnalysisSnapshot]],
        retry_delay: float = settings.fetch_retry_delay_ms / 1000,
        max_retries: int = settings.fetch_max_retries,
    ) -> AnalysisSnapshot | None:
        """Fetch the new song's analysis and swap it in.

        The old snapshot is dropped first so ticks during the fetch play at
        the neutral rate instead of following the previous song's beats.
        """
        self.handle.replace(track_id, None)
        snapshot = await fetch_with_retry(fetch, retry_delay=retry_delay, max_retries=max_retries)
        if self.handle.track_id == track_id:
            self.handle.replace(track_id, snapshot)
        else:
            logger.info(f"Discarding analysis for {track_id}: song changed during fetch")
        return snapshot

    async def run(
        self,
        position_source: Callable[[], float | None],
        rate_sink: Callable[[float], None],
        stop: asyncio.Event,
    ) -> None:
        """Tick until *stop* is set.

        *position_source* returns the playback position in ms, or None while
        paused; paused ticks are skipped.
        """
        logger.info(f"Rate driver started ({self.tick_interval * 1000:.0f}ms tick)")
        while not stop.is_set():
            position_ms = position_source()
            if position_ms is not None:
                rate_sink(self.tick(position_ms))
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.tick_interval)
            except asyncio.TimeoutError:
                pass
        logger.info("Rate driver stopped")
