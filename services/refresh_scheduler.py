"""
Quote Refresh Scheduler

Background service that keeps the QuoteCache current. It runs one full pass
over the instrument universe immediately at startup and then on a fixed
interval (3 minutes by default).

Per-pass rules:
    - Symbols are processed sequentially in universe order; requests are
      never issued in parallel.
    - After every symbol (refreshed, skipped or failed) the scheduler pauses
      for 0.4-0.5s so the scraped quote pages are not hammered.
    - SELIC HOJE is refetched every pass and carries no change percent.
    - DOLAR / BITCOIN are refetched only when their record is at least
      10 minutes old; their change is measured against the cached price.
    - Listed instruments are refetched every pass; their change is measured
      against the previous session close.

Passes never overlap: the loop awaits each pass before scheduling the next,
and ``run_once`` holds a lock so a manual call cannot run alongside it.
"""

import asyncio
import contextlib
import random
from datetime import datetime
from typing import Awaitable, Callable, Optional, Tuple

from core.config import settings
from core.logging import get_logger
from core.schemas import FetchResult, QuoteRecord
from core.universe import (
    InstrumentUniverse,
    is_policy_rate,
    pair_identifier,
)
from core.utils.numbers import percent_change
from core.utils.time import current_utc_datetime, seconds_since
from storage.quote_cache import QuoteCache


class RefreshScheduler:
    """
    Background refresh loop for the quote cache.

    Args:
        cache: Cache to write to
        universe: Instruments to refresh
        quote_page: Adapter with ``get_price(symbol, market_suffix="")``
        previous_close: Adapter with ``get_previous_close(symbol)``
        policy_rate: Adapter with ``get_policy_rate()``
        interval_seconds: Time between the starts of consecutive passes
        pacing: (min, max) seconds to pause after each symbol
        pair_min_age_seconds: Minimum record age before a pair is refetched
        clamp_percent: Absolute bound applied to change percentages
        clock: Returns the current aware UTC datetime
        sleep: Coroutine used for every pause

    Example:
        >>> scheduler = RefreshScheduler(cache, universe, gf, brapi, bcb)
        >>> await scheduler.start()
        >>> ...
        >>> await scheduler.stop()
    """

    def __init__(
        self,
        cache: QuoteCache,
        universe: InstrumentUniverse,
        quote_page,
        previous_close,
        policy_rate,
        interval_seconds: Optional[float] = None,
        pacing: Optional[Tuple[float, float]] = None,
        pair_min_age_seconds: Optional[float] = None,
        clamp_percent: Optional[float] = None,
        clock: Callable[[], datetime] = current_utc_datetime,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._logger = get_logger(__name__)
        self.cache = cache
        self.universe = universe
        self.quote_page = quote_page
        self.previous_close = previous_close
        self.policy_rate = policy_rate

        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else settings.refresh_interval_seconds
        )
        self.pacing = pacing if pacing is not None else settings.pacing_bounds
        self.pair_min_age_seconds = (
            pair_min_age_seconds if pair_min_age_seconds is not None
            else settings.pair_refresh_min_age_seconds
        )
        self.clamp_percent = clamp_percent if clamp_percent is not None else settings.change_clamp_percent

        self._clock = clock
        self._sleep = sleep
        self._run_lock = asyncio.Lock()
        self._running = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

        # Observability
        self.run_count = 0
        self.last_run_started: Optional[datetime] = None
        self.last_run_finished: Optional[datetime] = None
        self.last_run_refreshed = 0

    # ============================================
    # Lifecycle
    # ============================================

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    @property
    def is_refreshing(self) -> bool:
        """True while a pass is in progress."""
        return self._run_lock.locked()

    async def start(self) -> None:
        """Open adapter sessions and launch the background loop."""
        if self._running.is_set():
            return
        self._running.set()
        self._logger.info(
            f"Starting quote refresh scheduler ({len(self.universe)} symbols, "
            f"every {self.interval_seconds}s)"
        )
        for adapter in self._adapters():
            initialize = getattr(adapter, "initialize", None)
            if initialize is not None:
                await initialize()
        self._task = asyncio.create_task(self._run(), name="quote_refresh_scheduler")

    async def stop(self) -> None:
        """Cancel the loop (interrupting any pause) and close adapter sessions."""
        if not self._running.is_set():
            return
        self._logger.info("Stopping quote refresh scheduler...")
        self._running.clear()
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        for adapter in self._adapters():
            shutdown = getattr(adapter, "shutdown", None)
            if shutdown is not None:
                await shutdown()

    def _adapters(self):
        # Deduplicate in case one object serves several roles
        seen = []
        for adapter in (self.quote_page, self.previous_close, self.policy_rate):
            if not any(adapter is s for s in seen):
                seen.append(adapter)
        return seen

    # ============================================
    # Core Loop
    # ============================================

    async def _run(self) -> None:
        while self._running.is_set():
            cycle_start = self._clock()
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._logger.error(f"Refresh pass error: {e}")

            elapsed = seconds_since(cycle_start, self._clock())
            delay = min(self.interval_seconds, max(0.0, self.interval_seconds - elapsed))
            if delay == 0.0:
                self._logger.warning(
                    f"Refresh pass took {elapsed:.1f}s, longer than the {self.interval_seconds}s interval"
                )
            self._logger.info(f"Refresh pass finished in {elapsed:.1f}s; next in {delay:.1f}s")
            await self._sleep(delay)

    async def run_once(self) -> int:
        """
        Run one full pass over the universe.

        Returns:
            Number of symbols that were actually refreshed (not skipped)
        """
        async with self._run_lock:
            self.last_run_started = self._clock()
            refreshed = 0

            for symbol in self.universe:
                try:
                    if await self.update_symbol(symbol):
                        refreshed += 1
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    self._logger.error(f"Update failed for {symbol}: {e}")
                await self._pause()

            self.run_count += 1
            self.last_run_refreshed = refreshed
            self.last_run_finished = self._clock()
            self._logger.info(f"Refresh pass #{self.run_count}: {refreshed}/{len(self.universe)} symbols refreshed")
            return refreshed

    async def _pause(self) -> None:
        low, high = self.pacing
        await self._sleep(random.uniform(low, high))

    # ============================================
    # Per-Symbol Update Policy
    # ============================================

    async def update_symbol(self, symbol: str) -> bool:
        """
        Refresh one symbol according to its category rules.

        Returns:
            True if the symbol was refetched, False if the cadence rule skipped it

        Raises:
            KeyError: If *symbol* is not part of the universe
        """
        if symbol not in self.universe:
            raise KeyError(f"Unknown symbol: {symbol}")

        if is_policy_rate(symbol):
            await self._update_policy_rate(symbol)
            return True

        pair = pair_identifier(symbol)
        if pair is not None:
            return await self._update_pair(symbol, pair)

        await self._update_listed(symbol)
        return True

    async def _update_policy_rate(self, symbol: str) -> None:
        entry = self.cache.get(symbol)
        result: FetchResult = await self.policy_rate.get_policy_rate()
        self.cache.set(symbol, QuoteRecord(
            change_percent=None,
            price=result.value if result.ok else entry.price,
            last_updated=self._clock(),
        ))

    async def _update_pair(self, symbol: str, pair: str) -> bool:
        entry = self.cache.get(symbol)
        now = self._clock()
        if seconds_since(entry.last_updated, now) < self.pair_min_age_seconds:
            self._logger.debug(f"{symbol}: refreshed less than {self.pair_min_age_seconds}s ago, skipping")
            return False

        result: FetchResult = await self.quote_page.get_price(pair)
        change = None
        if result.ok:
            change = percent_change(result.value, entry.price, self.clamp_percent)

        self.cache.set(symbol, QuoteRecord(
            change_percent=change,
            price=result.value if result.ok else entry.price,
            last_updated=self._clock(),
        ))
        return True

    async def _update_listed(self, symbol: str) -> None:
        entry = self.cache.get(symbol)
        price: FetchResult = await self.quote_page.get_price(symbol, self.universe.market_suffix(symbol))
        prev: FetchResult = await self.previous_close.get_previous_close(symbol)

        change = None
        if price.ok and prev.ok:
            change = percent_change(price.value, prev.value, self.clamp_percent)

        self.cache.set(symbol, QuoteRecord(
            change_percent=change,
            price=price.value if price.ok else entry.price,
            last_updated=self._clock(),
        ))
