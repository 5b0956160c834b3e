"""
In-Memory Quote Cache

Single source of truth for the latest quote of every instrument. Written by
the refresh scheduler, read by the heatmap aggregator and HTTP handlers.

Consistency model:
    Records are immutable QuoteRecord instances. ``set`` swaps the whole
    record for a key in one dict assignment, which is atomic for readers on
    the event loop and in worker threads alike, so no lock is needed and no
    reader can observe a partially updated record.

Usage:
    cache = QuoteCache(universe)
    record = cache.get("ITSA4")
    cache.set("ITSA4", record.model_copy(update={"price": 10.5}))
"""

from typing import Dict, Iterable, List

from core.logging import get_logger
from core.schemas import QuoteRecord


class QuoteCache:
    """
    Mapping of symbol -> QuoteRecord with exactly one record per symbol.

    Every symbol passed at construction starts with the initial record
    (no price, no change, last updated at the epoch). The key set is fixed
    for the cache lifetime: there is no insertion of new symbols and no
    deletion.
    """

    def __init__(self, symbols: Iterable[str]):
        self._records: Dict[str, QuoteRecord] = {symbol: QuoteRecord() for symbol in symbols}
        self.logger = get_logger(__name__)
        self.logger.debug(f"QuoteCache created with {len(self._records)} symbols")

    def get(self, symbol: str) -> QuoteRecord:
        """
        Return the current record for *symbol*.

        Raises:
            KeyError: If the symbol is not tracked
        """
        try:
            return self._records[symbol]
        except KeyError:
            raise KeyError(f"Unknown symbol: {symbol}") from None

    def set(self, symbol: str, record: QuoteRecord) -> None:
        """
        Replace the record for *symbol*.

        Raises:
            KeyError: If the symbol is not tracked
            TypeError: If *record* is not a QuoteRecord
        """
        if symbol not in self._records:
            raise KeyError(f"Unknown symbol: {symbol}")
        if not isinstance(record, QuoteRecord):
            raise TypeError(f"Expected QuoteRecord, got {type(record).__name__}")
        self._records[symbol] = record

    def symbols(self) -> List[str]:
        return list(self._records)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._records

    def __len__(self) -> int:
        return len(self._records)
