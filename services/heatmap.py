"""
Heatmap Aggregator

Read-side projection of the quote cache: one group per instrument category
(in universe order), each listing its symbols with the cached change percent
and price, sorted by change percent descending. Symbols without a change
percent sort last; ties keep the declared order.

The aggregator only reads the cache. It never waits for or triggers a
refresh, so it answers immediately even before the first pass completes.
"""

from typing import List

from core.schemas import HeatmapGroup, HeatmapItem, HeatmapResponse
from core.universe import InstrumentUniverse
from core.utils.time import current_utc_datetime
from storage.quote_cache import QuoteCache


def _sort_key(item: HeatmapItem) -> float:
    return item.change_percent if item.change_percent is not None else float("-inf")


class HeatmapAggregator:
    """
    Builds heatmap snapshots from the cache.

    Example:
        >>> aggregator = HeatmapAggregator(cache, universe)
        >>> [g.name for g in aggregator.snapshot()]
        ['GERAL', 'Ações Brasileiras', 'Fundos Imobiliários', 'ETFs Americanos']
    """

    def __init__(self, cache: QuoteCache, universe: InstrumentUniverse):
        self.cache = cache
        self.universe = universe

    def snapshot(self) -> List[HeatmapGroup]:
        """Current groups, each sorted by change percent descending."""
        groups = []
        for category, symbols in self.universe.groups():
            items = []
            for symbol in symbols:
                record = self.cache.get(symbol)
                items.append(HeatmapItem(
                    symbol=symbol,
                    change_percent=record.change_percent,
                    price=record.price,
                ))
            items.sort(key=_sort_key, reverse=True)
            groups.append(HeatmapGroup(name=category.display_name, items=items))
        return groups

    def response(self) -> HeatmapResponse:
        """Snapshot wrapped with the time it was taken, as served over HTTP."""
        return HeatmapResponse(updated_at=current_utc_datetime(), groups=self.snapshot())
