"""
Instrument Universe

The fixed set of tracked symbols, partitioned into four disjoint categories.
Category membership decides how a symbol is fetched and how often:

    GENERAL              policy rate + currency pair + crypto pair
    DOMESTIC_EQUITIES    B3-listed stocks      (quote page ":BVMF" + previous close)
    REAL_ESTATE_FUNDS    B3-listed FIIs        (quote page ":BVMF" + previous close)
    FOREIGN_ETFS         US-listed ETFs        (quote page ":NYSEARCA" + previous close)

The universe is built once at startup (``build_universe``) and never changes
while the process runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class Category(str, Enum):
    """Instrument categories in display order."""

    GENERAL = "general"
    DOMESTIC_EQUITIES = "domestic_equities"
    REAL_ESTATE_FUNDS = "real_estate_funds"
    FOREIGN_ETFS = "foreign_etfs"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES: Dict[Category, str] = {
    Category.GENERAL: "GERAL",
    Category.DOMESTIC_EQUITIES: "Ações Brasileiras",
    Category.REAL_ESTATE_FUNDS: "Fundos Imobiliários",
    Category.FOREIGN_ETFS: "ETFs Americanos",
}

# ============================================
# General Group
# ============================================

POLICY_RATE_SYMBOL = "SELIC HOJE"

# Display symbol -> pair identifier on the quote page
PAIR_SYMBOLS: Dict[str, str] = {
    "DOLAR": "USD-BRL",
    "BITCOIN": "BTC-BRL",
}

GENERAL_SYMBOLS: Tuple[str, ...] = (POLICY_RATE_SYMBOL, "DOLAR", "BITCOIN")

# ============================================
# Market Qualifiers
# ============================================

DOMESTIC_MARKET_SUFFIX = ":BVMF"
FOREIGN_MARKET_SUFFIX = ":NYSEARCA"


@dataclass(frozen=True)
class InstrumentUniverse:
    """
    Immutable mapping of categories to their ordered symbol tuples.

    Iterating the universe yields every symbol in refresh order: GENERAL
    first, then DOMESTIC_EQUITIES, REAL_ESTATE_FUNDS and FOREIGN_ETFS, each
    in declared order.

    Example:
        >>> universe = InstrumentUniverse(
        ...     domestic_equities=("ITSA4",), real_estate_funds=("MXRF11",), foreign_etfs=("IVV",)
        ... )
        >>> list(universe)
        ['SELIC HOJE', 'DOLAR', 'BITCOIN', 'ITSA4', 'MXRF11', 'IVV']
        >>> universe.category_of("IVV")
        <Category.FOREIGN_ETFS: 'foreign_etfs'>
    """

    domestic_equities: Tuple[str, ...]
    real_estate_funds: Tuple[str, ...]
    foreign_etfs: Tuple[str, ...]
    general: Tuple[str, ...] = GENERAL_SYMBOLS
    _index: Dict[str, Category] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, Category] = {}
        for category, symbols in self.groups():
            for symbol in symbols:
                if symbol in index:
                    raise ValueError(
                        f"Symbol '{symbol}' appears in both {index[symbol].name} and {category.name}"
                    )
                index[symbol] = category
        object.__setattr__(self, "_index", index)

    def groups(self) -> Iterator[Tuple[Category, Tuple[str, ...]]]:
        """Yield (category, symbols) pairs in display/refresh order."""
        yield Category.GENERAL, self.general
        yield Category.DOMESTIC_EQUITIES, self.domestic_equities
        yield Category.REAL_ESTATE_FUNDS, self.real_estate_funds
        yield Category.FOREIGN_ETFS, self.foreign_etfs

    def category_of(self, symbol: str) -> Category:
        """
        Return the category of *symbol*.

        Raises:
            KeyError: If the symbol is not part of the universe
        """
        return self._index[symbol]

    def market_suffix(self, symbol: str) -> str:
        """Quote page market qualifier for a listed instrument."""
        if self.category_of(symbol) is Category.FOREIGN_ETFS:
            return FOREIGN_MARKET_SUFFIX
        return DOMESTIC_MARKET_SUFFIX

    def __iter__(self) -> Iterator[str]:
        for _, symbols in self.groups():
            yield from symbols

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index


def is_policy_rate(symbol: str) -> bool:
    return symbol == POLICY_RATE_SYMBOL


def pair_identifier(symbol: str) -> Optional[str]:
    """Quote page pair identifier for DOLAR/BITCOIN, None for anything else."""
    return PAIR_SYMBOLS.get(symbol)


def build_universe(config=None) -> InstrumentUniverse:
    """
    Build the universe from the configured instrument lists.

    Args:
        config: Settings instance (defaults to the global settings)
    """
    if config is None:
        from core.config import settings as config

    return InstrumentUniverse(
        domestic_equities=tuple(config.domestic_equities_list),
        real_estate_funds=tuple(config.real_estate_funds_list),
        foreign_etfs=tuple(config.foreign_etfs_list),
    )
