"""
Unit Tests for the Instrument Universe

Run with:
    pytest tests/unit/test_universe.py -v
"""

import pytest

from core.config import Settings
from core.universe import (
    Category,
    InstrumentUniverse,
    POLICY_RATE_SYMBOL,
    build_universe,
    is_policy_rate,
    pair_identifier,
)


@pytest.fixture
def universe():
    return InstrumentUniverse(
        domestic_equities=("ITSA4", "WEGE3"),
        real_estate_funds=("MXRF11",),
        foreign_etfs=("IVV",),
    )


class TestInstrumentUniverse:
    """Tests for InstrumentUniverse"""

    def test_iteration_order(self, universe):
        """Verify GENERAL, equities, funds, ETFs in declared order"""
        assert list(universe) == [
            "SELIC HOJE", "DOLAR", "BITCOIN", "ITSA4", "WEGE3", "MXRF11", "IVV"
        ]

    def test_len_and_contains(self, universe):
        assert len(universe) == 7
        assert "DOLAR" in universe
        assert "PETR4" not in universe

    def test_category_of(self, universe):
        assert universe.category_of("SELIC HOJE") is Category.GENERAL
        assert universe.category_of("WEGE3") is Category.DOMESTIC_EQUITIES
        assert universe.category_of("MXRF11") is Category.REAL_ESTATE_FUNDS
        assert universe.category_of("IVV") is Category.FOREIGN_ETFS

    def test_category_of_unknown_symbol_raises(self, universe):
        with pytest.raises(KeyError):
            universe.category_of("PETR4")

    def test_market_suffix(self, universe):
        """Verify ETFs use the NYSEARCA qualifier and B3 listings use BVMF"""
        assert universe.market_suffix("IVV") == ":NYSEARCA"
        assert universe.market_suffix("ITSA4") == ":BVMF"
        assert universe.market_suffix("MXRF11") == ":BVMF"

    def test_duplicate_symbols_rejected(self):
        with pytest.raises(ValueError):
            InstrumentUniverse(
                domestic_equities=("ITSA4",),
                real_estate_funds=("ITSA4",),
                foreign_etfs=("IVV",),
            )

    def test_universe_is_immutable(self, universe):
        with pytest.raises(AttributeError):
            universe.foreign_etfs = ("SPY",)

    def test_group_display_names(self, universe):
        names = [category.display_name for category, _ in universe.groups()]
        assert names == ["GERAL", "Ações Brasileiras", "Fundos Imobiliários", "ETFs Americanos"]


class TestGeneralSymbols:
    """Tests for the special GENERAL group helpers"""

    def test_policy_rate(self):
        assert is_policy_rate(POLICY_RATE_SYMBOL)
        assert not is_policy_rate("DOLAR")

    def test_pair_identifiers(self):
        assert pair_identifier("DOLAR") == "USD-BRL"
        assert pair_identifier("BITCOIN") == "BTC-BRL"
        assert pair_identifier("ITSA4") is None


class TestBuildUniverse:
    """Tests for build_universe"""

    def test_default_universe_size(self):
        """Verify the default universe tracks 3 + 12 + 8 + 3 instruments"""
        assert len(build_universe(Settings())) == 26

    def test_configured_lists(self):
        config = Settings(domestic_equities="PETR4", real_estate_funds="HGLG11", foreign_etfs="SPY")
        assert list(build_universe(config)) == ["SELIC HOJE", "DOLAR", "BITCOIN", "PETR4", "HGLG11", "SPY"]
