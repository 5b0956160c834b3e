"""
Unit Tests for the Quote Cache

These tests verify that:
- Every symbol starts with the initial (empty) record
- Records are replaced wholesale and cannot be mutated in place
- Unknown symbols are rejected

Run with:
    pytest tests/unit/test_quote_cache.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.schemas import QuoteRecord
from core.utils.time import EPOCH
from storage.quote_cache import QuoteCache


@pytest.fixture
def cache():
    return QuoteCache(["SELIC HOJE", "DOLAR", "ITSA4"])


class TestInitialState:
    """Tests for the state right after construction"""

    def test_one_record_per_symbol(self, cache):
        assert len(cache) == 3
        assert cache.symbols() == ["SELIC HOJE", "DOLAR", "ITSA4"]

    def test_initial_record_is_empty(self, cache):
        record = cache.get("ITSA4")
        assert record.price is None
        assert record.change_percent is None
        assert record.last_updated == EPOCH


class TestGetSet:
    """Tests for get/set"""

    def test_set_replaces_record(self, cache):
        now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        new = QuoteRecord(change_percent=1.5, price=10.2, last_updated=now)
        cache.set("ITSA4", new)
        assert cache.get("ITSA4") is new

    def test_set_does_not_touch_other_symbols(self, cache):
        cache.set("ITSA4", QuoteRecord(price=10.0))
        assert cache.get("DOLAR").price is None

    def test_get_unknown_symbol_raises(self, cache):
        with pytest.raises(KeyError):
            cache.get("PETR4")

    def test_set_unknown_symbol_raises(self, cache):
        with pytest.raises(KeyError):
            cache.set("PETR4", QuoteRecord(price=1.0))
        assert "PETR4" not in cache

    def test_set_rejects_non_record(self, cache):
        with pytest.raises(TypeError):
            cache.set("ITSA4", {"price": 1.0})

    def test_records_are_frozen(self, cache):
        """Verify a record cannot be partially mutated"""
        record = cache.get("ITSA4")
        with pytest.raises(ValidationError):
            record.price = 99.0
