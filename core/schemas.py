"""
Data Schemas

This module defines the Pydantic models shared by the cache, the source
adapters and the HTTP layer.

Models:
    - QuoteRecord: Cached state of one instrument (immutable; replaced wholesale)
    - FetchOutcome / FetchResult: Outcome of a single upstream lookup
    - HeatmapItem / HeatmapGroup / HeatmapResponse: Read-side projection served to the UI

Wire format:
    The heatmap models serialize with the field names the browser client
    expects (``changePct``, ``updatedAt``). Internally the snake_case names
    are used.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from core.utils.time import EPOCH


# ============================================
# Quote Record
# ============================================

class QuoteRecord(BaseModel):
    """
    Cached quote for a single instrument.

    Records are frozen: the refresh cycle always builds a new record and
    swaps it into the cache, so a reader never sees a half-updated entry.

    Attributes:
        change_percent: Signed change in percent, clamped to [-50, 50]; None when unknown
        price: Latest observed value in the instrument's native unit
               (for the policy rate this is the rate itself, in percent)
        last_updated: When the symbol was last refreshed (attempted or successful)

    Example:
        >>> record = QuoteRecord()
        >>> record.price is None, record.last_updated.year
        (True, 1970)
        >>> record.model_copy(update={"price": 12.3}).price
        12.3
    """

    model_config = ConfigDict(frozen=True)

    change_percent: Optional[float] = Field(
        default=None,
        description="Change versus the reference price, in percent"
    )

    price: Optional[float] = Field(
        default=None,
        description="Latest observed price (or rate, for the policy rate)"
    )

    last_updated: datetime = Field(
        default=EPOCH,
        description="Timestamp of the last refresh of this symbol (UTC)"
    )


# ============================================
# Source Fetch Results
# ============================================

class FetchOutcome(str, Enum):
    """How an upstream lookup ended."""

    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"   # network failure, DNS, timeout
    HTTP_ERROR = "http_error"             # non-success response status
    MISSING_DATA = "missing_data"         # expected field or markup not present
    PARSE_ERROR = "parse_error"           # value present but not a usable number


class FetchResult(BaseModel):
    """
    Result of a single adapter call.

    Adapters never raise for upstream problems; they return a FetchResult
    whose ``value`` is None unless ``outcome`` is SUCCESS.

    Example:
        >>> FetchResult.success(5.1).ok
        True
        >>> r = FetchResult.failure(FetchOutcome.HTTP_ERROR, "HTTP 503")
        >>> r.ok, r.value
        (False, None)
    """

    model_config = ConfigDict(frozen=True)

    outcome: FetchOutcome
    value: Optional[float] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.SUCCESS

    @classmethod
    def success(cls, value: float) -> "FetchResult":
        return cls(outcome=FetchOutcome.SUCCESS, value=value)

    @classmethod
    def failure(cls, outcome: FetchOutcome, detail: Optional[str] = None) -> "FetchResult":
        return cls(outcome=outcome, detail=detail)


# ============================================
# Heatmap Projection
# ============================================

class HeatmapItem(BaseModel):
    """One tile of the heatmap."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(..., examples=["ITSA4", "DOLAR", "SELIC HOJE"])
    change_percent: Optional[float] = Field(
        default=None,
        serialization_alias="changePct",
        description="Change in percent; null when unknown"
    )
    price: Optional[float] = Field(default=None, description="Latest price; null until first fetch")


class HeatmapGroup(BaseModel):
    """A named category of tiles, sorted by change percent descending."""

    name: str = Field(..., examples=["GERAL", "Ações Brasileiras"])
    items: List[HeatmapItem] = Field(default_factory=list)


class HeatmapResponse(BaseModel):
    """Payload returned by GET /api/heatmap."""

    model_config = ConfigDict(populate_by_name=True)

    updated_at: datetime = Field(..., serialization_alias="updatedAt")
    groups: List[HeatmapGroup]
