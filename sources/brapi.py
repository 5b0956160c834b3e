"""
Previous Close Source (brapi.dev)

Reads the official closing price of the previous trading session for
exchange-listed instruments (B3 stocks, FIIs and US ETFs).

Endpoint:
    GET {base}/quote/{symbol}?token={token}

Response Format (relevant part):
    {
      "results": [
        {"symbol": "ITSA4", "regularMarketPreviousClose": 10.12, ...}
      ]
    }
"""

from typing import Any, Optional
from urllib.parse import quote

from core.config import settings
from core.schemas import FetchResult
from core.utils.numbers import is_number
from sources.base import BaseSourceClient, SourceDataError, SourceError, SourceParseError


class BrapiClient(BaseSourceClient):
    """
    Previous-close adapter.

    Example:
        >>> async with BrapiClient(token="...") as client:
        ...     result = await client.get_previous_close("ITSA4")
    """

    name = "brapi"

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        super().__init__(timeout=timeout)
        self.base_url = (base_url or settings.quotes_api_base_url).rstrip("/")
        self.token = token if token is not None else settings.brapi_token

    async def get_previous_close(self, symbol: str) -> FetchResult:
        """
        Fetch the previous session's closing price for *symbol*.

        Returns:
            FetchResult with the close on success; a failed result when the
            request fails or ``results[0].regularMarketPreviousClose`` is
            missing, non-numeric or zero.
        """
        url = f"{self.base_url}/quote/{quote(symbol, safe='')}"
        params = {"token": self.token} if self.token else None
        try:
            payload = await self._get(url, params=params, as_json=True)
            close = self.extract_previous_close(payload)
        except SourceError as exc:
            return self._failed(f"previous close for {symbol}", exc)

        self.logger.debug(f"Previous close for {symbol}: {close}")
        return FetchResult.success(close)

    @staticmethod
    def extract_previous_close(payload: Any) -> float:
        """
        Pull ``results[0].regularMarketPreviousClose`` out of a response.

        Raises:
            SourceDataError: If the field is absent
            SourceParseError: If it is not a non-zero number
        """
        try:
            raw = payload["results"][0]["regularMarketPreviousClose"]
        except (KeyError, IndexError, TypeError) as e:
            raise SourceDataError("Response has no results[0].regularMarketPreviousClose") from e

        if raw is None:
            raise SourceDataError("regularMarketPreviousClose is null")

        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError) as e:
            raise SourceParseError(f"Non-numeric previous close {raw!r}") from e

        if not is_number(value) or value == 0:
            raise SourceParseError(f"Unusable previous close {raw!r}")
        return value
