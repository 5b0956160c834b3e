"""
Policy Rate Source (Banco Central do Brasil)

Reads the latest observation of SGS series 432 (SELIC target rate, % p.a.)
from the BCB open-data API.

Endpoint:
    GET https://api.bcb.gov.br/dados/serie/bcdata.sgs.432/dados/ultimos/1?formato=json

Response Format:
    [
      {"data": "18/10/2026", "valor": "15.00"}
    ]
"""

from typing import Any, Optional

from core.config import settings
from core.schemas import FetchResult
from core.utils.numbers import is_number
from sources.base import BaseSourceClient, SourceDataError, SourceError, SourceParseError


class BcbClient(BaseSourceClient):
    """
    Policy-rate adapter.

    Example:
        >>> async with BcbClient() as client:
        ...     selic = await client.get_policy_rate()
        ...     print(selic.value)
        15.0
    """

    name = "bcb"

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        super().__init__(timeout=timeout)
        self.url = url or settings.policy_rate_url

    async def get_policy_rate(self) -> FetchResult:
        """Fetch the most recent policy rate observation."""
        try:
            payload = await self._get(self.url, as_json=True)
            rate = self.extract_rate(payload)
        except SourceError as exc:
            return self._failed("policy rate", exc)

        self.logger.debug(f"Policy rate: {rate}")
        return FetchResult.success(rate)

    @staticmethod
    def extract_rate(payload: Any) -> float:
        """
        Pull ``[0].valor`` out of a series response.

        ``valor`` arrives as a string with a period decimal separator
        ("15.00") but plain numbers are accepted too.

        Raises:
            SourceDataError: If there is no observation
            SourceParseError: If the value is not a non-zero number
        """
        try:
            raw = payload[0]["valor"]
        except (KeyError, IndexError, TypeError) as e:
            raise SourceDataError("Response has no [0].valor") from e

        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError) as e:
            raise SourceParseError(f"Non-numeric rate {raw!r}") from e

        if not is_number(value) or value == 0:
            raise SourceParseError(f"Unusable rate {raw!r}")
        return value
