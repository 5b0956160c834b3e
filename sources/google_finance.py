"""
Quote Page Source (Google Finance)

Scrapes the current price of an instrument from its Google Finance quote
page. Used for every listed instrument and for the currency / crypto pairs.

Page layout:
    The price is rendered in the first ``div.YMlKec.fxKbKc`` of the page,
    formatted for the requested language ("R$ 12,34" with hl=pt-BR).

URL format:
    https://www.google.com/finance/quote/{symbol}{suffix}?hl=pt-BR

    ITSA4:BVMF     B3-listed stock or FII
    IVV:NYSEARCA   US ETF
    USD-BRL        currency / crypto pair (no suffix)

Usage:
    async with GoogleFinanceClient() as client:
        result = await client.get_price("ITSA4", ":BVMF")
        if result.ok:
            print(result.value)
"""

from typing import Optional
from urllib.parse import quote

from bs4 import BeautifulSoup

from core.config import settings
from core.schemas import FetchResult
from core.utils.numbers import is_number, parse_locale_number
from sources.base import BaseSourceClient, SourceDataError, SourceError, SourceParseError


PRICE_SELECTOR = "div.YMlKec.fxKbKc"


class GoogleFinanceClient(BaseSourceClient):
    """
    Quote page adapter.

    Example:
        >>> async with GoogleFinanceClient() as client:
        ...     dolar = await client.get_price("USD-BRL")
        ...     ivv = await client.get_price("IVV", ":NYSEARCA")
    """

    name = "google_finance"

    def __init__(
        self,
        base_url: Optional[str] = None,
        language: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        super().__init__(timeout=timeout)
        self.base_url = (base_url or settings.quote_page_base_url).rstrip("/")
        self.language = language or settings.quote_page_language

    def build_url(self, symbol: str, market_suffix: str = "") -> str:
        """
        Build the quote page URL.

        Example:
            >>> GoogleFinanceClient(base_url="https://www.google.com/finance").build_url("IVV", ":NYSEARCA")
            'https://www.google.com/finance/quote/IVV:NYSEARCA'
        """
        return f"{self.base_url}/quote/{quote(symbol, safe='')}{market_suffix}"

    @property
    def headers(self) -> dict:
        return {
            "User-Agent": "Mozilla/5.0",
            "Accept-Language": self.language,
        }

    async def get_price(self, symbol: str, market_suffix: str = "") -> FetchResult:
        """
        Fetch the current price shown on the quote page.

        Args:
            symbol: Ticker ("ITSA4") or pair identifier ("USD-BRL")
            market_suffix: Exchange qualifier (":BVMF", ":NYSEARCA") or "" for pairs

        Returns:
            FetchResult with the price on success. Network failures,
            non-200 responses, a missing price element and unparsable or
            zero prices all produce a failed result.
        """
        url = self.build_url(symbol, market_suffix)
        try:
            html = await self._get(url, params={"hl": self.language}, headers=self.headers)
            price = self.extract_price(html)
        except SourceError as exc:
            return self._failed(f"price for {symbol}{market_suffix}", exc)

        self.logger.debug(f"Price for {symbol}{market_suffix}: {price}")
        return FetchResult.success(price)

    @staticmethod
    def extract_price(html: str) -> float:
        """
        Extract and parse the price from a quote page document.

        Raises:
            SourceDataError: If the price element is not present
            SourceParseError: If its text is not a usable price
        """
        soup = BeautifulSoup(html, "html.parser")
        node = soup.select_one(PRICE_SELECTOR)
        if node is None:
            raise SourceDataError(f"No element matching {PRICE_SELECTOR!r}")

        text = node.get_text().strip()
        value = parse_locale_number(text)
        # A zero price is a placeholder, never a real quote
        if not is_number(value) or value == 0:
            raise SourceParseError(f"Unusable price text {text!r}")
        return value
