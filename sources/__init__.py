"""
Quote Sources Package

Adapters for the upstream data sources. Each adapter wraps one endpoint
behind a uniform contract: it returns a FetchResult and never raises for
upstream problems.

- google_finance.py: current price scraped from quote pages
- brapi.py: previous session close for listed instruments
- bcb.py: SELIC policy rate
- base.py: shared aiohttp session handling and error translation
"""

from sources.base import BaseSourceClient
from sources.bcb import BcbClient
from sources.brapi import BrapiClient
from sources.google_finance import GoogleFinanceClient

__all__ = ["BaseSourceClient", "BcbClient", "BrapiClient", "GoogleFinanceClient"]
