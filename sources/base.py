"""
Base HTTP Source Client

Shared plumbing for every upstream data source:
- aiohttp session lifecycle (async context manager or initialize/shutdown)
- A single GET helper with a finite timeout and no retries
- Translation of transport / status / decoding problems into SourceError

SourceError subclasses are internal to the sources package. Each public
adapter method catches them and returns a FetchResult, so nothing raised
here ever reaches the scheduler or the cache.

Usage:
    class MySource(BaseSourceClient):
        name = "mysource"

        async def get_value(self) -> FetchResult:
            try:
                data = await self._get("https://example.com/value.json", as_json=True)
                ...
            except SourceError as exc:
                return self._failed("value", exc)
"""

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp

from core.config import settings
from core.logging import get_logger, log_api_request, log_api_response
from core.schemas import FetchOutcome, FetchResult


# ============================================
# Source Errors
# ============================================

class SourceError(Exception):
    """Base class for upstream failures; carries the FetchOutcome it maps to."""

    outcome: FetchOutcome = FetchOutcome.TRANSPORT_ERROR


class SourceTransportError(SourceError):
    """Network failure, DNS error or timeout."""

    outcome = FetchOutcome.TRANSPORT_ERROR


class SourceHTTPError(SourceError):
    """Upstream answered with a non-success status."""

    outcome = FetchOutcome.HTTP_ERROR

    def __init__(self, status: int, url: str):
        super().__init__(f"HTTP {status} on {url}")
        self.status = status


class SourceDataError(SourceError):
    """Expected field or markup is absent from the response."""

    outcome = FetchOutcome.MISSING_DATA


class SourceParseError(SourceError):
    """Response body or value could not be decoded into a usable number."""

    outcome = FetchOutcome.PARSE_ERROR


# ============================================
# Base Client
# ============================================

class BaseSourceClient:
    """
    Async HTTP client base for quote sources.

    Attributes:
        name: Short source identifier used in logs
        timeout: Total request timeout in seconds
        session: aiohttp ClientSession (None until initialized)

    Notes:
        - One attempt per call; pacing and cadence are the scheduler's job
        - A client may be used as ``async with Client() as c`` or kept open
          for the process lifetime via ``initialize()`` / ``shutdown()``
    """

    name: str = "source"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.logger = get_logger(self.__class__.__module__)
        self.session: Optional[aiohttp.ClientSession] = None

    # ============================================
    # Session Management
    # ============================================

    async def initialize(self) -> None:
        """Create the HTTP session if it does not exist yet."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self.logger.debug(f"{self.__class__.__name__} session created")

    async def shutdown(self) -> None:
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.debug(f"{self.__class__.__name__} session closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()

    # ============================================
    # HTTP Request Handler
    # ============================================

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        as_json: bool = False
    ) -> Any:
        """
        Perform a single GET request.

        Args:
            url: Absolute URL
            params: Optional query parameters
            headers: Optional request headers
            as_json: Decode the body as JSON instead of returning text

        Returns:
            Decoded JSON (as_json=True) or the response text

        Raises:
            SourceTransportError: No open session, network failure or timeout
            SourceHTTPError: Non-200 status
            SourceParseError: Body is not valid JSON when JSON was requested
        """
        if not self.session:
            raise SourceTransportError("Client session not initialized. Use 'async with' statement.")

        log_api_request(self.name, url, params)
        started = time.monotonic()

        try:
            async with self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                log_api_response(self.name, url, resp.status, time.monotonic() - started)

                if resp.status != 200:
                    raise SourceHTTPError(resp.status, url)

                try:
                    if as_json:
                        return await resp.json(content_type=None)
                    return await resp.text()
                except ValueError as e:
                    raise SourceParseError(f"Undecodable body from {url}: {e}") from e

        except SourceError:
            raise
        except asyncio.TimeoutError as e:
            raise SourceTransportError(f"Timeout after {self.timeout}s on {url}") from e
        except aiohttp.ClientError as e:
            raise SourceTransportError(f"Request failed on {url}: {e}") from e

    def _failed(self, what: str, exc: SourceError) -> FetchResult:
        """Log a failed lookup and convert it to a FetchResult."""
        self.logger.warning(f"{self.name}: {what} unavailable ({exc.outcome.value}): {exc}")
        return FetchResult.failure(exc.outcome, str(exc))
