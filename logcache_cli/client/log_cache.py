"""HTTP client for the log-cache read and meta APIs."""

import asyncio
from typing import Dict, List, Optional
from urllib.parse import quote

import aiohttp

from ..config.schema import EndpointConfig
from ..core.constants import TailDefaults
from ..core.envelopes import Envelope
from ..core.exceptions import (
    RequestTimeoutError,
    UnexpectedStatusError,
    UnreachableError,
)
from ..core.types import MetaInfo
from ..io.envelope_decoder import EnvelopeDecoder
from ..io.logger import get_logger
from ..io.meta_decoder import decode_meta

logger = get_logger("log_cache_client")


class LogCacheClient:
    """Performs single windowed reads against log-cache.

    Use as an async context manager so one HTTP session is shared by every
    poll of a tail session::

        async with LogCacheClient(endpoint, timeout=5.0) as client:
            envelopes = await client.read("source-id")
    """

    def __init__(
        self,
        endpoint: EndpointConfig,
        timeout: float = TailDefaults.REQUEST_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            endpoint: Resolved address and authentication settings
            timeout: Per-request deadline in seconds
            session: Optional externally managed session
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "LogCacheClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def headers(self) -> Dict[str, str]:
        if self.endpoint.skip_auth or not self.endpoint.access_token:
            return {}
        return {"Authorization": self.endpoint.access_token}

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def read(
        self,
        source_id: str,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
        descending: bool = False,
    ) -> List[Envelope]:
        """Read one window of envelopes for a source.

        Args:
            source_id: Source to read
            start_time: Inclusive lower bound in ns; None asks for the most
                recent window
            end_time: Optional exclusive upper bound in ns
            limit: Optional maximum number of envelopes
            descending: Ask the server for newest-first results

        Returns:
            Envelopes in server order

        Raises:
            UnreachableError: Transport failure or non-success status
            RequestTimeoutError: The request exceeded its deadline
            MalformedResponseError: The body could not be decoded
        """
        params: Dict[str, str] = {}
        if start_time is not None:
            params["start_time"] = str(start_time)
        if end_time is not None:
            params["end_time"] = str(end_time)
        if limit is not None:
            params["limit"] = str(limit)
        if descending:
            params["descending"] = "true"

        url = f"{self.endpoint.addr}/v1/read/{quote(source_id, safe='')}"
        body = await self._get(url, params)
        envelopes = EnvelopeDecoder.decode(body)
        logger.debug(f"Read {len(envelopes)} envelope(s) from {source_id}")
        return envelopes

    async def meta(self) -> Dict[str, MetaInfo]:
        """Fetch cache metadata for every source."""
        body = await self._get(f"{self.endpoint.addr}/v1/meta", {})
        return decode_meta(body)

    async def _get(self, url: str, params: Dict[str, str]) -> bytes:
        """Issue a GET bounded by the per-request timeout."""
        session = self._get_session()
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        logger.debug(f"GET {url} {params}")

        try:
            async with session.get(
                url, params=params, headers=self.headers, timeout=timeout
            ) as response:
                body = await response.read()
                if response.status >= 400:
                    raise UnexpectedStatusError(
                        url, response.status, body.decode("utf-8", errors="replace")
                    )
                return body
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(url, self.timeout) from e
        except aiohttp.ClientError as e:
            raise UnreachableError(url, str(e) or type(e).__name__) from e
