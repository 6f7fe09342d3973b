"""Batched source-name lookups against the Cloud Controller API."""

import asyncio
import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

import aiohttp

from ..config.schema import EndpointConfig
from ..core.constants import MetaDefaults
from ..core.exceptions import (
    MalformedResponseError,
    RequestTimeoutError,
    UnexpectedStatusError,
    UnreachableError,
)
from ..core.types import Source
from ..io.logger import get_logger

logger = get_logger("cloud_controller")


def batched(items: Sequence[str], size: int) -> Iterable[List[str]]:
    """Yield consecutive slices of at most ``size`` items."""
    for offset in range(0, len(items), size):
        yield list(items[offset : offset + size])


class CloudControllerClient:
    """Resolves source ids to application and service instance names."""

    def __init__(
        self,
        endpoint: EndpointConfig,
        timeout: float = MetaDefaults.REQUEST_TIMEOUT,
        batch_size: int = MetaDefaults.NAME_BATCH_SIZE,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.batch_size = batch_size
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "CloudControllerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def resolve(self, source_ids: Iterable[str]) -> List[Source]:
        """Resolve names for source ids.

        Application names are looked up first; the ids left over are then
        looked up as service instances. Ids matching neither are omitted.

        Args:
            source_ids: Source ids to resolve

        Returns:
            Sources with names, applications first
        """
        remaining = list(dict.fromkeys(source_ids))
        if not remaining:
            return []

        apps = await self.get_apps(remaining)
        resolved = {source.guid for source in apps}
        leftover = [source_id for source_id in remaining if source_id not in resolved]
        services = await self.get_service_instances(leftover)

        logger.debug(
            f"Resolved {len(apps)} application(s) and "
            f"{len(services)} service instance(s) from {len(remaining)} id(s)"
        )
        return apps + services

    async def get_apps(self, guids: Sequence[str]) -> List[Source]:
        """Look up ``/v3/apps`` in batches."""
        sources = []
        for batch in batched(guids, self.batch_size):
            data = await self._get_json("/v3/apps", {"guids": ",".join(batch)})
            for resource in _resources(data):
                try:
                    sources.append(Source(guid=resource["guid"], name=resource["name"]))
                except (KeyError, TypeError) as e:
                    raise MalformedResponseError(f"application missing field {e}") from e
        return sources

    async def get_service_instances(self, guids: Sequence[str]) -> List[Source]:
        """Look up ``/v2/service_instances`` in batches."""
        sources = []
        for batch in batched(guids, self.batch_size):
            data = await self._get_json(
                "/v2/service_instances", {"guids": ",".join(batch)}
            )
            for resource in _resources(data):
                try:
                    sources.append(
                        Source(
                            guid=resource["metadata"]["guid"],
                            name=resource["entity"]["name"],
                        )
                    )
                except (KeyError, TypeError) as e:
                    raise MalformedResponseError(
                        f"service instance missing field {e}"
                    ) from e
        return sources

    async def _get_json(self, path: str, params: Dict[str, str]) -> Any:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

        url = f"{self.endpoint.api_addr}{path}"
        headers = {}
        if not self.endpoint.skip_auth and self.endpoint.access_token:
            headers["Authorization"] = self.endpoint.access_token

        try:
            async with self._session.get(
                url,
                params=params,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                body = await response.text()
                if response.status >= 400:
                    raise UnexpectedStatusError(url, response.status, body)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(url, self.timeout) from e
        except aiohttp.ClientError as e:
            raise UnreachableError(url, str(e) or type(e).__name__) from e

        try:
            return json.loads(body) if body.strip() else {}
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"invalid JSON from {url}: {e}") from e


def _resources(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, dict):
        raise MalformedResponseError("expected a JSON object")
    resources = data.get("resources") or []
    if not isinstance(resources, list):
        raise MalformedResponseError("'resources' is not a list")
    return [r for r in resources if isinstance(r, dict)]
