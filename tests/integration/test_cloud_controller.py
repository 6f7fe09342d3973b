"""Test name resolution against a stub Cloud Controller."""

import pytest
from aiohttp import web

from logcache_cli.client import CloudControllerClient
from logcache_cli.client.cloud_controller import batched
from logcache_cli.config import EndpointConfig
from logcache_cli.core.exceptions import MalformedResponseError, UnexpectedStatusError
from logcache_cli.core.types import Source
from tests.fixtures.responses import apps_response, service_instances_response
from tests.fixtures.servers import stub_server, text_handler


def inventory_handler(apps, services):
    """Answer app and service lookups from the given guid -> name maps."""

    async def handler(request):
        guids = request.query.get("guids", "").split(",")
        if request.path == "/v3/apps":
            body = apps_response(
                [{"guid": g, "name": apps[g]} for g in guids if g in apps]
            )
        elif request.path == "/v2/service_instances":
            body = service_instances_response(
                [{"guid": g, "name": services[g]} for g in guids if g in services]
            )
        else:
            return web.Response(status=404)
        return web.Response(text=body, content_type="application/json")

    return handler


def endpoint(url):
    return EndpointConfig(addr=url, api_addr=url, access_token="bearer t")


class TestBatched:
    def test_splits_into_slices(self):
        assert list(batched(["a", "b", "c"], 2)) == [["a", "b"], ["c"]]

    def test_empty(self):
        assert list(batched([], 50)) == []


class TestCloudControllerClient:
    """Test CloudControllerClient.resolve."""

    @pytest.mark.asyncio
    async def test_apps_then_service_instances(self):
        handler = inventory_handler({"app-1": "my-app"}, {"svc-1": "my-db"})

        async with stub_server(handler) as (url, log):
            async with CloudControllerClient(endpoint(url)) as client:
                sources = await client.resolve(["app-1", "svc-1", "doppler"])

        assert sources == [Source("app-1", "my-app"), Source("svc-1", "my-db")]
        assert log.paths == ["/v3/apps", "/v2/service_instances"]
        assert log.queries[0] == {"guids": "app-1,svc-1,doppler"}
        assert log.queries[1] == {"guids": "svc-1,doppler"}
        assert log.requests[0]["headers"]["Authorization"] == "bearer t"

    @pytest.mark.asyncio
    async def test_batches_lookups(self):
        ids = [f"id-{i:03d}" for i in range(120)]
        handler = inventory_handler({}, {})

        async with stub_server(handler) as (url, log):
            async with CloudControllerClient(endpoint(url), batch_size=50) as client:
                assert await client.resolve(ids) == []

        app_queries = [
            q["guids"].split(",")
            for p, q in zip(log.paths, log.queries)
            if p == "/v3/apps"
        ]
        assert [len(batch) for batch in app_queries] == [50, 50, 20]
        assert log.paths.count("/v2/service_instances") == 3

    @pytest.mark.asyncio
    async def test_no_ids_no_requests(self):
        async with stub_server(inventory_handler({}, {})) as (url, log):
            async with CloudControllerClient(endpoint(url)) as client:
                assert await client.resolve([]) == []

        assert log.requests == []

    @pytest.mark.asyncio
    async def test_error_status(self):
        async with stub_server(text_handler("denied", status=403)) as (url, _):
            async with CloudControllerClient(endpoint(url)) as client:
                with pytest.raises(UnexpectedStatusError):
                    await client.resolve(["app-1"])

    @pytest.mark.asyncio
    async def test_malformed_resources(self):
        body = '{"resources": [{"guid": "app-1"}]}'
        async with stub_server(text_handler(body)) as (url, _):
            async with CloudControllerClient(endpoint(url)) as client:
                with pytest.raises(MalformedResponseError):
                    await client.resolve(["app-1"])
