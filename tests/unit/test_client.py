"""
Unit tests for VirusTotalClient, wired end to end over httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from virustotal_dripper import (
    ClientClosedError,
    ClientConfig,
    ConfigurationError,
    ForbiddenError,
    ModeError,
    NotFoundOrInvalidError,
    SizeExceededError,
    TransportError,
    VirusTotalClient,
    VirusTotalError,
)
from virustotal_dripper.constants import DEFAULT_BASE_URL, ApiEndpoints
from virustotal_dripper.observability import RESPONSES_TOTAL

API_KEY = "test-key"
FAST = {"quotaCapacity": 100, "quotaWindowMs": 1000}


class FakeService:
    """Scripted VirusTotal stand-in that records requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/vtapi/v2")
        if request.url.host == "upload.example":
            return httpx.Response(200, json={"response_code": 1, "scan_id": "big"})
        if path == "/file/report":
            resource = request.url.params["resource"]
            if resource == "unknown":
                return httpx.Response(200, json={"response_code": 0})
            return httpx.Response(200, json={"response_code": 1, "resource": resource})
        if path == "/file/scan":
            return httpx.Response(200, json={"response_code": 1, "scan_id": "small"})
        if path == "/file/scan/upload_url":
            return httpx.Response(200, json={"upload_url": "https://upload.example/u/1"})
        if path == "/file/behaviour":
            return httpx.Response(403)
        return httpx.Response(200, json={"response_code": 1, "path": path})


@pytest.fixture
def service():
    return FakeService()


def make_client(service, options=None, **kwargs):
    http_client = httpx.AsyncClient(
        base_url=DEFAULT_BASE_URL, transport=httpx.MockTransport(service)
    )
    return VirusTotalClient(
        API_KEY, {**FAST, **(options or {})}, http_client=http_client, **kwargs
    )


class MemoryReader:
    def __init__(self, files: dict[str, bytes]):
        self.files = files

    async def read(self, name: str) -> bytes:
        return self.files[name]


class TestConstruction:
    def test_mapping_config(self, service):
        client = make_client(service, {"extendedMode": True})
        assert client.extended_mode is True
        assert client.queue.capacity == 100
        assert client.queue.window_seconds == 1.0

    def test_config_object(self):
        client = VirusTotalClient(API_KEY, ClientConfig(quota_capacity=7))
        assert client.queue.capacity == 7

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            VirusTotalClient(API_KEY, {"quotaCapacity": -1})

    def test_clients_do_not_share_metric_registries(self):
        first = VirusTotalClient(API_KEY)
        second = VirusTotalClient(API_KEY)
        assert first.metrics is not second.metrics


class TestReports:
    @pytest.mark.asyncio
    async def test_get_file_report(self, service):
        async with make_client(service) as client:
            report = await client.get_file_report("abc123")

        assert report == {"response_code": 1, "resource": "abc123"}
        params = service.requests[0].url.params
        assert params["apikey"] == API_KEY
        assert params["allinfo"] == "false"

    @pytest.mark.asyncio
    async def test_unknown_resource(self, service):
        async with make_client(service) as client:
            with pytest.raises(NotFoundOrInvalidError):
                await client.get_file_report("unknown")

    @pytest.mark.asyncio
    async def test_forbidden_endpoint(self, service):
        async with make_client(service) as client:
            with pytest.raises(ForbiddenError):
                await client.get_file_behaviour("abc123")

    @pytest.mark.asyncio
    async def test_named_methods_hit_their_endpoints(self, service):
        async with make_client(service) as client:
            await client.get_url_report("http://example.com", scan=True)
            await client.scan_url("http://example.com")
            await client.get_domain_report("example.com")
            await client.get_ip_report("192.0.2.1")
            await client.get_comments("abc", before="20240101T000000")
            await client.put_comment("abc", "looks clean")
            await client.rescan_file("abc")
            await client.get_file_network_traffic("abc")
            await client.search_files("type:peexe", offset="o1")
            await client.get_file_clusters("2024-01-01")

        seen = [
            (r.method, r.url.path.removeprefix("/vtapi/v2")) for r in service.requests
        ]
        assert seen == [
            ("GET", "/url/report"),
            ("POST", "/url/scan"),
            ("GET", "/domain/report"),
            ("GET", "/ip-address/report"),
            ("GET", "/comments/get"),
            ("POST", "/comments/put"),
            ("POST", "/file/rescan"),
            ("GET", "/file/network-traffic"),
            ("GET", "/file/search"),
            ("GET", "/file/clusters"),
        ]
        assert service.requests[0].url.params["scan"] == "true"
        assert service.requests[4].url.params["before"] == "20240101T000000"

    @pytest.mark.asyncio
    async def test_api_request_escape_hatch(self, service):
        async with make_client(service) as client:
            payload = await client.api_request("get", "/url/search", {"query": "q"})

        assert payload == {"response_code": 1, "path": "/url/search"}

    @pytest.mark.asyncio
    async def test_outcomes_counted(self, service):
        async with make_client(service) as client:
            await client.get_file_report("abc")
            with pytest.raises(NotFoundOrInvalidError):
                await client.get_file_report("unknown")

            metrics = client.get_metrics()

        counters = metrics["counters"][RESPONSES_TOTAL]
        assert counters["outcome=success"] == 1
        assert counters["outcome=not_found_or_invalid"] == 1
        assert metrics["pending"] == 0


class TestUploads:
    @pytest.mark.asyncio
    async def test_scan_file_small(self, service):
        async with make_client(service) as client:
            result = await client.scan_file(b"payload", filename="a.exe")

        assert result["scan_id"] == "small"
        assert service.requests[0].url.path == "/vtapi/v2/file/scan"

    @pytest.mark.asyncio
    async def test_scan_path_uses_file_reader(self, service):
        reader = MemoryReader({"/samples/a.exe": b"MZ"})
        async with make_client(service, file_reader=reader) as client:
            result = await client.scan_path("/samples/a.exe")

        assert result["scan_id"] == "small"
        assert b'filename="a.exe"' in service.requests[0].content

    @pytest.mark.asyncio
    async def test_large_upload_in_extended_mode(self, service):
        endpoints = ApiEndpoints(standard_limit=4, extended_limit=64)
        async with make_client(
            service, {"extendedMode": True}, endpoints=endpoints
        ) as client:
            result = await client.scan_file(b"0123456789")

        assert result["scan_id"] == "big"
        assert [str(r.url.host) for r in service.requests] == [
            "www.virustotal.com",
            "upload.example",
        ]

    @pytest.mark.asyncio
    async def test_large_upload_in_standard_mode(self, service):
        endpoints = ApiEndpoints(standard_limit=4, extended_limit=64)
        async with make_client(service, endpoints=endpoints) as client:
            with pytest.raises(SizeExceededError):
                await client.scan_file(b"0123456789")

        assert service.requests == []

    @pytest.mark.asyncio
    async def test_get_upload_url_standard_mode(self, service):
        async with make_client(service) as client:
            with pytest.raises(ModeError):
                await client.get_upload_url()

    @pytest.mark.asyncio
    async def test_get_upload_url_extended_mode(self, service):
        async with make_client(service, {"extendedMode": True}) as client:
            assert await client.get_upload_url() == "https://upload.example/u/1"


class TestClose:
    @pytest.mark.asyncio
    async def test_waiting_requests_fail_on_close(self, service):
        client = make_client(service, {"quotaCapacity": 1, "quotaWindowMs": 60_000})
        first = asyncio.create_task(client.get_file_report("first"))
        second = asyncio.create_task(client.get_file_report("second"))

        await first
        await client.aclose()

        with pytest.raises(ClientClosedError) as exc_info:
            await second
        assert isinstance(exc_info.value, TransportError)
        assert isinstance(exc_info.value, VirusTotalError)
        assert client.queue.pending_count == 0
        assert client.queue.wake_scheduled is False
        assert len(service.requests) == 1

    @pytest.mark.asyncio
    async def test_requests_after_close_fail(self, service):
        client = make_client(service)
        await client.aclose()

        with pytest.raises(ClientClosedError):
            await client.get_file_report("abc")
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_injected_http_client_left_open(self, service):
        http_client = httpx.AsyncClient(
            base_url=DEFAULT_BASE_URL, transport=httpx.MockTransport(service)
        )
        async with VirusTotalClient(API_KEY, FAST, http_client=http_client) as client:
            await client.get_domain_report("example.com")

        assert http_client.is_closed is False
        await http_client.aclose()
