# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
VirusTotalClient: named API operations over the rate-limited dispatcher.

Every method forwards a fixed parameter shape into ``api_request`` (or the
upload router) and returns the parsed response body.
"""

import logging
import os
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx
from prometheus_client import CollectorRegistry
from typing_extensions import Self

from .config import ClientConfig
from .constants import API, ApiEndpoints
from .observability.collector import MetricsCollector
from .protocols.file_reader import FileReaderProtocol, PathFileReader
from .routing import UploadRouter
from .scheduler.admission import AdmissionQueue
from .scheduler.dispatcher import Dispatcher
from .transport.executor import RequestExecutor
from .types.request import HttpMethod, ParamValue, RequestDescriptor

logger = logging.getLogger(__name__)


class VirusTotalClient:
    """
    Client for the VirusTotal v2 API with client-side quota enforcement.

    Args:
        api_key: The VirusTotal API key, attached to every request
        config: ClientConfig, or a mapping of options (``extendedMode``,
            ``quotaCapacity``, ``quotaWindowMs``, ``assumedLatencyMs``, ...)
        endpoints: Endpoint table and size limits
        file_reader: Collaborator used by ``scan_path``
        http_client: Optional pre-built httpx client
        metrics_registry: Prometheus registry for this client's counters.
            Defaults to a private registry.

    Example:
        >>> async with VirusTotalClient(key, {"quotaCapacity": 4}) as vt:
        ...     report = await vt.get_file_report(sha256)
    """

    def __init__(
        self,
        api_key: str,
        config: ClientConfig | Mapping[str, Any] | None = None,
        *,
        endpoints: ApiEndpoints = API,
        file_reader: FileReaderProtocol | None = None,
        http_client: httpx.AsyncClient | None = None,
        metrics_registry: CollectorRegistry | None = None,
    ) -> None:
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_options(config)

        self.config = config
        self.endpoints = endpoints
        self.file_reader: FileReaderProtocol = file_reader or PathFileReader()
        self.metrics = MetricsCollector(
            registry=metrics_registry or CollectorRegistry(),
            enabled=config.metrics_enabled,
        )

        self.queue = AdmissionQueue(
            capacity=config.quota_capacity,
            window_ms=config.quota_window_ms,
            latency_ms=config.assumed_latency_ms,
            metrics=self.metrics,
        )
        self.executor = RequestExecutor(
            api_key,
            base_url=config.base_url,
            timeout=config.request_timeout,
            http_client=http_client,
        )
        self.dispatcher = Dispatcher(self.queue, self.executor, metrics=self.metrics)
        self.uploads = UploadRouter(
            self.dispatcher, config.extended_mode, endpoints=endpoints
        )

        logger.info(
            f"Initialized {self.__class__.__name__} "
            f"(extended_mode={config.extended_mode}, "
            f"quota={config.quota_capacity}/{config.quota_window_ms}ms)"
        )

    @property
    def extended_mode(self) -> bool:
        return self.config.extended_mode

    async def api_request(
        self,
        method: str | HttpMethod,
        path: str,
        params: Mapping[str, ParamValue] | None = None,
        expedited: bool = False,
    ) -> Any:
        """
        Make a rate-limited API request and return the parsed body.

        Args:
            method: "GET" or "POST"
            path: Endpoint path relative to the API base (do not include /vtapi/v2)
            params: URL parameters for GET, body parameters for POST. The API
                key is included automatically.
            expedited: Jump ahead of requests still waiting in the queue
        """
        descriptor = RequestDescriptor(
            HttpMethod.parse(method), path, dict(params or {})
        )
        response = await self.dispatcher.dispatch(descriptor, expedited=expedited)
        return response.payload

    # Files

    async def get_file_report(self, resource: str, all_info: bool = False) -> Any:
        """
        Get a report of a file.

        Args:
            resource: MD5, SHA-1 or SHA-256 of the file, or a scan id
            all_info: Request additional information (extended mode only)
        """
        return await self.api_request(
            "GET",
            self.endpoints.FILES.REPORT,
            {"resource": resource, "allinfo": all_info},
        )

    async def scan_file(
        self, content: bytes, filename: str = "file", expedited: bool = False
    ) -> Any:
        """Upload raw bytes for scanning, routed by size."""
        response = await self.uploads.upload(
            content, filename=filename, expedited=expedited
        )
        return response.payload

    async def scan_path(self, name: str | os.PathLike[str], expedited: bool = False) -> Any:
        """Read a named file through the file reader and upload it for scanning."""
        content = await self.file_reader.read(name)
        return await self.scan_file(
            content, filename=os.path.basename(os.fspath(name)), expedited=expedited
        )

    async def get_upload_url(self) -> str:
        """Obtain a one-time upload URL for files over the standard size limit."""
        return await self.uploads.get_upload_url()

    async def rescan_file(self, resource: str) -> Any:
        return await self.api_request(
            "POST", self.endpoints.FILES.RESCAN, {"resource": resource}
        )

    async def get_file_behaviour(self, resource: str) -> Any:
        return await self.api_request(
            "GET", self.endpoints.FILES.BEHAVIOUR, {"hash": resource}
        )

    async def get_file_network_traffic(self, resource: str) -> Any:
        return await self.api_request(
            "GET", self.endpoints.FILES.TRAFFIC, {"hash": resource}
        )

    async def search_files(self, query: str, offset: str | None = None) -> Any:
        params: dict[str, ParamValue] = {"query": query}
        if offset:
            params["offset"] = offset
        return await self.api_request("GET", self.endpoints.FILES.SEARCH, params)

    async def get_file_clusters(self, date: str) -> Any:
        """Clustering for a given day, formatted YYYY-MM-DD."""
        return await self.api_request(
            "GET", self.endpoints.FILES.CLUSTERS, {"date": date}
        )

    # URLs, domains, IPs

    async def get_url_report(self, resource: str, scan: bool = False) -> Any:
        """
        Get a report of a URL.

        Args:
            resource: The URL or a scan id
            scan: Submit the URL for scanning if no report exists
        """
        return await self.api_request(
            "GET", self.endpoints.URLS.REPORT, {"resource": resource, "scan": scan}
        )

    async def scan_url(self, url: str) -> Any:
        return await self.api_request("POST", self.endpoints.URLS.SCAN, {"url": url})

    async def get_domain_report(self, domain: str) -> Any:
        return await self.api_request(
            "GET", self.endpoints.DOMAIN.REPORT, {"domain": domain}
        )

    async def get_ip_report(self, ip: str) -> Any:
        return await self.api_request("GET", self.endpoints.IP.REPORT, {"ip": ip})

    # Comments

    async def get_comments(self, resource: str, before: str | None = None) -> Any:
        params: dict[str, ParamValue] = {"resource": resource}
        if before:
            params["before"] = before
        return await self.api_request("GET", self.endpoints.COMMENTS.GET, params)

    async def put_comment(self, resource: str, comment: str) -> Any:
        return await self.api_request(
            "POST",
            self.endpoints.COMMENTS.PUT,
            {"resource": resource, "comment": comment},
        )

    def get_metrics(self) -> dict[str, Any]:
        """Queue state plus counter values."""
        snapshot = self.queue.snapshot()
        return {
            "pending": snapshot.pending,
            "consumed": snapshot.consumed,
            "capacity": snapshot.capacity,
            "active": self.dispatcher.active_count,
            "counters": self.metrics.get_metrics(),
        }

    async def aclose(self) -> None:
        """
        Shut the client down.

        Requests still waiting for quota fail with ClientClosedError, requests
        already sent are awaited, and the HTTP client is closed if this client
        created it.
        """
        await self.dispatcher.aclose()
        await self.executor.aclose()
        logger.info(f"Closed {self.__class__.__name__}")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


__all__ = ["VirusTotalClient"]
