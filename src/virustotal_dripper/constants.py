# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Endpoint table for the VirusTotal v2 API.

The table is static and read-only. Paths are relative to ``API_PATH`` on
``API_HOST``; the HTTP layer joins them onto its base URL.
"""

from dataclasses import dataclass

LIB_VERSION = "1.0.0"

API_HOST = "www.virustotal.com"
API_PATH = "/vtapi/v2"
DEFAULT_BASE_URL = f"https://{API_HOST}{API_PATH}"

USER_AGENT = f"Python virustotal-dripper/{LIB_VERSION} - VirusTotal API library"

MAX_PUBLIC_FILESIZE = 32_000_000  # 32MB
MAX_PRIVATE_FILESIZE = 200_000_000  # 200MB


@dataclass(frozen=True)
class FileEndpoints:
    REPORT: str = "/file/report"
    SCAN: str = "/file/scan"
    UPLOAD_URL: str = "/file/scan/upload_url"
    RESCAN: str = "/file/rescan"
    DOWNLOAD: str = "/file/download"
    BEHAVIOUR: str = "/file/behaviour"
    TRAFFIC: str = "/file/network-traffic"
    FEED: str = "/file/feed"
    CLUSTERS: str = "/file/clusters"
    SEARCH: str = "/file/search"


@dataclass(frozen=True)
class UrlEndpoints:
    REPORT: str = "/url/report"
    SCAN: str = "/url/scan"
    SEARCH: str = "/url/search"


@dataclass(frozen=True)
class DomainEndpoints:
    REPORT: str = "/domain/report"


@dataclass(frozen=True)
class IpEndpoints:
    REPORT: str = "/ip-address/report"


@dataclass(frozen=True)
class CommentEndpoints:
    GET: str = "/comments/get"
    PUT: str = "/comments/put"


@dataclass(frozen=True)
class ApiEndpoints:
    """
    Immutable endpoint table plus the two upload size thresholds.

    Attributes:
        standard_limit: Largest payload (bytes) accepted by the direct scan endpoint
        extended_limit: Largest payload (bytes) accepted via a one-time upload URL
    """

    FILES: FileEndpoints = FileEndpoints()
    URLS: UrlEndpoints = UrlEndpoints()
    DOMAIN: DomainEndpoints = DomainEndpoints()
    IP: IpEndpoints = IpEndpoints()
    COMMENTS: CommentEndpoints = CommentEndpoints()
    standard_limit: int = MAX_PUBLIC_FILESIZE
    extended_limit: int = MAX_PRIVATE_FILESIZE


API = ApiEndpoints()


__all__ = [
    "API",
    "API_HOST",
    "API_PATH",
    "DEFAULT_BASE_URL",
    "LIB_VERSION",
    "MAX_PRIVATE_FILESIZE",
    "MAX_PUBLIC_FILESIZE",
    "USER_AGENT",
    "ApiEndpoints",
    "CommentEndpoints",
    "DomainEndpoints",
    "FileEndpoints",
    "IpEndpoints",
    "UrlEndpoints",
]
