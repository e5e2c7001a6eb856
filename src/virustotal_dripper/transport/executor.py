# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request executor: one HTTP exchange per call, fully read, then classified.

GET requests carry the API key and parameters in the query string. POST
requests carry them form-encoded in the body, or as multipart form fields
next to the file part when the descriptor holds an upload.
"""

import logging
from types import TracebackType

import httpx
from typing_extensions import Self

from ..constants import DEFAULT_BASE_URL, USER_AGENT
from ..exceptions import ClientClosedError, ResponseError, TransportError
from ..types.request import HttpMethod, ParamValue, RequestDescriptor
from ..types.response import ApiResponse
from .classifier import classify_response

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_param(value: ParamValue) -> str:
    """Render a parameter value the way the API expects (booleans lower-case)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestExecutor:
    """
    Performs and classifies single API exchanges.

    The executor knows nothing about queueing; the dispatcher decides when
    ``execute`` runs.

    Args:
        api_key: Key attached to every request as ``apikey``
        base_url: URL that relative descriptor paths are joined onto
        timeout: Timeout for one exchange in seconds
        http_client: Optional pre-built client (tests pass one wrapping
            ``httpx.MockTransport``). A client passed in is not closed by
            ``aclose``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key must be a non-empty string")
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    def build_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        """Translate a descriptor into an httpx request with the API key attached."""
        params = {"apikey": self._api_key}
        params.update({k: encode_param(v) for k, v in descriptor.params.items()})

        if descriptor.method is HttpMethod.GET:
            return self._client.build_request("GET", descriptor.path, params=params)

        if descriptor.upload is not None:
            return self._client.build_request(
                "POST",
                descriptor.path,
                data=params,
                files={
                    "file": (descriptor.upload.filename, descriptor.upload.content)
                },
            )

        return self._client.build_request(
            "POST",
            descriptor.path,
            data=params,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    async def execute(self, descriptor: RequestDescriptor) -> ApiResponse:
        """
        Perform one exchange and classify it.

        Returns:
            ApiResponse with the parsed body

        Raises:
            ClientClosedError: The HTTP client has already been closed
            TransportError: The exchange failed at the network level
            NotFoundOrInvalidError: 200 with ``response_code`` 0
            ForbiddenError: HTTP 403
            NotFoundError: HTTP 404
            HttpError: Any other unsuccessful status, or a non-JSON 200 body
        """
        if self._client.is_closed:
            raise ClientClosedError(descriptor.path)

        request = self.build_request(descriptor)
        logger.debug(f"{descriptor.method.value} {descriptor.path}")

        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(
                f"{descriptor.method.value} {descriptor.path} failed: {e}",
                descriptor.path,
            ) from e

        body = response.content.decode("utf-8", errors="replace")
        outcome = classify_response(response.status_code, descriptor.path, body)
        if isinstance(outcome, ResponseError):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


__all__ = ["FORM_CONTENT_TYPE", "RequestExecutor", "encode_param"]
