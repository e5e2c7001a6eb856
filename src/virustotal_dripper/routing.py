# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Size-based routing for file uploads.

Payloads up to the standard limit go straight to the scan endpoint. Larger
payloads are only accepted in extended mode, where they are posted to a
one-time upload URL obtained first. Anything over the extended limit is
refused before any request is made.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .constants import API, ApiEndpoints
from .exceptions import HttpError, ModeError, SizeExceededError
from .scheduler.dispatcher import Dispatcher
from .types.request import HttpMethod, ParamValue, RequestDescriptor, UploadFile
from .types.response import ApiResponse

logger = logging.getLogger(__name__)


class UploadRoute(Enum):
    """How a payload reaches the scanner."""

    DIRECT = "direct"
    """One step: POST to the scan endpoint."""

    UPLOAD_URL = "upload_url"
    """Two steps: GET a one-time upload URL, then POST to it."""


@dataclass(frozen=True)
class UploadPlan:
    """
    Routing decision for one payload.

    Attributes:
        route: DIRECT or UPLOAD_URL
        size: Payload size in bytes
        scan_path: Endpoint for the DIRECT route
        upload_url_path: Endpoint that hands out upload URLs (UPLOAD_URL route)
    """

    route: UploadRoute
    size: int
    scan_path: str
    upload_url_path: str

    @property
    def steps(self) -> int:
        return 2 if self.route is UploadRoute.UPLOAD_URL else 1


def plan_upload(
    size: int, extended_mode: bool, endpoints: ApiEndpoints = API
) -> UploadPlan:
    """
    Decide how a payload of ``size`` bytes is uploaded.

    Raises:
        SizeExceededError: Over the extended limit in any mode, or over the
            standard limit outside extended mode
    """
    if size > endpoints.extended_limit:
        raise SizeExceededError(size, endpoints.extended_limit)
    if size > endpoints.standard_limit and not extended_mode:
        raise SizeExceededError(size, endpoints.standard_limit)

    route = (
        UploadRoute.UPLOAD_URL
        if size > endpoints.standard_limit
        else UploadRoute.DIRECT
    )
    return UploadPlan(
        route=route,
        size=size,
        scan_path=endpoints.FILES.SCAN,
        upload_url_path=endpoints.FILES.UPLOAD_URL,
    )


class UploadRouter:
    """
    Carries out upload plans through the dispatcher.

    Both steps of a two-step upload are separate dispatcher jobs and each
    counts against the quota.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        extended_mode: bool,
        endpoints: ApiEndpoints = API,
    ) -> None:
        self.dispatcher = dispatcher
        self.extended_mode = extended_mode
        self.endpoints = endpoints

    def plan(self, content: bytes) -> UploadPlan:
        return plan_upload(len(content), self.extended_mode, self.endpoints)

    async def get_upload_url(self, expedited: bool = False) -> str:
        """
        Obtain a one-time upload URL for payloads over the standard limit.

        Raises:
            ModeError: The router is not in extended mode
            HttpError: The response carried no ``upload_url``
        """
        if not self.extended_mode:
            raise ModeError("get_upload_url")

        path = self.endpoints.FILES.UPLOAD_URL
        response = await self.dispatcher.dispatch(
            RequestDescriptor(HttpMethod.GET, path), expedited=expedited
        )
        payload = response.payload
        upload_url = payload.get("upload_url") if isinstance(payload, dict) else None
        if not upload_url:
            raise HttpError(
                f"Response from {path} has no upload_url",
                response.status_code,
                path,
                payload=payload if isinstance(payload, dict) else None,
            )
        return str(upload_url)

    async def upload(
        self,
        content: bytes,
        filename: str = "file",
        params: dict[str, ParamValue] | None = None,
        expedited: bool = False,
    ) -> ApiResponse:
        """
        Upload a payload for scanning along the route chosen by ``plan``.

        Raises:
            SizeExceededError: Before any request, if the payload is too large
        """
        plan = self.plan(content)
        if plan.route is UploadRoute.UPLOAD_URL:
            target = await self.get_upload_url(expedited=expedited)
        else:
            target = plan.scan_path

        logger.debug(f"Uploading {plan.size} bytes via {plan.route.value} route")
        return await self.dispatcher.dispatch(
            RequestDescriptor(
                HttpMethod.POST,
                target,
                dict(params or {}),
                UploadFile(filename=filename, content=content),
            ),
            expedited=expedited,
        )


__all__ = ["UploadPlan", "UploadRoute", "UploadRouter", "plan_upload"]
