# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration for the VirusTotal dripper.

The recognized options mirror the client-facing surface: operating mode,
quota shape, and the assumed network latency used to pad request spacing.
Options may be given in snake_case or in the camelCase spelling
(``extendedMode``, ``quotaCapacity``, ``quotaWindowMs``, ``assumedLatencyMs``).
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_BASE_URL
from .exceptions import ConfigurationError


class ClientConfig(BaseModel):
    """
    Configuration for a VirusTotalClient.

    The defaults match the public API quota of 4 requests per minute.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    extended_mode: bool = False
    """Use the private API: larger uploads via one-time upload URLs."""

    quota_capacity: int = Field(default=4, gt=0)
    """Maximum requests released per quota window."""

    quota_window_ms: int = Field(default=60_000, gt=0)
    """Length of the quota window in milliseconds."""

    assumed_latency_ms: int = Field(default=0, ge=0)
    """Network latency in milliseconds added on top of request spacing."""

    request_timeout: float = Field(default=30.0, gt=0)
    """Timeout for a single HTTP exchange in seconds."""

    base_url: str = DEFAULT_BASE_URL
    """Base URL that endpoint paths are joined onto."""

    metrics_enabled: bool = True
    """Count submissions, releases and outcomes."""

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ClientConfig":
        """
        Build a config from a plain mapping of options.

        Raises:
            ConfigurationError: If any option is unknown or invalid
        """
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e


__all__ = ["ClientConfig"]
