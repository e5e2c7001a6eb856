# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for reading upload payloads from a named resource."""

import asyncio
import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileReaderProtocol(Protocol):
    """
    Protocol for the collaborator that turns a resource name into bytes.

    The client never touches the filesystem itself; ``scan_path`` delegates
    to an implementation of this protocol.
    """

    async def read(self, name: str | os.PathLike[str]) -> bytes:
        """Return the full contents of the named resource."""
        ...


class PathFileReader:
    """Reads local files in a worker thread so the event loop is not blocked."""

    async def read(self, name: str | os.PathLike[str]) -> bytes:
        return await asyncio.to_thread(Path(name).read_bytes)
