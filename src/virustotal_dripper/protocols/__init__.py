# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable collaborators.

Available protocols:
- FileReaderProtocol: Interface for reading upload payloads by name

Default implementations:
- PathFileReader: Reads from the local filesystem
"""

from .file_reader import FileReaderProtocol, PathFileReader

__all__ = ["FileReaderProtocol", "PathFileReader"]
