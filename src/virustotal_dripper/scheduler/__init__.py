# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request scheduling for the VirusTotal dripper.

This module provides:
- AdmissionQueue: windowed leaky-bucket queue that releases jobs under quota
- Dispatcher: wraps each API call as a job and hands back its outcome
"""

from .admission import AdmissionQueue
from .dispatcher import Dispatcher

__all__ = ["AdmissionQueue", "Dispatcher"]
