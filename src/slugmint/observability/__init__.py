# SPDX-License-Identifier: MIT
"""Telemetry helpers."""

from .monitoring import init_logfire

__all__ = ["init_logfire"]
