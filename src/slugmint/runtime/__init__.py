# SPDX-License-Identifier: MIT
"""Runtime configuration and wiring."""

from .environment import RuntimeEnv
from .settings import Settings, load_settings

__all__ = ["RuntimeEnv", "Settings", "load_settings"]
