"""
Config package for barque_console.

Responsible for:
- the ConsoleConfig model
- loading global.json
"""

from .model import ConsoleConfig
from .io import load_console_config

__all__ = ["ConsoleConfig", "load_console_config"]
