"""
Storage Layer.

This package handles all data persistence: the properties configuration file
and the counter file that records download progress between runs.
"""

from .config_manager import ConfigManager
from .counter import CounterStore

__all__ = ["ConfigManager", "CounterStore"]
