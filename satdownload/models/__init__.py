"""
Data Models Layer.

This package contains the data structures shared across the application:
the run configuration, resolved file descriptors and run statistics.
"""

from .config import RunConfig
from .file_info import FileInfo
from .stats import RunStats

__all__ = ["FileInfo", "RunConfig", "RunStats"]
