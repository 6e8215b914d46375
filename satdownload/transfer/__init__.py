"""
Transfer Layer.

This package is responsible for streaming resolved files to local storage.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
