"""
Descriptor for a file that has been resolved to a download URL.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileInfo:
    """A single-use pointer to a file on the scores download service."""

    file_name: str
    file_url: str
