"""
Core application engine for orchestrating the download process.

The `SequenceController` walks the numbered files for a date, delegating
authentication and resolution to the API client and the byte transfer to the
`Downloader`.
"""

from .sequence import SequenceController, SequenceState

__all__ = ["SequenceController", "SequenceState"]
