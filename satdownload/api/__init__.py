"""
Scores Download API Layer.

This package handles all communication with the PAScoresDwnld web service.
"""

from .auth import ScoresAuthenticator
from .client import ScoresDownloadClient

__all__ = ["ScoresAuthenticator", "ScoresDownloadClient"]
