"""
Utilities for handling local file paths.
"""

from pathlib import Path

from pathvalidate import sanitize_filename

from satdownload.utils.formatting import file_name_from_path


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def local_file_name(remote_name: str, explicit_name: str | None = None) -> str:
    """
    Chooses the name a downloaded file is saved under.

    The service never supplies a name of its own today, so the trailing segment
    of the requested file path is used unless `explicit_name` is given.
    """
    name = explicit_name or file_name_from_path(remote_name)
    return sanitize_filename(name, platform="auto")
