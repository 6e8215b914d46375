"""
Helper functions for building file names and formatting data into human-readable strings.
"""

import re
from datetime import date, datetime

from satdownload.exceptions import InvalidDateError, InvalidFileNumberError

PROPERTY_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
DATE_FORMAT = "%Y%m%d"
ACCEPTED_DATE_FORMATS = ("%Y%m%d", "%Y-%m-%d", "%Y/%m/%d")


def pad_number(number: int | str, width: int) -> str:
    """Left-pads a number with zeroes up to `width` digits (never truncates)."""
    return str(number).zfill(width)


def remove_quotes(value: str) -> str:
    """Removes every single (') and double (") quote from a string."""
    return value.replace("'", "").replace('"', "")


def unescape_property(value: str) -> str:
    """Resolves backslash escapes in a properties value (\\\\, \\t, \\:, ...)."""
    return re.sub(
        r"\\(.)", lambda m: PROPERTY_ESCAPES.get(m.group(1), m.group(1)), value
    )


def normalize_date_string(value: str | None, today: date | None = None) -> str:
    """
    Converts a user supplied date into the YYYYMMDD form used in file names.

    Args:
        value: The date as YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD. None means today.
        today: Overrides the current date, mainly for tests.

    Returns:
        The date formatted as YYYYMMDD.

    Raises:
        InvalidDateError: If the value matches none of the accepted formats.
    """
    if value is None:
        return (today or date.today()).strftime(DATE_FORMAT)

    cleaned = remove_quotes(value).strip()
    for fmt in ACCEPTED_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).strftime(DATE_FORMAT)
        except ValueError:
            continue
    raise InvalidDateError(f"Invalid date specified: {value}")


def parse_file_number(value: str) -> int:
    """Parses a starting file number, rejecting negatives and non-integers."""
    cleaned = remove_quotes(value).strip()
    try:
        number = int(cleaned)
    except ValueError:
        raise InvalidFileNumberError(f"Invalid file number specified: {value}") from None
    if number < 0:
        raise InvalidFileNumberError(
            f"File number must be equal to or greater than 0, got: {value}"
        )
    return number


def build_file_name(
    org_id: str, date_string: str, counter: int, padding: int, extension: str
) -> str:
    """Builds a score file name: ORGID_YYYYMMDD_NNNNNN.ext"""
    return f"{org_id}_{date_string}_{pad_number(counter, padding)}.{extension}"


def file_name_from_path(path: str) -> str:
    """Returns the trailing segment of a slash separated path."""
    return path[path.rfind("/") + 1 :]


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
