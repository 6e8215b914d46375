"""
Pydantic model for the run configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_URL_ROOT = "https://scoresdownload.collegeboard.org"
DEFAULT_COUNTER_FILE = "SATdownload.counter"
DEFAULT_FILE_EXTENSION = "txt"
DEFAULT_FILE_NUM_PADDING = 6


class RunConfig(BaseModel):
    """An immutable, validated configuration for a single download run."""

    # Authentication & API
    username: str
    password: str = Field(..., repr=False)
    scoredwnld_url_root: str = DEFAULT_URL_ROOT
    insecure_skip_verify: bool = False

    # File naming
    org_id: str
    date_string: str
    file_extension: str = DEFAULT_FILE_EXTENSION
    file_num_padding: int = DEFAULT_FILE_NUM_PADDING

    # Storage & sequence behaviour
    local_file_path: Path
    counter_file: Path = Path(DEFAULT_COUNTER_FILE)
    download_consecutive_files: bool = True
    save_counter: bool = True

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("username", "password", "org_id")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Rejects blank values for required settings."""
        if not v:
            raise ValueError("Value cannot be empty.")
        return v

    @field_validator("date_string")
    @classmethod
    def validate_date_string(cls, v: str) -> str:
        """Ensures the date is already normalised to YYYYMMDD."""
        if len(v) != 8 or not v.isdigit():
            raise ValueError(f"Date must be formatted as YYYYMMDD, got: {v}")
        return v

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Strips a leading dot so 'txt' and '.txt' are equivalent."""
        v = v[1:] if v.startswith(".") else v
        if not v:
            raise ValueError("File extension cannot be empty.")
        return v

    @field_validator("file_num_padding")
    @classmethod
    def validate_padding(cls, v: int) -> int:
        """Ensures a usable number of digits in the file number field."""
        if v < 1 or v > 18:
            raise ValueError("File number padding must be between 1 and 18.")
        return v

    @field_validator("scoredwnld_url_root")
    @classmethod
    def validate_url_root(cls, v: str) -> str:
        """Requires an http(s) URL and drops any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Root URL must start with https:// or http://, got: {v}")
        return v.rstrip("/")
