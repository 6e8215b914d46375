"""
Manages loading and validation of the properties configuration file.
"""

import configparser
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from satdownload.exceptions import ConfigurationError
from satdownload.models.config import (
    DEFAULT_COUNTER_FILE,
    DEFAULT_FILE_EXTENSION,
    DEFAULT_FILE_NUM_PADDING,
    DEFAULT_URL_ROOT,
    RunConfig,
)
from satdownload.utils.formatting import remove_quotes, unescape_property

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.properties"

# Property key in the file -> RunConfig field
PROPERTY_KEYS = {
    "orgID": "org_id",
    "localFilePath": "local_file_path",
    "scoredwnldUrlRoot": "scoredwnld_url_root",
    "username": "username",
    "password": "password",
    "fileExtension": "file_extension",
    "fileNumPadding": "file_num_padding",
    "downloadConsecutiveFiles": "download_consecutive_files",
    "counterFile": "counter_file",
    "insecureSkipVerify": "insecure_skip_verify",
}

REQUIRED_KEYS = ("orgID", "localFilePath", "username", "password")

# "key value" lines: the key ends at the first whitespace
WHITESPACE_SEPARATOR = re.compile(
    r"^([ \t]*[^\s=:#!;]+)[ \t]+(?=[^\s=:])", re.MULTILINE
)

CONFIG_TEMPLATE = f"""\
# SATdownload configuration
orgID=Your_Org_ID
username=Your_User_Name
password=Your_Password
localFilePath=/path/to/SAT/inbound
counterFile={DEFAULT_COUNTER_FILE}
fileExtension={DEFAULT_FILE_EXTENSION}
fileNumPadding={DEFAULT_FILE_NUM_PADDING}
downloadConsecutiveFiles=true
scoredwnldUrlRoot={DEFAULT_URL_ROOT}
# Only enable if the service certificate cannot be verified
insecureSkipVerify=false
"""


class ConfigManager:
    """Handles all operations related to the application's properties file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(
            interpolation=None,
            comment_prefixes=("#", "!", ";"),
            delimiters=("=", ":"),
            strict=False,
        )
        # Property keys are case sensitive (orgID, fileNumPadding, ...)
        self._parser.optionxform = str

    def load_config(self, cli_options: dict[str, Any] | None = None) -> RunConfig:
        """
        Loads configuration from the properties file, applies CLI overrides,
        and validates it.

        Args:
            cli_options: RunConfig fields provided via the command line.

        Returns:
            A validated, immutable RunConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        log.info(f"Loading config file {self.config_file_path}")
        properties = self.read_properties()

        missing = [key for key in REQUIRED_KEYS if not properties.get(key)]
        if missing:
            raise ConfigurationError(
                f"Missing required settings in '{self.config_file_path}': "
                f"{', '.join(missing)}"
            )

        config_from_file = self._to_config_fields(properties)
        if cli_options:
            config_from_file.update(cli_options)

        try:
            return RunConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def read_properties(self) -> dict[str, str]:
        """
        Reads the key/value pairs of the properties file.

        Quotes are removed and backslash escapes resolved. A repeated key keeps
        its last value.

        Raises:
            ConfigurationError: If the file does not exist or cannot be parsed.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Could not find config file '{self.config_file_path}'."
            )

        # Properties files have no sections; read everything as DEFAULT.
        # Read errors other than a missing file propagate untranslated.
        text = self.config_file_path.read_text(encoding="utf-8")
        text = WHITESPACE_SEPARATOR.sub(r"\1=", text)
        try:
            self._parser.read_string(f"[{configparser.DEFAULTSECT}]\n{text}")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        return {
            key: unescape_property(remove_quotes(value)).strip()
            for key, value in self._parser.defaults().items()
        }

    def save_template(self) -> None:
        """Writes a starter properties file with placeholder values."""
        if self.config_file_path.exists():
            raise ConfigurationError(
                f"Refusing to overwrite existing config file '{self.config_file_path}'."
            )
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _to_config_fields(self, properties: dict[str, str]) -> dict[str, Any]:
        """Maps known property keys onto RunConfig field names."""
        fields: dict[str, Any] = {}
        for key, value in properties.items():
            field_name = PROPERTY_KEYS.get(key)
            if field_name is None:
                log.debug(f"Ignoring unknown config key '{key}'.")
                continue
            if value == "":
                continue
            fields[field_name] = value
        return fields
