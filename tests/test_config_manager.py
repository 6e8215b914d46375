"""
Tests for satdownload.storage.config_manager and the RunConfig model.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from satdownload.exceptions import ConfigurationError
from satdownload.models.config import DEFAULT_URL_ROOT
from satdownload.storage.config_manager import ConfigManager

MINIMAL = """\
orgID=ABC123
localFilePath=/srv/sat/inbound
username=user
password=secret
"""


class TestLoadConfig:
    def test_defaults_applied(self, properties_file):
        config = ConfigManager(properties_file(MINIMAL)).load_config(
            {"date_string": "20240115"}
        )
        assert config.org_id == "ABC123"
        assert config.local_file_path == Path("/srv/sat/inbound")
        assert config.file_extension == "txt"
        assert config.file_num_padding == 6
        assert config.download_consecutive_files is True
        assert config.save_counter is True
        assert config.counter_file == Path("SATdownload.counter")
        assert config.scoredwnld_url_root == DEFAULT_URL_ROOT
        assert config.insecure_skip_verify is False

    def test_all_keys_quotes_and_comments(self, properties_file):
        text = """\
# comment line
! another comment
orgID = "XYZ"
localFilePath='C:/SAT/inbound/'
username: user
password="p%ss"
fileExtension=.dat
fileNumPadding=4
downloadConsecutiveFiles=false
counterFile="/var/lib/sat/counter"
scoredwnldUrlRoot=https://test.example.com/
insecureSkipVerify=true
"""
        config = ConfigManager(properties_file(text)).load_config(
            {"date_string": "20240115"}
        )
        assert config.org_id == "XYZ"
        assert config.password == "p%ss"
        assert config.file_extension == "dat"
        assert config.file_num_padding == 4
        assert config.download_consecutive_files is False
        assert config.counter_file == Path("/var/lib/sat/counter")
        assert config.scoredwnld_url_root == "https://test.example.com"
        assert config.insecure_skip_verify is True

    def test_backslash_escapes_are_resolved(self, properties_file):
        text = MINIMAL.replace(
            "localFilePath=/srv/sat/inbound", r"localFilePath=C:\\SAT\\inbound"
        ) + r"counterFile=C\:\\SAT\\SATdownload.counter" + "\n"
        properties = ConfigManager(properties_file(text)).read_properties()

        assert properties["localFilePath"] == "C:\\SAT\\inbound"
        assert properties["counterFile"] == "C:\\SAT\\SATdownload.counter"

    def test_whitespace_separated_and_repeated_keys(self, properties_file):
        text = MINIMAL + "fileExtension dat\norgID=LAST1\n"
        config = ConfigManager(properties_file(text)).load_config(
            {"date_string": "20240115"}
        )

        assert config.file_extension == "dat"
        assert config.org_id == "LAST1"

    def test_cli_options_override_file(self, properties_file):
        config = ConfigManager(properties_file(MINIMAL)).load_config(
            {
                "date_string": "20240115",
                "download_consecutive_files": False,
                "save_counter": False,
            }
        )
        assert config.download_consecutive_files is False
        assert config.save_counter is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Could not find config file"):
            ConfigManager(tmp_path / "nope.properties").load_config(
                {"date_string": "20240115"}
            )

    def test_missing_required_keys(self, properties_file):
        with pytest.raises(ConfigurationError, match="username, password"):
            ConfigManager(properties_file("orgID=A\nlocalFilePath=/tmp\n")).load_config(
                {"date_string": "20240115"}
            )

    def test_invalid_value_is_configuration_error(self, properties_file):
        text = MINIMAL + "fileNumPadding=lots\n"
        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigManager(properties_file(text)).load_config({"date_string": "20240115"})

    def test_password_hidden_from_repr(self, properties_file):
        config = ConfigManager(properties_file(MINIMAL)).load_config(
            {"date_string": "20240115"}
        )
        assert "secret" not in repr(config)


class TestRunConfig:
    def test_is_immutable(self, make_config):
        config = make_config()
        with pytest.raises(ValidationError):
            config.org_id = "OTHER"

    def test_rejects_bad_date(self, make_config):
        with pytest.raises(ValidationError):
            make_config(date_string="2024-01-15")

    def test_rejects_zero_padding(self, make_config):
        with pytest.raises(ValidationError):
            make_config(file_num_padding=0)


class TestSaveTemplate:
    def test_template_is_loadable_after_edit(self, tmp_path):
        path = tmp_path / "config.properties"
        manager = ConfigManager(path)
        manager.save_template()
        properties = ConfigManager(path).read_properties()
        assert properties["orgID"] == "Your_Org_ID"
        assert properties["fileNumPadding"] == "6"

    def test_refuses_to_overwrite(self, properties_file):
        with pytest.raises(ConfigurationError):
            ConfigManager(properties_file(MINIMAL)).save_template()
