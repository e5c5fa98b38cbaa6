"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path
from unittest.mock import patch
from pydantic import ValidationError

from filesearch.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)
from filesearch.models.config import SearchConfig, LoggingConfig, validate_config_dict


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, content, name="config.yaml"):
        path = Path(self.temp_dir) / name
        path.write_text(content, encoding='utf-8')
        return path

    def test_init_default(self):
        parser = ConfigParser()
        assert parser.strict_mode is False

    def test_load_defaults_without_path(self):
        """Test that no path means built-in defaults, no discovery."""
        result = ConfigParser().load_config()

        assert isinstance(result, ConfigParseResult)
        assert result.is_default
        assert result.config_path is None
        assert result.config.limits.max_depth is None
        assert result.config.limits.max_results is None
        assert result.config.output.echo_request is True
        assert result.config.logging.level == "WARNING"

    def test_load_config_with_valid_file(self):
        path = self._write(yaml.dump({
            'limits': {'max_depth': 5, 'max_results': 100},
            'output': {'echo_request': False},
            'logging': {'level': 'info'}
        }))

        result = ConfigParser().load_config(path)

        assert not result.is_default
        assert result.config_path == path
        assert result.config.limits.max_depth == 5
        assert result.config.limits.max_results == 100
        assert result.config.output.echo_request is False
        assert result.config.logging.level == "INFO"

    def test_missing_file(self):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigParser().load_config(Path(self.temp_dir) / "nope.yaml")

    def test_directory_instead_of_file(self):
        with pytest.raises(ConfigurationError, match="not a file"):
            ConfigParser().load_config(self.temp_dir)

    def test_empty_file(self):
        result = ConfigParser().load_config(self._write(""))

        assert result.config == SearchConfig()

    def test_comment_only_file(self):
        result = ConfigParser().load_config(self._write("# nothing here\n"))

        assert result.config == SearchConfig()

    def test_invalid_yaml(self):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigParser().load_config(self._write("limits: [unclosed\n"))

    def test_non_mapping_yaml(self):
        with pytest.raises(ConfigurationError, match="YAML object"):
            ConfigParser().load_config(self._write("- a\n- b\n"))

    def test_invalid_values(self):
        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigParser().load_config(self._write("limits:\n  max_results: 0\n"))

    def test_unknown_section(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration section"):
            ConfigParser().load_config(self._write("roots:\n  - /tmp\n"))

    def test_empty_section(self):
        result = ConfigParser().load_config(self._write("limits:\n"))

        assert result.config.limits.max_results is None

    def test_strict_mode_turns_warnings_into_errors(self):
        path = self._write("logging:\n  level: DEBUG\n")

        result = ConfigParser().load_config(path)
        assert result.warnings

        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).load_config(path)

    def test_unreadable_file(self):
        path = self._write("limits: {}\n")

        with patch('builtins.open', side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError, match="Cannot read"):
                ConfigParser().load_config(path)

    def test_save_and_reload(self):
        config = SearchConfig.from_dict({'limits': {'max_depth': 3}})
        path = Path(self.temp_dir) / "nested" / "saved.yaml"

        ConfigParser().save_config(config, path)
        result = load_config(path)

        assert result.config == config
        assert path.read_text(encoding='utf-8').startswith("# filesearch configuration")

    def test_validate_config_file(self):
        assert validate_config_file(self._write("limits:\n  max_depth: 2\n")) == []

        errors = validate_config_file(self._write("limits:\n  max_depth: -2\n", "bad.yaml"))
        assert len(errors) == 1

        errors = validate_config_file(Path(self.temp_dir) / "missing.yaml")
        assert "not found" in errors[0]

    def test_create_config_template(self):
        path = Path(self.temp_dir) / "template.yaml"

        create_config_template(path)
        content = path.read_text(encoding='utf-8')

        assert "# Limits used when" in content
        assert load_config(path).config == SearchConfig()


class TestConfigModels:
    """Test cases for configuration models."""

    def test_log_level_normalized(self):
        assert LoggingConfig(level=" debug ").level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_level_number(self):
        assert LoggingConfig(level="ERROR").get_level_number() == 40

    def test_validate_config_dict_section_type(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            validate_config_dict({'limits': 5})

    def test_to_dict_roundtrip(self):
        config = SearchConfig.from_dict({'output': {'show_stats': True}})

        assert SearchConfig.from_dict(config.to_dict()) == config
