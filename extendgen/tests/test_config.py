"""Test configuration for extendgen package."""

import os
import tempfile
from unittest.mock import patch

import pytest

from extendgen.config import ExtendConfig, get_config
from extendgen.exceptions import ConfigurationError


class TestExtendConfig:
    """Test ExtendConfig model."""

    def test_defaults(self):
        """Test the defaults describe a ScandiPWA-style project."""
        config = ExtendConfig()
        assert config.marker_file == 'package.json'
        assert config.metadata_key == 'scandipwa'
        assert config.parent_key == 'parentTheme'
        assert config.alias_key == 'themeAlias'
        assert config.fallback_source_modules == ['@scandipwa/scandipwa']
        assert config.lint_command == ['npx', 'eslint', '--fix']

    def test_config_is_immutable(self):
        """Test the configuration cannot be changed once built."""
        config = ExtendConfig()
        with pytest.raises(Exception):
            config.marker_file = 'composer.json'

    def test_environment_override(self):
        """Test settings can come from EXTENDGEN_ environment variables."""
        with patch.dict(os.environ, {'EXTENDGEN_METADATA_KEY': 'mosaic'}):
            config = ExtendConfig()
        assert config.metadata_key == 'mosaic'

    def test_invalid_type(self):
        """Test invalid values are rejected."""
        with pytest.raises(ValueError):
            ExtendConfig(lint_command='not-a-list-of-strings', script_extensions=5)


class TestGetConfig:
    """Test get_config function."""

    def test_get_config_with_yaml_file(self):
        """Test loading config from YAML file."""
        yaml_content = """
metadata_key: mosaic
fallback_source_modules:
  - "@tilework/base-theme"
lint_command: []
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content)
            f.flush()

            try:
                config = get_config(f.name)
                assert config.metadata_key == 'mosaic'
                assert config.fallback_source_modules == ['@tilework/base-theme']
                assert config.lint_command == []
            finally:
                os.unlink(f.name)

    def test_get_config_with_json_file(self):
        """Test loading config from JSON file."""
        json_content = '{"marker_file": "module.json", "style_extension": ".style.css"}'
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write(json_content)
            f.flush()

            try:
                config = get_config(f.name)
                assert config.marker_file == 'module.json'
                assert config.style_extension == '.style.css'
            finally:
                os.unlink(f.name)

    def test_get_config_missing_explicit_file(self):
        """Test a missing explicit file is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_config('/nonexistent/extendgen.yaml')
        assert '/nonexistent/extendgen.yaml' in str(exc_info.value)

    def test_get_config_invalid_content(self, tmp_path):
        """Test invalid values are reported with the file path."""
        path = tmp_path / 'extendgen.yaml'
        path.write_text('lint_command: 5\n')

        with pytest.raises(ConfigurationError) as exc_info:
            get_config(str(path))
        assert exc_info.value.config_path == str(path)

    def test_get_config_default_file(self, tmp_path):
        """Test extendgen.yaml in the working directory is picked up."""
        (tmp_path / 'extendgen.yaml').write_text('parent_key: parent\n')

        with patch('os.getcwd', return_value=str(tmp_path)):
            config = get_config()

        assert config.parent_key == 'parent'

    def test_get_config_pyproject(self, tmp_path):
        """Test the [tool.extendgen] table of pyproject.toml is used."""
        (tmp_path / 'pyproject.toml').write_text(
            '[tool.extendgen]\nalias_key = "alias"\n'
        )

        with patch('os.getcwd', return_value=str(tmp_path)):
            config = get_config()

        assert config.alias_key == 'alias'

    def test_get_config_falls_back_to_defaults(self, tmp_path):
        """Test defaults are used when no configuration exists."""
        with patch('os.getcwd', return_value=str(tmp_path)):
            config = get_config()

        assert config == ExtendConfig()
