"""Tests for configuration management."""

import json
from pathlib import Path

import pytest

from paconvert.core.errors import InvalidMappingConfigurationError
from paconvert.mapping import default_mappings

from .lib import (
    EnvConfig,
    EnvVar,
    _parse_bool,
    get_environment,
    get_environment_info,
    get_mappings,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("PACONVERT_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.PACONVERT_LOG_LEVEL) == "WARNING"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("PACONVERT_LOG_LEVEL", "ERROR")
        result = get_environment(EnvVar.PACONVERT_LOG_LEVEL, override="DEBUG")
        assert result == "DEBUG"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("PACONVERT_LOG_LEVEL", "INFO")
        assert get_environment(EnvVar.PACONVERT_LOG_LEVEL) == "INFO"

    @pytest.mark.unit
    def test_bool_type_conversion(self, monkeypatch):
        """Boolean type conversion for true and false spellings."""
        for value in ("true", "1", "yes", "ON"):
            monkeypatch.setenv("PACONVERT_MERGE_MAPPINGS", value)
            assert get_environment(EnvVar.PACONVERT_MERGE_MAPPINGS) is True
        for value in ("false", "0", "No", "off"):
            monkeypatch.setenv("PACONVERT_MERGE_MAPPINGS", value)
            assert get_environment(EnvVar.PACONVERT_MERGE_MAPPINGS) is False

    @pytest.mark.unit
    def test_invalid_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean text falls back to the default."""
        monkeypatch.setenv("PACONVERT_LOG_TIMESTAMPS", "maybe")
        assert get_environment(EnvVar.PACONVERT_LOG_TIMESTAMPS) is True
        assert _parse_bool("maybe") is None

    @pytest.mark.unit
    def test_path_type(self, monkeypatch, tmp_path):
        """Path variables return Path objects."""
        monkeypatch.setenv("PACONVERT_MAPPINGS_FILE", str(tmp_path / "m.json"))
        result = get_environment(EnvVar.PACONVERT_MAPPINGS_FILE)
        assert result == tmp_path / "m.json"
        assert isinstance(result, Path)

    @pytest.mark.unit
    def test_empty_value_is_unset(self, monkeypatch):
        """An empty variable behaves as if it were not set."""
        monkeypatch.setenv("PACONVERT_MAPPINGS_FILE", "")
        assert get_environment(EnvVar.PACONVERT_MAPPINGS_FILE) is None


class TestGetEnvironmentInfo:
    """Tests for get_environment_info."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns the EnvConfig metadata."""
        info = get_environment_info(EnvVar.PACONVERT_MERGE_MAPPINGS)
        assert isinstance(info, EnvConfig)
        assert info.name == "PACONVERT_MERGE_MAPPINGS"
        assert info.default is True
        assert info.var_type is bool
        assert info.category == "mappings"

    @pytest.mark.unit
    def test_description_present(self):
        """Every variable is documented."""
        for var in EnvVar:
            assert get_environment_info(var).description

    @pytest.mark.unit
    def test_types_are_convertible(self):
        """Every variable uses a type the string converter handles."""
        for var in EnvVar:
            assert get_environment_info(var).var_type in (str, bool, Path)


class TestListEnvironmentVariables:
    """Tests for list_environment_variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filtering keeps only the requested category."""
        result = list_environment_variables("logging")
        assert set(result) == {
            EnvVar.PACONVERT_LOG_LEVEL,
            EnvVar.PACONVERT_LOG_TIMESTAMPS,
        }
        assert list_environment_variables("unknown") == []


# =============================================================================
# Tests for get_mappings
# =============================================================================


class TestGetMappings:
    """Tests for mapping table resolution."""

    @pytest.fixture
    def mapping_file(self, tmp_path):
        path = tmp_path / "mappings.json"
        path.write_text(
            json.dumps(
                {
                    "controlTypes": {"Classic/Slider": "Slider@1.0.32"},
                    "properties": {"Slider": {"Max": "Maximum"}},
                }
            ),
            encoding="utf-8",
        )
        return path

    @pytest.mark.unit
    def test_builtin_when_unset(self, monkeypatch):
        """Without a mapping file the built-in tables are used."""
        monkeypatch.delenv("PACONVERT_MAPPINGS_FILE", raising=False)
        assert get_mappings() == default_mappings()

    @pytest.mark.unit
    def test_file_merged_by_default(self, monkeypatch, mapping_file):
        """A mapping file from the environment is layered over the tables."""
        monkeypatch.setenv("PACONVERT_MAPPINGS_FILE", str(mapping_file))
        monkeypatch.delenv("PACONVERT_MERGE_MAPPINGS", raising=False)

        config = get_mappings()
        assert config.control_types["Classic/Slider"] == "Slider@1.0.32"
        assert config.control_types["Classic/Button"] == "Button@0.0.45"

    @pytest.mark.unit
    def test_file_replaces_without_merge(self, monkeypatch, mapping_file):
        """With merging disabled only the file's tables remain."""
        monkeypatch.setenv("PACONVERT_MERGE_MAPPINGS", "false")

        config = get_mappings(mapping_file)
        assert config.control_types == {"Classic/Slider": "Slider@1.0.32"}

    @pytest.mark.unit
    def test_argument_beats_environment(self, monkeypatch, mapping_file, tmp_path):
        """An explicit path wins over the environment."""
        monkeypatch.setenv("PACONVERT_MAPPINGS_FILE", str(tmp_path / "missing.json"))

        config = get_mappings(mapping_file, merge=False)
        assert list(config.control_types) == ["Classic/Slider"]

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """An unreadable file is a configuration error."""
        with pytest.raises(InvalidMappingConfigurationError, match="Cannot read"):
            get_mappings(tmp_path / "missing.json")
