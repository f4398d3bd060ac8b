"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_container_size,
    get_environment,
    get_environment_info,
    get_export_path,
    get_project_name,
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
        monkeypatch.delenv("LAYOUT_CONTAINER_WIDTH", raising=False)
        assert get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH) == 1200

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("LAYOUT_CONTAINER_WIDTH", "999")
        assert get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH, override=640) == 640

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("LAYOUT_CONTAINER_HEIGHT", "600")
        result = get_environment(EnvVar.LAYOUT_CONTAINER_HEIGHT)
        assert result == 600
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Non-numeric values for int variables use the default."""
        monkeypatch.setenv("LAYOUT_CONTAINER_HEIGHT", "tall")
        assert get_environment(EnvVar.LAYOUT_CONTAINER_HEIGHT) == 800

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("LAYOUT_EXPORT_PATH", "out/layout.json")
        result = get_environment(EnvVar.LAYOUT_EXPORT_PATH)
        assert result == Path("out/layout.json")


class TestConvertValue:
    """Tests for raw string conversion."""

    @pytest.mark.unit
    def test_unset_uses_default(self):
        assert _convert_value(None, int, 7) == 7

    @pytest.mark.unit
    def test_int_tolerates_whitespace(self):
        assert _convert_value(" 960 ", int, 0) == 960

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", "12.5", "wide"])
    def test_int_rejects_non_integers(self, raw):
        assert _convert_value(raw, int, 1200) == 1200

    @pytest.mark.unit
    def test_str_kept_verbatim(self):
        assert _convert_value(" Landing ", str, "x") == " Landing "


class TestConvenienceFunctions:
    """Tests for convenience accessors."""

    @pytest.mark.unit
    def test_container_size_defaults(self, monkeypatch):
        """Container size defaults to the logical canvas size."""
        monkeypatch.delenv("LAYOUT_CONTAINER_WIDTH", raising=False)
        monkeypatch.delenv("LAYOUT_CONTAINER_HEIGHT", raising=False)
        assert get_container_size() == (1200, 800)

    @pytest.mark.unit
    def test_container_size_partial_override(self, monkeypatch):
        """Each dimension can be overridden independently."""
        monkeypatch.setenv("LAYOUT_CONTAINER_HEIGHT", "500")
        assert get_container_size(width=900) == (900, 500)

    @pytest.mark.unit
    def test_export_path_override(self):
        """Explicit export path wins and is normalized to Path."""
        assert get_export_path("custom.json") == Path("custom.json")

    @pytest.mark.unit
    def test_project_name_default(self, monkeypatch):
        """Project name defaults to the layout title."""
        monkeypatch.delenv("LAYOUT_PROJECT_NAME", raising=False)
        assert get_project_name() == "Test Builder Layout"


class TestIntrospection:
    """Tests for variable metadata and listing."""

    @pytest.mark.unit
    def test_info_returns_config(self):
        """get_environment_info exposes the EnvConfig."""
        info = get_environment_info(EnvVar.LAYOUT_LOG_LEVEL)
        assert isinstance(info, EnvConfig)
        assert info.name == "LAYOUT_LOG_LEVEL"
        assert info.default == "INFO"

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's config name matches its enum name."""
        for var in EnvVar:
            assert var.value.name == var.name

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter returns only matching variables."""
        canvas_vars = list_environment_variables("canvas")
        assert set(canvas_vars) == {
            EnvVar.LAYOUT_CONTAINER_WIDTH,
            EnvVar.LAYOUT_CONTAINER_HEIGHT,
        }

    @pytest.mark.unit
    def test_no_filter_returns_all(self):
        """No category returns every variable."""
        assert list_environment_variables() == list(EnvVar)
