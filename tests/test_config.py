"""Integration tests for configuration module."""

from pathlib import Path

import pytest

from faculty_records.config import (
    ConfigurationError,
    YearConfig,
    load_config,
    validate_config_file,
)
from faculty_records.config.environment import DEFAULT_DATABASE_URL, load_environment_config
from verify_config import verify_config_structure


# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROJECT_ROOT = Path(__file__).parent.parent


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, mock_env_vars):
        """Test loading a valid configuration file."""
        config_path = FIXTURES_DIR / "valid_config.yaml"
        app_config, env_config = load_config(config_path)

        # Verify years
        assert [year.label for year in app_config.years] == ["2015-16", "2014-15", "2013-14"]
        first = app_config.years[0]
        assert first.anchor_keyword == "FACULTY"
        assert first.secondary_anchor_keyword == "THE FACULTY"
        assert first.reference_year == 2015
        assert app_config.years[1].rejoin_count == 2
        assert app_config.years[1].reorder_names is False
        assert app_config.years[2].enabled is False

        # Verify directory and extraction
        assert app_config.directory.http_request_timeout == 10
        assert app_config.directory.user_agent == "FacultyRecordsTest/1.0"
        assert app_config.extraction.assumed_graduation_age == 21

        # Verify logging config
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"

    def test_load_minimal_config(self, mock_env_vars):
        """Test loading a minimal configuration with defaults."""
        config_path = FIXTURES_DIR / "minimal_config.yaml"
        app_config, env_config = load_config(config_path)

        year = app_config.years[0]
        assert year.short_line_threshold == 4
        assert year.rejoin_count == 0
        assert year.reorder_names is True
        assert year.secondary_document is None
        assert year.secondary_anchor_keyword == "FACULTY"
        assert year.reference_year == 2014

        # Verify defaults are applied
        assert app_config.directory.enabled is True
        assert app_config.directory.http_request_timeout == 30
        assert app_config.extraction.assumed_graduation_age == 22
        assert app_config.logging.level == "INFO"
        assert env_config.database_url == DEFAULT_DATABASE_URL

    def test_document_paths_resolve_against_config_directory(self, config_file, catalog_dir):
        """Test relative document paths point next to the config file."""
        app_config, _ = load_config(config_file)

        year = app_config.years[0]
        assert year.document == catalog_dir / "2015-16.txt"
        assert year.secondary_document == catalog_dir / "2013-14.txt"

    def test_absolute_document_path_is_kept(self, tmp_path, mock_env_vars):
        """Test absolute paths are not rebased."""
        document = tmp_path / "elsewhere" / "catalog.txt"
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            f"years:\n  - label: '2015-16'\n    document: {document}\n    anchor_keyword: FACULTY\n"
        )

        app_config, _ = load_config(config_path)

        assert app_config.years[0].document == document

    def test_config_file_not_found(self, mock_env_vars):
        """Test error when config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()

    def test_default_location_not_found(self, tmp_path, monkeypatch, mock_env_vars):
        """Test the fallback search reports the locations it tried."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        assert "config/config.yaml" in str(exc_info.value)
        assert "config.example.yaml" in str(exc_info.value)

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        """Test error when YAML syntax is invalid."""
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("years:\n  - label: '2015\n    invalid yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)

        assert "parse" in str(exc_info.value).lower()

    def test_empty_file(self, tmp_path, mock_env_vars):
        """Test error when the file has no content."""
        empty = tmp_path / "empty.yaml"
        empty.write_text("")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(empty)

        assert "empty" in str(exc_info.value).lower()

    def test_disabled_year_warns(self, mock_env_vars):
        """Test a disabled year produces a warning, not an error."""
        with pytest.warns(UserWarning, match="2013-14"):
            load_config(FIXTURES_DIR / "valid_config.yaml")

    def test_rejoin_warns(self, mock_env_vars):
        """Test enabling split-line rejoining is flagged for review."""
        with pytest.warns(UserWarning, match="rejoin"):
            load_config(FIXTURES_DIR / "valid_config.yaml")


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_missing_required_field_years(self, mock_env_vars):
        """Test error when years field is missing."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_missing_years.yaml")

        error_msg = str(exc_info.value)
        assert "Missing required field: years" in error_msg

    def test_duplicate_years(self, mock_env_vars):
        """Test error when a year label appears twice."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_duplicate_years.yaml")

        assert "duplicate" in str(exc_info.value).lower()

    def test_all_years_disabled(self, mock_env_vars):
        """Test error when nothing would be processed."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_all_disabled.yaml")

        assert "at least one year must be enabled" in str(exc_info.value).lower()

    def test_invalid_record_pattern(self, mock_env_vars):
        """Test error when the record pattern does not compile."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_record_pattern.yaml")

        assert "record_pattern" in str(exc_info.value)

    def test_profile_template_needs_placeholder(self, mock_env_vars):
        """Test error when the profile URL has nowhere to put the identifier."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_profile_template.yaml")

        assert "{identifier}" in str(exc_info.value)

    def test_label_without_year_needs_reference_year(self):
        """Test the reference year can only be derived from a year-prefixed label."""
        with pytest.raises(ValueError):
            YearConfig(label="Fall catalog", document=Path("a.txt"), anchor_keyword="FACULTY")

        year = YearConfig(
            label="Fall catalog", document=Path("a.txt"), anchor_keyword="FACULTY", reference_year=2016
        )
        assert year.reference_year == 2016

    def test_whitespace_anchor_rejected(self):
        """Test an anchor of only spaces is rejected."""
        with pytest.raises(ValueError):
            YearConfig(label="2015-16", document=Path("a.txt"), anchor_keyword="   ")

    def test_negative_threshold_rejected(self):
        """Test thresholds cannot be negative."""
        with pytest.raises(ValueError):
            YearConfig(
                label="2015-16", document=Path("a.txt"), anchor_keyword="FACULTY", short_line_threshold=-1
            )


class TestEnvironmentVariables:
    """Test environment variable loading and validation."""

    def test_defaults(self, mock_env_vars):
        """Test every variable is optional."""
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.database_url == DEFAULT_DATABASE_URL
        assert env_config.environment == "local"

    def test_overrides(self, monkeypatch):
        """Test values are read and normalized."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
        monkeypatch.setenv("ENVIRONMENT", " production ")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.database_url == "sqlite:///:memory:"
        assert env_config.environment == "production"

    def test_invalid_log_level(self, monkeypatch):
        """Test error when LOG_LEVEL is not a level name."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "LOG_LEVEL" in str(exc_info.value)

    def test_empty_database_url(self, monkeypatch):
        """Test error when DATABASE_URL is set to blank."""
        monkeypatch.setenv("DATABASE_URL", "  ")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "DATABASE_URL" in str(exc_info.value)


class TestConfigurationHelpers:
    """Test configuration helper methods."""

    def test_get_enabled_years(self, mock_env_vars):
        """Test getting only enabled years."""
        app_config, _ = load_config(FIXTURES_DIR / "valid_config.yaml")

        enabled = app_config.get_enabled_years()
        assert [year.label for year in enabled] == ["2015-16", "2014-15"]

    def test_get_year(self, mock_env_vars):
        """Test looking a year up by label."""
        app_config, _ = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.get_year("2014-15").rejoin_count == 2
        assert app_config.get_year("1999-00") is None

    def test_validate_config_file_utility(self):
        """Test the standalone config validation utility."""
        assert validate_config_file(FIXTURES_DIR / "valid_config.yaml") is True
        assert validate_config_file(FIXTURES_DIR / "invalid_missing_years.yaml") is False

    def test_example_config_is_valid(self):
        """Test the shipped example configuration passes both checks."""
        example = PROJECT_ROOT / "config.example.yaml"

        assert verify_config_structure(example) is True
        assert validate_config_file(example) is True

    def test_structure_check_reports_problems(self):
        """Test the structural check flags duplicate labels and missing keys."""
        assert verify_config_structure(FIXTURES_DIR / "invalid_duplicate_years.yaml") is False
        assert verify_config_structure(FIXTURES_DIR / "invalid_missing_years.yaml") is False
        assert verify_config_structure(FIXTURES_DIR / "does_not_exist.yaml") is False

    def test_error_message_lists_errors_and_suggestions(self):
        """Test ConfigurationError renders its details."""
        error = ConfigurationError("Broken", errors=["first problem"], suggestions=["try this"])

        assert "1. first problem" in str(error)
        assert "- try this" in str(error)
