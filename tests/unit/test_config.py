"""Unit tests for recipe_index.config module.

Tests ExtractionConfig validation, loading, and serialization.
"""

import tomllib
from pathlib import Path

import pytest

from recipe_index.config import ExtractionConfig
from recipe_index.exceptions import ConfigurationError


class TestExtractionConfigDefaults:
    """Tests for ExtractionConfig default values."""

    def test_default_title(self) -> None:
        """Default title is the import placeholder."""
        assert ExtractionConfig().default_title == "Imported Recipe"

    def test_default_servings(self) -> None:
        """Default servings is 4."""
        assert ExtractionConfig().default_servings == 4

    def test_default_heuristic_lengths(self) -> None:
        """Plain-text length thresholds match the extractor defaults."""
        config = ExtractionConfig()
        assert config.min_title_length == 4
        assert config.min_ingredient_length == 3
        assert config.min_instruction_length == 10

    def test_default_flags(self) -> None:
        """Tag standardization and recovery are on, debug is off."""
        config = ExtractionConfig()
        assert config.standardize_tags is True
        assert config.recover_misplaced_ingredients is True
        assert config.debug_mode is False


class TestExtractionConfigValidation:
    """Tests for ExtractionConfig validation logic."""

    def test_default_servings_minimum(self) -> None:
        """default_servings must be at least 1."""
        ExtractionConfig(default_servings=1)

        with pytest.raises(ConfigurationError, match="default_servings"):
            ExtractionConfig(default_servings=0)

    def test_blank_default_title_rejected(self) -> None:
        """A blank default title is rejected."""
        with pytest.raises(ConfigurationError, match="default_title"):
            ExtractionConfig(default_title="   ")

    @pytest.mark.parametrize(
        "key",
        [
            "min_title_length",
            "min_ingredient_length",
            "min_instruction_length",
            "scraped_ingredient_min_length",
            "scraped_instruction_min_length",
        ],
    )
    def test_lengths_non_negative(self, key: str) -> None:
        """Length thresholds must be non-negative."""
        ExtractionConfig(**{key: 0})

        with pytest.raises(ConfigurationError, match=key):
            ExtractionConfig(**{key: -1})

    def test_error_carries_context(self) -> None:
        """Validation errors include the offending value as context."""
        with pytest.raises(ConfigurationError) as exc_info:
            ExtractionConfig(default_servings=-2)
        assert exc_info.value.context == {"default_servings": -2}


class TestExtractionConfigLoad:
    """Tests for ExtractionConfig.load()."""

    def test_load_defaults(self, clean_env: None, tmp_path: Path, monkeypatch) -> None:
        """Loading without files or env gives defaults."""
        monkeypatch.chdir(tmp_path)
        config = ExtractionConfig.load(load_user_config=False)
        assert config == ExtractionConfig()

    def test_load_from_toml(self, clean_env: None, tmp_path: Path) -> None:
        """Values are read from a TOML file."""
        path = tmp_path / "config.toml"
        path.write_text('default_servings = 2\ndefault_title = "Untitled"\n')

        config = ExtractionConfig.load(path, load_user_config=False)

        assert config.default_servings == 2
        assert config.default_title == "Untitled"

    def test_load_from_named_section(self, clean_env: None, tmp_path: Path) -> None:
        """A [recipe-index] table is used when present."""
        path = tmp_path / "pyproject-like.toml"
        path.write_text("[recipe-index]\nstandardize_tags = false\n")

        config = ExtractionConfig.load(path, load_user_config=False)

        assert config.standardize_tags is False

    def test_project_file_discovered(self, clean_env: None, tmp_path: Path, monkeypatch) -> None:
        """.recipe-index.toml in the working directory is picked up."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".recipe-index.toml").write_text("min_title_length = 6\n")

        config = ExtractionConfig.load(load_user_config=False)

        assert config.min_title_length == 6

    def test_env_overrides_file(
        self, clean_env: None, mock_env: dict[str, str], tmp_path: Path
    ) -> None:
        """Environment variables override file values."""
        path = tmp_path / "config.toml"
        path.write_text("default_servings = 2\n")
        mock_env["DEFAULT_SERVINGS"] = "6"
        mock_env["DEBUG_MODE"] = "true"

        config = ExtractionConfig.load(path, load_user_config=False)

        assert config.default_servings == 6
        assert config.debug_mode is True

    def test_env_string_values(self, clean_env: None, mock_env: dict[str, str], tmp_path) -> None:
        """Non-numeric, non-boolean env values stay strings."""
        mock_env["LOG_FILE"] = "import.log"

        config = ExtractionConfig.load(tmp_path / "missing.toml", load_user_config=False)

        assert config.log_file == "import.log"

    def test_invalid_toml_raises(self, clean_env: None, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigurationError."""
        path = tmp_path / "broken.toml"
        path.write_text("default_servings = = 2\n")

        with pytest.raises(ConfigurationError, match="Failed to load configuration"):
            ExtractionConfig.load(path, load_user_config=False)

    def test_unknown_key_raises(self, clean_env: None, tmp_path: Path) -> None:
        """Unknown keys in a config file are reported."""
        path = tmp_path / "config.toml"
        path.write_text('model = "gpt-5-nano"\n')

        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            ExtractionConfig.load(path, load_user_config=False)


class TestExtractionConfigSerialization:
    """Tests for save(), to_dict() and update()."""

    def test_to_dict(self) -> None:
        """to_dict returns every field."""
        data = ExtractionConfig(default_servings=3).to_dict()
        assert data["default_servings"] == 3
        assert set(data) == set(ExtractionConfig.__dataclass_fields__)

    def test_save_round_trip(self, tmp_path: Path) -> None:
        """Saved TOML can be loaded back."""
        path = tmp_path / "nested" / "config.toml"
        ExtractionConfig(default_servings=5, debug_mode=True).save(path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["default_servings"] == 5
        assert data["debug_mode"] is True

    def test_update_valid(self) -> None:
        """update() sets known keys."""
        config = ExtractionConfig()
        config.update(default_servings=2, debug_mode=True)
        assert config.default_servings == 2
        assert config.debug_mode is True

    def test_update_unknown_key(self) -> None:
        """update() rejects unknown keys."""
        config = ExtractionConfig()
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            config.update(model="gpt-4o")

    def test_update_revalidates(self) -> None:
        """update() re-runs validation."""
        config = ExtractionConfig()
        with pytest.raises(ConfigurationError, match="default_servings"):
            config.update(default_servings=0)
