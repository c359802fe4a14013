"""Configuration management for recipe_index.

Configuration priority (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (RECIPE_INDEX_*)
3. Project config file (.recipe-index.toml)
4. User config file (~/.config/recipe-index/config.toml)
5. Default values

Example:
    >>> config = ExtractionConfig.load()
    >>> config.default_servings = 2
    >>> config.save("~/.config/recipe-index/config.toml")
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError


@dataclass
class ExtractionConfig:
    """Configuration for recipe extraction.

    Attributes:
        Defaults:
            default_title: Title used when no tier finds one
            default_servings: Servings used when no tier finds a number

        Plain-text heuristics:
            min_title_length: Minimum length of a line chosen as title
            min_ingredient_length: Minimum length of an ingredient line
            min_instruction_length: Minimum length of an instruction line
            recover_misplaced_ingredients: Re-classify instruction lines when
                no ingredients were found (PDF column-order damage)

        HTML scraping:
            scraped_ingredient_min_length: Minimum list-item length kept as
                an ingredient
            scraped_instruction_min_length: Minimum list-item length kept as
                an instruction

        Tags:
            standardize_tags: Run the tag normalizer over extracted tags

        Output:
            log_file: Log file written by the CLI
            debug_mode: Enable debug logging
    """

    # Defaults
    default_title: str = "Imported Recipe"
    default_servings: int = 4

    # Plain-text heuristics
    min_title_length: int = 4
    min_ingredient_length: int = 3
    min_instruction_length: int = 10
    recover_misplaced_ingredients: bool = True

    # HTML scraping
    scraped_ingredient_min_length: int = 4
    scraped_instruction_min_length: int = 11

    # Tags
    standardize_tags: bool = True

    # Output
    log_file: str = "recipe_index.log"
    debug_mode: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid
        """
        if not str(self.default_title).strip():
            raise ConfigurationError(
                "default_title must not be blank",
                default_title=self.default_title,
            )

        if self.default_servings < 1:
            raise ConfigurationError(
                "default_servings must be at least 1",
                default_servings=self.default_servings,
            )

        for key in (
            "min_title_length",
            "min_ingredient_length",
            "min_instruction_length",
            "scraped_ingredient_min_length",
            "scraped_instruction_min_length",
        ):
            value = getattr(self, key)
            if value < 0:
                raise ConfigurationError(f"{key} must be non-negative", **{key: value})

        if not str(self.log_file).strip():
            raise ConfigurationError("log_file must not be blank", log_file=self.log_file)

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        load_user_config: bool = True,
        load_env: bool = True,
    ) -> "ExtractionConfig":
        """Load configuration from file(s) and environment variables.

        Configuration is loaded in this order (later overrides earlier):
        1. Default values
        2. User config file (~/.config/recipe-index/config.toml)
        3. Project config file (.recipe-index.toml or specified path)
        4. Environment variables (RECIPE_INDEX_*)

        Args:
            config_path: Path to project config file (optional)
            load_user_config: Whether to load user config file
            load_env: Whether to load environment variables

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: dict[str, Any] = {}

        if load_user_config:
            user_config_path = Path.home() / ".config" / "recipe-index" / "config.toml"
            if user_config_path.exists():
                config_dict.update(cls._load_toml(user_config_path))

        if config_path:
            project_path = Path(config_path)
            if project_path.exists():
                config_dict.update(cls._load_toml(project_path))
        else:
            default_path = Path(".recipe-index.toml")
            if default_path.exists():
                config_dict.update(cls._load_toml(default_path))

        if load_env:
            config_dict.update(cls._load_env())

        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys",
                keys=", ".join(sorted(unknown)),
            )

        return cls(**config_dict)

    @staticmethod
    def _load_toml(path: Path) -> dict[str, Any]:
        """Load configuration from TOML file.

        A ``[recipe-index]`` table is used when present, otherwise the top
        level of the file.

        Raises:
            ConfigurationError: If TOML file is invalid
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if "recipe-index" in data:
                return data["recipe-index"]
            return data

        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {path}",
                path=str(path),
                error=str(e),
            ) from e

    @staticmethod
    def _load_env() -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables are prefixed with RECIPE_INDEX_ and use
        uppercase snake_case, e.g. RECIPE_INDEX_DEFAULT_SERVINGS=2 or
        RECIPE_INDEX_DEBUG_MODE=true.

        Returns:
            Dictionary of configuration values from environment
        """
        config: dict[str, Any] = {}
        prefix = "RECIPE_INDEX_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix) :].lower()

            if value.lower() in ("true", "yes"):
                config[config_key] = True
            elif value.lower() in ("false", "no"):
                config[config_key] = False
            elif value.isdigit():
                config[config_key] = int(value)
            else:
                config[config_key] = value

        return config

    def save(self, path: str | Path) -> None:
        """Save configuration to TOML file.

        Raises:
            ConfigurationError: If save fails
        """
        try:
            import tomli_w

            path = Path(path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, "wb") as f:
                tomli_w.dump(self.to_dict(), f)

        except ImportError:
            raise ConfigurationError(
                "tomli_w package required to save configuration. Install with: pip install tomli-w"
            ) from None
        except (OSError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to save configuration to {path}",
                path=str(path),
                error=str(e),
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return dict(self.__dict__)

    def update(self, **kwargs: Any) -> None:
        """Update configuration values.

        Raises:
            ConfigurationError: If a key is unknown or updated values are invalid

        Example:
            >>> config = ExtractionConfig()
            >>> config.update(default_servings=2, debug_mode=True)
        """
        for key, value in kwargs.items():
            if key in self.__dataclass_fields__:
                setattr(self, key, value)
            else:
                raise ConfigurationError(
                    f"Unknown configuration key: {key}",
                    key=key,
                    valid_keys=", ".join(self.__dataclass_fields__.keys()),
                )

        self._validate()
