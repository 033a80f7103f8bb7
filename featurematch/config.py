"""
Configuration module for the featurematch recommendation engine.

This module centralizes all configuration constants and default values
to make the system more maintainable and configurable.

Example usage:
    from featurematch.config import config

    # Access configuration values
    print(f"Catalog directory: {config.catalog.get_catalog_dir()}")

    # Get configuration summary
    print(config.get_summary())

    # Validate configuration
    try:
        config.validate()
        print("Configuration is valid")
    except ValueError as e:
        print(f"Configuration error: {e}")
"""

import os
from pathlib import Path
from typing import Optional

# Catalogs bundled with the package
DEFAULT_CATALOG_DIR = Path(__file__).parent / "data"


class ConfigValidationError(ValueError):
    """Exception raised when configuration validation fails."""

    pass


def validate_positive_int(value: str, var_name: str, default: int) -> int:
    """Validate and convert string to positive integer."""
    try:
        result = int(value)
    except ValueError as e:
        raise ConfigValidationError(f"{var_name} must be a valid integer, got '{value}'") from e

    if result <= 0:
        raise ConfigValidationError(f"{var_name} must be positive, got {result}")
    return result


def validate_log_level(value: str, var_name: str) -> str:
    """Validate log level."""
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if value.upper() not in valid_levels:
        raise ConfigValidationError(f"{var_name} must be one of {valid_levels}, got '{value}'")
    return value.upper()


def validate_filename(value: str, var_name: str) -> str:
    """Validate a bare catalog filename (no directory components)."""
    if not value or Path(value).name != value:
        raise ConfigValidationError(f"{var_name} must be a plain file name, got '{value}'")
    if not value.endswith(".json"):
        raise ConfigValidationError(f"{var_name} must be a .json file, got '{value}'")
    return value


class ScoringConfig:
    """Thresholds and result limits for analysis and recommendation."""

    # Relevance thresholds
    MIN_CATEGORY_SCORE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MIN_CATEGORY_SCORE", "10"), "FEATUREMATCH_MIN_CATEGORY_SCORE", 10
    )
    MIN_FEATURE_SCORE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MIN_FEATURE_SCORE", "15"), "FEATUREMATCH_MIN_FEATURE_SCORE", 15
    )
    MIN_PRIORITY_SCORE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MIN_PRIORITY_SCORE", "40"), "FEATUREMATCH_MIN_PRIORITY_SCORE", 40
    )
    QUICK_WIN_MIN_SCORE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_QUICK_WIN_MIN_SCORE", "30"), "FEATUREMATCH_QUICK_WIN_MIN_SCORE", 30
    )

    # Result truncation
    MAX_RESULTS_PER_TYPE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_RESULTS_PER_TYPE", "5"), "FEATUREMATCH_MAX_RESULTS_PER_TYPE", 5
    )
    MAX_TOP_PRIORITY: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_TOP_PRIORITY", "5"), "FEATUREMATCH_MAX_TOP_PRIORITY", 5
    )
    MAX_QUICK_WINS: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_QUICK_WINS", "3"), "FEATUREMATCH_MAX_QUICK_WINS", 3
    )
    MAX_TOP_CATEGORIES: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_TOP_CATEGORIES", "3"), "FEATUREMATCH_MAX_TOP_CATEGORIES", 3
    )
    MAX_DETECTED_KEYWORDS: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_DETECTED_KEYWORDS", "10"), "FEATUREMATCH_MAX_DETECTED_KEYWORDS", 10
    )


class CatalogConfig:
    """Static catalog locations."""

    CATALOG_DIR: Optional[str] = os.getenv("FEATUREMATCH_CATALOG_DIR")
    CATEGORIES_FILE: str = validate_filename(
        os.getenv("FEATUREMATCH_CATEGORIES_FILE", "categories.json"), "FEATUREMATCH_CATEGORIES_FILE"
    )
    FEATURES_FILE: str = validate_filename(
        os.getenv("FEATUREMATCH_FEATURES_FILE", "features.json"), "FEATUREMATCH_FEATURES_FILE"
    )

    # Keywords shown per category in category listings
    CATEGORY_KEYWORD_LIMIT: int = validate_positive_int(
        os.getenv("FEATUREMATCH_CATEGORY_KEYWORD_LIMIT", "10"), "FEATUREMATCH_CATEGORY_KEYWORD_LIMIT", 10
    )

    @classmethod
    def get_catalog_dir(cls, override: Optional[Path] = None) -> Path:
        """Get the directory holding the catalog JSON files."""
        if override is not None:
            return Path(override)
        if cls.CATALOG_DIR:
            return Path(cls.CATALOG_DIR)
        return DEFAULT_CATALOG_DIR


class TaskInputConfig:
    """Limits applied to task descriptions at the tool boundary."""

    MIN_TASK_LENGTH: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MIN_TASK_LENGTH", "3"), "FEATUREMATCH_MIN_TASK_LENGTH", 3
    )
    MAX_TASK_LENGTH: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_TASK_LENGTH", "2000"), "FEATUREMATCH_MAX_TASK_LENGTH", 2000
    )


class SearchConfig:
    """Feature search configuration."""

    MAX_SEARCH_RESULTS: int = validate_positive_int(
        os.getenv("FEATUREMATCH_MAX_SEARCH_RESULTS", "20"), "FEATUREMATCH_MAX_SEARCH_RESULTS", 20
    )


class LoggingConfig:
    """Logging configuration."""

    # Log levels
    LOG_LEVEL: str = validate_log_level(
        os.getenv("FEATUREMATCH_LOG_LEVEL", "INFO"), "FEATUREMATCH_LOG_LEVEL"
    )

    # Log formatting
    LOG_FORMAT: str = os.getenv(
        "FEATUREMATCH_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # File logging
    LOG_FILE: Optional[str] = os.getenv("FEATUREMATCH_LOG_FILE")
    LOG_MAX_SIZE: int = validate_positive_int(
        os.getenv("FEATUREMATCH_LOG_MAX_SIZE", "10485760"), "FEATUREMATCH_LOG_MAX_SIZE", 10485760
    )  # 10MB
    LOG_BACKUP_COUNT: int = validate_positive_int(
        os.getenv("FEATUREMATCH_LOG_BACKUP_COUNT", "5"), "FEATUREMATCH_LOG_BACKUP_COUNT", 5
    )


# Convenience class for accessing all configurations
class Config:
    """Main configuration class that provides access to all configuration sections."""

    scoring = ScoringConfig()
    catalog = CatalogConfig()
    task_input = TaskInputConfig()
    search = SearchConfig()
    logging = LoggingConfig()

    @classmethod
    def validate(cls) -> bool:
        """Validate cross-field configuration constraints."""
        # Individual values are validated when the environment variables are read
        if cls.scoring.MIN_PRIORITY_SCORE < cls.scoring.MIN_FEATURE_SCORE:
            raise ConfigValidationError(
                "FEATUREMATCH_MIN_PRIORITY_SCORE must not be lower than FEATUREMATCH_MIN_FEATURE_SCORE"
            )
        if cls.task_input.MAX_TASK_LENGTH < cls.task_input.MIN_TASK_LENGTH:
            raise ConfigValidationError(
                "FEATUREMATCH_MAX_TASK_LENGTH must not be lower than FEATUREMATCH_MIN_TASK_LENGTH"
            )
        return True

    @classmethod
    def get_validation_status(cls) -> str:
        """Get validation status for all configuration values."""
        try:
            cls.validate()
            return "✅ All configuration values are valid"
        except ConfigValidationError as e:
            return f"❌ Configuration validation failed: {e}"

    @classmethod
    def get_summary(cls) -> str:
        """Get a summary of current configuration settings."""
        validation_status = cls.get_validation_status()
        return f"""
featurematch Configuration Summary:
==================================

Validation Status: {validation_status}

Scoring:
  Min Category Score: {cls.scoring.MIN_CATEGORY_SCORE}
  Min Feature Score: {cls.scoring.MIN_FEATURE_SCORE}
  Min Priority Score: {cls.scoring.MIN_PRIORITY_SCORE}
  Quick Win Min Score: {cls.scoring.QUICK_WIN_MIN_SCORE}
  Max Results Per Type: {cls.scoring.MAX_RESULTS_PER_TYPE}

Catalog:
  Directory: {cls.catalog.get_catalog_dir()}
  Categories File: {cls.catalog.CATEGORIES_FILE}
  Features File: {cls.catalog.FEATURES_FILE}

Task Input:
  Min Length: {cls.task_input.MIN_TASK_LENGTH}
  Max Length: {cls.task_input.MAX_TASK_LENGTH}

Search:
  Max Results: {cls.search.MAX_SEARCH_RESULTS}

Logging:
  Level: {cls.logging.LOG_LEVEL}
  File: {cls.logging.LOG_FILE or 'Console only'}
        """


# Create a global config instance for easy access
config = Config()
