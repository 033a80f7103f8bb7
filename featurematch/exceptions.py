"""
Custom exceptions for the featurematch recommendation engine.

This module defines specific exception classes for different failure scenarios
to improve error handling and debugging throughout the codebase.
"""


class FeatureMatchError(Exception):
    """Base exception class for all featurematch-related errors."""

    pass


class CatalogError(FeatureMatchError):
    """Raised when the static catalogs cannot be used."""

    pass


class CatalogLoadError(CatalogError):
    """Raised when a catalog file is missing, unreadable, or not valid JSON."""

    pass


class CatalogValidationError(CatalogError):
    """Raised when catalog data does not have the expected structure."""

    pass


class InvalidTaskError(FeatureMatchError, ValueError):
    """Raised when a task description fails boundary validation."""

    pass


class InvalidFeatureTypeError(FeatureMatchError, ValueError):
    """Raised when a feature type name is not recognised."""

    pass


class FeatureNotFoundError(FeatureMatchError):
    """Raised when a feature cannot be found in the catalog."""

    pass
