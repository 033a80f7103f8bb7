#!/usr/bin/env python3
"""
catalog_loader.py: Load and validate the static catalogs.

The category catalog (categories, task patterns, complexity indicators) and the
feature catalog are plain JSON files. They are read once at startup and turned
into the immutable structures of catalog_types. Any problem with the data is a
startup failure: CatalogLoadError for unreadable files, CatalogValidationError
for data with the wrong shape.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .catalog_types import (
    Category,
    CategoryCatalog,
    ComplexityIndicators,
    Feature,
    FeatureCatalog,
    FeatureType,
    TaskPattern,
)
from .config import config
from .exceptions import CatalogLoadError, CatalogValidationError
from .logging_config import get_logger
from .text_utils import alternation_pattern

logger = get_logger(__name__)

REQUIRED_CATEGORY_FIELDS = ["id", "name", "keywords"]
REQUIRED_FEATURE_FIELDS = [
    "id",
    "name",
    "description",
    "whenToUse",
    "installCommand",
    "source",
    "category",
    "keywords",
]
COMPLEXITY_LEVELS = ["simple", "moderate", "complex"]


def read_json_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a catalog file, raising CatalogLoadError on any I/O or JSON failure."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise CatalogLoadError(f"Failed to read catalog file {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogValidationError(f"Catalog file {path} must contain a JSON object at the top level")
    return data


def _string_list(value: Any, where: str) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise CatalogValidationError(f"{where} must be a list of strings")
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise CatalogValidationError(f"{where} must only contain non-empty strings, got {item!r}")
    return tuple(value)


def _require_fields(entry: Any, fields: List[str], where: str) -> None:
    if not isinstance(entry, dict):
        raise CatalogValidationError(f"{where} must be an object")
    missing = [name for name in fields if name not in entry]
    if missing:
        raise CatalogValidationError(f"{where} is missing required field(s): {', '.join(missing)}")


def parse_category(entry: Any, index: int) -> Category:
    where = f"categories[{index}]"
    _require_fields(entry, REQUIRED_CATEGORY_FIELDS, where)

    raw_defaults = entry.get("defaultFeatures") or {}
    if not isinstance(raw_defaults, dict):
        raise CatalogValidationError(f"{where}.defaultFeatures must be an object")

    valid_keys = {t.plural for t in FeatureType}
    default_features = {}
    for type_key, ids in raw_defaults.items():
        if type_key not in valid_keys:
            raise CatalogValidationError(
                f"{where}.defaultFeatures has unknown feature type '{type_key}'. "
                f"Valid keys: {', '.join(sorted(valid_keys))}"
            )
        default_features[type_key] = _string_list(ids, f"{where}.defaultFeatures.{type_key}")

    return Category(
        id=str(entry["id"]),
        name=str(entry["name"]),
        description=str(entry.get("description", "")),
        keywords=_string_list(entry["keywords"], f"{where}.keywords"),
        default_features=default_features,
    )


def parse_task_pattern(entry: Any, index: int) -> TaskPattern:
    where = f"taskPatterns[{index}]"
    _require_fields(entry, ["pattern", "boost"], where)

    pattern = entry["pattern"]
    if not isinstance(pattern, str) or not pattern.strip():
        raise CatalogValidationError(f"{where}.pattern must be a non-empty string")
    try:
        alternation_pattern(pattern)
    except re.error as e:
        raise CatalogValidationError(f"{where}.pattern '{pattern}' is not a valid pattern: {e}") from e

    return TaskPattern(
        pattern=pattern,
        boost=_string_list(entry["boost"], f"{where}.boost"),
        description=str(entry.get("description", "")),
        priority_agents=_string_list(entry.get("priorityAgents", []), f"{where}.priorityAgents"),
    )


def parse_complexity_indicators(raw: Any) -> ComplexityIndicators:
    if raw is None:
        return ComplexityIndicators()
    if not isinstance(raw, dict):
        raise CatalogValidationError("complexityIndicators must be an object")

    lists = {}
    for level in COMPLEXITY_LEVELS:
        lists[level] = _string_list(raw.get(level, []), f"complexityIndicators.{level}")
    return ComplexityIndicators(**lists)


def parse_category_catalog(data: Dict[str, Any]) -> CategoryCatalog:
    """Build a CategoryCatalog from the decoded categories file."""
    raw_categories = data.get("categories")
    if not isinstance(raw_categories, list):
        raise CatalogValidationError("Category catalog must have a 'categories' list")

    categories = [parse_category(entry, i) for i, entry in enumerate(raw_categories)]
    seen = set()
    for category in categories:
        if category.id in seen:
            raise CatalogValidationError(f"Duplicate category id: {category.id}")
        seen.add(category.id)

    raw_patterns = data.get("taskPatterns", [])
    if not isinstance(raw_patterns, list):
        raise CatalogValidationError("'taskPatterns' must be a list")
    patterns = [parse_task_pattern(entry, i) for i, entry in enumerate(raw_patterns)]

    return CategoryCatalog(
        categories=tuple(categories),
        task_patterns=tuple(patterns),
        complexity_indicators=parse_complexity_indicators(data.get("complexityIndicators")),
    )


def parse_feature(entry: Any, feature_type: FeatureType, index: int) -> Feature:
    where = f"{feature_type.plural}[{index}]"
    _require_fields(entry, REQUIRED_FEATURE_FIELDS, where)

    config_example = entry.get("configExample")
    if config_example is not None and not isinstance(config_example, dict):
        raise CatalogValidationError(f"{where}.configExample must be an object")

    return Feature(
        id=str(entry["id"]),
        name=str(entry["name"]),
        description=str(entry["description"]),
        when_to_use=str(entry["whenToUse"]),
        install_command=str(entry["installCommand"]),
        source=str(entry["source"]),
        category=str(entry["category"]),
        keywords=_string_list(entry["keywords"], f"{where}.keywords"),
        config_example=config_example,
        file_content=entry.get("fileContent"),
        template_example=entry.get("templateExample"),
    )


def parse_feature_catalog(data: Dict[str, Any]) -> FeatureCatalog:
    """Build a FeatureCatalog from the decoded features file."""
    known_keys = {t.plural for t in FeatureType}
    for key in data:
        if key not in known_keys:
            logger.warning(f"Ignoring unknown feature type section '{key}' in feature catalog")

    features = {}
    for feature_type in FeatureType:
        raw_features = data.get(feature_type.plural, [])
        if not isinstance(raw_features, list):
            raise CatalogValidationError(f"'{feature_type.plural}' must be a list")

        parsed = [parse_feature(entry, feature_type, i) for i, entry in enumerate(raw_features)]
        seen = set()
        for feature in parsed:
            if feature.id in seen:
                raise CatalogValidationError(f"Duplicate {feature_type.value} id: {feature.id}")
            seen.add(feature.id)
        features[feature_type] = tuple(parsed)

    return FeatureCatalog(features=features)


def load_category_catalog(path: Union[str, Path]) -> CategoryCatalog:
    catalog = parse_category_catalog(read_json_file(path))
    logger.info(
        f"Loaded {len(catalog.categories)} categories and {len(catalog.task_patterns)} task patterns from {path}"
    )
    return catalog


def load_feature_catalog(path: Union[str, Path]) -> FeatureCatalog:
    catalog = parse_feature_catalog(read_json_file(path))
    logger.info(f"Loaded {catalog.total_count()} features from {path}")
    return catalog


def load_catalogs(catalog_dir: Optional[Union[str, Path]] = None) -> Tuple[CategoryCatalog, FeatureCatalog]:
    """
    Load both catalogs from a directory.

    Args:
        catalog_dir: Directory holding the catalog files. Defaults to the
                     configured directory, or the catalogs bundled with the package.

    Returns:
        Tuple of (CategoryCatalog, FeatureCatalog)
    """
    directory = config.catalog.get_catalog_dir(Path(catalog_dir) if catalog_dir else None)
    category_catalog = load_category_catalog(directory / config.catalog.CATEGORIES_FILE)
    feature_catalog = load_feature_catalog(directory / config.catalog.FEATURES_FILE)
    return category_catalog, feature_catalog
