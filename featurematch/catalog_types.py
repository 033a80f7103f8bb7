#!/usr/bin/env python3
"""
catalog_types.py: Data contracts for the static catalogs.

This module defines the immutable structures that the catalog loader builds
from the bundled JSON files: task categories, the features grouped by type,
the action patterns, and the complexity indicator word lists. The analysis
and recommendation code only ever reads these objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .exceptions import InvalidFeatureTypeError


class FeatureType(Enum):
    """Kinds of features in the catalog, in recommendation order."""

    SKILL = "skill"
    AGENT = "agent"
    MCP = "mcp"
    HOOK = "hook"
    COMMAND = "command"
    SETTING = "setting"
    CLAUDEMD = "claudemd"

    @property
    def plural(self) -> str:
        """Key used for this type in catalogs and responses."""
        if self is FeatureType.CLAUDEMD:
            return self.value
        return f"{self.value}s"

    @classmethod
    def from_name(cls, name: str) -> "FeatureType":
        """Resolve a singular or plural type name."""
        if isinstance(name, str):
            lowered = name.strip().lower()
            for feature_type in cls:
                if lowered in (feature_type.value, feature_type.plural):
                    return feature_type
        valid = ", ".join(t.value for t in cls)
        raise InvalidFeatureTypeError(f"Invalid feature type '{name}'. Valid types: {valid}")


@dataclass(frozen=True)
class Category:
    """A task domain with its keywords and default feature associations."""

    id: str
    name: str
    description: str
    keywords: Tuple[str, ...]
    default_features: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def default_feature_ids(self, feature_type: FeatureType) -> Tuple[str, ...]:
        return self.default_features.get(feature_type.plural, ())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "keywords": list(self.keywords),
            "defaultFeatures": {key: list(ids) for key, ids in self.default_features.items()},
        }


@dataclass(frozen=True)
class Feature:
    """A single catalog entry. Ids are unique within a feature type only."""

    id: str
    name: str
    description: str
    when_to_use: str
    install_command: str
    source: str
    category: str
    keywords: Tuple[str, ...]
    config_example: Optional[Dict[str, Any]] = None
    file_content: Optional[str] = None
    template_example: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape used by the catalog files."""
        result = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "whenToUse": self.when_to_use,
            "installCommand": self.install_command,
            "source": self.source,
            "category": self.category,
            "keywords": list(self.keywords),
        }
        if self.config_example is not None:
            result["configExample"] = self.config_example
        if self.file_content is not None:
            result["fileContent"] = self.file_content
        if self.template_example is not None:
            result["templateExample"] = self.template_example
        return result


@dataclass(frozen=True)
class TaskPattern:
    """An action/intent pattern such as ``fix|debug|resolve``."""

    pattern: str
    boost: Tuple[str, ...]
    description: str
    priority_agents: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "boost": list(self.boost),
            "priorityAgents": list(self.priority_agents),
            "description": self.description,
        }


@dataclass(frozen=True)
class ComplexityIndicators:
    """Indicator word lists used by the complexity vote."""

    simple: Tuple[str, ...] = ()
    moderate: Tuple[str, ...] = ()
    complex: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryCatalog:
    """Categories, task patterns and complexity indicators."""

    categories: Tuple[Category, ...]
    task_patterns: Tuple[TaskPattern, ...] = ()
    complexity_indicators: ComplexityIndicators = field(default_factory=ComplexityIndicators)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


@dataclass(frozen=True)
class FeatureCatalog:
    """Features grouped by type."""

    features: Dict[FeatureType, Tuple[Feature, ...]]

    def features_of(self, feature_type: FeatureType) -> Tuple[Feature, ...]:
        return self.features.get(feature_type, ())

    def get_feature(self, feature_type: FeatureType, feature_id: str) -> Optional[Feature]:
        for feature in self.features_of(feature_type):
            if feature.id == feature_id:
                return feature
        return None

    def by_plural_type(self) -> Dict[str, List[Feature]]:
        """All features keyed by plural type name, every type present."""
        return {t.plural: list(self.features_of(t)) for t in FeatureType}

    def total_count(self) -> int:
        return sum(len(items) for items in self.features.values())
