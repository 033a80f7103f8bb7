#!/usr/bin/env python3
"""
Feature Catalog Browser

Read-only accessors over the static catalogs: listing, lookup by type and id,
keyword search, and filtering by feature category. None of this touches the
analysis pipeline; search uses its own simple substring scoring.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .catalog_types import CategoryCatalog, Feature, FeatureCatalog, FeatureType
from .config import config
from .exceptions import FeatureNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

# Search scoring weights
NAME_MATCH_SCORE = 30
DESCRIPTION_MATCH_SCORE = 20
KEYWORD_MATCH_SCORE = 15
WHEN_TO_USE_MATCH_SCORE = 10


@dataclass
class FeatureSearchResult:
    type: FeatureType
    feature: Feature
    match_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "feature": self.feature.to_dict(), "matchScore": self.match_score}


@dataclass
class FeatureSearchResponse:
    results: List[FeatureSearchResult]  # capped
    query: str
    count: int  # total matches before the cap

    def to_dict(self) -> Dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results], "query": self.query, "count": self.count}


def score_search_match(feature: Feature, query: str) -> int:
    """Score a feature against a lowercased, trimmed query."""
    score = 0
    if query in feature.name.lower():
        score += NAME_MATCH_SCORE
    if query in feature.description.lower():
        score += DESCRIPTION_MATCH_SCORE
    for keyword in feature.keywords:
        keyword = keyword.lower()
        if query in keyword or keyword in query:
            score += KEYWORD_MATCH_SCORE
    if query in feature.when_to_use.lower():
        score += WHEN_TO_USE_MATCH_SCORE
    return score


class FeatureBrowser:
    """Browse, look up and search the feature and category catalogs."""

    def __init__(self, feature_catalog: FeatureCatalog, category_catalog: CategoryCatalog):
        self.feature_catalog = feature_catalog
        self.category_catalog = category_catalog

    def list_features(self) -> Dict[str, List[Feature]]:
        return self.feature_catalog.by_plural_type()

    def feature_counts(self) -> Dict[str, Any]:
        """Counts per plural type plus the overall total."""
        counts = {type_key: len(items) for type_key, items in self.list_features().items()}
        return {"counts": counts, "total": sum(counts.values())}

    def list_features_of_type(self, type_name: str) -> List[Feature]:
        """Features of one type; accepts singular or plural names."""
        feature_type = FeatureType.from_name(type_name)
        return list(self.feature_catalog.features_of(feature_type))

    def get_feature(self, feature_type: FeatureType, feature_id: str) -> Optional[Feature]:
        return self.feature_catalog.get_feature(feature_type, feature_id)

    def require_feature(self, type_name: str, feature_id: str) -> Feature:
        """Like get_feature, but resolves the type name and raises when missing."""
        feature_type = FeatureType.from_name(type_name)
        feature = self.get_feature(feature_type, feature_id)
        if feature is None:
            raise FeatureNotFoundError(f"No {feature_type.value} found with id: {feature_id}")
        return feature

    def search_features(
        self, query: str, feature_type: Optional[FeatureType] = None, max_results: Optional[int] = None
    ) -> FeatureSearchResponse:
        """
        Search features by free text.

        Args:
            query: Search text; matched case-insensitively as a substring
            feature_type: Only search features of this type
            max_results: Cap on returned results (defaults to configuration)

        Returns:
            FeatureSearchResponse sorted by match score, best first
        """
        max_results = config.search.MAX_SEARCH_RESULTS if max_results is None else max_results
        normalized_query = query.lower().strip()

        results = []
        for current_type in FeatureType:
            if feature_type is not None and current_type is not feature_type:
                continue
            for feature in self.feature_catalog.features_of(current_type):
                match_score = score_search_match(feature, normalized_query)
                if match_score > 0:
                    results.append(FeatureSearchResult(type=current_type, feature=feature, match_score=match_score))

        results.sort(key=lambda r: r.match_score, reverse=True)
        logger.debug(f"Feature search for '{normalized_query}' matched {len(results)} features")
        return FeatureSearchResponse(results=results[:max_results], query=query, count=len(results))

    def get_features_by_category(self, category: str) -> Dict[str, List[Feature]]:
        """Features whose category field equals category, keyed by plural type."""
        return {
            feature_type.plural: [f for f in self.feature_catalog.features_of(feature_type) if f.category == category]
            for feature_type in FeatureType
        }

    def list_categories(self, keyword_limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Category overview without default feature associations."""
        keyword_limit = config.catalog.CATEGORY_KEYWORD_LIMIT if keyword_limit is None else keyword_limit
        return [
            {
                "id": category.id,
                "name": category.name,
                "description": category.description,
                "keywords": list(category.keywords[:keyword_limit]),
            }
            for category in self.category_catalog.categories
        ]
