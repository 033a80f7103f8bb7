#!/usr/bin/env python3
"""
feature_recommendation_engine.py: Main Feature Recommendation Engine

This module turns a task analysis into the final recommendation result: every
feature type is scored, filtered and ranked, and the kept features are
summarised into a priority list and a short list of quick wins.

The engine holds only read-only catalogs, so one instance can serve any
number of concurrent callers.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .catalog_types import FeatureCatalog, FeatureType
from .config import config
from .exceptions import InvalidTaskError
from .logging_config import get_logger
from .recommendation_algorithms import FeatureScorer, ScoredFeature
from .task_analyzer import AnalysisResult, TaskAnalyzer

logger = get_logger(__name__)

BUILT_IN_SOURCE = "built-in"
BUILT_IN_INSTALL_MARKER = "Built-in"


def validate_task_description(
    task_description: Any, min_length: Optional[int] = None, max_length: Optional[int] = None
) -> str:
    """
    Check a task description before it reaches the engine.

    Returns the description unchanged; raises InvalidTaskError when it is
    missing, not a string, or outside the configured length limits.
    """
    min_length = config.task_input.MIN_TASK_LENGTH if min_length is None else min_length
    max_length = config.task_input.MAX_TASK_LENGTH if max_length is None else max_length

    if not task_description or not isinstance(task_description, str):
        raise InvalidTaskError("Task description must be a non-empty string")
    if len(task_description.strip()) < min_length:
        raise InvalidTaskError(f"Task description too short (min {min_length} characters)")
    if len(task_description) > max_length:
        raise InvalidTaskError(f"Task description too long (max {max_length} characters)")
    return task_description


@dataclass
class AnalysisSummary:
    """Task summary included with every recommendation result."""

    task: str
    complexity: str
    top_categories: List[str]  # category names
    detected_keywords: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task,
            "complexity": self.complexity,
            "topCategories": list(self.top_categories),
            "detectedKeywords": list(self.detected_keywords),
        }


@dataclass
class RecommendationSummary:
    total_recommendations: int
    top_priority: List[ScoredFeature]
    quick_wins: List[ScoredFeature]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecommendations": self.total_recommendations,
            "topPriority": [item.to_dict() for item in self.top_priority],
            "quickWins": [item.to_dict() for item in self.quick_wins],
        }


@dataclass
class RecommendationResult:
    """Response containing feature recommendations."""

    analysis: AnalysisSummary
    recommendations: Dict[str, List[ScoredFeature]]  # keyed by plural type, every type present
    summary: RecommendationSummary

    def all_recommendations(self) -> List[ScoredFeature]:
        return [item for items in self.recommendations.values() for item in items]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "analysis": self.analysis.to_dict(),
            "recommendations": {
                type_key: [item.to_dict() for item in items] for type_key, items in self.recommendations.items()
            },
            "summary": self.summary.to_dict(),
        }


def is_quick_win(item: ScoredFeature, min_score: int) -> bool:
    """High scoring and cheap to adopt: built-in, a command, or nothing to install."""
    if item.score < min_score:
        return False
    return (
        item.feature.source == BUILT_IN_SOURCE
        or item.type is FeatureType.COMMAND
        or BUILT_IN_INSTALL_MARKER in item.feature.install_command
    )


class FeatureRecommendationEngine:
    """Feature recommendation system."""

    def __init__(
        self,
        feature_catalog: FeatureCatalog,
        task_analyzer: TaskAnalyzer,
        scorer: Optional[FeatureScorer] = None,
    ):
        """Initialize the engine with read-only catalogs."""
        self.feature_catalog = feature_catalog
        self.task_analyzer = task_analyzer
        self.scorer = scorer or FeatureScorer()
        self.max_results_per_type = config.scoring.MAX_RESULTS_PER_TYPE

        logger.info(f"Feature recommendation engine initialized with {feature_catalog.total_count()} features")

    def recommend_feature_type(self, feature_type: FeatureType, analysis: AnalysisResult) -> List[ScoredFeature]:
        """Score every feature of one type, keep those over threshold, best first."""
        scored = []
        for feature in self.feature_catalog.features_of(feature_type):
            item = self.scorer.evaluate(feature, feature_type, analysis)
            if item is not None:
                scored.append(item)

        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[: self.max_results_per_type]

    def generate_recommendations(self, analysis: AnalysisResult) -> RecommendationResult:
        """Build the full recommendation result for an analysis."""
        recommendations = {t.plural: self.recommend_feature_type(t, analysis) for t in FeatureType}
        all_items = [item for items in recommendations.values() for item in items]

        top_priority = sorted((item for item in all_items if item.is_priority), key=lambda i: i.score, reverse=True)
        quick_wins = sorted(
            (item for item in all_items if is_quick_win(item, config.scoring.QUICK_WIN_MIN_SCORE)),
            key=lambda i: i.score,
            reverse=True,
        )

        summary = AnalysisSummary(
            task=analysis.original_task,
            complexity=analysis.complexity,
            top_categories=[m.category.name for m in analysis.categories[: config.scoring.MAX_TOP_CATEGORIES]],
            detected_keywords=analysis.keywords[: config.scoring.MAX_DETECTED_KEYWORDS],
        )

        logger.debug(f"Generated {len(all_items)} recommendations ({len(top_priority)} priority)")

        return RecommendationResult(
            analysis=summary,
            recommendations=recommendations,
            summary=RecommendationSummary(
                total_recommendations=len(all_items),
                top_priority=top_priority[: config.scoring.MAX_TOP_PRIORITY],
                quick_wins=quick_wins[: config.scoring.MAX_QUICK_WINS],
            ),
        )

    def recommend_for_task(self, task_description: str) -> RecommendationResult:
        """Analyze a task and recommend features for it."""
        analysis = self.task_analyzer.analyze_task(task_description)
        return self.generate_recommendations(analysis)
