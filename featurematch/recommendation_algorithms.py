#!/usr/bin/env python3
"""
recommendation_algorithms.py: Scoring of catalog features against a task analysis

A feature's score is the sum of five independent signals. Each signal that
fires appends a human readable reason, so every recommendation can explain
itself:

1. extracted task keyword equals a feature keyword      +25 each
2. feature is a default of a matched category            +20 top category, +10 others
3. feature type is boosted by a detected task pattern    +10
4. feature id is a priority id of a detected pattern     +30
5. feature keyword (3+ chars) appears in the task text   +10 each, unless counted by 1
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .catalog_types import Feature, FeatureType
from .config import config
from .logging_config import get_logger
from .task_analyzer import AnalysisResult
from .text_utils import has_whole_word

logger = get_logger(__name__)

# Signal weights
KEYWORD_MATCH_SCORE = 25
PRIMARY_CATEGORY_SCORE = 20
SECONDARY_CATEGORY_SCORE = 10
PATTERN_BOOST_SCORE = 10
PRIORITY_FEATURE_SCORE = 30
TASK_MENTION_SCORE = 10

# Shorter feature keywords are too noisy for free-text mention matching
MIN_MENTION_KEYWORD_LENGTH = 3


@dataclass
class FeatureScore:
    """Raw outcome of scoring one feature."""

    score: int = 0
    reasons: List[str] = field(default_factory=list)

    def add(self, points: int, reason: str) -> None:
        self.score += points
        self.reasons.append(reason)


@dataclass
class ScoredFeature:
    """A feature that passed the relevance threshold."""

    feature: Feature
    type: FeatureType
    score: int
    match_reasons: List[str]
    is_priority: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.feature.to_dict(),
            "type": self.type.value,
            "score": self.score,
            "matchReasons": list(self.match_reasons),
            "isPriority": self.is_priority,
        }


class FeatureScorer:
    """Type-agnostic scorer; one instance serves every feature type."""

    def __init__(self, min_score: Optional[int] = None, priority_score: Optional[int] = None):
        self.min_score = config.scoring.MIN_FEATURE_SCORE if min_score is None else min_score
        self.priority_score = config.scoring.MIN_PRIORITY_SCORE if priority_score is None else priority_score

    def score_feature(self, feature: Feature, feature_type: FeatureType, analysis: AnalysisResult) -> FeatureScore:
        """Score one feature against the analysis."""
        result = FeatureScore()
        feature_keywords = list(dict.fromkeys(k.lower() for k in feature.keywords))

        # 1. Extracted task keywords that are also feature keywords
        for keyword in analysis.keywords:
            if keyword.lower() in feature_keywords:
                result.add(KEYWORD_MATCH_SCORE, f"Matches keyword: {keyword}")

        # 2. Category defaults; categories are already sorted by relevance
        for index, match in enumerate(analysis.categories):
            if feature.id in match.category.default_feature_ids(feature_type):
                bonus = PRIMARY_CATEGORY_SCORE if index == 0 else SECONDARY_CATEGORY_SCORE
                result.add(bonus, f"Recommended for {match.category.name}")

        # 3. Feature type boosted by a detected pattern
        if feature_type.plural in analysis.boost_feature_types or feature_type.value in analysis.boost_feature_types:
            result.add(PATTERN_BOOST_SCORE, "Matches task pattern")

        # 4. Feature forced to the front by a detected pattern
        if feature.id in analysis.priority_agents:
            result.add(PRIORITY_FEATURE_SCORE, "Priority for this task type")

        # 5. Feature keywords mentioned in the task but not already counted in 1
        extracted = {k.lower() for k in analysis.keywords}
        for keyword in feature_keywords:
            if len(keyword) < MIN_MENTION_KEYWORD_LENGTH or keyword in extracted:
                continue
            if has_whole_word(analysis.normalized_task, keyword):
                result.add(TASK_MENTION_SCORE, f"Task mentions: {keyword}")

        return result

    def evaluate(
        self, feature: Feature, feature_type: FeatureType, analysis: AnalysisResult
    ) -> Optional[ScoredFeature]:
        """Score a feature and return it only if it passes the threshold."""
        result = self.score_feature(feature, feature_type, analysis)
        if result.score < self.min_score:
            return None

        return ScoredFeature(
            feature=feature,
            type=feature_type,
            score=result.score,
            match_reasons=result.reasons,
            is_priority=result.score >= self.priority_score,
        )
