#!/usr/bin/env python3
"""
task_analyzer.py: Task Analysis for Feature Recommendations

This module analyzes natural language task descriptions: it extracts known
keywords, matches the task against the category catalog, detects action
patterns, and estimates complexity. The result feeds the feature scorer.

All matching is whole-word; see text_utils.has_whole_word.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .catalog_types import Category, CategoryCatalog, ComplexityIndicators, TaskPattern
from .config import config
from .logging_config import get_logger
from .text_utils import has_whole_word, matches_alternation, normalize_task

logger = get_logger(__name__)

# Category scoring weights
EXTRACTED_KEYWORD_SCORE = 10
TASK_TEXT_KEYWORD_SCORE = 5
CATEGORY_NAME_BONUS = 15

# Complexity vote weights; complex indicators are the most specific
SIMPLE_WEIGHT = 1.0
MODERATE_WEIGHT = 1.5
COMPLEX_WEIGHT = 2.0


class TaskComplexity(Enum):
    """Task complexity levels."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


@dataclass
class CategoryMatch:
    """A category that passed the relevance threshold."""

    category: Category
    score: int
    matched_keywords: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.to_dict(),
            "score": self.score,
            "matchedKeywords": list(self.matched_keywords),
        }


@dataclass
class AnalysisResult:
    """Complete analysis of one task description."""

    original_task: str
    normalized_task: str
    keywords: List[str]
    categories: List[CategoryMatch]  # sorted by score, descending
    patterns: List[TaskPattern]
    complexity: str  # 'simple', 'moderate', 'complex'
    boost_feature_types: List[str] = field(default_factory=list)
    priority_agents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "originalTask": self.original_task,
            "normalizedTask": self.normalized_task,
            "keywords": list(self.keywords),
            "categories": [match.to_dict() for match in self.categories],
            "patterns": [pattern.to_dict() for pattern in self.patterns],
            "complexity": self.complexity,
            "boostFeatureTypes": list(self.boost_feature_types),
            "priorityAgents": list(self.priority_agents),
        }


@dataclass
class QuickAnalysis:
    """Truncated analysis for incremental feedback while a user types."""

    keywords: List[str]
    top_categories: List[str]  # category ids
    complexity: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keywords": list(self.keywords),
            "topCategories": list(self.top_categories),
            "complexity": self.complexity,
        }


class KeywordExtractor:
    """Find catalog keywords that occur in a task as whole words."""

    def __init__(self, category_catalog: CategoryCatalog):
        # Insertion order of the catalog keeps extraction deterministic
        known = {}
        for category in category_catalog.categories:
            for keyword in category.keywords:
                known.setdefault(keyword.lower(), None)
        self.known_keywords = list(known)

    def extract_keywords(self, normalized_task: str) -> List[str]:
        return [keyword for keyword in self.known_keywords if has_whole_word(normalized_task, keyword)]


class CategoryMatcher:
    """Score categories by keyword overlap and name mentions."""

    def __init__(self, category_catalog: CategoryCatalog, min_score: Optional[int] = None):
        self.category_catalog = category_catalog
        self.min_score = config.scoring.MIN_CATEGORY_SCORE if min_score is None else min_score

    def score_category(self, category: Category, normalized_task: str, keywords: List[str]) -> CategoryMatch:
        category_keywords = list(dict.fromkeys(k.lower() for k in category.keywords))
        matched_keywords = []
        score = 0

        for keyword in keywords:
            if keyword in category_keywords and keyword not in matched_keywords:
                matched_keywords.append(keyword)
                score += EXTRACTED_KEYWORD_SCORE

        # Category keywords present in the text that were not counted above
        for keyword in category_keywords:
            if keyword not in matched_keywords and has_whole_word(normalized_task, keyword):
                matched_keywords.append(keyword)
                score += TASK_TEXT_KEYWORD_SCORE

        if has_whole_word(normalized_task, category.name.lower()) or has_whole_word(
            normalized_task, category.id.lower()
        ):
            score += CATEGORY_NAME_BONUS

        return CategoryMatch(category=category, score=score, matched_keywords=matched_keywords)

    def match_categories(self, normalized_task: str, keywords: List[str]) -> List[CategoryMatch]:
        matches = []
        for category in self.category_catalog.categories:
            match = self.score_category(category, normalized_task, keywords)
            if match.score >= self.min_score:
                matches.append(match)

        # sorted() is stable, so equal scores keep catalog order
        return sorted(matches, key=lambda m: m.score, reverse=True)


class TaskPatternRecognizer:
    """Recognize action patterns (build, fix, review, ...) in the task."""

    def __init__(self, category_catalog: CategoryCatalog):
        self.task_patterns = category_catalog.task_patterns

    def recognize_patterns(self, normalized_task: str) -> List[TaskPattern]:
        return [p for p in self.task_patterns if matches_alternation(normalized_task, p.pattern)]


class ComplexityEstimator:
    """Weighted vote over the simple/moderate/complex indicator words."""

    def __init__(self, indicators: ComplexityIndicators):
        self.indicators = indicators

    @staticmethod
    def _count_hits(normalized_task: str, words) -> int:
        return sum(1 for word in words if has_whole_word(normalized_task, word))

    def weighted_scores(self, normalized_task: str) -> Dict[str, float]:
        return {
            "simple": self._count_hits(normalized_task, self.indicators.simple) * SIMPLE_WEIGHT,
            "moderate": self._count_hits(normalized_task, self.indicators.moderate) * MODERATE_WEIGHT,
            "complex": self._count_hits(normalized_task, self.indicators.complex) * COMPLEX_WEIGHT,
        }

    @staticmethod
    def decide(simple: float, moderate: float, complex_: float) -> TaskComplexity:
        """
        Pick a bucket from weighted scores.

        Ties go to the more complex bucket. A task with no indicator hits at
        all is simple.
        """
        if complex_ >= moderate and complex_ >= simple and complex_ > 0:
            return TaskComplexity.COMPLEX
        if moderate >= simple and moderate > 0:
            return TaskComplexity.MODERATE
        return TaskComplexity.SIMPLE

    def estimate(self, normalized_task: str) -> TaskComplexity:
        scores = self.weighted_scores(normalized_task)
        return self.decide(scores["simple"], scores["moderate"], scores["complex"])


class TaskAnalyzer:
    """Analyze development tasks for feature recommendation."""

    def __init__(self, category_catalog: CategoryCatalog):
        """Initialize the task analyzer with a read-only category catalog."""
        self.category_catalog = category_catalog
        self.keyword_extractor = KeywordExtractor(category_catalog)
        self.category_matcher = CategoryMatcher(category_catalog)
        self.pattern_recognizer = TaskPatternRecognizer(category_catalog)
        self.complexity_estimator = ComplexityEstimator(category_catalog.complexity_indicators)

    def analyze_task(self, task_description: str) -> AnalysisResult:
        """Comprehensive analysis of task description."""
        normalized_task = normalize_task(task_description)
        keywords = self.keyword_extractor.extract_keywords(normalized_task)
        categories = self.category_matcher.match_categories(normalized_task, keywords)
        patterns = self.pattern_recognizer.recognize_patterns(normalized_task)
        complexity = self.complexity_estimator.estimate(normalized_task)

        boost_feature_types = {}
        priority_agents = {}
        for pattern in patterns:
            boost_feature_types.update(dict.fromkeys(pattern.boost))
            priority_agents.update(dict.fromkeys(pattern.priority_agents))

        logger.debug(
            f"Analyzed task: {len(keywords)} keywords, {len(categories)} categories, "
            f"{len(patterns)} patterns, complexity={complexity.value}"
        )

        return AnalysisResult(
            original_task=task_description,
            normalized_task=normalized_task,
            keywords=keywords,
            categories=categories,
            patterns=patterns,
            complexity=complexity.value,
            boost_feature_types=list(boost_feature_types),
            priority_agents=list(priority_agents),
        )

    def quick_analyze(self, task_description: str) -> QuickAnalysis:
        """Same analysis, truncated to keywords, top category ids and complexity."""
        result = self.analyze_task(task_description)
        return QuickAnalysis(
            keywords=result.keywords[: config.scoring.MAX_DETECTED_KEYWORDS],
            top_categories=[m.category.id for m in result.categories[: config.scoring.MAX_TOP_CATEGORIES]],
            complexity=result.complexity,
        )
