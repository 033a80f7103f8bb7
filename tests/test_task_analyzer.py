#!/usr/bin/env python3
"""
Tests for task_analyzer.py - Task Analysis for Feature Recommendations

This module tests keyword extraction, category matching, pattern recognition,
complexity estimation and the combined task analysis.
"""

import pytest

from featurematch.catalog_loader import parse_category_catalog
from featurematch.catalog_types import ComplexityIndicators
from featurematch.task_analyzer import (
    AnalysisResult,
    CategoryMatcher,
    ComplexityEstimator,
    KeywordExtractor,
    QuickAnalysis,
    TaskComplexity,
    TaskPatternRecognizer,
)


class TestKeywordExtractor:
    """Test cases for KeywordExtractor."""

    @pytest.fixture
    def extractor(self, category_catalog):
        return KeywordExtractor(category_catalog)

    def test_extracts_in_catalog_order(self, extractor):
        keywords = extractor.extract_keywords("build a react dashboard with user authentication")
        assert keywords == ["react", "dashboard", "authentication"]

    def test_whole_words_only(self, extractor):
        # "rapid" contains "api", "authentication" contains "auth"
        keywords = extractor.extract_keywords("build a rapid prototype with authentication")
        assert "api" not in keywords
        assert "auth" not in keywords
        assert "authentication" in keywords

    def test_no_duplicates(self, extractor, categories_data):
        categories_data["categories"][1]["keywords"].append("react")
        extractor = KeywordExtractor(parse_category_catalog(categories_data))
        assert extractor.extract_keywords("react react react") == ["react"]

    def test_unrelated_text(self, extractor):
        assert extractor.extract_keywords("xyz completely unrelated gibberish qqq") == []


class TestCategoryMatcher:
    """Test cases for CategoryMatcher."""

    @pytest.fixture
    def matcher(self, category_catalog):
        return CategoryMatcher(category_catalog)

    def test_extracted_keywords_counted_once(self, matcher, category_catalog):
        category = category_catalog.get_category("web-frontend")
        match = matcher.score_category(category, "react dashboard", ["react", "dashboard"])

        assert match.score == 20
        assert match.matched_keywords == ["react", "dashboard"]

    def test_text_keywords_not_extracted_score_five(self, matcher, category_catalog):
        category = category_catalog.get_category("web-frontend")
        match = matcher.score_category(category, "react dashboard", ["react"])

        assert match.score == 15
        assert match.matched_keywords == ["react", "dashboard"]

    def test_category_name_bonus(self, matcher, category_catalog):
        category = category_catalog.get_category("testing")
        match = matcher.score_category(category, "improve testing", ["testing"])

        # keyword +10, name mentioned +15
        assert match.score == 25

    def test_category_id_bonus(self, matcher, category_catalog):
        category = category_catalog.get_category("security")
        match = matcher.score_category(category, "security", ["security"])
        assert match.score == 25

    def test_threshold_filters_weak_categories(self, matcher):
        matches = matcher.match_categories("react dashboard with authentication", ["react", "dashboard", "authentication"])

        assert [m.category.id for m in matches] == ["web-frontend", "security"]
        assert [m.score for m in matches] == [20, 10]

    def test_custom_min_score(self, category_catalog):
        matcher = CategoryMatcher(category_catalog, min_score=15)
        matches = matcher.match_categories("react dashboard with authentication", ["react", "dashboard", "authentication"])
        assert [m.category.id for m in matches] == ["web-frontend"]

    def test_ties_keep_catalog_order(self, matcher):
        matches = matcher.match_categories("react api", ["react", "api"])
        assert [m.category.id for m in matches] == ["web-frontend", "backend-api"]

    def test_no_match(self, matcher):
        assert matcher.match_categories("nothing relevant here", []) == []


class TestTaskPatternRecognizer:
    """Test cases for TaskPatternRecognizer."""

    def test_detects_patterns(self, category_catalog):
        recognizer = TaskPatternRecognizer(category_catalog)
        patterns = recognizer.recognize_patterns("debug and fix the failing test")

        assert [p.pattern for p in patterns] == ["fix|debug|resolve", "test|testing"]

    def test_requires_word_boundaries(self, category_catalog):
        recognizer = TaskPatternRecognizer(category_catalog)
        assert recognizer.recognize_patterns("rebuild the prefix") == []


class TestComplexityEstimator:
    """Test cases for ComplexityEstimator."""

    @pytest.fixture
    def estimator(self, category_catalog):
        return ComplexityEstimator(category_catalog.complexity_indicators)

    def test_tie_between_simple_and_moderate_is_moderate(self):
        assert ComplexityEstimator.decide(2, 2, 0) == TaskComplexity.MODERATE

    def test_no_hits_is_simple(self):
        assert ComplexityEstimator.decide(0, 0, 0) == TaskComplexity.SIMPLE

    def test_complex_wins_ties(self):
        assert ComplexityEstimator.decide(2, 2, 2) == TaskComplexity.COMPLEX

    def test_simple_dominates(self):
        assert ComplexityEstimator.decide(3, 1.5, 2) == TaskComplexity.SIMPLE

    def test_weighted_scores(self, estimator):
        scores = estimator.weighted_scores("quick feature for a scalable distributed platform")
        assert scores == {"simple": 1.0, "moderate": 1.5, "complex": 6.0}

    def test_estimate_simple(self, estimator):
        assert estimator.estimate("a quick small change") == TaskComplexity.SIMPLE

    def test_estimate_moderate(self, estimator):
        assert estimator.estimate("add a feature component") == TaskComplexity.MODERATE

    def test_estimate_complex(self, estimator):
        assert estimator.estimate("design a scalable architecture") == TaskComplexity.COMPLEX

    def test_estimate_without_indicators(self):
        estimator = ComplexityEstimator(ComplexityIndicators())
        assert estimator.estimate("anything at all") == TaskComplexity.SIMPLE


class TestTaskAnalyzer:
    """Test cases for the combined analysis."""

    def test_analyze_react_task(self, task_analyzer):
        result = task_analyzer.analyze_task("Build a React dashboard with user authentication")

        assert isinstance(result, AnalysisResult)
        assert result.original_task == "Build a React dashboard with user authentication"
        assert result.normalized_task == "build a react dashboard with user authentication"
        assert result.keywords == ["react", "dashboard", "authentication"]
        assert [m.category.id for m in result.categories] == ["web-frontend", "security"]
        assert [p.pattern for p in result.patterns] == ["build|create|implement"]
        assert result.complexity == "simple"
        assert result.boost_feature_types == ["agents"]
        assert result.priority_agents == ["react-specialist"]

    def test_boosts_union_in_pattern_order(self, task_analyzer):
        result = task_analyzer.analyze_task("Fix and test the build")

        assert result.boost_feature_types == ["agents", "commands", "settings", "hook"]
        assert result.priority_agents == ["react-specialist", "debugger"]

    def test_gibberish_task(self, task_analyzer):
        result = task_analyzer.analyze_task("xyz completely unrelated gibberish qqq")

        assert result.keywords == []
        assert result.categories == []
        assert result.patterns == []
        assert result.complexity == "simple"

    def test_analysis_is_deterministic(self, task_analyzer):
        task = "Implement a scalable REST api with OAuth and pytest coverage"
        assert task_analyzer.analyze_task(task).to_dict() == task_analyzer.analyze_task(task).to_dict()

    def test_to_dict_shape(self, task_analyzer):
        data = task_analyzer.analyze_task("Build a React dashboard").to_dict()

        assert set(data) == {
            "originalTask",
            "normalizedTask",
            "keywords",
            "categories",
            "patterns",
            "complexity",
            "boostFeatureTypes",
            "priorityAgents",
        }
        assert data["categories"][0]["matchedKeywords"] == ["react", "dashboard"]
        assert data["categories"][0]["category"]["id"] == "web-frontend"


class TestQuickAnalyze:
    """Test cases for the truncated analysis."""

    @pytest.mark.parametrize(
        "task",
        [
            "Build a React dashboard with user authentication",
            "Debug the rest api server endpoint and add pytest coverage",
            "react dashboard frontend ui css authentication auth security oauth api rest endpoint server test",
            "xyz completely unrelated gibberish qqq",
        ],
    )
    def test_quick_is_consistent_with_full_analysis(self, task_analyzer, task):
        full = task_analyzer.analyze_task(task)
        quick = task_analyzer.quick_analyze(task)

        assert isinstance(quick, QuickAnalysis)
        assert quick.keywords == full.keywords[:10]
        assert quick.top_categories == [m.category.id for m in full.categories[:3]]
        assert quick.complexity == full.complexity

    def test_quick_truncates(self, task_analyzer):
        task = "react dashboard frontend ui css authentication auth security oauth api rest endpoint server test"
        quick = task_analyzer.quick_analyze(task)

        assert len(quick.keywords) == 10
        assert len(quick.top_categories) == 3

    def test_quick_to_dict(self, task_analyzer):
        data = task_analyzer.quick_analyze("Build a React dashboard").to_dict()
        assert data == {"keywords": ["react", "dashboard"], "topCategories": ["web-frontend"], "complexity": "simple"}
