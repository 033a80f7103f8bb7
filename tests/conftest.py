#!/usr/bin/env python3
"""
conftest.py: Shared pytest fixtures for the featurematch test suite.

This module provides:
- Small synthetic category and feature catalogs with hand-computable scores
- Helpers to write catalogs to a temporary directory for loader tests
- The catalogs bundled with the package
- Isolation of the module-level MCP tool state
"""

import copy
import json
from pathlib import Path

import pytest

from featurematch import recommendation_mcp_tools
from featurematch.catalog_loader import load_catalogs, parse_category_catalog, parse_feature_catalog
from featurematch.config import DEFAULT_CATALOG_DIR
from featurematch.feature_recommendation_engine import FeatureRecommendationEngine
from featurematch.feature_search import FeatureBrowser
from featurematch.task_analyzer import TaskAnalyzer

SAMPLE_CATEGORIES = {
    "categories": [
        {
            "id": "web-frontend",
            "name": "Web Frontend",
            "description": "User interfaces",
            "keywords": ["react", "dashboard", "frontend", "ui", "css"],
            "defaultFeatures": {"agents": ["react-specialist", "ui-designer"], "skills": ["frontend-design"]},
        },
        {
            "id": "security",
            "name": "Security",
            "description": "Authentication and authorization",
            "keywords": ["authentication", "auth", "security", "oauth"],
            "defaultFeatures": {"agents": ["security-auditor"], "hooks": ["secret-scan"]},
        },
        {
            "id": "backend-api",
            "name": "Backend API",
            "description": "Servers and endpoints",
            "keywords": ["api", "rest", "endpoint", "server"],
            "defaultFeatures": {"agents": ["api-builder"]},
        },
        {
            "id": "testing",
            "name": "Testing",
            "description": "Automated tests",
            "keywords": ["test", "testing", "pytest", "coverage"],
            "defaultFeatures": {"commands": ["run-tests"]},
        },
    ],
    "taskPatterns": [
        {
            "pattern": "build|create|implement",
            "boost": ["agents"],
            "priorityAgents": ["react-specialist"],
            "description": "Building something new",
        },
        {
            "pattern": "fix|debug|resolve",
            "boost": ["commands", "settings"],
            "priorityAgents": ["debugger"],
            "description": "Fixing a problem",
        },
        {"pattern": "test|testing", "boost": ["hook"], "description": "Writing tests"},
    ],
    "complexityIndicators": {
        "simple": ["simple", "quick", "small"],
        "moderate": ["feature", "component", "integrate"],
        "complex": ["architecture", "distributed", "scalable", "platform"],
    },
}


def _feature(feature_id, name, keywords, source="community", install="Copy file", category="development", **extra):
    entry = {
        "id": feature_id,
        "name": name,
        "description": f"{name} feature",
        "whenToUse": f"When you need {name.lower()}",
        "installCommand": install,
        "source": source,
        "category": category,
        "keywords": keywords,
    }
    entry.update(extra)
    return entry


SAMPLE_FEATURES = {
    "skills": [_feature("frontend-design", "Frontend Design", ["frontend", "ui", "css", "design"], source="anthropic")],
    "agents": [
        _feature("react-specialist", "React Specialist", ["react", "hooks", "jsx"]),
        _feature("ui-designer", "UI Designer", ["ui", "design", "figma"]),
        _feature("security-auditor", "Security Auditor", ["security", "authentication", "oauth"], category="security"),
        _feature("api-builder", "API Builder", ["api", "rest", "backend"]),
        _feature("debugger", "Debugger", ["debug", "bug", "error"], category="quality"),
    ],
    "mcps": [_feature("browser-tools", "Browser Tools", ["browser", "screenshot"], category="testing")],
    "hooks": [
        _feature("secret-scan", "Secret Scan", ["secrets", "security"], category="security"),
        _feature("test-runner", "Test Runner", ["test", "pytest"], source="built-in", category="testing"),
    ],
    "commands": [
        _feature("run-tests", "/run-tests", ["test", "coverage"], install="Create .claude/commands/run-tests.md",
                 category="testing"),
        _feature("review", "/review", ["review"], source="built-in", install="Built-in command", category="quality"),
    ],
    "settings": [
        _feature("verbose", "Verbose Output", ["debug", "verbose", "error"], source="built-in",
                 install="Built-in: /config", category="productivity", configExample={"verbose": True}),
    ],
    "claudemd": [
        _feature("react-template", "React Template", ["react", "frontend"], install="Save as CLAUDE.md",
                 templateExample="# Project"),
    ],
}


@pytest.fixture
def categories_data():
    """Raw category catalog data; safe to modify per test."""
    return copy.deepcopy(SAMPLE_CATEGORIES)


@pytest.fixture
def features_data():
    """Raw feature catalog data; safe to modify per test."""
    return copy.deepcopy(SAMPLE_FEATURES)


@pytest.fixture
def category_catalog(categories_data):
    return parse_category_catalog(categories_data)


@pytest.fixture
def feature_catalog(features_data):
    return parse_feature_catalog(features_data)


@pytest.fixture
def task_analyzer(category_catalog):
    return TaskAnalyzer(category_catalog)


@pytest.fixture
def recommendation_engine(feature_catalog, task_analyzer):
    return FeatureRecommendationEngine(feature_catalog, task_analyzer)


@pytest.fixture
def feature_browser(feature_catalog, category_catalog):
    return FeatureBrowser(feature_catalog, category_catalog)


def write_catalog_dir(directory: Path, categories, features) -> Path:
    """Write both catalog files into directory and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "categories.json").write_text(json.dumps(categories), encoding="utf-8")
    (directory / "features.json").write_text(json.dumps(features), encoding="utf-8")
    return directory


@pytest.fixture
def catalog_dir(tmp_path, categories_data, features_data):
    """Temporary directory holding the synthetic catalogs as JSON files."""
    return write_catalog_dir(tmp_path / "catalogs", categories_data, features_data)


@pytest.fixture(scope="session")
def bundled_catalogs():
    """The catalogs shipped with the package."""
    return load_catalogs(DEFAULT_CATALOG_DIR)


@pytest.fixture
def mcp_tools(category_catalog, feature_catalog, monkeypatch):
    """MCP tool functions wired to the synthetic catalogs, reset after the test."""
    monkeypatch.setattr(recommendation_mcp_tools, "_task_analyzer", None)
    monkeypatch.setattr(recommendation_mcp_tools, "_recommendation_engine", None)
    monkeypatch.setattr(recommendation_mcp_tools, "_feature_browser", None)
    recommendation_mcp_tools.initialize_recommendation_tools(category_catalog, feature_catalog)
    return recommendation_mcp_tools
