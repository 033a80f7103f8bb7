#!/usr/bin/env python3
"""
recommendation_mcp_tools.py: MCP tools for task analysis and feature recommendations.

This module is the boundary between MCP clients and the engine. It validates
input, calls the analyzer, recommendation engine or catalog browser, and turns
results and failures into JSON-ready dictionaries.

Core MCP Tools:
- analyze_task: Full analysis with ranked recommendations
- quick_analyze_task: Keywords, top categories and complexity only
- list_task_categories: Category overview
- list_features / get_feature_details / search_features / get_features_by_category:
  read-only access to the feature catalog
"""

import time
from typing import Any, Dict, Optional

from .catalog_types import CategoryCatalog, FeatureCatalog, FeatureType
from .exceptions import InvalidTaskError
from .feature_recommendation_engine import FeatureRecommendationEngine, validate_task_description
from .feature_search import FeatureBrowser
from .logging_config import get_logger
from .mcp_error_handling import (
    RESPONSE_VERSION,
    create_not_found_error,
    create_validation_error,
    handle_tool_exception,
)
from .task_analyzer import TaskAnalyzer

logger = get_logger(__name__)

# Global instances - initialized by the server at startup
_task_analyzer: Optional[TaskAnalyzer] = None
_recommendation_engine: Optional[FeatureRecommendationEngine] = None
_feature_browser: Optional[FeatureBrowser] = None


def initialize_recommendation_tools(category_catalog: CategoryCatalog, feature_catalog: FeatureCatalog) -> None:
    """
    Initialize the tools with the loaded catalogs.

    Args:
        category_catalog: Categories, task patterns and complexity indicators
        feature_catalog: Features grouped by type
    """
    global _task_analyzer, _recommendation_engine, _feature_browser

    _task_analyzer = TaskAnalyzer(category_catalog)
    _recommendation_engine = FeatureRecommendationEngine(feature_catalog, _task_analyzer)
    _feature_browser = FeatureBrowser(feature_catalog, category_catalog)

    logger.info("Feature recommendation MCP tools initialized successfully")


def _require_initialized() -> None:
    if _task_analyzer is None or _recommendation_engine is None or _feature_browser is None:
        raise RuntimeError("Recommendation tools not initialized")


def _success(payload: Dict[str, Any], start_time: float) -> Dict[str, Any]:
    return {
        "success": True,
        **payload,
        "metadata": {
            "timestamp": time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime()),
            "version": RESPONSE_VERSION,
            "processing_time": time.time() - start_time,
        },
    }


def _task_validation_error(tool_name: str, error: InvalidTaskError) -> Dict[str, Any]:
    return create_validation_error(
        tool_name,
        str(error),
        "Task description validation failed",
        ["Provide a meaningful task description", "Include specific details about what you want to accomplish"],
    )


def analyze_task(task: Any) -> Dict[str, Any]:
    """
    Analyze a development task and recommend features for it.

    Args:
        task: Free-text task description, e.g.
              "Build a React dashboard with user authentication"

    Returns:
        Task summary, recommendations per feature type, and a summary with
        top priority items and quick wins
    """
    start_time = time.time()
    try:
        task = validate_task_description(task)
    except InvalidTaskError as e:
        return _task_validation_error("analyze_task", e)

    try:
        _require_initialized()
        logger.info(f"Processing recommendation request: {task[:50]}...")
        result = _recommendation_engine.recommend_for_task(task)
        return _success(result.to_dict(), start_time)
    except Exception as e:
        return handle_tool_exception("analyze_task", e, "Generating recommendations", {"task": task})


def quick_analyze_task(task: Any) -> Dict[str, Any]:
    """
    Lightweight analysis for feedback while a task is being typed.

    Returns:
        Up to 10 keywords, up to 3 category ids, and the complexity estimate
    """
    start_time = time.time()
    try:
        task = validate_task_description(task)
    except InvalidTaskError as e:
        return _task_validation_error("quick_analyze_task", e)

    try:
        _require_initialized()
        return _success(_task_analyzer.quick_analyze(task).to_dict(), start_time)
    except Exception as e:
        return handle_tool_exception("quick_analyze_task", e, "Quick analysis", {"task": task})


def list_task_categories() -> Dict[str, Any]:
    """List every task category with a short keyword sample."""
    start_time = time.time()
    try:
        _require_initialized()
        categories = _feature_browser.list_categories()
        return _success({"categories": categories, "count": len(categories)}, start_time)
    except Exception as e:
        return handle_tool_exception("list_task_categories", e, "Listing categories")


def list_features(feature_type: Optional[str] = None, summary: bool = False) -> Dict[str, Any]:
    """
    List catalog features.

    Args:
        feature_type: Restrict to one type (singular or plural name)
        summary: Return only counts per type and the total
    """
    start_time = time.time()
    try:
        _require_initialized()
        if summary:
            return _success(_feature_browser.feature_counts(), start_time)

        if feature_type:
            resolved = FeatureType.from_name(feature_type)
            features = _feature_browser.list_features_of_type(feature_type)
            return _success({resolved.plural: [f.to_dict() for f in features]}, start_time)

        grouped = _feature_browser.list_features()
        return _success(
            {"features": {type_key: [f.to_dict() for f in items] for type_key, items in grouped.items()}},
            start_time,
        )
    except Exception as e:
        return handle_tool_exception("list_features", e, "Listing features", {"feature_type": feature_type})


def get_feature_details(feature_type: str, feature_id: str) -> Dict[str, Any]:
    """Get the full catalog entry for one feature."""
    start_time = time.time()
    try:
        _require_initialized()
        feature = _feature_browser.require_feature(feature_type, feature_id)
        return _success({"type": FeatureType.from_name(feature_type).value, "feature": feature.to_dict()}, start_time)
    except Exception as e:
        return handle_tool_exception(
            "get_feature_details", e, "Feature lookup", {"feature_type": feature_type, "feature_id": feature_id}
        )


def search_features(query: Any, feature_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Search features by name, description, keywords and usage guidance.

    Args:
        query: Search text
        feature_type: Restrict to one type (singular or plural name)
    """
    start_time = time.time()
    if not query or not isinstance(query, str) or not query.strip():
        return create_validation_error(
            "search_features",
            "Missing search query",
            "Parameter validation failed",
            ["Provide a search query such as 'react' or 'testing'"],
        )

    try:
        _require_initialized()
        resolved = FeatureType.from_name(feature_type) if feature_type else None
        response = _feature_browser.search_features(query, resolved)
        return _success(response.to_dict(), start_time)
    except Exception as e:
        return handle_tool_exception("search_features", e, "Feature search", {"query": query})


def get_features_by_category(category: str) -> Dict[str, Any]:
    """List features whose category matches, grouped by type."""
    start_time = time.time()
    try:
        _require_initialized()
        grouped = _feature_browser.get_features_by_category(category)
        total = sum(len(items) for items in grouped.values())
        if total == 0:
            return create_not_found_error(
                "get_features_by_category",
                "Category not found",
                f"No features found for category: {category}",
                ["Use list_features to see the categories features belong to"],
            )

        return _success(
            {
                "category": category,
                "features": {type_key: [f.to_dict() for f in items] for type_key, items in grouped.items()},
                "count": total,
            },
            start_time,
        )
    except Exception as e:
        return handle_tool_exception("get_features_by_category", e, "Category filter", {"category": category})
