"""
Test package for the featurematch recommendation engine.

This package contains unit tests and integration tests for:
- Text normalization and whole-word matching (test_text_utils.py)
- Task analysis and feature scoring (test_task_analyzer.py, test_recommendation_algorithms.py)
- Recommendation generation and catalog browsing
- Catalog loading, configuration and the MCP tool boundary

Run tests with:
    pytest tests/
"""
