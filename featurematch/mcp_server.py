#!/usr/bin/env python3
"""
MCP Server for featurematch - Task to Feature Recommendations

This module implements a Model Context Protocol (MCP) server that exposes the
task analyzer and feature recommendation engine as MCP tools, so that MCP
clients can ask which agents, skills, integrations, hooks, commands, settings
and project-context templates suit a development task.

Tools provided:
- analyze_task: Full analysis with ranked, explained recommendations
- quick_analyze_task: Keywords, top categories and complexity only
- list_task_categories: Browse the task categories
- list_features: Browse the feature catalog
- get_feature_details: Full entry for one feature
- search_features: Free-text feature search
- get_features_by_category: Features belonging to one category

The server uses stdio transport for communication with MCP clients.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from . import recommendation_mcp_tools as tools
from .catalog_loader import load_catalogs
from .config import config, validate_log_level
from .logging_config import add_log_file, get_logger, set_log_level
from .mcp_error_handling import JSON_INDENT
from .yaml_config import create_sample_config, get_config_value, load_yaml_config, validate_yaml_structure

logger = get_logger(__name__)

mcp = FastMCP("featurematch: Task to Feature Recommendations")


def _to_json(response: dict) -> str:
    return json.dumps(response, indent=JSON_INDENT)


@mcp.tool()
def analyze_task(task: str) -> str:
    """
    Recommend agents, skills, MCP servers, hooks, commands, settings and
    CLAUDE.md templates for a development task.

    Args:
        task: Description of the task, e.g. "Build a React dashboard with user authentication"

    Returns:
        JSON with the task summary, up to 5 recommendations per feature type
        (each with a score and the reasons it matched), the top priority items
        and quick wins.
    """
    return _to_json(tools.analyze_task(task))


@mcp.tool()
def quick_analyze_task(task: str) -> str:
    """
    Fast keyword, category and complexity detection for a task description.

    Args:
        task: Description of the task

    Returns:
        JSON with up to 10 keywords, up to 3 category ids and the complexity.
    """
    return _to_json(tools.quick_analyze_task(task))


@mcp.tool()
def list_task_categories() -> str:
    """List all task categories with their descriptions and main keywords."""
    return _to_json(tools.list_task_categories())


@mcp.tool()
def list_features(feature_type: Optional[str] = None, summary: bool = False) -> str:
    """
    List catalog features.

    Args:
        feature_type: Only list this type (skill, agent, mcp, hook, command, setting, claudemd)
        summary: Return only counts per type
    """
    return _to_json(tools.list_features(feature_type, summary))


@mcp.tool()
def get_feature_details(feature_type: str, feature_id: str) -> str:
    """
    Get the full catalog entry for a feature, including its install instruction.

    Args:
        feature_type: skill, agent, mcp, hook, command, setting or claudemd
        feature_id: Feature id within that type
    """
    return _to_json(tools.get_feature_details(feature_type, feature_id))


@mcp.tool()
def search_features(query: str, feature_type: Optional[str] = None) -> str:
    """
    Search features by name, description, keywords and usage guidance.

    Args:
        query: Search text, e.g. "testing"
        feature_type: Optional type filter
    """
    return _to_json(tools.search_features(query, feature_type))


@mcp.tool()
def get_features_by_category(category: str) -> str:
    """
    List the features that belong to a feature category (e.g. "development").

    Args:
        category: Feature category name
    """
    return _to_json(tools.get_features_by_category(category))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="featurematch-mcp",
        description="MCP server recommending Claude Code features for development tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  featurematch-mcp                               # Bundled catalogs
  featurematch-mcp --catalog-dir ./catalogs      # Custom catalogs
  featurematch-mcp --config-dir ~/project        # Read ~/project/.featurematch.yml
  featurematch-mcp --print-sample-config > .featurematch.yml
        """,
    )
    parser.add_argument("--catalog-dir", help="Directory containing categories.json and features.json")
    parser.add_argument("--config-dir", help="Directory containing a .featurematch.yml file (default: cwd)")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument(
        "--print-sample-config",
        action="store_true",
        help="Print a commented .featurematch.yml to stdout and exit",
    )
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> dict:
    """Combine command line, environment, YAML file and defaults, in that order."""
    yaml_data = load_yaml_config(args.config_dir)
    if yaml_data and not validate_yaml_structure(yaml_data):
        logger.warning("Ignoring malformed .featurematch.yml")
        yaml_data = {}

    catalog_dir = args.catalog_dir or get_config_value(
        yaml_data, "catalog.directory", None, "FEATUREMATCH_CATALOG_DIR"
    )
    log_level = args.log_level or get_config_value(
        yaml_data, "logging.level", config.logging.LOG_LEVEL, "FEATUREMATCH_LOG_LEVEL"
    )
    log_file = get_config_value(yaml_data, "logging.file", None, "FEATUREMATCH_LOG_FILE")

    return {
        "catalog_dir": Path(catalog_dir) if catalog_dir else None,
        "log_level": validate_log_level(str(log_level), "log level"),
        "log_file": log_file,
    }


def initialize_server(catalog_dir: Optional[Path] = None) -> None:
    """Load the catalogs and wire them into the MCP tools."""
    category_catalog, feature_catalog = load_catalogs(catalog_dir)
    tools.initialize_recommendation_tools(category_catalog, feature_catalog)


def main(argv=None):
    """Entry point for the MCP server."""
    args = parse_args(argv)
    if args.print_sample_config:
        print(create_sample_config(), end="")
        return

    settings = resolve_settings(args)
    set_log_level(settings["log_level"])
    if settings["log_file"] and not config.logging.LOG_FILE:
        add_log_file(settings["log_file"])
    config.validate()

    # Catalog problems are fatal at startup
    initialize_server(settings["catalog_dir"])

    print("featurematch MCP Server Starting", file=sys.stderr)
    print("=" * 40, file=sys.stderr)
    print(f"Catalog directory: {config.catalog.get_catalog_dir(settings['catalog_dir'])}", file=sys.stderr)
    print("Tools: analyze_task, quick_analyze_task, list_task_categories, list_features,", file=sys.stderr)
    print("       get_feature_details, search_features, get_features_by_category", file=sys.stderr)
    print("=" * 40, file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
