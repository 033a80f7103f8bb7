"""
featurematch - recommend Claude Code features for a development task.

The engine analyzes a free-text task description against static catalogs and
returns ranked, explained recommendations of agents, skills, MCP servers,
hooks, commands, settings and CLAUDE.md templates.
"""

__version__ = "0.1.0"
