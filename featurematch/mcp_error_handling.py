#!/usr/bin/env python3
"""
mcp_error_handling.py: Standardized error handling for MCP tools.

This module provides consistent error response formats, exception handling utilities,
and logging across all MCP tools to ensure uniform behavior and debugging experience.
"""

import json
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .catalog_types import FeatureType
from .exceptions import CatalogError, FeatureNotFoundError, InvalidFeatureTypeError, InvalidTaskError
from .logging_config import get_logger

# JSON formatting
JSON_INDENT = 2

# Response versioning
RESPONSE_VERSION = "1.0"


class ErrorSeverity(Enum):
    """Error severity levels for categorization."""

    CRITICAL = "critical"  # Service unavailable, catalog unusable
    HIGH = "high"  # Unexpected failure inside a tool
    MEDIUM = "medium"  # Invalid parameters, unknown ids
    LOW = "low"  # Warnings


class ErrorCategory(Enum):
    """Error categories for better organization."""

    VALIDATION = "validation"  # Input parameter validation
    NOT_FOUND = "not_found"  # Unknown feature, type or category
    RESOURCE = "resource"  # Catalog files
    SYSTEM = "system"  # Infrastructure, configuration


@dataclass
class MCPError:
    """Standardized MCP error structure."""

    tool_name: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    context: str = ""
    error_code: str = ""
    timestamp: str = ""
    version: str = RESPONSE_VERSION

    # Additional debugging information
    stack_trace: Optional[str] = None
    request_data: Optional[Dict[str, Any]] = None
    suggestions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": False,
            "error": {
                "tool": self.tool_name,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "context": self.context,
                "error_code": self.error_code,
                "timestamp": self.timestamp,
                "version": self.version,
                "stack_trace": self.stack_trace,
                "request_data": self.request_data,
                "suggestions": self.suggestions,
            },
        }

    def to_json(self) -> str:
        """Convert to JSON string for MCP responses."""
        return json.dumps(self.to_dict(), indent=JSON_INDENT)


class MCPErrorHandler:
    """Centralized error handling for MCP tools."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def create_validation_error(
        self, tool_name: str, message: str, context: str = "", suggestions: Optional[List[str]] = None
    ) -> MCPError:
        """Create a parameter validation error."""
        return MCPError(
            tool_name=tool_name,
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            error_code="VALIDATION_FAILED",
            suggestions=suggestions or [],
        )

    def create_not_found_error(
        self, tool_name: str, message: str, context: str = "", suggestions: Optional[List[str]] = None
    ) -> MCPError:
        """Create an error for an unknown feature, type or category."""
        return MCPError(
            tool_name=tool_name,
            message=message,
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            error_code="NOT_FOUND",
            suggestions=suggestions or [],
        )

    def handle_exception(
        self, tool_name: str, exception: Exception, context: str = "", request_data: Optional[Dict[str, Any]] = None
    ) -> MCPError:
        """Handle an exception and convert it to standardized MCP error."""
        error_message = str(exception)
        error_type = type(exception).__name__

        category, severity = self._categorize_exception(exception)

        if category in (ErrorCategory.VALIDATION, ErrorCategory.NOT_FOUND):
            self.logger.warning(f"Tool '{tool_name}' rejected request: {error_type}: {error_message}")
            stack_trace = None
        else:
            self.logger.error(
                f"Tool '{tool_name}' encountered {error_type}: {error_message}",
                extra={"context": context, "tool": tool_name},
                exc_info=True,
            )
            stack_trace = traceback.format_exc()

        return MCPError(
            tool_name=tool_name,
            message=error_message,
            category=category,
            severity=severity,
            context=context,
            error_code=f"{category.value.upper()}_{error_type.upper()}",
            stack_trace=stack_trace,
            request_data=request_data,
            suggestions=self._get_exception_suggestions(exception),
        )

    def _categorize_exception(self, exception: Exception) -> Tuple[ErrorCategory, ErrorSeverity]:
        """Categorize exception type into category and severity."""
        if isinstance(exception, (FeatureNotFoundError, InvalidFeatureTypeError)):
            return ErrorCategory.NOT_FOUND, ErrorSeverity.MEDIUM
        elif isinstance(exception, InvalidTaskError):
            return ErrorCategory.VALIDATION, ErrorSeverity.MEDIUM
        elif isinstance(exception, CatalogError):
            return ErrorCategory.RESOURCE, ErrorSeverity.CRITICAL
        else:
            return ErrorCategory.SYSTEM, ErrorSeverity.HIGH

    def _get_exception_suggestions(self, exception: Exception) -> List[str]:
        """Get helpful suggestions based on exception type."""
        suggestions = []

        if isinstance(exception, InvalidTaskError):
            suggestions.append("Provide a more detailed task description")
            suggestions.append("Mention the technologies and the kind of work involved")
        elif isinstance(exception, InvalidFeatureTypeError):
            suggestions.append("Use one of: " + ", ".join(t.value for t in FeatureType))
        elif isinstance(exception, FeatureNotFoundError):
            suggestions.append("Use search_features or list_features to find valid feature ids")
        elif isinstance(exception, CatalogError):
            suggestions.append("Check the catalog directory and the JSON files it contains")

        return suggestions


# Global error handler instance
error_handler = MCPErrorHandler()


def create_validation_error(
    tool_name: str, message: str, context: str = "", suggestions: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Create a validation error response dictionary."""
    return error_handler.create_validation_error(tool_name, message, context, suggestions).to_dict()


def create_not_found_error(
    tool_name: str, message: str, context: str = "", suggestions: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Create a not-found error response dictionary."""
    return error_handler.create_not_found_error(tool_name, message, context, suggestions).to_dict()


def handle_tool_exception(
    tool_name: str, exception: Exception, context: str = "", request_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Handle exception and return an error response dictionary."""
    return error_handler.handle_exception(tool_name, exception, context, request_data).to_dict()
