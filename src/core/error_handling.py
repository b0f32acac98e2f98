"""
Error handling system for the item crafting simulator.

This module provides hierarchical error classification for catalog loading,
affix generation and description rendering, plus an aggregator used to
summarise per-item failures across a generation batch.
"""

import time
from datetime import datetime
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    CRITICAL = auto()  # Aborts the whole run
    HIGH = auto()  # Aborts a single item
    MEDIUM = auto()
    LOW = auto()  # Recovered locally, logged
    INFO = auto()


class ErrorCategory(Enum):
    """Error categories for classification and routing."""

    SYSTEM = auto()
    CATALOG = auto()  # Persisted catalog records
    GENERATION = auto()  # Affix selection and rolling
    DESCRIPTION = auto()  # Stat text rendering
    VALIDATION = auto()
    CONFIGURATION = auto()


class BaseError(Exception):
    """Base exception class with enhanced error information."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """
        Initialize base error with comprehensive metadata.

        Args:
            message: Human-readable error message
            severity: Error severity level
            category: Error category for classification
            error_code: Unique error code for tracking
            context: Additional context information
            recoverable: Whether error is recoverable
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.recoverable = recoverable
        self.timestamp = datetime.utcnow()

    def _generate_error_code(self) -> str:
        """Generate unique error code based on category and timestamp."""
        timestamp = int(time.time() * 1000) % 100000
        return f"{self.category.name[:3]}-{self.severity.name[:3]}-{timestamp}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.name,
            "category": self.category.name,
            "context": self.context,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp.isoformat(),
        }


class CatalogLoadError(BaseError):
    """Missing or malformed persisted catalog records."""

    def __init__(self, message: str, source: str, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["source"] = source
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CATALOG,
            context=context,
            recoverable=False,
            **kwargs,
        )


class NoEligibleModifierError(BaseError):
    """Every candidate modifier weighed 0 during a draw."""

    def __init__(self, message: str, base_name: str, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["base_name"] = base_name
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.GENERATION,
            context=context,
            recoverable=False,
            **kwargs,
        )


class SamplingError(BaseError):
    """Invalid input handed to the sampler."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.GENERATION,
            recoverable=False,
            **kwargs,
        )


class UnmappedStatError(BaseError):
    """A rolled stat id has no description template."""

    def __init__(self, stat_id: str, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["stat_id"] = stat_id
        super().__init__(
            f"Didn't find description for {stat_id}",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.DESCRIPTION,
            context=context,
            **kwargs,
        )


class NoMatchingAlternativeError(BaseError):
    """A template was found but none of its alternatives match the rolls."""

    def __init__(self, stat_ids: List[str], rolls: List[int], **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["stat_ids"] = list(stat_ids)
        context["rolls"] = list(rolls)
        super().__init__(
            "None of the description alternatives match",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.DESCRIPTION,
            context=context,
            **kwargs,
        )


class ErrorAggregator:
    """Aggregate errors raised or recorded during a batch run."""

    def __init__(self, window_size: int = 1000) -> None:
        """
        Initialize error aggregator.

        Args:
            window_size: Maximum number of errors to track
        """
        self.window_size = window_size
        self.errors: List[BaseError] = []

    def add_error(self, error: BaseError) -> None:
        """Add error to aggregator for analysis."""
        self.errors.append(error)

        # Limit to window size
        if len(self.errors) > self.window_size:
            self.errors = self.errors[-self.window_size:]

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics grouped by category, severity and message."""
        if not self.errors:
            return {
                "total_errors": 0,
                "categories": {},
                "severities": {},
                "top_errors": [],
            }

        categories: Dict[str, int] = {}
        severities: Dict[str, int] = {}
        messages: Dict[str, int] = {}
        for error in self.errors:
            categories[error.category.name] = categories.get(error.category.name, 0) + 1
            severities[error.severity.name] = severities.get(error.severity.name, 0) + 1
            messages[error.message] = messages.get(error.message, 0) + 1

        top_errors = sorted(messages.items(), key=lambda x: x[1], reverse=True)[:5]

        return {
            "total_errors": len(self.errors),
            "categories": categories,
            "severities": severities,
            "top_errors": top_errors,
        }
