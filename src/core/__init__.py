"""Core infrastructure components."""

from .error_handling import (
    BaseError,
    CatalogLoadError,
    ErrorAggregator,
    ErrorCategory,
    ErrorSeverity,
    NoEligibleModifierError,
    NoMatchingAlternativeError,
    SamplingError,
    UnmappedStatError,
)

__all__ = [
    "BaseError",
    "CatalogLoadError",
    "ErrorAggregator",
    "ErrorCategory",
    "ErrorSeverity",
    "NoEligibleModifierError",
    "NoMatchingAlternativeError",
    "SamplingError",
    "UnmappedStatError",
]
