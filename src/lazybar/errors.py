"""
Error Types for the Scroll Estimation Core

The core produces best-effort numeric estimates. Anything raised from here is
an internal consistency fault or a violated precondition, never a transient
condition, so nothing is retried.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    CACHE = "cache"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"


class LazybarError(Exception):
    """Base exception class for lazybar errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        component: str = "",
        operation: str = "",
        metadata: Optional[Dict[str, Any]] = None,
        recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.component = component
        self.operation = operation
        self.metadata = metadata or {}
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "error_type": type(self).__name__,
            "error_message": self.message,
            "error_category": self.category.value,
            "severity": self.severity.value,
            "component": self.component,
            "operation": self.operation,
            "recoverable": self.recoverable,
            "metadata": self.metadata,
        }


class CacheInvariantError(LazybarError):
    """The range cache reached a state its invariants forbid."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CACHE,
            severity=ErrorSeverity.CRITICAL,
            component=kwargs.pop("component", "RangeCache"),
            recoverable=False,
            **kwargs
        )


class EmptyLayoutError(LazybarError):
    """An operation that needs visible items was given none."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.ERROR,
            recoverable=False,
            **kwargs
        )


class ConfigurationError(LazybarError):
    """Configuration could not be loaded or saved."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            recoverable=False,
            **kwargs
        )
