#!/usr/bin/env python3
"""
Standardized exception hierarchy for the entertainment digest.

Errors are grouped by how far they propagate: browser launch and snapshot
writes abort the whole run, a failed article navigation only skips that
candidate, everything else degrades locally.
"""

from typing import Optional, Dict, Any


class DigestError(Exception):
    """Base exception for all digest errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Browser-related exceptions
class BrowserError(DigestError):
    """Base exception for page capability errors."""
    pass


class BrowserLaunchError(BrowserError):
    """The browser session could not be started. Fatal to the run."""

    def __init__(self, engine: str, original_error: Exception):
        message = f"Failed to launch {engine} browser session"
        context = {
            'engine': engine,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class NavigationError(BrowserError):
    """Navigation to a URL failed or timed out."""

    def __init__(self, url: str, original_error: Optional[Exception] = None, timeout_seconds: Optional[float] = None):
        message = f"Failed to navigate to {url}"
        if timeout_seconds is not None:
            message += f" within {timeout_seconds}s"
        context = {
            'url': url,
            'timeout_seconds': timeout_seconds,
            'original_error': str(original_error) if original_error else None
        }
        super().__init__(message, context=context)
        self.url = url


# Storage-related exceptions
class StorageError(DigestError):
    """Base exception for snapshot and status storage errors."""
    pass


class SnapshotWriteError(StorageError):
    """Snapshot could not be written. Fatal to the run."""

    def __init__(self, path: str, original_error: Exception):
        message = f"Failed to write snapshot {path}"
        context = {
            'path': path,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class SnapshotReadError(StorageError):
    """Snapshot exists but could not be read or parsed."""

    def __init__(self, path: str, original_error: Exception):
        message = f"Failed to read snapshot {path}"
        context = {
            'path': path,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(DigestError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


# Validation-related exceptions
class ValidationError(DigestError):
    """Data validation failed."""

    def __init__(self, field: str, value: Any, expected: str):
        message = f"Validation failed for {field}: expected {expected}, got {value!r}"
        context = {
            'field': field,
            'value': str(value),
            'expected': expected,
            'actual_type': type(value).__name__
        }
        super().__init__(message, context=context)
