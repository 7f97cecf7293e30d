"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
None of them are retried internally; callers decide how to react.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(DomainError):
    """Raised when a model receives malformed training input."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InsufficientDataError(DomainError):
    """Raised when there are fewer values than requested clusters."""

    def __init__(self, available: int, required: int):
        message = (
            f"Insufficient data for k-means: {available} values for {required} "
            "clusters"
        )
        super().__init__(message, {"available": available, "required": required})


class NoTrainingDataError(DomainError):
    """Raised when event aggregation produced no feature rows."""

    def __init__(
        self,
        message: str = "No data available to train the models",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ModelNotTrainedError(DomainError):
    """Raised when a prediction is requested before any successful training."""

    def __init__(
        self,
        message: str = "Model has not been trained yet",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ArtifactStoreError(DomainError):
    """Raised when the artifact bundle cannot be read or written."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TrainingInProgressError(DomainError):
    """Raised when another training run holds the training lock."""

    def __init__(
        self,
        message: str = "Another training run is already in progress",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
