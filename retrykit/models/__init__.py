"""Pydantic models for retrykit.

Exports the classification result and the API response envelope.
"""

from retrykit.models.classification import ClassifiedError
from retrykit.models.responses import ApiResponse

__all__ = ["ClassifiedError", "ApiResponse"]
