"""Utility modules for retrykit."""

from retrykit.utils.decorators import create_retryable_api_call, retryable

__all__ = ["create_retryable_api_call", "retryable"]
