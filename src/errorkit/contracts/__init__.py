"""Contracts package - export response models."""

from errorkit.contracts.response import ErrorDetails, ErrorResponse

__all__ = ["ErrorDetails", "ErrorResponse"]
