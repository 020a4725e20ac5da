"""Shared HTTP plumbing: error translation and service lookups."""

from .errors import FailureReason, register_error_handlers

__all__ = ["FailureReason", "register_error_handlers"]
