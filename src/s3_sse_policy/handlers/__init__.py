"""Handlers applying encryption policy to storage requests."""

from .copy import apply_copy_encryption_parameters, select_copy_encryption_parameters

__all__ = [
    "apply_copy_encryption_parameters",
    "select_copy_encryption_parameters",
]
