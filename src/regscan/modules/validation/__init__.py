"""Structural markup validation."""

from .models import ValidationIssue, ValidationResult
from .validator import StructuralValidator, css_path, is_interactive

__all__ = [
    "StructuralValidator",
    "ValidationIssue",
    "ValidationResult",
    "css_path",
    "is_interactive",
]
