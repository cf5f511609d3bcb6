"""
Validation package for generated BSP dungeons.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationError: Exception raised on FAIL issues
    - validate_tree(): Run every structural check over a partition tree
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import ValidationRule
from .checks import validate_tree

__all__ = [
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    'ValidationRule',
    'validate_tree',
]
