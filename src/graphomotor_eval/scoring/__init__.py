"""
Scoring sub-package

Validates evaluator replies into the strict result schema.
"""

from graphomotor_eval.scoring.response_validator import (
    ResponseParseError,
    ResponseSchemaError,
    ResponseValidationError,
    strip_code_fences,
    validate_response,
)

__all__ = [
    "ResponseParseError",
    "ResponseSchemaError",
    "ResponseValidationError",
    "strip_code_fences",
    "validate_response",
]
