"""JSON Schema validation with semantic checks.

Structural validation runs payloads through registered JSON Schema
documents; semantic checks add the protocol rules schemas cannot
express. Both sets of findings land in one ValidatorResult.

Usage::

    from opr_models.schema import create_validator

    validator = create_validator()
    result = validator.validate(payload, "offer.schema.json")
    if not result.valid:
        for error in result.structural_errors:
            print(error)
        for message in result.semantic_errors:
            print(message)
"""

from __future__ import annotations

from opr_models.schema.core import SchemaRegistry, StructuralError, validate_structure
from opr_models.schema.result import ValidatorResult, format_error
from opr_models.schema.semantic import CheckRegistry, FunctionCheck, SemanticCheck
from opr_models.schema.validator import OprValidator, create_validator

__all__ = [
    "CheckRegistry",
    "FunctionCheck",
    "OprValidator",
    "SchemaRegistry",
    "SemanticCheck",
    "StructuralError",
    "ValidatorResult",
    "create_validator",
    "format_error",
    "validate_structure",
]
