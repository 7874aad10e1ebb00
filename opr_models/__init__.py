"""OPR payload validation.

Validates OPR protocol payloads against a registry of JSON Schema
documents and runs semantic checks that the schemas cannot express.

Usage::

    from opr_models import create_validator

    validator = create_validator()
    result = validator.validate(payload, "offer.schema.json")
    if not result.valid:
        print(result.render_message())
"""

from __future__ import annotations

from opr_models.exceptions import (
    MalformedSchemaDocumentError,
    OprModelsError,
    SchemaNotFoundError,
)
from opr_models.schema import (
    OprValidator,
    StructuralError,
    ValidatorResult,
    create_validator,
)

__all__ = [
    "MalformedSchemaDocumentError",
    "OprModelsError",
    "OprValidator",
    "SchemaNotFoundError",
    "StructuralError",
    "ValidatorResult",
    "create_validator",
]
