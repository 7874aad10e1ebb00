"""opr-models exception hierarchy.

Base exceptions for the validation engine with correlation ID support.

Usage:
    from opr_models.exceptions import SchemaNotFoundError

    try:
        result = validator.validate(payload, "offer.schema.json")
    except SchemaNotFoundError as e:
        logger.error("Unknown schema %s (correlation_id=%s)", e.schema_id, e.correlation_id)
"""

import uuid


class OprModelsError(Exception):
    """Base exception for all opr-models errors.

    Carries a correlation_id for tracing errors across layers.
    """

    def __init__(self, message: str, *, correlation_id: str | None = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        super().__init__(message)


class SchemaNotFoundError(OprModelsError, KeyError):
    """No schema document is registered under the requested id."""

    def __init__(self, schema_id: str, **kwargs):
        self.schema_id = schema_id
        super().__init__(f"Schema {schema_id} not found", **kwargs)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class MalformedSchemaDocumentError(OprModelsError, ValueError):
    """A schema document was registered without a usable ``$id``."""

    pass


class ConfigurationError(OprModelsError):
    """Errors from application configuration."""

    pass
