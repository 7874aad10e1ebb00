"""Validation engine.

OprValidator owns a SchemaRegistry and a CheckRegistry and exposes the
single validate() entry point that merges structural and semantic
findings into a ValidatorResult.

Registries are meant to be filled once at startup and then shared
read-only; registering while other threads validate needs external
locking.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from opr_models.schema.core import SchemaRegistry, document_id, validate_structure
from opr_models.schema.result import ValidatorResult
from opr_models.schema.semantic import CheckRegistry, SemanticCheck
from opr_models.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class OprValidator:
    """Validates JSON payloads against OPR schema documents.

    Args:
        schemas: Schema documents to register, in order.
        checks: Semantic checks to register, keyed by schema id.
        settings: Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        schemas: Iterable[Mapping[str, Any]] = (),
        checks: Mapping[str, SemanticCheck] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.schemas = SchemaRegistry(schemas)
        self.checks = CheckRegistry()
        for schema_id, check in (checks or {}).items():
            self.checks.register_check(schema_id, check)

    @property
    def wrapper_schema_id(self) -> str:
        return self._settings.wrapper_schema_id

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_schema(self, schema: Mapping[str, Any]) -> None:
        """Register a schema document under its ``$id``."""
        self.schemas.register(schema)

    def get_schema(self, schema_id: str) -> dict[str, Any]:
        """Return the schema registered under ``schema_id``.

        Raises:
            SchemaNotFoundError: If no schema has that id.
        """
        return self.schemas.lookup(schema_id)

    def list_schema_ids(self) -> list[str]:
        """Return all registered schema ids, sorted."""
        return self.schemas.list_ids()

    def register_check(self, schema_id: str, check: SemanticCheck) -> None:
        """Install or replace the semantic check for a schema id."""
        self.checks.register_check(schema_id, check)

    def register_validator_function(
        self,
        schema_id: str,
        fn: Callable[[Any], Sequence[str]],
    ) -> None:
        """Install or replace a plain function as the check for a schema id.

        The schema id need not be registered yet, or ever.
        """
        self.checks.register_function(schema_id, fn)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(
        self,
        payload: Any,
        schema_or_id: Mapping[str, Any] | str,
    ) -> ValidatorResult:
        """Validate a payload structurally and semantically.

        The semantic check for the schema's id runs even when the
        structural pass already failed. Exceptions raised by a check
        propagate to the caller.

        Args:
            payload: Parsed JSON value.
            schema_or_id: Registered schema id, or a schema document.

        Returns:
            Immutable ValidatorResult.

        Raises:
            SchemaNotFoundError: If given an id that is not registered.
        """
        if isinstance(schema_or_id, str):
            schema_id: str | None = schema_or_id
            structural = self.schemas.validate_structure(payload, schema_or_id)
        else:
            schema_id = document_id(schema_or_id)
            structural = validate_structure(payload, schema_or_id, registry=self.schemas)

        semantic = self.checks.run_check(schema_id, payload)

        result = ValidatorResult.from_errors(
            structural,
            semantic,
            schema_id=schema_id,
            wrapper_schema_id=self.wrapper_schema_id,
        )
        logger.debug(
            "Validated payload against %s: valid=%s structural=%d semantic=%d",
            schema_id,
            result.valid,
            len(result.structural_errors),
            len(result.semantic_errors),
        )
        return result


def create_validator(settings: Settings | None = None) -> OprValidator:
    """Build a validator populated according to settings.

    Registers the bundled OPR documents and checks when
    ``load_builtin_schemas`` is set, then any documents found in
    ``extra_schema_dir``.
    """
    from opr_models.schema.opr import builtin_checks, builtin_documents, load_documents

    settings = settings or get_settings()
    validator = OprValidator(settings=settings)

    if settings.load_builtin_schemas:
        validator.schemas.register_all(builtin_documents())
        for schema_id, check in builtin_checks().items():
            validator.register_check(schema_id, check)

    if settings.extra_schema_dir is not None:
        validator.schemas.register_all(load_documents(settings.extra_schema_dir))

    logger.info(
        "Validator ready with %d schemas and %d semantic checks",
        len(validator.schemas),
        len(validator.checks.list_ids()),
    )
    return validator


__all__ = ["OprValidator", "create_validator"]
