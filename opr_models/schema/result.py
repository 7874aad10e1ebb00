"""Validation result model and message rendering."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from opr_models.schema.core import StructuralError

# Schema whose root-level errors are dropped when other errors remain.
DEFAULT_WRAPPER_SCHEMA_ID = "error.result.schema.json"


class ValidatorResult(BaseModel):
    """Aggregate outcome of one validate() call.

    Attributes:
        valid: True iff there are no structural and no semantic errors.
        structural_errors: Schema violations, in discovery order.
        semantic_errors: Messages from the semantic check, verbatim.
        schema_id: Id of the schema the payload was validated against.
        wrapper_schema_id: Schema id whose root-level errors are dropped
            from the rendered message when other structural errors exist.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    structural_errors: tuple[StructuralError, ...] = ()
    semantic_errors: tuple[str, ...] = ()
    schema_id: str | None = None
    wrapper_schema_id: str | None = DEFAULT_WRAPPER_SCHEMA_ID

    @model_validator(mode="after")
    def _check_valid_flag(self) -> ValidatorResult:
        has_errors = bool(self.structural_errors or self.semantic_errors)
        if self.valid == has_errors:
            raise ValueError("valid must be True exactly when there are no errors")
        return self

    @classmethod
    def from_errors(
        cls,
        structural_errors: Iterable[StructuralError],
        semantic_errors: Iterable[str],
        *,
        schema_id: str | None = None,
        wrapper_schema_id: str | None = DEFAULT_WRAPPER_SCHEMA_ID,
    ) -> ValidatorResult:
        """Build a result, deriving ``valid`` from the error sequences."""
        structural = tuple(structural_errors)
        semantic = tuple(semantic_errors)
        return cls(
            valid=not structural and not semantic,
            structural_errors=structural,
            semantic_errors=semantic,
            schema_id=schema_id,
            wrapper_schema_id=wrapper_schema_id,
        )

    def render_message(self) -> str | None:
        """Render all errors as a multi-line message, or None when valid.

        Structural errors come first, one per line, with every line after
        the first indented by two spaces. Errors raised at the root of the
        wrapper schema are left out while any other structural error
        remains. Semantic errors follow verbatim.
        """
        if self.valid:
            return None

        structural = self.structural_errors
        if len(structural) > 1:
            specific = tuple(e for e in structural if not self._is_wrapper_error(e))
            if specific:
                structural = specific

        lines = [
            ("" if index == 0 else "  ") + format_error(error)
            for index, error in enumerate(structural)
        ]
        return "\n".join([*lines, *self.semantic_errors])

    def _is_wrapper_error(self, error: StructuralError) -> bool:
        return error.schema_root and error.schema_id == self.wrapper_schema_id

    def __str__(self) -> str:
        message = self.render_message()
        return "valid" if message is None else message


def format_error(error: StructuralError) -> str:
    """Render one structural error as ``<schema_id>: /<path>: <message>``."""
    return str(error)


__all__ = ["DEFAULT_WRAPPER_SCHEMA_ID", "ValidatorResult", "format_error"]
