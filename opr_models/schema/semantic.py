"""Semantic check registry.

Structural schemas cannot express some protocol rules, e.g. that an
offer must name the organization offering it. Those rules live in
semantic checks, keyed by the id of the schema they apply to, and run
on the raw payload after the structural pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class SemanticCheck(Protocol):
    """A rule run against payloads validated with one schema id."""

    def check(self, payload: Any) -> Sequence[str]:
        """Return error messages for ``payload`` (empty when it passes)."""
        ...


@dataclass(frozen=True)
class FunctionCheck:
    """Adapts a plain ``fn(payload) -> errors`` callable to SemanticCheck."""

    fn: Callable[[Any], Sequence[str]]

    def check(self, payload: Any) -> Sequence[str]:
        return self.fn(payload)


class CheckRegistry:
    """Maps schema ids to at most one SemanticCheck each.

    Registering a check for an id that already has one replaces it.
    Exceptions raised by a check are not caught.
    """

    def __init__(self) -> None:
        self._checks: dict[str, SemanticCheck] = {}

    def register_check(self, schema_id: str, check: SemanticCheck) -> None:
        """Install or replace the check for a schema id.

        Raises:
            TypeError: If ``check`` has no ``check(payload)`` method.
        """
        if not isinstance(check, SemanticCheck):
            raise TypeError(
                f"Semantic check for '{schema_id}' must define check(payload), "
                f"got {type(check).__name__}"
            )
        if schema_id in self._checks:
            logger.debug("Replacing semantic check for %s", schema_id)
        self._checks[schema_id] = check

    def register_function(self, schema_id: str, fn: Callable[[Any], Sequence[str]]) -> None:
        """Install or replace a plain function as the check for a schema id."""
        self.register_check(schema_id, FunctionCheck(fn))

    def run_check(self, schema_id: str | None, payload: Any) -> Sequence[str]:
        """Run the check registered for ``schema_id``.

        Returns:
            The check's output unmodified, or an empty tuple if no check is
            registered for the id.
        """
        if schema_id is None:
            return ()
        check = self._checks.get(schema_id)
        if check is None:
            return ()
        return check.check(payload)

    def has_check(self, schema_id: str) -> bool:
        return schema_id in self._checks

    def list_ids(self) -> list[str]:
        """Return ids that have a check, sorted."""
        return sorted(self._checks)


__all__ = ["CheckRegistry", "FunctionCheck", "SemanticCheck"]
