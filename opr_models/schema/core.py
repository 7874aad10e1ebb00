"""Core schema registry and structural validation.

Provides the SchemaRegistry, the StructuralError model, and
validate_structure(), which walks a payload against a JSON Schema
document.

Validation delegates to the jsonschema library; ``$ref`` between
registered documents is resolved by id through a ``referencing``
registry kept in sync with the SchemaRegistry.
"""

from __future__ import annotations

import copy
import logging
from collections import ChainMap
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import jsonschema  # type: ignore[import-untyped,unused-ignore]
from jsonschema.exceptions import ValidationError as JsonSchemaError
from pydantic import BaseModel, ConfigDict
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from opr_models.exceptions import MalformedSchemaDocumentError, SchemaNotFoundError

logger = logging.getLogger(__name__)

ID_KEY = "$id"

# Marks "no owner recorded" in owner lookups; None is a legitimate owner id.
_UNOWNED = object()

# =============================================================================
# MODELS
# =============================================================================


class StructuralError(BaseModel):
    """A single structural violation with location context.

    Attributes:
        schema_id: Id of the schema document that rejected the value, or
            None if that document has no id.
        path: Property names and array indices from the payload root to the
            offending node.
        message: Human-readable description of the violated constraint.
        keyword: JSON Schema keyword that failed (e.g. "type", "required").
        schema_root: True when the failing keyword sits at the top level of
            the schema document rather than in one of its subschemas.
    """

    model_config = ConfigDict(frozen=True)

    schema_id: str | None = None
    path: tuple[str | int, ...] = ()
    message: str
    keyword: str | None = None
    schema_root: bool = False

    def __str__(self) -> str:
        """Render as ``<schema_id>: /<path>: <message>``."""
        schema_name = f"{self.schema_id}: " if self.schema_id else ""
        path = "/" + "/".join(str(p) for p in self.path) + ": " if self.path else ""
        return schema_name + path + self.message


# =============================================================================
# SCHEMA REGISTRY
# =============================================================================


class SchemaRegistry:
    """Registry mapping ``$id`` strings to JSON Schema documents.

    Documents are stored as private deep copies. Registering a document
    under an id that is already taken replaces the previous document.
    """

    def __init__(self, documents: Iterable[Mapping[str, Any]] = ()) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._resource_by_id: dict[str, Resource] = {}
        self._index = _SchemaIndex()
        self._resources: Registry = Registry()
        self.register_all(documents)

    def register(self, document: Mapping[str, Any]) -> None:
        """Register a schema document under its ``$id``.

        Args:
            document: JSON Schema mapping carrying a string ``$id``.

        Raises:
            MalformedSchemaDocumentError: If the document is not a mapping or
                has no non-empty string ``$id``.
        """
        schema_id = document_id(document)
        if schema_id is None:
            raise MalformedSchemaDocumentError(
                f"Schema document must carry a non-empty string '{ID_KEY}'"
            )
        stored = copy.deepcopy(dict(document))
        resource = Resource.from_contents(stored, default_specification=DRAFT202012)

        if schema_id in self._documents:
            logger.debug("Replacing schema %s", schema_id)
        self._documents[schema_id] = stored
        self._resource_by_id[schema_id] = resource
        self._rebuild()
        logger.debug("Registered schema %s", schema_id)

    def register_all(self, documents: Iterable[Mapping[str, Any]]) -> None:
        """Register each document in order (later duplicates win)."""
        for document in documents:
            self.register(document)

    def lookup(self, schema_id: str) -> dict[str, Any]:
        """Return a copy of the document registered under ``schema_id``.

        Raises:
            SchemaNotFoundError: If nothing is registered under that id.
        """
        return copy.deepcopy(self._get_registered(schema_id))

    def get(self, schema_id: str) -> dict[str, Any] | None:
        """Like lookup(), but returns None for unknown ids."""
        if schema_id not in self._documents:
            return None
        return self.lookup(schema_id)

    def list_ids(self) -> list[str]:
        """Return all registered ids, sorted."""
        return sorted(self._documents)

    def __contains__(self, schema_id: object) -> bool:
        return schema_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    # ------------------------------------------------------------------
    # Structural validation
    # ------------------------------------------------------------------

    def validate_structure(
        self,
        payload: Any,
        schema_or_id: Mapping[str, Any] | str,
    ) -> list[StructuralError]:
        """Walk a payload against a schema and collect every violation.

        Errors nested under composition keywords (oneOf, anyOf, ...) are
        reported after the error that wraps them, depth first. Each error is
        tagged with the id of the document owning the failing keyword, which
        for a ``$ref`` into another registered document is that document.

        Args:
            payload: Parsed JSON value.
            schema_or_id: Registered schema id, or a schema document (need
                not be registered; its ``$ref``s resolve against this registry).

        Returns:
            List of StructuralError (empty when the payload conforms).

        Raises:
            SchemaNotFoundError: If given an id that is not registered.
        """
        if isinstance(schema_or_id, str):
            schema = self._get_registered(schema_or_id)
        else:
            schema = schema_or_id
        root_id = document_id(schema)

        index = self._index.with_root(schema, root_id)
        validator_cls = jsonschema.validators.validator_for(
            schema, default=jsonschema.Draft202012Validator
        )
        validator = validator_cls(schema, registry=self._resources)

        errors: list[StructuralError] = []
        for error in _flatten(validator.iter_errors(payload)):
            schema_id, schema_root = index.locate(error, root_id)
            errors.append(
                StructuralError(
                    schema_id=schema_id,
                    path=tuple(error.absolute_path),
                    message=error.message,
                    keyword=error.validator if isinstance(error.validator, str) else None,
                    schema_root=schema_root,
                )
            )
        return errors

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_registered(self, schema_id: str) -> dict[str, Any]:
        try:
            return self._documents[schema_id]
        except KeyError:
            raise SchemaNotFoundError(schema_id) from None

    def _rebuild(self) -> None:
        """Recompute the $ref resolver registry and subschema index."""
        self._resources = Registry().with_resources(self._resource_by_id.items())
        index = _SchemaIndex()
        for schema_id, doc in self._documents.items():
            index.add(doc, schema_id)
        self._index = index


# =============================================================================
# STRUCTURAL VALIDATION
# =============================================================================


def validate_structure(
    payload: Any,
    schema: Mapping[str, Any],
    *,
    registry: SchemaRegistry | None = None,
) -> list[StructuralError]:
    """Validate a payload against a schema document.

    Args:
        payload: Parsed JSON value.
        schema: JSON Schema document (need not be registered).
        registry: SchemaRegistry used to resolve ``$ref`` by id.

    Returns:
        List of StructuralError (empty when the payload conforms).
    """
    return (registry or SchemaRegistry()).validate_structure(payload, schema)


def document_id(document: Any) -> str | None:
    """Return the document's ``$id`` if it is a non-empty string."""
    if not isinstance(document, Mapping):
        return None
    schema_id = document.get(ID_KEY)
    if isinstance(schema_id, str) and schema_id:
        return schema_id
    return None


# =============================================================================
# HELPERS
# =============================================================================


class _SchemaIndex:
    """Identity index from subschema objects to the document that owns them.

    Document roots (registered documents, the schema being validated and
    embedded subschemas with their own ``$id``) are tracked separately.
    """

    def __init__(
        self,
        owners: Mapping[int, str | None] | None = None,
        roots: frozenset[int] = frozenset(),
    ) -> None:
        self.owners: Mapping[int, str | None] = owners if owners is not None else {}
        self.roots = roots

    def add(self, document: Mapping[str, Any], schema_id: str | None) -> None:
        owners = dict(self.owners)
        roots = set(self.roots)
        roots.add(id(document))
        _index_owners(document, schema_id, owners, roots)
        self.owners = owners
        self.roots = frozenset(roots)

    def with_root(self, schema: Mapping[str, Any], schema_id: str | None) -> _SchemaIndex:
        """Return a view of this index that also covers ``schema``."""
        owners: dict[int, str | None] = {}
        roots = {id(schema)}
        _index_owners(schema, schema_id, owners, roots)
        return _SchemaIndex(ChainMap(owners, self.owners), self.roots | roots)

    def locate(self, error: JsonSchemaError, default: str | None) -> tuple[str | None, bool]:
        """Return the owning document id and whether the error sits at its root.

        Boolean subschemas cannot be told apart by identity, so those fall
        back to the enclosing error's schema.
        """
        node: JsonSchemaError | None = error
        while node is not None:
            if isinstance(node.schema, Mapping):
                owner = self.owners.get(id(node.schema), _UNOWNED)
                if owner is not _UNOWNED:
                    return owner, id(node.schema) in self.roots  # type: ignore[return-value]
            node = node.parent  # type: ignore[assignment]
        return default, False


def _flatten(errors: Iterable[JsonSchemaError]) -> Iterator[JsonSchemaError]:
    """Yield each error followed by its nested context errors, depth first."""
    for error in errors:
        yield error
        yield from _flatten(error.context or ())


def _index_owners(
    node: Any,
    owner: str | None,
    owners: dict[int, str | None],
    roots: set[int],
) -> None:
    """Record which document id owns every subschema object under ``node``.

    Embedded subschemas with their own ``$id`` start a new owner.
    """
    if isinstance(node, Mapping):
        nested_id = document_id(node)
        if nested_id is not None:
            owner = nested_id
            roots.add(id(node))
        owners[id(node)] = owner
        for value in node.values():
            _index_owners(value, owner, owners, roots)
    elif isinstance(node, list):
        for item in node:
            _index_owners(item, owner, owners, roots)


__all__ = [
    "SchemaRegistry",
    "StructuralError",
    "document_id",
    "validate_structure",
]
