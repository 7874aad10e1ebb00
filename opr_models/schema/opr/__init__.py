"""Built-in OPR protocol schemas.

The bundled documents live as YAML under ``documents/`` and are keyed
by their ``$id``. ``builtin_checks()`` returns the semantic checks that
ship alongside them.

Usage::

    from opr_models.schema.opr import builtin_documents, builtin_checks

    registry = SchemaRegistry(builtin_documents())
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from opr_models.exceptions import ConfigurationError
from opr_models.schema.opr.offer import OFFER_SCHEMA_ID, OfferCheck

if TYPE_CHECKING:
    from opr_models.schema.semantic import SemanticCheck

logger = logging.getLogger(__name__)

BUILTIN_SCHEMA_DIR = Path(__file__).parent / "documents"


def load_documents(directory: Path) -> list[dict[str, Any]]:
    """Parse every ``*.yaml`` file in a directory into a schema document.

    Files are read in filename order so later files win on duplicate ids.

    Raises:
        ConfigurationError: If the directory is missing, or a file is not
            valid YAML or does not hold a mapping.
    """
    if not directory.is_dir():
        raise ConfigurationError(f"Schema directory {directory} does not exist")

    documents: list[dict[str, Any]] = []
    for path in sorted(directory.glob("*.yaml")):
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in schema file {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Schema file {path.name} must hold a mapping, got {type(data).__name__}"
            )
        documents.append(data)

    logger.debug("Loaded %d schema documents from %s", len(documents), directory)
    return documents


def builtin_documents() -> list[dict[str, Any]]:
    """Return freshly parsed copies of the bundled OPR schema documents."""
    return load_documents(BUILTIN_SCHEMA_DIR)


def builtin_checks() -> dict[str, SemanticCheck]:
    """Return the semantic checks for the bundled schemas, keyed by schema id."""
    return {OFFER_SCHEMA_ID: OfferCheck()}


__all__ = [
    "BUILTIN_SCHEMA_DIR",
    "OfferCheck",
    "builtin_checks",
    "builtin_documents",
    "load_documents",
]
