"""Semantic rules for OPR offers.

The offer schema leaves ``offeredBy`` optional because servers may fill
it in on the way out, but every offer that crosses the wire must name
the organization offering it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

OFFER_SCHEMA_ID = "offer.schema.json"

OFFERED_BY_REQUIRED = "offeredBy field is required by the OPR protocol spec"


class OfferCheck:
    """Checks protocol rules the offer schema cannot express."""

    def check(self, payload: Any) -> list[str]:
        errors: list[str] = []
        offered_by = payload.get("offeredBy") if isinstance(payload, Mapping) else None
        if not offered_by:
            errors.append(OFFERED_BY_REQUIRED)
        return errors


__all__ = ["OFFERED_BY_REQUIRED", "OFFER_SCHEMA_ID", "OfferCheck"]
