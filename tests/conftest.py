"""Shared test fixtures for opr-models.

Provides settings, validator and payload fixtures used across the unit
tests.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from opr_models.settings import Settings

# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings that ignore any local .env file."""
    return Settings(
        _env_file=None,  # Don't load .env in tests
        environment="testing",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings(test_settings: Settings, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Mock get_settings() to return test settings."""
    from opr_models.schema import validator

    monkeypatch.setattr(validator, "get_settings", lambda: test_settings)
    return test_settings


# =============================================================================
# VALIDATORS
# =============================================================================


@pytest.fixture
def opr_validator(test_settings: Settings):
    """A fresh validator loaded with the bundled OPR schemas and checks."""
    from opr_models.schema.validator import create_validator

    return create_validator(test_settings)


@pytest.fixture
def empty_validator(test_settings: Settings):
    """A validator with no schemas and no checks."""
    from opr_models.schema.validator import OprValidator

    return OprValidator(settings=test_settings)


# =============================================================================
# PAYLOADS
# =============================================================================

_VALID_OFFER: dict[str, Any] = {
    "id": "offer-1",
    "offeredBy": "https://org-x.example.org",
    "description": "Two cases of apples",
    "contents": {
        "contentsType": "product",
        "description": "Apples",
        "quantity": 2,
        "unitDescription": "case",
    },
    "offerCreationUTC": 1650000000,
    "offerExpirationUTC": 1650086400,
}


@pytest.fixture
def valid_offer() -> dict[str, Any]:
    """A structurally and semantically valid offer (fresh copy per test)."""
    return copy.deepcopy(_VALID_OFFER)
