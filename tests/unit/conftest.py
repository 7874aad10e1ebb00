"""Unit-test conftest: settings isolation.

Resets the cached settings between tests so environment changes made
with monkeypatch never leak into later tests.
"""

from __future__ import annotations

import pytest

from opr_models.settings import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
