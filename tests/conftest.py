# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors
"""

# Standard
import os

# Third-Party
import pytest

# First-Party
from fragjson.config import get_settings, Settings
from fragjson.table import FragmentTable


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop FRAGJSON_* env vars and the cached settings around every test."""
    for key in list(os.environ):
        if key.startswith("FRAGJSON_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Create default settings isolated from the environment."""
    return Settings()


@pytest.fixture
def make_table():
    """Return a builder for fragment tables: make_table(base, {index: fragment})."""

    def _make(base, overrides=None):
        return FragmentTable.build(base, list((overrides or {}).items()))

    return _make
