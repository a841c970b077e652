"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running: pytest tests/
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from intent_matcher.config.settings import DEFAULT_INTENTS  # noqa: E402
from intent_matcher.services.catalog_index import build_index  # noqa: E402


@pytest.fixture
def default_index():
    return build_index(DEFAULT_INTENTS)


@pytest.fixture
def small_catalog():
    return {"greeting": ["Hola"], "thanks": ["Gracias"]}


@pytest.fixture
def small_index(small_catalog):
    return build_index(small_catalog)
