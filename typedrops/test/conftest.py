"""Shared pytest fixtures for typedrops tests."""

from __future__ import annotations

import pytest

from typedrops import compile_schema, refine
from typedrops import loader


@pytest.fixture
def string_type():
    return compile_schema(("primitive", "string"))


@pytest.fixture
def integer_type():
    return compile_schema(("primitive", "integer"))


@pytest.fixture
def positive_integer(integer_type):
    return refine(integer_type, ("gt?", 0))


@pytest.fixture(autouse=True)
def _clear_schema_cache():
    loader.clear_cache()
    yield
    loader.clear_cache()
