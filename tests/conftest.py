"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_document():
    """Sample configuration document with content and metadata branches."""
    return {
        "name": "Dispensary",
        "categories": [
            {"name": "Flower", "count": 12, "featured": True},
            {"name": "Edibles", "count": 4, "featured": False},
            {"name": "Tinctures", "count": 0, "featured": None},
        ],
        "meta": {
            "keywords": ["organic", "local"],
            "schema": {"type": "Store", "rating": 4.5},
        },
        "settings": {
            "theme": "dark",
            "limits": [],
            "flags": {},
        },
    }


@pytest.fixture
def scenario_json():
    """Small document with a scalar field and an array of scalars."""
    return {"a": 1, "b": [True, None]}


def make_nested(depth, leaf="leaf"):
    """Nest ``leaf`` inside ``depth`` single-key objects."""
    value = leaf
    for _ in range(depth):
        value = {"child": value}
    return value


def make_nested_lists(depth, leaf=0):
    """Nest ``leaf`` inside ``depth`` single-item lists."""
    value = leaf
    for _ in range(depth):
        value = [value]
    return value
