"""Root test configuration: isolate tests from ambient MDPRESS_* settings"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDPRESS_* env vars so a developer's shell config cannot leak into tests."""
    for name in list(os.environ):
        if name.startswith("MDPRESS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(name="resolver")
def resolver_fixture():
    """Deterministic image resolver standing in for object storage."""
    return lambda path: f"https://cdn.example.com/{path}"
