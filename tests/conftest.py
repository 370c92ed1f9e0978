"""Root test configuration: isolate tests from MDSITE_* environment settings"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDSITE_* env vars so load_config only sees what a test sets."""
    for name in list(os.environ):
        if name.startswith("MDSITE_"):
            monkeypatch.delenv(name)
