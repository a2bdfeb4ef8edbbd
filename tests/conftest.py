import sys
import os

import pytest

# Add backend/ to path so tests can import backend modules directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

# Add scripts/ to path so tests can import script modules directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))


@pytest.fixture(autouse=True)
def _isolate_catalog_env(monkeypatch):
    """Tests never pick up a CATALOG_PATH from the developer's shell."""
    monkeypatch.delenv("CATALOG_PATH", raising=False)
