"""
Pytest configuration and fixtures.

Ensures doc_ingest package can be imported from tests.
"""

import sys
import os
from pathlib import Path

import pytest

# Add the repository root to Python path so tests can import doc_ingest
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

# Also set PYTHONPATH environment variable
os.environ['PYTHONPATH'] = str(repo_root)


@pytest.fixture(autouse=True)
def reset_config_cache(monkeypatch):
    """Drop the cached config between tests."""
    import doc_ingest.config
    monkeypatch.setattr(doc_ingest.config, '_config_instance', None)
    monkeypatch.delenv('DOC_INGEST_CONFIG_PATH', raising=False)


@pytest.fixture
def numbered_lines():
    """Build newline-joined text 'line 0' .. 'line n-1'."""
    def _build(n):
        return '\n'.join(f'line {i}' for i in range(n))
    return _build
