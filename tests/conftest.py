"""Shared test fixtures for logtree test suite."""

import json

import pytest

from logtree import LoggerRegistry
from logtree import registry as _registry_mod


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: threaded stress tests (deselect with -m 'not slow')"
    )


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def registry():
    """A fresh registry in global (non-hierarchical) mode."""
    return LoggerRegistry()


@pytest.fixture
def hregistry():
    """A fresh registry with hierarchical logging enabled."""
    return LoggerRegistry(hierarchical=True)


@pytest.fixture
def default_registry():
    """Swap in a fresh module-level default registry for the test."""
    old = _registry_mod._registry
    _registry_mod._registry = LoggerRegistry()
    yield _registry_mod._registry
    _registry_mod._registry = old


# ---------------------------------------------------------------------------
# Record collection
# ---------------------------------------------------------------------------
class Collector:
    """Listener that keeps every record it receives."""

    def __init__(self):
        self.records = []
        self.done = 0

    def __call__(self, record):
        self.records.append(record)

    def on_done(self):
        self.done += 1

    @property
    def messages(self):
        return [r.message for r in self.records]

    def __len__(self):
        return len(self.records)


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def make_collector():
    """Factory for several independent collectors in one test."""
    return Collector


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sample_project_config(tmp_path):
    """Write a .logtree.json file in a temporary project directory."""
    config = {
        "hierarchical": True,
        "record_stack_trace_at": "SEVERE",
        "levels": {
            "": "WARNING",
            "net": "INFO",
            "net.http": "FINE",
        },
    }
    path = tmp_path / ".logtree.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config
