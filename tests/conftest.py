"""Pytest configuration and shared fixtures."""

import pytest

from wirebox import Container


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def container():
    return Container()


class Counter:
    """Zero-argument factory that counts its calls."""

    def __init__(self, factory=object):
        self.calls = 0
        self._factory = factory

    def __call__(self):
        self.calls += 1
        return self._factory()


@pytest.fixture
def counter():
    return Counter()


@pytest.fixture
def make_counter():
    return Counter
