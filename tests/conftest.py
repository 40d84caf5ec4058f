"""
Shared pytest fixtures for pushflow tests.
"""

import pytest


class Recorder:
    """Change hook that remembers every value it was called with."""

    def __init__(self):
        self.values = []

    def __call__(self, value):
        self.values.append(value)

    @property
    def count(self):
        return len(self.values)


@pytest.fixture
def recorder():
    """Provide a fresh recording hook."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for tests that need several independent hooks."""
    return Recorder
