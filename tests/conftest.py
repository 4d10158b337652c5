"""Shared fixtures for the Wrapped bot tests."""

from pathlib import Path

import pytest

from wrapped_bot.services.dataset import WrappedDataService, load_wrapped_data

FIXTURES = Path(__file__).parent / "fixtures"


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_path() -> Path:
    return FIXTURES / "sample_wrapped.json"


@pytest.fixture
def wrapped_data(sample_path):
    return load_wrapped_data(sample_path)


@pytest.fixture
def service(wrapped_data):
    return WrappedDataService(wrapped_data, "https://wrapped.example.com/", "Music Rec")
