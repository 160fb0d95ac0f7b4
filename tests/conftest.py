"""
Pytest Configuration and Fixtures

Shared fixtures for scoring engine, service and API tests.
"""
import pytest
import numpy as np
from pathlib import Path
import sys
from typing import Iterable, List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FixedUniform:
    """Uniform source that replays the given values in a loop."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible draws."""
    return np.random.default_rng(1234)


@pytest.fixture
def fixed_uniform():
    """Factory for FixedUniform sources."""
    return FixedUniform


@pytest.fixture
def temp_session_id() -> str:
    """Generate a temporary session ID."""
    import uuid
    return str(uuid.uuid4())
