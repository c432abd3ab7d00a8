# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Fault Isolation:
    Every test that needs a container should use the ``mock_container``
    fixture (or build its own MockContainer with an explicit
    FaultConfiguration). The process-wide shared_faults() configuration is
    reset around every test so a leaked fault cannot bleed into the next one.
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from mockcloud.faults import shared_faults
from tests.fixtures.mockcloud import MockCloudFixture, mock_container
from tests.fixtures.mockcloud import pytest_configure as _mockcloud_pytest_configure

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Shared fault configuration hygiene
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_shared_faults() -> Iterator[None]:
    shared_faults().reset()
    yield
    shared_faults().reset()


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    _mockcloud_pytest_configure(config)


__all__ = [
    "MockCloudFixture",
    "mock_container",
]
