# tests/fixtures/__init__.py
"""Shared pytest fixtures for mockcloud tests.

Available fixtures:
- mock_container: isolated MockContainer with marker-driven configuration
"""

from tests.fixtures.mockcloud import CallbackRecorder, MockCloudFixture, mock_container

__all__ = [
    "CallbackRecorder",
    "MockCloudFixture",
    "mock_container",
]
