# tests/property/__init__.py
"""Property-based tests for mockcloud.

These tests check invariants that must hold for every store content and
fault configuration, not just the scenarios written out in tests/unit/.
Profiles are configured in tests/conftest.py.
"""
