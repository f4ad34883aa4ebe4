"""Test helper utilities for faculty records tests."""

from .fixture_directory import FixtureDirectory

__all__ = ["FixtureDirectory"]
