"""Testing utilities for warbler applications."""

from warbler.testing.client import TestClient

__all__ = ["TestClient"]
