"""
Platform adapters for the tablejack engine.

This package provides adapters that translate between the table engine and a
presentation layer.
"""

from tablejack.adapters.base import PlatformAdapter
from tablejack.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "DummyAdapter"]
