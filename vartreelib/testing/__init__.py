"""Testing utilities for VarTreeLib.

This module provides fixtures and helpers for testing code that consumes
VarTreeLib, without exposing internal implementation details.
"""

from .fixtures import ProviderQuery, RecordingProvider

__all__ = ['ProviderQuery', 'RecordingProvider']
