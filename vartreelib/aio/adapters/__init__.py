"""Concrete variable providers.

This module contains providers that bridge specific sources of variables
to the generic async variable tree interface.
"""

from .python_objects import PythonObjectProvider

__all__ = [
    'PythonObjectProvider',
]
