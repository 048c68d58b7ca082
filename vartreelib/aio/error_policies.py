"""
Error handling policies for VarTreeLib.

The data source itself never swallows provider failures. Hosts that
would rather show an empty expansion than an error pick one of these
policies and wrap their data source in an ErrorHandlingDataSource.
"""

import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .core import CancelledError


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors raised
    while fetching the children of a tree element.
    """

    @abstractmethod
    async def handle(self, error: Exception, method_name: str, element: Any) -> Any:
        """
        Handle an error that occurred during a fetch.

        Args:
            error: The exception that was raised
            method_name: Name of the method that failed (e.g., 'get_children')
            element: The scope or variable being expanded

        Returns:
            A value to return in place of the failed call,
            or re-raises the exception.
        """
        pass


def _describe(element: Any) -> str:
    name = getattr(element, 'name', None)
    if name is not None:
        return name
    document = getattr(element, 'document', None)
    return f"<scope {document}>" if document is not None else str(element)


def _default_result(method_name: str) -> Any:
    if method_name.startswith('get_'):
        return []  # Empty expansion
    return None


class _RecordingPolicy(ErrorPolicy):
    """Shared bookkeeping for policies that keep going after an error."""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def _record(self, error: Exception, method_name: str, element: Any) -> Dict[str, Any]:
        record = {
            'element': _describe(element),
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'cancelled': isinstance(error, CancelledError),
        }
        self.errors.append(record)
        return record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'cancelled': sum(1 for e in self.errors if e['cancelled']),
            'errors': self.errors,
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error.

    This is the default behavior and matches an unwrapped data source.
    """

    async def handle(self, error: Exception, method_name: str, element: Any) -> Any:
        raise error


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that records errors, warns, and shows an empty expansion.

    Cancellations are recorded but never warned about: the host asked
    for them.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        super().__init__()
        self.verbose = verbose

    async def handle(self, error: Exception, method_name: str, element: Any) -> Any:
        record = self._record(error, method_name, element)
        if self.verbose and not record['cancelled']:
            print(f"\nWARNING: Error in {method_name} for '{record['element']}': {error}",
                  file=sys.stderr)
        return _default_result(method_name)


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that collects all errors silently, for batch reporting.
    """

    async def handle(self, error: Exception, method_name: str, element: Any) -> Any:
        self._record(error, method_name, element)
        return _default_result(method_name)


class ThresholdPolicy(_RecordingPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails.

    Useful when an occasional failing variable is expected but a provider
    that fails everywhere should be surfaced.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, print warnings for errors
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose

    @property
    def error_count(self) -> int:
        # Superseded queries are not failures
        return sum(1 for record in self.errors if not record['cancelled'])

    async def handle(self, error: Exception, method_name: str, element: Any) -> Any:
        record = self._record(error, method_name, element)

        if record['cancelled']:
            return _default_result(method_name)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            print(f"\nWARNING [{self.error_count}/{self.max_errors}]: Error in {method_name} "
                  f"for '{record['element']}': {error}", file=sys.stderr)
        return _default_result(method_name)
