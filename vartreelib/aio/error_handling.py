"""
Error handling wrapper for VarTreeLib data sources.

This module provides ErrorHandlingDataSource, which wraps a data source
and delegates fetch failures to pluggable policies.
"""

import functools
import inspect
from typing import Any, List, Optional

from .core import TreeElement, VariableDataSource, VariableNode
from .error_policies import ErrorPolicy, FailFastPolicy


class ErrorHandlingDataSource:
    """
    Data source wrapper that handles fetch errors through a policy.

    ``has_children`` and ``cancel`` are answered by the wrapped source
    directly; they do no I/O and cannot fail. Any coroutine method of the
    wrapped source is proxied with error handling, so ``get_children`` and
    the lower-level fetch methods share one policy.
    """

    def __init__(self, base_source: VariableDataSource, policy: Optional[ErrorPolicy] = None):
        """
        Initialize the wrapper.

        Args:
            base_source: The data source to wrap
            policy: Error handling policy (defaults to FailFastPolicy)
        """
        self._base_source = base_source
        self._policy = policy or FailFastPolicy()

    def has_children(self, element: TreeElement) -> bool:
        return self._base_source.has_children(element)

    def cancel(self) -> None:
        self._base_source.cancel()

    async def get_children(self, element: TreeElement) -> List[VariableNode]:
        try:
            return await self._base_source.get_children(element)
        except Exception as e:
            return await self._policy.handle(e, 'get_children', element)

    def __getattr__(self, name: str) -> Any:
        """
        Proxy remaining attributes to the wrapped source.

        Coroutine methods are wrapped so their failures reach the policy;
        everything else is returned as-is.
        """
        attr = getattr(self._base_source, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        @functools.wraps(attr)
        async def wrapper(*args, **kwargs):
            try:
                return await attr(*args, **kwargs)
            except Exception as e:
                element = args[0] if args else None
                return await self._policy.handle(e, name, element)

        return wrapper

    def get_policy(self) -> ErrorPolicy:
        return self._policy

    def set_policy(self, policy: ErrorPolicy) -> None:
        self._policy = policy

    def get_base_source(self) -> VariableDataSource:
        return self._base_source

    def __repr__(self) -> str:
        return f"ErrorHandlingDataSource({self._base_source!r}, policy={self._policy.__class__.__name__})"


def create_resilient_data_source(
    base_source: VariableDataSource,
    strict: bool = False,
    verbose: bool = True
) -> ErrorHandlingDataSource:
    """
    Convenience function to create an error-handling data source.

    Args:
        base_source: The data source to wrap
        strict: If True, use FailFastPolicy; if False, use ContinueOnErrorsPolicy
        verbose: If True, print warnings for errors (only applies when strict=False)

    Returns:
        An ErrorHandlingDataSource configured appropriately
    """
    from .error_policies import ContinueOnErrorsPolicy

    if strict:
        policy = FailFastPolicy()
    else:
        policy = ContinueOnErrorsPolicy(verbose=verbose)

    return ErrorHandlingDataSource(base_source, policy)
