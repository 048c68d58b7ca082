"""Core abstractions for the async variable tree.

This module defines the tree elements, the provider interface, cancellation
and the lazy data source that ties them together.
"""

from .node import Document, ScopeNode, VariableNode, VariableResult, TreeElement
from .cancellation import (
    CancelledError,
    CancellationToken,
    CancellationTokenSource,
    CancellationManager,
)
from .provider import VariableProvider, ProviderSelector, StaticProviderSelector
from .data_source import VariableDataSource
from .traverser import (
    AsyncVariableTraverser,
    AsyncBreadthFirstVariableTraverser,
    AsyncDepthFirstVariableTraverser,
    create_traverser,
)

__all__ = [
    # Elements
    'Document',
    'ScopeNode',
    'VariableNode',
    'VariableResult',
    'TreeElement',
    # Cancellation
    'CancelledError',
    'CancellationToken',
    'CancellationTokenSource',
    'CancellationManager',
    # Providers
    'VariableProvider',
    'ProviderSelector',
    'StaticProviderSelector',
    # Data source
    'VariableDataSource',
    # Traversers
    'AsyncVariableTraverser',
    'AsyncBreadthFirstVariableTraverser',
    'AsyncDepthFirstVariableTraverser',
    'create_traverser',
]
