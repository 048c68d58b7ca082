"""Asynchronous implementation of VarTreeLib.

This package contains the async data source, providers and helpers for
materializing a document's variable tree one expansion at a time.
"""

# Core abstractions
from .core import (
    Document,
    ScopeNode,
    VariableNode,
    VariableResult,
    TreeElement,
    CancelledError,
    CancellationToken,
    CancellationTokenSource,
    CancellationManager,
    VariableProvider,
    ProviderSelector,
    StaticProviderSelector,
    VariableDataSource,
    AsyncVariableTraverser,
    AsyncBreadthFirstVariableTraverser,
    AsyncDepthFirstVariableTraverser,
    create_traverser,
)

# Providers
from .adapters import PythonObjectProvider

# Error handling
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .error_handling import ErrorHandlingDataSource, create_resilient_data_source

# High-level API
from .api import (
    traverse_variables,
    get_variable_tree,
    find_variables,
    count_variables,
)

# Configuration
from ..config import (
    VARIABLE_PAGE_SIZE,
    DataSourceConfig,
    DepthConfig,
    ObjectProviderConfig,
    ProvisionMode,
    NodeKind,
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
    'PythonObjectProvider',
    # Data source
    'VariableDataSource',
    # Traversers
    'AsyncVariableTraverser',
    'AsyncBreadthFirstVariableTraverser',
    'AsyncDepthFirstVariableTraverser',
    'create_traverser',
    # Error handling
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    'ErrorHandlingDataSource',
    'create_resilient_data_source',
    # High-level API
    'traverse_variables',
    'get_variable_tree',
    'find_variables',
    'count_variables',
    # Configuration
    'VARIABLE_PAGE_SIZE',
    'DataSourceConfig',
    'DepthConfig',
    'ObjectProviderConfig',
    'ProvisionMode',
    'NodeKind',
]
