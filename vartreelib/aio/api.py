"""High-level async API for VarTreeLib.

This module provides simple functions for common whole-tree operations
on a document's variables. They expand through the data source like a
user clicking through the tree would, so paging and range nodes show up
in their results. Always pass ``max_depth`` for providers whose data may
be cyclic.
"""

from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple, Union

from ..config import DepthConfig
from .core import Document, ScopeNode, VariableDataSource, VariableNode, create_traverser
from .error_handling import ErrorHandlingDataSource

DataSource = Union[VariableDataSource, ErrorHandlingDataSource]


async def traverse_variables(
    source: DataSource,
    document: Document,
    strategy: str = 'bfs',
    max_depth: Optional[int] = 1
) -> AsyncIterator[Tuple[VariableNode, int]]:
    """Walk a document's variables.

    Args:
        source: Data source to expand through
        document: Document whose variables are walked
        strategy: Traversal strategy ('bfs', 'dfs' or 'dfs_post')
        max_depth: Deepest level to yield; 1 means root variables only,
                   None means unbounded

    Yields:
        (variable, depth) tuples; root variables have depth 1

    Raises:
        ValueError: If the strategy is unknown
    """
    traverser = create_traverser(strategy, DepthConfig(min_depth=1, max_depth=max_depth))
    async for element, depth in traverser.traverse(ScopeNode(document), source):
        yield element, depth


async def get_variable_tree(
    source: DataSource,
    document: Document,
    max_depth: Optional[int] = 2
) -> List[Dict[str, Any]]:
    """Snapshot a document's variables as nested dictionaries.

    Each entry has 'id', 'name', 'value', 'type' and 'children'. Elements
    below ``max_depth`` that could be expanded have ``children`` set to
    None, elements with nothing to expand have an empty list.

    Example:
        >>> tree = await get_variable_tree(source, document, max_depth=2)
        >>> [entry['name'] for entry in tree]
        ['x', 'arr']
    """

    async def snapshot(element: VariableNode, depth: int) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            'id': element.id,
            'name': element.name,
            'value': element.value,
            'type': element.type,
            'children': [],
        }
        if source.has_children(element):
            if max_depth is not None and depth >= max_depth:
                entry['children'] = None
            else:
                children = await source.get_children(element)
                entry['children'] = [await snapshot(child, depth + 1) for child in children]
        return entry

    roots = await source.get_children(ScopeNode(document))
    return [await snapshot(variable, 1) for variable in roots]


async def find_variables(
    source: DataSource,
    document: Document,
    predicate: Callable[[VariableNode], bool],
    max_depth: Optional[int] = 3,
    include_ranges: bool = False
) -> List[VariableNode]:
    """Collect variables matching a predicate, depth-first.

    Args:
        predicate: Called with each variable; True to keep it
        include_ranges: Also offer synthetic range nodes to the predicate

    Returns:
        Matching variables in pre-order
    """
    matches = []
    async for variable, _ in traverse_variables(source, document, 'dfs', max_depth):
        if variable.is_range and not include_ranges:
            continue
        if predicate(variable):
            matches.append(variable)
    return matches


async def count_variables(
    source: DataSource,
    document: Document,
    max_depth: Optional[int] = 1
) -> Dict[str, int]:
    """Count the elements reachable within ``max_depth``.

    Returns:
        Dictionary with 'variables', 'ranges' and 'expandable' counts
    """
    stats = {'variables': 0, 'ranges': 0, 'expandable': 0}
    async for variable, _ in traverse_variables(source, document, 'bfs', max_depth):
        if variable.is_range:
            stats['ranges'] += 1
        else:
            stats['variables'] += 1
        if source.has_children(variable):
            stats['expandable'] += 1
    return stats
