"""Async variable tree traversal strategies.

Walks a data source by repeatedly expanding elements, for hosts that want
to pre-expand part of a tree (snapshots, search, tests). Every expansion
goes through ``get_children``, so paging and range splitting apply exactly
as they do for interactive expansion.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import replace
from typing import AsyncIterator, Optional, Tuple

from ...config import DepthConfig
from .data_source import VariableDataSource
from .node import TreeElement


class AsyncVariableTraverser(ABC):
    """Abstract base class for variable tree traversers.

    Traversers do not track visited nodes. Providers over cyclic data
    (an object that contains itself) must be walked with a ``max_depth``.
    """

    def __init__(self, depth_config: Optional[DepthConfig] = None):
        """Initialize traverser with optional depth configuration.

        Args:
            depth_config: Configuration for depth-based filtering
        """
        self.depth_config = depth_config or DepthConfig()

    @abstractmethod
    async def traverse(
        self,
        root: TreeElement,
        source: VariableDataSource,
        max_depth: Optional[int] = None
    ) -> AsyncIterator[Tuple[TreeElement, int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting element (depth 0)
            source: Data source used to expand elements
            max_depth: Maximum depth to expand into (overrides config)

        Yields:
            (element, depth) tuples in traversal order
        """
        pass

    def should_yield(self, depth: int, depth_config: Optional[DepthConfig] = None) -> bool:
        return (depth_config or self.depth_config).should_yield(depth)

    def should_explore(
        self,
        element: TreeElement,
        source: VariableDataSource,
        depth: int,
        depth_config: Optional[DepthConfig] = None
    ) -> bool:
        config = depth_config or self.depth_config
        return config.should_explore(depth) and source.has_children(element)

    def _depth_config_for(self, max_depth: Optional[int]) -> DepthConfig:
        # A per-call limit applies to this traversal only
        if max_depth is None:
            return self.depth_config
        return replace(self.depth_config, max_depth=max_depth)


class AsyncBreadthFirstVariableTraverser(AsyncVariableTraverser):
    """Level-order traversal: every element at depth N before depth N+1."""

    async def traverse(
        self,
        root: TreeElement,
        source: VariableDataSource,
        max_depth: Optional[int] = None
    ) -> AsyncIterator[Tuple[TreeElement, int]]:
        depth_config = self._depth_config_for(max_depth)

        queue = deque([(root, 0)])
        while queue:
            element, depth = queue.popleft()

            if self.should_yield(depth, depth_config):
                yield element, depth

            if self.should_explore(element, source, depth, depth_config):
                for child in await source.get_children(element):
                    queue.append((child, depth + 1))


class AsyncDepthFirstVariableTraverser(AsyncVariableTraverser):
    """Depth-first traversal, pre-order by default."""

    def __init__(
        self,
        depth_config: Optional[DepthConfig] = None,
        pre_order: bool = True
    ):
        """Initialize depth-first traverser.

        Args:
            depth_config: Configuration for depth-based filtering
            pre_order: If True, yield parent before children (pre-order).
                      If False, yield children before parent (post-order).
        """
        super().__init__(depth_config)
        self.pre_order = pre_order

    async def traverse(
        self,
        root: TreeElement,
        source: VariableDataSource,
        max_depth: Optional[int] = None
    ) -> AsyncIterator[Tuple[TreeElement, int]]:
        depth_config = self._depth_config_for(max_depth)

        async def dfs(element: TreeElement, depth: int) -> AsyncIterator[Tuple[TreeElement, int]]:
            if self.pre_order and self.should_yield(depth, depth_config):
                yield element, depth

            if self.should_explore(element, source, depth, depth_config):
                for child in await source.get_children(element):
                    async for descendant in dfs(child, depth + 1):
                        yield descendant

            if not self.pre_order and self.should_yield(depth, depth_config):
                yield element, depth

        async for item in dfs(root, 0):
            yield item


def create_traverser(strategy: str = 'bfs', depth_config: Optional[DepthConfig] = None) -> AsyncVariableTraverser:
    """Create a traverser by strategy name.

    Args:
        strategy: 'bfs', 'dfs' (pre-order) or 'dfs_post'

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy == 'bfs':
        return AsyncBreadthFirstVariableTraverser(depth_config)
    elif strategy == 'dfs':
        return AsyncDepthFirstVariableTraverser(depth_config, pre_order=True)
    elif strategy == 'dfs_post':
        return AsyncDepthFirstVariableTraverser(depth_config, pre_order=False)
    raise ValueError(f"Unknown strategy: {strategy}")
