"""Lazy variable tree data source.

Turns a provider's two query modes into the children of a tree node,
fetching only when a node is expanded. Indexed collections larger than
one page are never fetched directly: they are split into synthetic range
nodes, each of which is fetched (one page at most) when it is expanded.
"""

import logging
from typing import AsyncIterator, List, Optional

from ...config import DataSourceConfig, NodeKind, ProvisionMode
from ...ranges import IndexRange, needs_split, split_index_ranges
from .cancellation import CancellationManager
from .node import Document, TreeElement, VariableNode
from .provider import ProviderSelector, VariableProvider

logger = logging.getLogger(__name__)


class VariableDataSource:
    """Async data source for a document's variable tree.

    A host calls ``has_children`` to decide whether to draw an expand
    affordance and ``get_children`` when the user expands. Neither caches
    anything: every expansion queries the provider again.

    Example:
        source = VariableDataSource(selector)
        root = ScopeNode(document)
        for variable in await source.get_children(root):
            if source.has_children(variable):
                children = await source.get_children(variable)
    """

    def __init__(
        self,
        selector: ProviderSelector,
        config: Optional[DataSourceConfig] = None,
        cancellation: Optional[CancellationManager] = None
    ):
        """Initialize data source.

        Args:
            selector: Resolves the provider serving a document
            config: Paging configuration (defaults to DataSourceConfig())
            cancellation: Cancellation manager for this view (created if None)

        Raises:
            ValueError: If the configuration is invalid
        """
        config = config or DataSourceConfig()
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid data source config: {'; '.join(errors)}")

        self.selector = selector
        self._page_size = config.page_size
        self._cancellation = cancellation or CancellationManager()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def cancellation(self) -> CancellationManager:
        return self._cancellation

    def has_children(self, element: TreeElement) -> bool:
        """Check whether an element can be expanded, without any I/O."""
        if element.kind is NodeKind.ROOT:
            return True
        return element.has_named_children or element.indexed_children_count > 0

    def cancel(self) -> None:
        """Revoke queries issued so far; later queries get a fresh token."""
        self._cancellation.cancel()

    async def get_children(self, element: TreeElement) -> List[VariableNode]:
        """Get the children of a scope or variable.

        Named children come first, in provider order, followed by indexed
        children or range nodes in ascending offset order.

        Returns:
            Child nodes; empty if no capable provider serves the document
        """
        if element.kind is NodeKind.ROOT:
            return await self.get_root_variables(element.document)
        return await self.get_variables(element)

    async def get_root_variables(self, document: Document) -> List[VariableNode]:
        provider = self._get_provider(document)
        if provider is None:
            return []

        logger.debug("Fetching root variables of %s", document.uri)
        variables = provider.provide_variables(
            document.uri, None, ProvisionMode.NAMED, 0, self._cancellation.token
        )
        return [VariableNode.from_result(variable, document) async for variable in variables]

    async def get_variables(self, parent: VariableNode) -> List[VariableNode]:
        provider = self._get_provider(parent.document)
        if provider is None:
            return []

        children: List[VariableNode] = []
        if parent.has_named_children:
            logger.debug("Fetching named children of handle %d", parent.ext_host_id)
            variables = provider.provide_variables(
                parent.document.uri,
                parent.ext_host_id,
                ProvisionMode.NAMED,
                0,
                self._cancellation.token
            )
            children.extend([
                VariableNode.from_result(variable, parent.document)
                async for variable in variables
            ])
        if parent.indexed_children_count > 0:
            children.extend(await self.get_indexed_children(parent, provider))

        return children

    async def get_indexed_children(
        self,
        parent: VariableNode,
        provider: VariableProvider
    ) -> List[VariableNode]:
        """Get one page of indexed children, or range nodes covering them.

        Collections larger than the page size are split into range nodes
        without querying the provider. Smaller ones are fetched in indexed
        mode from ``index_start`` and consumption stops after one page,
        even if the provider keeps producing.
        """
        count = parent.indexed_children_count
        base = parent.index_start or 0

        if needs_split(count, self._page_size):
            ranges = [
                self._create_range_element(parent, block)
                for block in split_index_ranges(count, self._page_size, base)
            ]
            logger.debug(
                "Split %d indexed children of handle %d into %d ranges",
                count, parent.ext_host_id, len(ranges)
            )
            return ranges

        child_nodes: List[VariableNode] = []
        if count <= 0:
            return child_nodes

        logger.debug("Fetching indexed children of handle %d from %d", parent.ext_host_id, base)
        variables = provider.provide_variables(
            parent.document.uri,
            parent.ext_host_id,
            ProvisionMode.INDEXED,
            base,
            self._cancellation.token
        )
        try:
            async for variable in variables:
                child_nodes.append(VariableNode.from_result(variable, parent.document))
                if len(child_nodes) >= self._page_size:
                    logger.debug("Page limit reached for handle %d", parent.ext_host_id)
                    break
        finally:
            await _close_stream(variables)

        return child_nodes

    def _get_provider(self, document: Document) -> Optional[VariableProvider]:
        provider = self.selector.get_matching_provider(document)
        if provider is None or not provider.has_variable_provider:
            return None
        return provider

    def _create_range_element(self, parent: VariableNode, block: IndexRange) -> VariableNode:
        return VariableNode(
            id=parent.id + f"{block.start}",
            ext_host_id=parent.ext_host_id,
            name=block.label,
            value='',
            document=parent.document,
            indexed_children_count=block.count,
            index_start=block.start,
            has_named_children=False,
        )


async def _close_stream(stream: AsyncIterator) -> None:
    # Finalize a provider generator we stopped pulling from early
    aclose = getattr(stream, 'aclose', None)
    if aclose is not None:
        await aclose()
