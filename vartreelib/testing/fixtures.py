"""Test fixtures for VarTreeLib consumers.

These fixtures wrap real providers so tests can see exactly which queries
a data source issued and how far it consumed each stream, without the
provider having to know it is being observed.
"""

from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

from ..config import ProvisionMode
from ..aio.core import CancellationToken, VariableProvider, VariableResult


@dataclass
class ProviderQuery:
    """One call to ``provide_variables`` and what came of it."""

    document_uri: str
    handle: Optional[int]
    mode: ProvisionMode
    start: int
    token: CancellationToken
    pulled: int = 0             # Elements actually handed to the consumer
    closed: bool = False        # Stream finalized (exhausted, stopped early or failed)


class RecordingProvider(VariableProvider):
    """Provider wrapper that records every query.

    Example:
        provider = RecordingProvider(PythonObjectProvider(namespace))
        source = VariableDataSource(StaticProviderSelector(default=provider))
        await source.get_children(ScopeNode(document))
        assert provider.queries[0].mode is ProvisionMode.NAMED
    """

    def __init__(self, base_provider: VariableProvider):
        self.base_provider = base_provider
        self.queries: List[ProviderQuery] = []

    @property
    def has_variable_provider(self) -> bool:
        return self.base_provider.has_variable_provider

    async def provide_variables(
        self,
        document_uri: str,
        handle: Optional[int],
        mode: ProvisionMode,
        start: int,
        token: CancellationToken
    ) -> AsyncIterator[VariableResult]:
        query = ProviderQuery(document_uri, handle, mode, start, token)
        self.queries.append(query)
        stream = self.base_provider.provide_variables(document_uri, handle, mode, start, token)
        try:
            async for result in stream:
                query.pulled += 1
                yield result
        finally:
            query.closed = True
            aclose = getattr(stream, 'aclose', None)
            if aclose is not None:
                await aclose()

    def queries_for(self, handle: Optional[int]) -> List[ProviderQuery]:
        return [query for query in self.queries if query.handle == handle]

    def reset(self) -> None:
        self.queries.clear()

    async def close(self):
        await self.base_provider.close()
