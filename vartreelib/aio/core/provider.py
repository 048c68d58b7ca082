"""Variable provider abstraction.

Defines how a source of variables (a kernel, a debugger, an in-process
namespace) is adapted into the async variable tree interface.
Key feature: children are streamed through an AsyncIterator, so a consumer
can stop pulling after one page.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict, Optional

from ...config import ProvisionMode
from .cancellation import CancellationToken
from .node import Document, VariableResult


class VariableProvider(ABC):
    """Abstract base class for variable providers.

    Providers answer one kind of query: enumerate the children of a
    handle in a given mode, starting at an offset. The returned stream may
    be long or unbounded; consumers stop pulling when they have enough.
    """

    @property
    def has_variable_provider(self) -> bool:
        """Whether this provider can currently supply variables at all."""
        return True

    @abstractmethod
    def provide_variables(
        self,
        document_uri: str,
        handle: Optional[int],
        mode: ProvisionMode,
        start: int,
        token: CancellationToken
    ) -> AsyncIterator[VariableResult]:
        """Stream the children of a variable.

        Implementations are normally async generators. They should check
        ``token`` between elements and stop (by raising
        ``CancelledError``) once it is revoked.

        Args:
            document_uri: URI of the document whose variables are queried
            handle: Variable handle, or None for the document's root scope
            mode: Enumerate named or indexed children
            start: Offset of the first indexed child (0 for named mode)
            token: Cancellation token current when the query was issued

        Yields:
            VariableResult for each child, in provider order
        """
        pass

    async def close(self):
        """Clean up provider resources.

        Override if the provider needs cleanup (close connections, etc.)
        """
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class ProviderSelector(ABC):
    """Decides which provider, if any, serves a document."""

    @abstractmethod
    def get_matching_provider(self, document: Document) -> Optional[VariableProvider]:
        """Get the provider currently selected for a document.

        Returns:
            The selected provider, or None if nothing is selected
        """
        pass


class StaticProviderSelector(ProviderSelector):
    """Selector backed by an explicit per-document choice.

    Example:
        selector = StaticProviderSelector()
        selector.select(document, provider)
        source = VariableDataSource(selector)
    """

    def __init__(self, default: Optional[VariableProvider] = None):
        """Initialize selector.

        Args:
            default: Provider used for documents with no explicit selection
        """
        self.default = default
        self._selected: Dict[str, VariableProvider] = {}

    def select(self, document: Document, provider: VariableProvider) -> None:
        self._selected[document.uri] = provider

    def deselect(self, document: Document) -> None:
        self._selected.pop(document.uri, None)

    def get_matching_provider(self, document: Document) -> Optional[VariableProvider]:
        return self._selected.get(document.uri, self.default)
