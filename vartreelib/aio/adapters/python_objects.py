"""Variable provider over live Python objects.

Exposes a namespace mapping (for example a REPL's globals) the way a
kernel exposes its variables: mappings and plain objects have named
children, sequences and sets have indexed children, and strings, bytes
and numbers are leaves.
"""

import asyncio
import keyword
from collections.abc import Mapping, Sequence, Set
from typing import Any, AsyncIterator, Dict, Hashable, Iterator, List, Optional, Tuple

from ...config import ObjectProviderConfig, ProvisionMode
from ..core import CancellationToken, VariableProvider, VariableResult

_LEAF_TYPES = (str, bytes, bytearray, memoryview, int, float, complex, bool, type(None))


class PythonObjectProvider(VariableProvider):
    """Provider serving the objects of an in-process namespace.

    Handles are positive integers assigned per position: the parent handle
    plus the child's raw mapping key, attribute name or index. A position
    gets its handle the first time it is reported, and the provider keeps a
    reference to the object last reported there.

    Mapping keys are shown bare when they are plain identifiers and as
    ``repr`` otherwise, so the keys ``3`` and ``'3'`` read ``3`` and ``'3'``.

    Example:
        provider = PythonObjectProvider({'x': 1, 'items': list(range(250))})
        selector = StaticProviderSelector(default=provider)
        source = VariableDataSource(selector)
    """

    def __init__(
        self,
        namespace: Optional[Mapping] = None,
        config: Optional[ObjectProviderConfig] = None
    ):
        """Initialize provider.

        Args:
            namespace: Mapping of variable name to object for the root scope
            config: Presentation settings

        Raises:
            ValueError: If the configuration is invalid
        """
        config = config or ObjectProviderConfig()
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid provider config: {'; '.join(errors)}")

        self.namespace = namespace if namespace is not None else {}
        self.config = config
        self.enabled = True
        self._objects: Dict[int, Any] = {}
        self._handles: Dict[Tuple[Optional[int], Hashable], int] = {}
        self._next_handle = 1

    @property
    def has_variable_provider(self) -> bool:
        return self.enabled

    async def provide_variables(
        self,
        document_uri: str,
        handle: Optional[int],
        mode: ProvisionMode,
        start: int,
        token: CancellationToken
    ) -> AsyncIterator[VariableResult]:
        if handle is None:
            entries = self._root_entries() if mode is ProvisionMode.NAMED else iter(())
        else:
            target = self.resolve(handle)
            if mode is ProvisionMode.NAMED:
                entries = self._named_entries(target)
            else:
                entries = self._indexed_entries(target, start)

        for key, name, value in entries:
            token.raise_if_cancelled()
            # One suspension per element, like a remote kernel round-trip
            await asyncio.sleep(0)
            token.raise_if_cancelled()
            yield self.describe(handle, key, name, value)

    def handle_for(self, parent: Optional[int], key: Hashable, obj: Any) -> int:
        """Get (assigning if needed) the handle of the child at ``key`` under ``parent``.

        Handles identify a position in the tree, so the same object reachable
        from two places gets two handles, and rebinding a name keeps its handle.
        """
        position = (parent, key)
        handle = self._handles.get(position)
        if handle is None:
            handle = self._next_handle
            self._next_handle += 1
            self._handles[position] = handle
        self._objects[handle] = obj
        return handle

    def resolve(self, handle: int) -> Any:
        """Get the object behind a handle.

        Raises:
            KeyError: If the handle was never issued by this provider
        """
        try:
            return self._objects[handle]
        except KeyError:
            raise KeyError(f"Unknown variable handle: {handle}") from None

    def describe(self, parent: Optional[int], key: Hashable, name: str, value: Any) -> VariableResult:
        """Build the provider result for one child object."""
        named, indexed = self._child_counts(value)
        return VariableResult(
            handle=self.handle_for(parent, key, value),
            name=name,
            value=self._format_value(value),
            type=type(value).__name__,
            indexed_children_count=indexed,
            has_named_children=named,
        )

    def _root_entries(self) -> Iterator[Tuple[Hashable, str, Any]]:
        return self._mapping_entries(self.namespace)

    def _named_entries(self, obj: Any) -> Iterator[Tuple[Hashable, str, Any]]:
        if isinstance(obj, _LEAF_TYPES):
            return iter(())
        if isinstance(obj, Mapping):
            return self._mapping_entries(obj)
        if self._is_indexed(obj):
            return iter(())
        return ((('attr', name), name, value) for name, value in self._attributes(obj))

    def _mapping_entries(self, obj: Mapping) -> Iterator[Tuple[Hashable, str, Any]]:
        return ((('key', key), self._format_key(key), value) for key, value in list(obj.items()))

    def _indexed_entries(self, obj: Any, start: int) -> Iterator[Tuple[Hashable, str, Any]]:
        if not self._is_indexed(obj):
            return iter(())
        # Sets have no positions; a snapshot gives them a stable order for this query
        items = list(obj) if isinstance(obj, Set) else obj
        return ((('index', index), str(index), items[index]) for index in range(start, len(items)))

    def _child_counts(self, obj: Any) -> Tuple[bool, int]:
        if isinstance(obj, _LEAF_TYPES):
            return False, 0
        if isinstance(obj, Mapping):
            return len(obj) > 0, 0
        if self._is_indexed(obj):
            return False, len(obj)
        return len(self._attributes(obj)) > 0, 0

    def _attributes(self, obj: Any) -> List[Tuple[str, Any]]:
        try:
            attributes = vars(obj)
        except TypeError:
            return []
        return [
            (name, value) for name, value in list(attributes.items())
            if self.config.include_private or not name.startswith('_')
        ]

    @staticmethod
    def _is_indexed(obj: Any) -> bool:
        if isinstance(obj, _LEAF_TYPES):
            return False
        return isinstance(obj, (Sequence, Set))

    @staticmethod
    def _format_key(key: Any) -> str:
        if isinstance(key, str) and key.isidentifier() and not keyword.iskeyword(key):
            return key
        return repr(key)

    def _format_value(self, value: Any) -> str:
        text = repr(value)
        limit = self.config.max_value_length
        if len(text) > limit:
            text = text[:limit - 3] + '...'
        return text
