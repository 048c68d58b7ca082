"""Variable tree elements.

A variable tree has two kinds of element, told apart by their ``kind``
field: the synthetic ``ScopeNode`` at the root of a document, and
``VariableNode`` for everything a provider (or range splitting) produces.
Elements are immutable and rebuilt on every fetch, so a node's ``id`` is
the only continuity a host can rely on between two expansions.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ...config import NodeKind


@dataclass(frozen=True)
class Document:
    """The document a variable tree belongs to, addressed by URI."""

    uri: str

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class VariableResult:
    """One variable as reported by a provider.

    Attributes:
        handle: Provider-assigned number used to query the variable's children
        name: Display name
        value: Display value
        type: Optional type label
        indexed_children_count: Number of positionally addressed children
        has_named_children: Whether the variable also has named children
    """

    handle: int
    name: str
    value: str
    type: Optional[str] = None
    indexed_children_count: int = 0
    has_named_children: bool = False


@dataclass(frozen=True)
class ScopeNode:
    """Root of a document's variable tree."""

    document: Document
    kind: NodeKind = field(default=NodeKind.ROOT, init=False)


@dataclass(frozen=True)
class VariableNode:
    """A displayable variable, or a synthetic range over indexed children.

    ``index_start`` is set only for range nodes: nodes that cover a block of
    a larger indexed collection rather than the whole of it. Range nodes
    share ``ext_host_id`` with the collection they split.
    """

    id: str
    ext_host_id: int
    name: str
    value: str
    document: Document
    type: Optional[str] = None
    indexed_children_count: int = 0
    index_start: Optional[int] = None
    has_named_children: bool = False
    kind: NodeKind = field(default=NodeKind.VARIABLE, init=False)

    @property
    def is_range(self) -> bool:
        return self.index_start is not None

    @classmethod
    def from_result(cls, result: VariableResult, document: Document) -> 'VariableNode':
        """Wrap a provider result, keyed by its stringified handle."""
        return cls(
            id=f"{result.handle}",
            ext_host_id=result.handle,
            name=result.name,
            value=result.value,
            type=result.type,
            indexed_children_count=result.indexed_children_count,
            has_named_children=result.has_named_children,
            document=document,
        )

    def __repr__(self) -> str:
        return f"VariableNode(id={self.id!r}, name={self.name!r})"


TreeElement = Union[ScopeNode, VariableNode]
