"""Index range arithmetic for paginating indexed children.

Pure computation with no I/O, shared by the data source and anything
that needs to predict how a large indexed collection will be split.
"""

from typing import Iterator, NamedTuple


class IndexRange(NamedTuple):
    """Half-open block ``[start, end)`` of an indexed collection."""

    start: int
    end: int

    @property
    def count(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        """Inclusive bracketed display form, e.g. ``[100..199]``."""
        return f"[{self.start}..{self.end - 1}]"


def needs_split(count: int, page_size: int) -> bool:
    """Check if a collection of ``count`` elements must be shown as ranges."""
    return count > page_size


def split_index_ranges(count: int, page_size: int, base: int = 0) -> Iterator[IndexRange]:
    """Split ``count`` elements starting at ``base`` into page-sized blocks.

    Blocks are yielded in ascending order, cover ``[base, base + count)``
    without gaps or overlap, and all but the last hold exactly
    ``page_size`` elements.

    Args:
        count: Number of elements in the collection
        page_size: Maximum elements per block
        base: Absolute index of the first element

    Yields:
        IndexRange blocks
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    limit = base + count
    for start in range(base, limit, page_size):
        yield IndexRange(start, min(start + page_size, limit))


def range_count(count: int, page_size: int) -> int:
    """Number of blocks ``split_index_ranges`` produces (ceil division)."""
    if count <= 0:
        return 0
    return -(-count // page_size)
