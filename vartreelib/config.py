"""Configuration system for VarTreeLib.

This module defines how hosts specify paging, depth limits and provider
presentation when materializing a variable tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# Upper bound on nodes materialized per fetch and per range block
VARIABLE_PAGE_SIZE = 100


class ProvisionMode(Enum):
    """Which kind of children a provider query enumerates."""
    NAMED = "named"        # Children addressed by name (fields, keys)
    INDEXED = "indexed"    # Children addressed by position (elements)


class NodeKind(Enum):
    """Discriminant for the elements of a variable tree."""
    ROOT = "root"
    VARIABLE = "variable"


@dataclass
class DataSourceConfig:
    """Configuration for a variable data source.

    The page size is copied by the data source when it is constructed and
    stays fixed for that data source's lifetime: range node identifiers are
    derived from it.
    """

    page_size: int = VARIABLE_PAGE_SIZE

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if not isinstance(self.page_size, int) or isinstance(self.page_size, bool):
            errors.append("page_size must be an integer")
        elif self.page_size <= 0:
            errors.append("page_size must be positive")
        return errors


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering during expansion."""

    min_depth: int = 0                  # Minimum depth to yield
    max_depth: Optional[int] = None     # Maximum depth to expand into

    def should_yield(self, depth: int) -> bool:
        """Check if elements at this depth should be yielded.

        Args:
            depth: Current depth

        Returns:
            True if depth is within configured range
        """
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of an element at this depth should be fetched.

        Args:
            depth: Current depth

        Returns:
            True if we should go deeper
        """
        if self.max_depth is not None:
            return depth < self.max_depth
        return True

    def validate(self) -> List[str]:
        errors = []
        if self.min_depth < 0:
            errors.append("min_depth cannot be negative")
        if self.max_depth is not None:
            if self.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.max_depth < self.min_depth:
                errors.append("max_depth cannot be less than min_depth")
        return errors


@dataclass
class ObjectProviderConfig:
    """Presentation settings for the Python object provider."""

    max_value_length: int = 120     # Truncate repr() beyond this many chars
    include_private: bool = False   # Expose _underscore attributes

    def validate(self) -> List[str]:
        errors = []
        if self.max_value_length < 4:
            errors.append("max_value_length must be at least 4")
        return errors
