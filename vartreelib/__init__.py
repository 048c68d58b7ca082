"""VarTreeLib - Lazy, paginated variable trees.

VarTreeLib turns a variable provider (a kernel, a debugger, an in-process
namespace) into a tree a UI can expand one level at a time. Children are
fetched only on expansion, large indexed collections are split into
re-expandable range nodes, and a single cancellation handle per view lets
a host abandon queries it no longer needs.

    from vartreelib.aio import VariableDataSource, ScopeNode
"""

__version__ = "0.1.0"

from . import aio
from .config import VARIABLE_PAGE_SIZE

__all__ = [
    "__version__",
    "aio",
    "VARIABLE_PAGE_SIZE",
]
