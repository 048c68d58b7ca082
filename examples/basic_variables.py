#!/usr/bin/env python3
"""
Basic example: browse a namespace the way a variables panel would.

This example demonstrates:
- Expanding only what the user opens
- Range nodes for a large list
- Cancelling outstanding queries when the view is refreshed
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from vartreelib.aio import (
    Document,
    PythonObjectProvider,
    ScopeNode,
    StaticProviderSelector,
    VariableDataSource,
    get_variable_tree,
)


def print_tree(entries, indent=0):
    for entry in entries:
        marker = '+' if entry['children'] is None else ' '
        print(f"{'  ' * indent}{marker} {entry['name']} = {entry['value']}")
        print_tree(entry['children'] or [], indent + 1)


async def main():
    """Walk a small namespace lazily."""
    namespace = {
        'answer': 42,
        'settings': {'debug': True, 'retries': 3},
        'samples': [x * x for x in range(1050)],
    }
    document = Document('file:///example.py')
    source = VariableDataSource(StaticProviderSelector(default=PythonObjectProvider(namespace)))

    root = ScopeNode(document)
    variables = await source.get_children(root)
    print("Root variables:")
    for variable in variables:
        expandable = 'expandable' if source.has_children(variable) else 'leaf'
        print(f"  {variable.name}: {variable.type} ({expandable})")

    samples = next(v for v in variables if v.name == 'samples')
    ranges = await source.get_children(samples)
    print(f"\n'samples' split into {len(ranges)} ranges: {ranges[0].name} ... {ranges[-1].name}")

    last = await source.get_children(ranges[-1])
    print(f"Last range holds {len(last)} elements, first is {last[0].name} = {last[0].value}")

    # A refresh makes earlier queries obsolete
    source.cancel()

    print("\nSnapshot (depth 2, '+' = not expanded):")
    print_tree(await get_variable_tree(source, document, max_depth=2))


if __name__ == "__main__":
    if '-v' in sys.argv:
        logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
