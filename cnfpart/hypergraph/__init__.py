"""
Hypergraph core.

Provides:
- The append-only Hypergraph store and its dual transform
- Breadth-first and depth-first traversal
- Partitions, the partition ledger and baseline partitioners
"""

from .hypergraph import Hypergraph, Vertex, dual
from .search import Frontier, Queue, Stack, SearchIterator
from .partition import Partition, PartitionManager
from .partitioners import (
    partition,
    partition_traversal,
    partition_bfs,
    partition_dfs,
    partition_random,
)

__all__ = [
    # Store
    'Hypergraph',
    'Vertex',
    'dual',
    # Traversal
    'Frontier',
    'Queue',
    'Stack',
    'SearchIterator',
    # Partitioning
    'Partition',
    'PartitionManager',
    'partition',
    'partition_traversal',
    'partition_bfs',
    'partition_dfs',
    'partition_random',
]
