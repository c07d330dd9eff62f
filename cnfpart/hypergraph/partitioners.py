"""
Baseline hypergraph partitioners.

- Traversal partitioning: cuts a breadth-first or depth-first visitation
  order into consecutive chunks, one chunk per block.
- Random partitioning: assigns shuffled vertices to random blocks, with a
  single attempt at correcting blocks that would become too heavy.

Neither strategy minimizes the cut; they serve as cheap baselines next to
dedicated partitioners such as KaHyPar or PaToH.
"""

import logging
import math
import random
from itertools import islice
from typing import Optional

from ..errors import BalanceError, StructureError
from .hypergraph import Hypergraph
from .partition import Partition, PartitionManager

logger = logging.getLogger(__name__)

TRAVERSAL_ORDERS = ('bfs', 'dfs')
MODES = TRAVERSAL_ORDERS + ('random',)


def partition_traversal(graph: Hypergraph, blocks: int, order: str = 'bfs') -> Partition:
    """
    Partition a hypergraph along a traversal order.

    The first ``ceil(n / blocks)`` visited vertices go to block 0, the next
    ones to block 1 and so on. Trailing blocks may be smaller or empty. No
    imbalance tolerance is applied.

    Args:
        graph: Hypergraph with vertex ids ``0..n-1``
        blocks: Number of blocks
        order: ``'bfs'`` or ``'dfs'``

    Returns:
        Partition mapping each vertex to its block

    Raises:
        BalanceError: If ``blocks`` is not positive
        ValueError: If ``order`` is unknown
    """
    if order not in TRAVERSAL_ORDERS:
        raise ValueError(f"Unknown traversal order: {order} (expected one of {TRAVERSAL_ORDERS})")

    partition = PartitionManager(blocks, len(graph), 0.0)

    # The ceiling ensures every vertex is covered.
    vertices_per_block = math.ceil(len(graph) / blocks)

    search = graph.bfs() if order == 'bfs' else graph.dfs()

    for block in range(blocks):
        for vertex in islice(search, vertices_per_block):
            partition.add(block, vertex, graph.vertex(vertex).weight)

    logger.debug(f"{order} partition into {blocks} blocks, weights {partition.weights}")
    return partition.blocks


def partition_bfs(graph: Hypergraph, blocks: int) -> Partition:
    """Partition a hypergraph along its breadth-first order."""
    return partition_traversal(graph, blocks, 'bfs')


def partition_dfs(graph: Hypergraph, blocks: int) -> Partition:
    """Partition a hypergraph along its depth-first order."""
    return partition_traversal(graph, blocks, 'dfs')


def partition_random(
    graph: Hypergraph,
    blocks: int,
    imbalance: float,
    rng: Optional[random.Random] = None
) -> Partition:
    """
    Partition a hypergraph randomly.

    Vertices are visited in shuffled order and each is offered to a random
    block. If the block would exceed the imbalance tolerance (every vertex
    counting as weight 1), the vertex goes to the following block instead,
    without checking that block. The result is therefore not guaranteed to
    respect the tolerance.

    Args:
        graph: Hypergraph to partition
        blocks: Number of blocks
        imbalance: Imbalance tolerance
        rng: Random source; pass a seeded ``random.Random`` for reproducible
             partitions (default: a new unseeded one)

    Returns:
        Partition mapping each vertex to its block

    Raises:
        BalanceError: If ``blocks`` is not positive or ``imbalance`` is negative
        StructureError: If the vertex ids are not ``0..n-1``
        TypeError: If ``rng`` is not usable as a random source
    """
    if rng is None:
        rng = random.Random()
    elif not (hasattr(rng, 'shuffle') and hasattr(rng, 'randrange')):
        raise TypeError(f"Random source must provide shuffle and randrange, got {type(rng).__name__}")

    if not graph.is_contiguous():
        raise StructureError(
            f"Random partitioning requires vertex ids 0..n-1, got ids {graph.vertices()[:5]}..."
        )

    partition = PartitionManager(blocks, len(graph), imbalance)

    vertices = list(range(len(graph)))
    rng.shuffle(vertices)

    for vertex in vertices:
        block = rng.randrange(blocks)

        if partition.is_balanced(block, 1):
            partition.add(block, vertex, 1)
        else:
            partition.add((block + 1) % blocks, vertex, 1)

    logger.debug(f"random partition into {blocks} blocks, weights {partition.weights}")
    return partition.blocks


def partition(
    graph: Hypergraph,
    blocks: int,
    mode: str,
    imbalance: Optional[float] = None,
    rng: Optional[random.Random] = None
) -> Partition:
    """
    Partition a hypergraph with the named strategy.

    Args:
        graph: Hypergraph to partition
        blocks: Number of blocks
        mode: One of ``'bfs'``, ``'dfs'`` or ``'random'``
        imbalance: Imbalance tolerance, required by ``'random'``
        rng: Random source for ``'random'``

    Returns:
        Partition mapping each vertex to its block
    """
    if mode in TRAVERSAL_ORDERS:
        return partition_traversal(graph, blocks, mode)

    if mode == 'random':
        if imbalance is None:
            raise BalanceError("Random partitioning requires an imbalance tolerance")
        return partition_random(graph, blocks, imbalance, rng)

    raise ValueError(f"Unknown partitioning mode: {mode} (expected one of {MODES})")
