"""
Partitions of hypergraphs.

A :class:`Partition` maps every vertex (by index) to a block id. Its text form
is the one used by hypergraph partitioners: one block id per line, in vertex
order. :class:`PartitionManager` builds a partition while keeping track of
block weights and the balance of the blocks.
"""

import math
from collections import Counter
from pathlib import Path
from typing import List, Optional

from ..errors import BalanceError, ParseError


class Partition(list):
    """
    Mapping of vertices to blocks.

    Entry ``i`` is the block vertex ``i`` belongs to.
    """

    @classmethod
    def from_string(cls, content: str) -> 'Partition':
        """
        Parse a partition from its text form.

        Args:
            content: One non-negative block id per line

        Returns:
            The parsed Partition

        Raises:
            ParseError: If a line is not a single non-negative integer
        """
        blocks = []
        lines = content.rstrip().split('\n') if content.strip() else []
        for line_num, line in enumerate(lines, 1):
            value = line.strip()
            if not (value.isascii() and value.isdigit()):
                raise ParseError("Invalid block number", fragment=line, line_num=line_num)
            blocks.append(int(value))
        return cls(blocks)

    @classmethod
    def from_file(cls, filepath: str | Path) -> 'Partition':
        """Read a partition file as written by a hypergraph partitioner."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Partition file not found: {filepath}")
        return cls.from_string(filepath.read_text())

    def to_string(self) -> str:
        return ''.join(f"{block}\n" for block in self)

    def write(self, filepath: str | Path) -> None:
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(self.to_string())

    def blocks(self) -> List[int]:
        """Distinct block ids in ascending order."""
        return sorted(set(self))

    def block_sizes(self, num_blocks: Optional[int] = None) -> List[int]:
        """
        Number of vertices per block.

        Args:
            num_blocks: Report this many blocks, including empty ones
                        (default: highest block id + 1)
        """
        counts = Counter(self)
        if num_blocks is None:
            num_blocks = max(counts) + 1 if counts else 0
        return [counts.get(block, 0) for block in range(num_blocks)]


class PartitionManager:
    """
    Keeps track of a partition under construction.

    All vertices start in block 0 with every block weighing nothing; the
    weights only grow through :meth:`add`. Each vertex should be added at
    most once, as adding it again does not remove its weight from the block
    it was in before.

    Args:
        num_blocks: Number of blocks of the partition
        num_vertices: Number of vertices being partitioned
        imbalance: Allowed deviation of a block weight from the ideal weight

    Raises:
        BalanceError: If ``num_blocks`` is not positive or ``imbalance`` is
                      negative or not a number
    """

    def __init__(self, num_blocks: int, num_vertices: int, imbalance: float):
        if num_blocks < 1:
            raise BalanceError(f"At least one block is required, got {num_blocks}")
        if math.isnan(imbalance) or imbalance < 0:
            raise BalanceError(f"Imbalance tolerance must be non-negative, got {imbalance}")

        self.blocks = Partition([0] * num_vertices)
        self.weights = [0] * num_blocks
        self.num_blocks = num_blocks
        self.tolerance = imbalance

    def add(self, block: int, vertex: int, weight: int) -> None:
        """Put a vertex with the given weight into a block."""
        self.blocks[vertex] = block
        self.weights[block] += weight

    def imbalance(self, block: int, candidate: Optional[int] = None) -> float:
        """
        Difference between the ideal block weight and the weight of a block.

        The ideal weight is the weight assigned so far divided evenly over
        all blocks. The result is non-negative.

        Args:
            block: Block to evaluate
            candidate: Weight of a vertex to count as if it were in the block
        """
        total = sum(self.weights)
        partial = self.weights[block]
        if candidate is not None:
            partial += candidate

        expected = total / self.num_blocks
        return abs(expected - partial)

    def is_balanced(self, block: int, candidate: Optional[int] = None) -> bool:
        """Whether the imbalance of a block is within the tolerance."""
        return self.imbalance(block, candidate) <= self.tolerance

