"""
Partition an hMETIS hypergraph with one of the baseline partitioners.

Writes one block id per line, in vertex order, the same way hMETIS and
KaHyPar write their partition files.

Usage:
    python scripts/partition_hypergraph.py --input graph.hgr --output graph.part2 --mode bfs
    python scripts/partition_hypergraph.py -i graph.hgr -o graph.part4 -m random -b 4 -e 2
"""

import logging
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cnfpart.formats import read_hmetis
from cnfpart.hypergraph import partition
from cnfpart.hypergraph.partitioners import MODES

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def partition_file(
    input_file: str | Path,
    output_file: str | Path,
    mode: str,
    blocks: int = 2,
    epsilon: float | None = None,
    seed: int | None = None
) -> None:
    """
    Partition the hypergraph in ``input_file`` and write the partition.

    Args:
        input_file: hMETIS hypergraph
        output_file: Where to write the partition
        mode: 'bfs', 'dfs' or 'random'
        blocks: Number of blocks
        epsilon: Imbalance tolerance, required for 'random'
        seed: Seed for 'random' (default: unseeded)
    """
    graph = read_hmetis(input_file)
    logger.info(f"Read {graph} from {input_file}")

    result = partition(graph, blocks, mode, imbalance=epsilon, rng=random.Random(seed))
    result.write(output_file)

    logger.info(f"Block sizes: {result.block_sizes(blocks)}")
    logger.info(f"Wrote partition to {output_file}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Partition an hMETIS hypergraph")
    parser.add_argument("-i", "--input", required=True, help="hMETIS input file")
    parser.add_argument("-o", "--output", required=True, help="Where to write the partition to")
    parser.add_argument("-m", "--mode", required=True, choices=list(MODES), help="Partitioning algorithm")
    parser.add_argument("-b", "--blocks", type=int, default=2, help="Number of partition blocks")
    parser.add_argument("-e", "--epsilon", type=float, default=None, help="Block-imbalance tolerance")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random partitioning")

    args = parser.parse_args()

    if args.mode == "random" and args.epsilon is None:
        parser.error("random partitioning requires --epsilon")

    partition_file(
        args.input,
        args.output,
        args.mode,
        args.blocks,
        args.epsilon,
        args.seed
    )
