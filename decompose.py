"""
Decomposition entry point for cnfpart.

Partitions the clause hypergraph of a CNF formula, splits the formula along
the partition, fixes the cut variables with a satisfying assignment and
checks that the model counts of the conditioned fragments multiply to the
model count of the conditioned formula.

Usage:
    python decompose.py input=formula.cnf
    python decompose.py input=formula.cnf blocks=4 partitioner.mode=dfs
    python decompose.py input=formula.cnf heuristic=mams counter.name=enumeration
    python decompose.py input=formula.cnf counter.preprocess=true
"""

import hydra
from omegaconf import DictConfig, OmegaConf
from tqdm import tqdm
import logging
import random
import time
from pathlib import Path

from cnfpart.hypergraph import partition
from cnfpart.preprocessing import (
    DecompositionRun,
    VariableHeuristic,
    build_clause_hypergraph,
    condition_cnf,
    cut_variables,
    fragment_metrics,
    parse_dimacs,
    split_cnf,
    write_dimacs,
)
from cnfpart.solvers import D4Solver, compute_model_count, find_assignment

logger = logging.getLogger(__name__)


def run_decomposition(cfg: DictConfig) -> DecompositionRun:
    """
    Decompose one formula and verify the decomposition.

    Args:
        cfg: Configuration, see ``conf/config.yaml``

    Returns:
        The DecompositionRun; when a count timed out, its counts are left
        incomplete and it is not checked

    Raises:
        CountMismatchError: If the fragment counts do not multiply to the
                            count of the conditioned formula
    """
    input_path = Path(cfg.input)
    instance = input_path.stem
    blocks = cfg.blocks
    mode = cfg.partitioner.mode
    heuristic = VariableHeuristic(cfg.get('heuristic', 'none'))

    counter_cfg = cfg.counter
    count_args = dict(
        counter=counter_cfg.name,
        d4_path=counter_cfg.get('d4_path', None),
        timeout=counter_cfg.get('timeout', None),
    )

    output_cfg = cfg.get('output', {})
    output_dir = Path(output_cfg.get('dir', 'output'))

    if counter_cfg.get('preprocess', False):
        preprocessed = output_dir / f"{instance}.preprocessed.cnf"
        preprocessed.parent.mkdir(parents=True, exist_ok=True)
        millis = D4Solver(count_args['d4_path']).preprocess(input_path, preprocessed)
        logger.info(f"Preprocessed {instance} with d4 in {millis} ms, saved to {preprocessed}")
        input_path = preprocessed

    cnf = parse_dimacs(input_path)
    logger.info(f"Loaded {instance}: {cnf.num_variables} variables, {cnf.num_clauses} clauses")

    graph = build_clause_hypergraph(cnf, heuristic)

    rng = random.Random(cfg.get('seed', 42))
    start = time.monotonic()
    clause_blocks = partition(
        graph,
        blocks,
        mode,
        imbalance=cfg.partitioner.get('imbalance', None),
        rng=rng,
    )
    time_partitioning = int((time.monotonic() - start) * 1000)
    logger.info(f"Partitioned {instance} with {mode} into {blocks} blocks in {time_partitioning} ms")

    fragments = split_cnf(clause_blocks, cnf)
    cut = cut_variables(fragments)
    logger.info(f"{len(fragments)} fragments, cut size {len(cut)}")

    metrics = fragment_metrics(cnf, fragments)
    logger.debug(f"Original dimensions: {metrics['original']}")
    for index, dimensions in enumerate(metrics['split']):
        logger.debug(f"Fragment {index} dimensions: {dimensions}")

    if output_cfg.get('save_partition', False):
        partition_file = output_dir / f"{instance}.{mode}.part{blocks}"
        clause_blocks.write(partition_file)
        logger.info(f"Saved partition to {partition_file}")
    if output_cfg.get('save_cnfs', False):
        for index, fragment in enumerate(fragments):
            write_dimacs(fragment, output_dir / f"{instance}.{mode}.{index}.cnf")
        logger.info(f"Saved {len(fragments)} fragments to {output_dir}")

    assignment = find_assignment(cnf, cut)

    run = DecompositionRun(
        instance=instance,
        partitioner=mode,
        heuristic=heuristic.value,
        blocks=blocks,
        cut=cut,
        assignment=assignment,
        time_partitioning=time_partitioning,
    )

    if counter_cfg.get('count_original', False):
        result = compute_model_count(cnf, **count_args)
        if result is not None:
            run.count_original = result[1]
            logger.info(f"Original count: {run.count_original}")

    result = compute_model_count(condition_cnf(cnf, assignment), **count_args)
    if result is None:
        logger.warning(f"Counting the conditioned formula of {instance} timed out")
        return run
    run.time_conditioned, run.count_conditioned = result
    logger.info(f"Conditioned count: {run.count_conditioned} ({run.time_conditioned} ms)")

    for fragment in tqdm(fragments, desc="Counting fragments"):
        result = compute_model_count(condition_cnf(fragment, assignment), **count_args)
        if result is None:
            logger.warning(f"Counting a fragment of {instance} timed out")
            return run
        run.add_part(*result)

    run.check()
    return run


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig):
    """Main decomposition function."""
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    run_decomposition(cfg)


if __name__ == '__main__':
    main()
