"""
Decomposition of CNF formulas along a clause partition.

A partition of the clause hypergraph splits a formula into fragments. The
variables shared by two or more fragments form the cut. Once the cut is
fixed by an assignment, the fragments are independent: the model count of
the conditioned formula is the product of the model counts of the
conditioned fragments.
"""

import logging
from dataclasses import dataclass, field
from math import prod
from typing import Dict, List, Optional, Sequence

from ..errors import CountMismatchError, StructureError
from .cnf_parser import CNF

logger = logging.getLogger(__name__)


def split_cnf(partition: Sequence[int], cnf: CNF) -> List[CNF]:
    """
    Split a formula into one fragment per block.

    Clause ``i`` goes to the fragment of block ``partition[i]``. Fragments
    are returned in ascending block order; blocks without clauses produce no
    fragment. Every fragment keeps the variable count of the original.

    Args:
        partition: Block id per clause
        cnf: Formula to split

    Returns:
        List of fragments

    Raises:
        StructureError: If the partition does not have one entry per clause
    """
    if len(partition) != len(cnf.clauses):
        raise StructureError(
            f"Partition covers {len(partition)} clauses, formula has {len(cnf.clauses)}"
        )

    fragments: Dict[int, List[List[int]]] = {}
    for clause, block in zip(cnf.clauses, partition):
        fragments.setdefault(block, []).append(list(clause))

    return [
        CNF.from_clauses(cnf.num_variables, fragments[block])
        for block in sorted(fragments)
    ]


def cut_variables(fragments: Sequence[CNF]) -> List[int]:
    """
    Variables shared between fragments.

    The cut is the union of the variable intersections of all pairs of
    fragments.

    Args:
        fragments: Fragments of one formula

    Returns:
        Sorted list of cut variables without duplicates
    """
    variables = [fragment.variable_set() for fragment in fragments]

    cut = set()
    for index, a in enumerate(variables):
        for b in variables[index + 1:]:
            cut |= a & b

    return sorted(cut)


def condition_cnf(cnf: CNF, assignment: Sequence[int]) -> CNF:
    """
    Condition a formula on an assignment.

    Every literal of the assignment is added as a unit clause. Then every
    declared variable occurring neither in the clauses nor in the assignment
    is fixed by a positive unit clause, so that all conditioned fragments
    count models over the same variables.

    Args:
        cnf: Formula to condition
        assignment: Signed literals, e.g. ``[2, -5]``

    Returns:
        The conditioned formula (the input is left untouched)
    """
    clauses = [list(clause) for clause in cnf.clauses]
    clauses.extend([literal] for literal in assignment)

    present = {abs(literal) for clause in clauses for literal in clause}
    clauses.extend(
        [variable]
        for variable in range(1, cnf.num_variables + 1)
        if variable not in present
    )

    return CNF.from_clauses(cnf.num_variables, clauses)


@dataclass
class DecompositionRun:
    """
    Model counts gathered for one partition of a formula.

    Attributes:
        instance: Name of the formula
        partitioner: Name of the partitioning strategy
        heuristic: Variable heuristic used to weight the hypergraph
        blocks: Requested number of blocks
        cut: Cut variables
        assignment: Literal per cut variable
        count_conditioned: Model count of the conditioned formula
        count_original: Model count of the unconditioned formula, if known
        time_partitioning: Milliseconds spent partitioning
        time_conditioned: Milliseconds spent counting the conditioned formula
        part_counts: Model count of each conditioned fragment
        part_times: Milliseconds spent counting each fragment
    """
    instance: str
    partitioner: str
    heuristic: str
    blocks: int
    cut: List[int]
    assignment: List[int]
    count_conditioned: Optional[int] = None
    count_original: Optional[int] = None
    time_partitioning: int = 0
    time_conditioned: int = 0
    part_counts: List[int] = field(default_factory=list)
    part_times: List[int] = field(default_factory=list)

    @property
    def cut_size(self) -> int:
        return len(self.cut)

    @property
    def count(self) -> int:
        """Product of the fragment counts."""
        return prod(self.part_counts)

    def add_part(self, time: int, count: int) -> None:
        """Record the result of counting one fragment."""
        self.part_times.append(time)
        self.part_counts.append(count)

    def check(self) -> None:
        """
        Verify that the fragment counts multiply to the conditioned count.

        Raises:
            CountMismatchError: If the counts disagree, which points to a
                                defect in splitting, cutting or conditioning
        """
        if self.count_conditioned != self.count:
            raise CountMismatchError(
                f"{self.instance} ({self.partitioner}, {self.blocks} blocks): "
                f"conditioned count {self.count_conditioned} != "
                f"product of split counts {self.count}"
            )
        logger.info(
            f"{self.instance} ({self.partitioner}, {self.blocks} blocks): "
            f"cut size {self.cut_size}, count {self.count} verified"
        )
