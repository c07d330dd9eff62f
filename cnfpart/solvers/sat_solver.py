"""
SAT oracle for decomposition.

Uses pycosat (PicoSAT bindings) to find an assignment of the cut variables
that extends to a model of the whole formula, and to count models of small
formulas by enumeration.
"""

import logging
from typing import List, Optional, Sequence

import pycosat

from ..errors import UnsatisfiableError
from ..preprocessing.cnf_parser import CNF

logger = logging.getLogger(__name__)


def find_assignment(cnf: CNF, cut: Sequence[int]) -> List[int]:
    """
    Find an assignment of the cut variables satisfying the formula.

    Conditioning on an assignment taken from a model keeps the conditioned
    formula satisfiable. Variables the solver leaves undecided are assigned
    positively.

    Args:
        cnf: Formula to solve
        cut: Cut variables

    Returns:
        One signed literal per cut variable, in the order of ``cut``

    Raises:
        UnsatisfiableError: If the formula has no model
    """
    solution = pycosat.solve(cnf.clauses, vars=cnf.num_variables)

    if solution == 'UNSAT':
        raise UnsatisfiableError("Formula is unsatisfiable, no cut assignment exists")
    if solution == 'UNKNOWN':
        raise RuntimeError("SAT solver gave up before deciding the formula")

    model = set(solution)
    assignment = [-var if -var in model else var for var in cut]
    logger.debug(f"Cut assignment: {assignment}")
    return assignment


def count_models_pycosat(cnf: CNF, max_count: Optional[int] = None) -> Optional[int]:
    """
    Count models of a formula by enumerating them (AllSAT).

    Only suitable for small formulas. Models are counted over all declared
    variables.

    Args:
        cnf: Formula to count
        max_count: Give up after this many models

    Returns:
        The model count, or None if ``max_count`` was reached
    """
    count = 0
    for _ in pycosat.itersolve(cnf.clauses, vars=cnf.num_variables):
        count += 1
        if max_count is not None and count >= max_count:
            logger.warning(f"Reached max count {max_count}, giving up")
            return None
    return count
