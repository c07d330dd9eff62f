"""
Graph Builder for CNF hypergraphs.

This module constructs:
1. Variable hypergraphs: one vertex per variable, one net per clause
2. Clause hypergraphs: the dual, one vertex per clause, one net per variable

Vertex weights of the variable hypergraph can be derived from the formula
with one of several branching heuristics. The weights do not change the
topology, only the weights seen by weighted partitioners.
"""

from enum import Enum
from typing import Dict, List
import logging

from ..hypergraph import Hypergraph, dual
from .cnf_parser import CNF

logger = logging.getLogger(__name__)


class VariableHeuristic(Enum):
    """
    Vertex weighting of the variable hypergraph.

    - NONE: every variable weighs 1
    - MAXO: number of occurrences over all clauses
    - MOMS: number of occurrences in clauses of minimum size
    - MAMS: MAXO + MOMS
    """
    NONE = 'none'
    MAXO = 'maxo'
    MOMS = 'moms'
    MAMS = 'mams'


def occurrence(clause: List[int], var: int) -> int:
    """
    How often a variable occurs in a clause: 2 if both polarities are
    present, 1 if one is, 0 otherwise.
    """
    return int(var in clause) + int(-var in clause)


def variable_weights(cnf: CNF, heuristic: VariableHeuristic) -> Dict[int, int]:
    """
    Compute a weight for every occurring variable.

    Scores of 0 are raised to 1, as partitioners reject zero weights.

    Args:
        cnf: Parsed CNF formula
        heuristic: Weighting to apply

    Returns:
        Mapping variable -> weight
    """
    variables = sorted(cnf.variable_set())

    if heuristic == VariableHeuristic.NONE or not variables:
        return {var: 1 for var in variables}

    occurrences: Dict[int, int] = {var: 0 for var in variables}
    minimum: Dict[int, int] = {var: 0 for var in variables}
    minimum_size = min(len(clause) for clause in cnf.clauses)
    for clause in cnf.clauses:
        for var in set(abs(lit) for lit in clause):
            count = occurrence(clause, var)
            occurrences[var] += count
            if len(clause) == minimum_size:
                minimum[var] += count

    if heuristic == VariableHeuristic.MAXO:
        scores = occurrences
    elif heuristic == VariableHeuristic.MOMS:
        scores = minimum
    else:
        scores = {var: occurrences[var] + minimum[var] for var in variables}

    return {var: max(score, 1) for var, score in scores.items()}


def build_hypergraph(cnf: CNF, heuristic: VariableHeuristic = VariableHeuristic.NONE) -> Hypergraph:
    """
    Build the variable hypergraph of a CNF formula.

    Every clause becomes a net holding the variables of its literals, in
    literal order and with duplicates kept. Variable ``v`` becomes vertex
    ``v - 1``. Every declared variable becomes a vertex, so the vertex ids
    are ``0..num_variables-1`` even when some variables occur in no clause.

    Args:
        cnf: Parsed CNF formula
        heuristic: Vertex weighting

    Returns:
        Hypergraph with one net per clause
    """
    graph = Hypergraph(len(cnf.clauses))

    for vertex in range(cnf.num_variables):
        graph.add_vertex(vertex)

    for clause_idx, clause in enumerate(cnf.clauses):
        for literal in clause:
            graph.add_pin(clause_idx, abs(literal) - 1)

    for var, weight in variable_weights(cnf, heuristic).items():
        graph.set_vertex_weight(var - 1, weight)

    logger.debug(
        f"Built hypergraph with {len(graph)} vertices, {graph.num_nets} nets "
        f"and {graph.pin_count()} pins (heuristic: {heuristic.value})"
    )
    return graph


def build_clause_hypergraph(
    cnf: CNF,
    heuristic: VariableHeuristic = VariableHeuristic.NONE
) -> Hypergraph:
    """
    Build the clause hypergraph of a CNF formula.

    This is the dual of :func:`build_hypergraph`: vertex ``i`` is clause
    ``i``, and every occurring variable becomes a net weighted by the
    heuristic. A partition of this hypergraph maps clauses to blocks, which
    is what :func:`~cnfpart.preprocessing.decomposition.split_cnf` expects.
    """
    return dual(build_hypergraph(cnf, heuristic))
