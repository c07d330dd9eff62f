"""
cnfpart: hypergraph partitioning and decomposition of CNF formulas.

This package provides hypergraph construction, baseline partitioning and
exchange formats, and the decomposition of CNF formulas along a partition
of their clauses.

Submodules:
- hypergraph: Hypergraph store, traversals, partitions and partitioners
- formats: hMETIS and PaToH hypergraph files
- preprocessing: CNF parsing, hypergraph building, splitting and conditioning
- solvers: SAT oracle (pycosat) and model counters (d4, enumeration)
"""

from .errors import (
    CnfPartError,
    StructureError,
    ParseError,
    BalanceError,
    UnsatisfiableError,
    CountMismatchError,
)
from .hypergraph import Hypergraph, Partition, dual, partition
from .formats import parse_hmetis, to_hmetis, parse_patoh, to_patoh
from .preprocessing import (
    CNF,
    parse_dimacs,
    VariableHeuristic,
    build_hypergraph,
    build_clause_hypergraph,
    split_cnf,
    cut_variables,
    condition_cnf,
    DecompositionRun,
)
from .solvers import find_assignment, compute_model_count

__version__ = '0.1.0'

__all__ = [
    # Errors
    'CnfPartError',
    'StructureError',
    'ParseError',
    'BalanceError',
    'UnsatisfiableError',
    'CountMismatchError',
    # Hypergraphs
    'Hypergraph',
    'Partition',
    'dual',
    'partition',
    # Formats
    'parse_hmetis',
    'to_hmetis',
    'parse_patoh',
    'to_patoh',
    # CNF decomposition
    'CNF',
    'parse_dimacs',
    'VariableHeuristic',
    'build_hypergraph',
    'build_clause_hypergraph',
    'split_cnf',
    'cut_variables',
    'condition_cnf',
    'DecompositionRun',
    # Solvers
    'find_assignment',
    'compute_model_count',
]
