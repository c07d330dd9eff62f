"""
Preprocessing utilities for CNF formulas.

Provides:
- CNF parsing and serialization (DIMACS format)
- Hypergraph construction with variable weighting heuristics
- Splitting, cut computation and conditioning along a partition
- Size metrics of fragments
"""

from .cnf_parser import CNF, parse_dimacs, parse_dimacs_string, serialize_dimacs, write_dimacs
from .graph_builder import (
    VariableHeuristic,
    build_hypergraph,
    build_clause_hypergraph,
    variable_weights,
)
from .decomposition import (
    DecompositionRun,
    split_cnf,
    cut_variables,
    condition_cnf,
)
from .metrics import FormulaDimensions, formula_dimensions, fragment_metrics

__all__ = [
    # CNF parsing
    'CNF',
    'parse_dimacs',
    'parse_dimacs_string',
    'serialize_dimacs',
    'write_dimacs',
    # Graph building
    'VariableHeuristic',
    'build_hypergraph',
    'build_clause_hypergraph',
    'variable_weights',
    # Decomposition
    'DecompositionRun',
    'split_cnf',
    'cut_variables',
    'condition_cnf',
    # Metrics
    'FormulaDimensions',
    'formula_dimensions',
    'fragment_metrics',
]
