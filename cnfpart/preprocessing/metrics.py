"""
Size metrics comparing a formula with its fragments.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .cnf_parser import CNF


@dataclass
class FormulaDimensions:
    """
    Size of a single formula.

    Attributes:
        num_clauses: Number of clauses
        num_variables: Number of distinct variables occurring in clauses
        num_literals: Number of distinct literals occurring in clauses
        width: Size of the largest clause
        density: Clauses per occurring variable
    """
    num_clauses: int
    num_variables: int
    num_literals: int
    width: int
    density: float


def formula_dimensions(cnf: CNF) -> FormulaDimensions:
    num_variables = len(cnf.variable_set())
    return FormulaDimensions(
        num_clauses=len(cnf.clauses),
        num_variables=num_variables,
        num_literals=len(cnf.literal_set()),
        width=max((len(clause) for clause in cnf.clauses), default=0),
        density=len(cnf.clauses) / num_variables if num_variables else 0.0,
    )


def fragment_metrics(original: CNF, fragments: Sequence[CNF]) -> Dict[str, object]:
    """
    Compare the dimensions of a formula with those of its fragments.

    Args:
        original: The unsplit formula
        fragments: Its fragments, e.g. from ``split_cnf``

    Returns:
        Dictionary with the original's FormulaDimensions under ``'original'``
        and a list of FormulaDimensions (one per fragment) under ``'split'``
    """
    split: List[FormulaDimensions] = [formula_dimensions(fragment) for fragment in fragments]
    return {
        'original': formula_dimensions(original),
        'split': split,
    }
