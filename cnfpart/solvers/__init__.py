"""
Solver interfaces for SAT and #SAT (model counting).

Provides the SAT oracle used to assign cut variables and the exact model
counters used to verify decompositions.
"""

from .sat_solver import find_assignment, count_models_pycosat
from .d4_solver import (
    D4Solver,
    compute_model_count,
    parse_d4_output,
)

__all__ = [
    'find_assignment',
    'count_models_pycosat',
    'D4Solver',
    'compute_model_count',
    'parse_d4_output',
]
