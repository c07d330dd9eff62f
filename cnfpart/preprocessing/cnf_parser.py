"""
CNF Parser for DIMACS format files.

This module provides functionality to parse and serialize CNF (Conjunctive
Normal Form) formulas in DIMACS format, the exchange format of SAT solvers
and model counters.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple
import re

from ..errors import ParseError

_PROBLEM_LINE = re.compile(r'p\s+cnf\s+(\d+)\s+(\d+)\s*$')


@dataclass
class CNF:
    """
    Represents a CNF formula parsed from DIMACS format.

    Attributes:
        num_variables: Number of declared variables
        num_clauses: Number of clauses in the formula
        clauses: List of clauses, where each clause is a list of literals
                 (positive int = positive literal, negative int = negative literal)
        comments: Optional list of comment lines from the file
    """
    num_variables: int
    num_clauses: int
    clauses: List[List[int]]
    comments: List[str] = field(default_factory=list)

    @classmethod
    def from_clauses(cls, num_variables: int, clauses: Iterable[List[int]]) -> 'CNF':
        """Create a CNF, deriving the clause count from the clauses."""
        clauses = [list(clause) for clause in clauses]
        return cls(num_variables=num_variables, num_clauses=len(clauses), clauses=clauses)

    def get_variables(self) -> List[int]:
        """Return list of all variable indices (1 to num_variables)."""
        return list(range(1, self.num_variables + 1))

    def variable_set(self) -> Set[int]:
        """Variables actually occurring in the clauses."""
        return {abs(literal) for clause in self.clauses for literal in clause}

    def literal_set(self) -> Set[int]:
        """Distinct literals occurring in the clauses."""
        return {literal for clause in self.clauses for literal in clause}

    def get_variable_occurrences(self) -> Dict[int, List[Tuple[int, int]]]:
        """
        Return dict mapping each variable to list of (clause_idx, polarity) pairs.

        Returns:
            Dictionary where keys are variable indices and values are lists of
            tuples (clause_index, polarity) where polarity is +1 or -1.
        """
        occurrences = {v: [] for v in range(1, self.num_variables + 1)}
        for clause_idx, clause in enumerate(self.clauses):
            for literal in clause:
                var = abs(literal)
                polarity = 1 if literal > 0 else -1
                if var in occurrences:
                    occurrences[var].append((clause_idx, polarity))
        return occurrences

    def get_clause_variables(self) -> List[List[Tuple[int, int]]]:
        """
        Return list where each element is a list of (variable, polarity) pairs for that clause.
        """
        return [
            [(abs(lit), 1 if lit > 0 else -1) for lit in clause]
            for clause in self.clauses
        ]


def parse_dimacs(filepath: str | Path) -> CNF:
    """
    Parse a DIMACS CNF format file.

    Args:
        filepath: Path to the DIMACS CNF file

    Returns:
        CNF object containing the parsed formula

    Raises:
        ParseError: If the file format is invalid
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"CNF file not found: {filepath}")

    with open(filepath, 'r') as f:
        return parse_dimacs_string(f.read())


def parse_dimacs_string(content: str) -> CNF:
    """
    Parse a DIMACS CNF format string.

    DIMACS CNF format:
    - Lines starting with 'c' are comments
    - Problem line: 'p cnf <num_vars> <num_clauses>'
    - Clause lines: space-separated literals, each clause ending with 0

    A clause may span several lines. The clause count of the problem line is
    not enforced, as many benchmarks misstate it; the actual count is used.

    Args:
        content: String containing DIMACS CNF format data

    Returns:
        CNF object containing the parsed formula

    Raises:
        ParseError: On a missing or malformed problem line, a non-integer
                    literal, a literal over an undeclared variable or a
                    clause without terminating 0
    """
    comments = []
    num_variables = None
    clauses = []
    current_clause = []
    last_line = None

    for line_num, line in enumerate(content.split('\n'), 1):
        line = line.strip()

        if not line:
            continue

        if line.startswith('c'):
            comments.append(line[1:].strip())
            continue

        if line.startswith('p'):
            match = _PROBLEM_LINE.match(line)
            if not match or num_variables is not None:
                raise ParseError("Invalid problem line", fragment=line, line_num=line_num)
            num_variables = int(match.group(1))
            continue

        if num_variables is None:
            raise ParseError("Clause before problem line", fragment=line, line_num=line_num)

        try:
            literals = [int(x) for x in line.split()]
        except ValueError:
            raise ParseError("Invalid literal", fragment=line, line_num=line_num) from None

        for lit in literals:
            if lit == 0:
                clauses.append(current_clause)
                current_clause = []
            elif abs(lit) > num_variables:
                raise ParseError(
                    f"Literal {lit} exceeds {num_variables} declared variables",
                    fragment=line,
                    line_num=line_num,
                )
            else:
                current_clause.append(lit)
        last_line = (line_num, line)

    if num_variables is None:
        raise ParseError("Missing problem line (p cnf ...)")

    if current_clause:
        raise ParseError("Clause not terminated by 0", fragment=last_line[1], line_num=last_line[0])

    return CNF(
        num_variables=num_variables,
        num_clauses=len(clauses),
        clauses=clauses,
        comments=comments
    )


def serialize_dimacs(cnf: CNF, comments: Optional[List[str]] = None) -> str:
    """
    Serialize a CNF formula into DIMACS format.

    Args:
        cnf: CNF object to serialize
        comments: Optional additional comments to include

    Returns:
        DIMACS text ending with a newline
    """
    lines = [f"c {comment}" for comment in (comments or []) + cnf.comments]
    lines.append(f"p cnf {cnf.num_variables} {len(cnf.clauses)}")
    for clause in cnf.clauses:
        lines.append(' '.join([str(lit) for lit in clause] + ['0']))
    return '\n'.join(lines) + '\n'


def write_dimacs(cnf: CNF, filepath: str | Path, comments: Optional[List[str]] = None) -> None:
    """
    Write a CNF formula to DIMACS format.

    Args:
        cnf: CNF object to write
        filepath: Output file path
        comments: Optional additional comments to include
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        f.write(serialize_dimacs(cnf, comments))
