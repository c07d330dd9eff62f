"""
Exceptions raised by cnfpart.

Every failure of the core is classified into one of these kinds so callers
can tell a defect in the input apart from a defect in their configuration.
The concrete classes also derive from the builtin exception a plain Python
caller would expect (``ValueError`` for bad input, ``RuntimeError`` for
solver trouble).
"""

from typing import Optional


class CnfPartError(Exception):
    """Base class of all errors raised by cnfpart."""


class StructureError(CnfPartError, ValueError):
    """
    A hypergraph or partition violates a structural invariant.

    Raised for pins referencing a net that does not exist, unknown vertices,
    traversals over non-contiguous vertex ids, and partitions whose length
    does not match the object they partition.
    """


class ParseError(CnfPartError, ValueError):
    """
    Malformed DIMACS, hypergraph or partition text.

    Attributes:
        fragment: The offending piece of input (usually the whole line)
        line_num: 1-based line number of the fragment, if known
    """

    def __init__(self, message: str, fragment: Optional[str] = None, line_num: Optional[int] = None):
        if line_num is not None:
            message = f"{message} at line {line_num}"
        if fragment is not None:
            message = f"{message}: {fragment!r}"
        super().__init__(message)
        self.fragment = fragment
        self.line_num = line_num


class BalanceError(CnfPartError, ValueError):
    """The requested block count or imbalance tolerance admits no partition."""


class UnsatisfiableError(CnfPartError, RuntimeError):
    """The formula has no model, so no cut assignment exists."""


class CountMismatchError(CnfPartError, AssertionError):
    """The split model counts do not multiply to the conditioned count."""
