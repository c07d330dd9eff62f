"""
Hypergraph exchange formats.

Provides:
- hMETIS (vertex ids from 1), as read by hMETIS, KaHyPar and Mt-KaHyPar
- PaToH (vertex ids from 0 by default)
"""

from .format import Format, Header
from .hmetis import parse_hmetis, to_hmetis, read_hmetis, write_hmetis
from .patoh import parse_patoh, to_patoh, read_patoh, write_patoh

__all__ = [
    'Format',
    'Header',
    # hMETIS
    'parse_hmetis',
    'to_hmetis',
    'read_hmetis',
    'write_hmetis',
    # PaToH
    'parse_patoh',
    'to_patoh',
    'read_patoh',
    'write_patoh',
]
