"""
Shared parts of the hypergraph exchange formats.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..errors import ParseError, StructureError
from ..hypergraph import Hypergraph

logger = logging.getLogger(__name__)


class Format(Enum):
    """Whether a hypergraph file carries net and/or vertex weights."""
    UNWEIGHTED = 'unweighted'
    NET_WEIGHTS = 'net_weights'
    VERTEX_WEIGHTS = 'vertex_weights'
    WEIGHTED = 'weighted'

    @property
    def has_net_weights(self) -> bool:
        return self in (Format.NET_WEIGHTS, Format.WEIGHTED)

    @property
    def has_vertex_weights(self) -> bool:
        return self in (Format.VERTEX_WEIGHTS, Format.WEIGHTED)

    @classmethod
    def from_flags(cls, net_weights: bool, vertex_weights: bool) -> 'Format':
        if net_weights and vertex_weights:
            return cls.WEIGHTED
        if net_weights:
            return cls.NET_WEIGHTS
        if vertex_weights:
            return cls.VERTEX_WEIGHTS
        return cls.UNWEIGHTED

    @classmethod
    def detect(cls, graph: Hypergraph) -> 'Format':
        """The smallest format that preserves all weights of a hypergraph."""
        return cls.from_flags(
            any(weight != 1 for weight in graph.net_weights),
            any(weight != 1 for weight in graph.vertex_weights()),
        )


@dataclass
class Header:
    """
    Header of a hypergraph file.

    Attributes:
        num_nets: Number of nets
        num_vertices: Number of vertices
        format: Which weights follow
        one_indexed: Whether vertex ids in the file start at 1
    """
    num_nets: int
    num_vertices: int
    format: Format = Format.UNWEIGHTED
    one_indexed: bool = True


def content_lines(content: str, comment: str = '%') -> Iterator[Tuple[int, str]]:
    """Iterate over (line number, stripped line), skipping blanks and comments."""
    for line_num, line in enumerate(content.split('\n'), 1):
        line = line.strip()
        if not line or line.startswith(comment):
            continue
        yield line_num, line


def parse_integers(line: str, line_num: int) -> List[int]:
    try:
        values = [int(token) for token in line.split()]
    except ValueError:
        raise ParseError("Invalid integer", fragment=line, line_num=line_num) from None
    if any(value < 0 for value in values):
        raise ParseError("Negative value", fragment=line, line_num=line_num)
    return values


def build_graph(
    header: Header,
    nets: List[Tuple[int, str, List[int]]],
    net_weights: Optional[List[int]],
    vertex_weights: Optional[List[int]]
) -> Hypergraph:
    """
    Create a hypergraph from parsed file contents.

    Args:
        header: Parsed header
        nets: (line number, line, vertex ids as written) per net
        net_weights: Weight per net, if the file has them
        vertex_weights: Weight per vertex, if the file has them

    Raises:
        ParseError: If a vertex id lies outside the declared range
    """
    offset = 1 if header.one_indexed else 0
    graph = Hypergraph(header.num_nets)

    for vertex in range(header.num_vertices):
        graph.add_vertex(vertex)

    for net_index, (line_num, line, vertices) in enumerate(nets):
        for vertex in vertices:
            index = vertex - offset
            if not 0 <= index < header.num_vertices:
                raise ParseError(
                    f"Vertex {vertex} out of range for {header.num_vertices} vertices",
                    fragment=line,
                    line_num=line_num,
                )
            graph.add_pin(net_index, index)

    if net_weights is not None:
        graph.net_weights = list(net_weights)

    if vertex_weights is not None:
        for vertex, weight in enumerate(vertex_weights):
            graph.set_vertex_weight(vertex, weight)

    return graph


def check_writable(graph: Hypergraph) -> None:
    """
    Reject hypergraphs the exchange formats cannot represent.

    An empty net would be written as a blank line, which parsers skip.

    Raises:
        StructureError: If some net has no pins
    """
    empty = [index for index, net in enumerate(graph.nets) if not net]
    if empty:
        raise StructureError(f"Cannot write empty nets {empty[:5]} in a hypergraph file")


def read_text(filepath: str | Path) -> str:
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Hypergraph file not found: {filepath}")
    return filepath.read_text()


def write_text(content: str, filepath: str | Path) -> None:
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(content)
    logger.debug(f"Wrote hypergraph to {filepath}")
