"""
Hypergraph store.

A hypergraph consists of vertices identified by non-negative integers and a
fixed number of nets (hyperedges). Every net is an ordered list of vertex ids
and every vertex keeps the ordered list of nets it is pinned to, so both
directions of the incidence relation are available without a search.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import StructureError
from .search import Queue, SearchIterator, Stack


@dataclass
class Vertex:
    """
    A single vertex of a hypergraph.

    Attributes:
        weight: Weight of the vertex, used by weighted partitioning
        nets: Indices of the nets this vertex is pinned to, in insertion order
    """
    weight: int = 1
    nets: List[int] = field(default_factory=list)


class Hypergraph:
    """
    Append-only hypergraph with a fixed number of nets.

    Vertices are created implicitly by :meth:`add_pin` (or explicitly by
    :meth:`add_vertex`) and are never removed. Iteration over vertices is
    always in ascending id order.

    Args:
        num_nets: Number of (initially empty) nets
        default_weight: Weight given to vertices created implicitly
    """

    def __init__(self, num_nets: int, default_weight: int = 1):
        if num_nets < 0:
            raise StructureError(f"Number of nets must be non-negative, got {num_nets}")

        self.default_weight = default_weight
        self.nets: List[List[int]] = [[] for _ in range(num_nets)]
        self.net_weights: List[int] = [1] * num_nets
        self._vertices: Dict[int, Vertex] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: int) -> bool:
        return vertex in self._vertices

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hypergraph):
            return NotImplemented
        return (
            self.nets == other.nets
            and self.net_weights == other.net_weights
            and self._vertices == other._vertices
        )

    def __repr__(self) -> str:
        return f"Hypergraph(num_vertices={len(self)}, num_nets={self.num_nets})"

    @property
    def num_nets(self) -> int:
        return len(self.nets)

    def is_empty(self) -> bool:
        """Whether the hypergraph contains no vertices."""
        return not self._vertices

    def add_vertex(self, vertex: int, weight: Optional[int] = None) -> Vertex:
        """
        Return the given vertex, creating it without pins if it does not exist.

        Args:
            vertex: Vertex id
            weight: Weight for a newly created vertex (default: ``default_weight``)

        Returns:
            The stored Vertex
        """
        if vertex < 0:
            raise StructureError(f"Vertex ids must be non-negative, got {vertex}")

        if vertex not in self._vertices:
            self._vertices[vertex] = Vertex(
                weight=self.default_weight if weight is None else weight
            )
        return self._vertices[vertex]

    def add_pin(self, net: int, vertex: int) -> None:
        """
        Place a vertex in a net.

        The vertex is appended to the net and the net to the vertex's incident
        list. Duplicate pins are kept.

        Raises:
            StructureError: If ``net`` does not index an existing net
        """
        if not 0 <= net < len(self.nets):
            raise StructureError(
                f"Net {net} out of range for hypergraph with {len(self.nets)} nets"
            )

        self.add_vertex(vertex).nets.append(net)
        self.nets[net].append(vertex)

    def vertex(self, vertex: int) -> Vertex:
        """Look up a vertex, raising StructureError if it does not exist."""
        try:
            return self._vertices[vertex]
        except KeyError:
            raise StructureError(f"Vertex {vertex} not found") from None

    def vertices(self) -> List[int]:
        """All vertex ids in ascending order."""
        return sorted(self._vertices)

    def items(self) -> Iterator[Tuple[int, Vertex]]:
        """Iterate over (id, Vertex) pairs in ascending id order."""
        for vertex in self.vertices():
            yield vertex, self._vertices[vertex]

    def set_vertex_weight(self, vertex: int, weight: int) -> None:
        self.vertex(vertex).weight = weight

    def vertex_weights(self) -> List[int]:
        """Vertex weights in ascending vertex order."""
        return [data.weight for _, data in self.items()]

    def neighbors(self, vertex: int) -> Iterator[int]:
        """
        Iterate over all vertices sharing a net with the given one.

        The vertex itself and vertices sharing several nets with it are
        yielded once per pin. Each call returns a fresh iterator.
        """
        incident = self.vertex(vertex).nets
        return (neighbor for net in incident for neighbor in self.nets[net])

    def weight(self) -> int:
        """The sum of all vertex weights."""
        return sum(data.weight for data in self._vertices.values())

    def pins(self) -> Iterator[Tuple[int, int]]:
        """Iterate over all (net, vertex) pairs, net by net."""
        for net_index, net in enumerate(self.nets):
            for vertex in net:
                yield net_index, vertex

    def pin_count(self) -> int:
        return sum(len(net) for net in self.nets)

    def is_contiguous(self) -> bool:
        """Whether the vertex ids are exactly ``0..len-1``."""
        if not self._vertices:
            return True
        return min(self._vertices) == 0 and max(self._vertices) == len(self._vertices) - 1

    def bfs(self) -> SearchIterator:
        """Iterate over the vertices in breadth-first order."""
        return SearchIterator(self, Queue)

    def dfs(self) -> SearchIterator:
        """Iterate over the vertices in depth-first order."""
        return SearchIterator(self, Stack)

    def dual(self) -> 'Hypergraph':
        """Create the dual hypergraph, see :func:`dual`."""
        return dual(self)


def dual(graph: Hypergraph) -> Hypergraph:
    """
    Swap the roles of vertices and nets.

    Net ``i`` of ``graph`` becomes vertex ``i`` of the result (weighted with
    the net weight). Each vertex of ``graph``, taken in ascending id order,
    becomes one net containing the indices of its incident nets, deduplicated
    and sorted, weighted with the vertex weight.

    For a graph with contiguous vertex ids, ``dual(dual(graph))`` has the
    same vertices, nets and weights as ``graph`` up to the order of pins.

    Args:
        graph: Hypergraph to transform

    Returns:
        The dual hypergraph
    """
    vertices = graph.vertices()
    result = Hypergraph(len(vertices), default_weight=graph.default_weight)

    # Empty nets still become (isolated) vertices.
    for net_index, weight in enumerate(graph.net_weights):
        result.add_vertex(net_index, weight)

    for dual_net, vertex in enumerate(vertices):
        data = graph.vertex(vertex)
        for net_index in sorted(set(data.nets)):
            result.add_pin(dual_net, net_index)
        result.net_weights[dual_net] = data.weight

    return result
