"""
Traversal of hypergraphs.

One search algorithm produces both breadth-first and depth-first orders; the
only difference is the frontier holding the vertices still to visit. A queue
yields the oldest vertex first (breadth-first), a stack the newest
(depth-first).
"""

from collections import deque
from typing import TYPE_CHECKING, Callable, Deque, Iterable, Iterator, List, Optional

from ..errors import StructureError

if TYPE_CHECKING:
    from .hypergraph import Hypergraph


class Frontier:
    """Collection of vertices waiting to be visited by a search."""

    def is_empty(self) -> bool:
        raise NotImplementedError

    def put(self, item: int) -> None:
        raise NotImplementedError

    def extend(self, items: Iterable[int]) -> None:
        for item in items:
            self.put(item)

    def get(self) -> Optional[int]:
        """Remove and return the next item, or None if the frontier is empty."""
        raise NotImplementedError


class Queue(Frontier):
    """First in, first out: breadth-first search."""

    def __init__(self):
        self._items: Deque[int] = deque()

    def is_empty(self) -> bool:
        return not self._items

    def put(self, item: int) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[int]) -> None:
        self._items.extend(items)

    def get(self) -> Optional[int]:
        return self._items.popleft() if self._items else None


class Stack(Frontier):
    """Last in, first out: depth-first search."""

    def __init__(self):
        self._items: List[int] = []

    def is_empty(self) -> bool:
        return not self._items

    def put(self, item: int) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[int]) -> None:
        self._items.extend(items)

    def get(self) -> Optional[int]:
        return self._items.pop() if self._items else None


class SearchIterator(Iterator[int]):
    """
    Iterator visiting every vertex of a hypergraph exactly once.

    The search starts at vertex 0. Neighbors are marked as seen when they
    are put into the frontier, so no vertex is queued twice. Once the
    frontier runs dry before all vertices were visited, the next
    disconnected component is entered at its lowest unseen vertex.

    The hypergraph must not be modified while the iterator is in use.

    Args:
        graph: Hypergraph with vertex ids ``0..len(graph)-1``
        frontier_factory: Callable creating an empty Frontier

    Raises:
        StructureError: If the vertex ids are not contiguous from 0
    """

    def __init__(self, graph: 'Hypergraph', frontier_factory: Callable[[], Frontier]):
        if not graph.is_contiguous():
            raise StructureError(
                "Traversal requires vertex ids 0..n-1, "
                f"got {len(graph)} vertices with ids {graph.vertices()[:5]}..."
            )

        self.graph = graph
        self.seen = [False] * len(graph)
        self.visited = 0
        self.frontier = frontier_factory()
        # The last root used when searching for disconnected components.
        self.last_root = 0

        if not graph.is_empty():
            self.frontier.put(0)
            self.seen[0] = True

    def __iter__(self) -> 'SearchIterator':
        return self

    def _find_unvisited(self) -> int:
        for vertex in range(self.last_root, len(self.graph)):
            if not self.seen[vertex]:
                self.last_root = vertex
                return vertex
        raise StructureError("Failed to find an unvisited vertex")

    def _unseen(self, vertices: Iterable[int]) -> Iterator[int]:
        for vertex in vertices:
            if not self.seen[vertex]:
                self.seen[vertex] = True
                yield vertex

    def __next__(self) -> int:
        if self.visited == len(self.graph):
            raise StopIteration

        # Disconnected hypergraph: continue with the next component.
        if self.frontier.is_empty():
            root = self._find_unvisited()
            self.frontier.put(root)
            self.seen[root] = True

        current = self.frontier.get()
        self.visited += 1

        self.frontier.extend(self._unseen(self.graph.neighbors(current)))

        return current
