"""
Tests for the hypergraph store, traversals and the dual transform.
"""

import pytest


def make_tree():
    """Three nets: [0, 1, 2], [1, 3], [2, 4]."""
    from cnfpart.hypergraph import Hypergraph

    graph = Hypergraph(3)
    for vertex in (0, 1, 2):
        graph.add_pin(0, vertex)
    graph.add_pin(1, 1)
    graph.add_pin(1, 3)
    graph.add_pin(2, 2)
    graph.add_pin(2, 4)
    return graph


def make_chain():
    """Two nets: [0, 1], [1, 2]."""
    from cnfpart.hypergraph import Hypergraph

    graph = Hypergraph(2)
    graph.add_pin(0, 0)
    graph.add_pin(0, 1)
    graph.add_pin(1, 1)
    graph.add_pin(1, 2)
    return graph


class TestHypergraphStore:
    """Tests for building and querying hypergraphs."""

    def test_add_pin(self):
        """Pins are recorded in both directions."""
        graph = make_chain()

        assert len(graph) == 3
        assert graph.num_nets == 2
        assert graph.nets == [[0, 1], [1, 2]]
        assert graph.vertex(1).nets == [0, 1]
        assert graph.pin_count() == 4
        assert list(graph.pins()) == [(0, 0), (0, 1), (1, 1), (1, 2)]

    def test_duplicate_pins_kept(self):
        """Adding the same pin twice records it twice."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(1)
        graph.add_pin(0, 0)
        graph.add_pin(0, 0)

        assert graph.nets == [[0, 0]]
        assert graph.vertex(0).nets == [0, 0]
        assert len(graph) == 1

    def test_invalid_net(self):
        """Pins into nets that do not exist are rejected."""
        from cnfpart.errors import StructureError

        graph = make_chain()
        with pytest.raises(StructureError):
            graph.add_pin(2, 0)
        with pytest.raises(ValueError):
            graph.add_pin(-1, 0)

    def test_negative_vertex(self):
        """Vertex ids must be non-negative."""
        from cnfpart.errors import StructureError

        graph = make_chain()
        with pytest.raises(StructureError):
            graph.add_pin(0, -3)

    def test_vertices_sorted(self):
        """Vertices are reported in ascending order whatever the insertion order."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(1)
        for vertex in (5, 2, 9, 0):
            graph.add_pin(0, vertex)

        assert graph.vertices() == [0, 2, 5, 9]
        assert [vertex for vertex, _ in graph.items()] == [0, 2, 5, 9]

    def test_weights(self):
        """Vertex weights default to 1 and can be changed."""
        graph = make_chain()
        assert graph.weight() == 3

        graph.set_vertex_weight(2, 5)
        assert graph.vertex_weights() == [1, 1, 5]
        assert graph.weight() == 7

    def test_default_weight(self):
        """Implicitly created vertices get the default weight."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(1, default_weight=4)
        graph.add_pin(0, 0)
        graph.add_vertex(1)
        graph.add_vertex(2, weight=7)

        assert graph.vertex_weights() == [4, 4, 7]

    def test_add_vertex_keeps_existing(self):
        """Adding an existing vertex does not reset it."""
        graph = make_chain()
        graph.set_vertex_weight(1, 3)
        graph.add_vertex(1, weight=10)

        assert graph.vertex(1).weight == 3
        assert graph.vertex(1).nets == [0, 1]

    def test_neighbors(self):
        """Neighbors include the vertex itself and repeat shared vertices."""
        graph = make_chain()

        assert list(graph.neighbors(1)) == [0, 1, 1, 2]
        assert list(graph.neighbors(0)) == [0, 1]

    def test_neighbors_fresh_iterator(self):
        """Every call starts a new iteration."""
        graph = make_chain()
        first = graph.neighbors(2)
        next(first)

        assert list(graph.neighbors(2)) == [1, 2]

    def test_unknown_vertex(self):
        """Looking up a missing vertex raises StructureError."""
        from cnfpart.errors import StructureError

        graph = make_chain()
        with pytest.raises(StructureError):
            graph.vertex(7)
        with pytest.raises(StructureError):
            graph.neighbors(7)

    def test_empty(self):
        """A hypergraph without pins has no vertices."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(3)
        assert graph.is_empty()
        assert len(graph) == 0
        assert graph.weight() == 0
        assert graph.nets == [[], [], []]


class TestTraversal:
    """Tests for breadth-first and depth-first search."""

    def test_bfs_order(self):
        """Breadth-first search visits by distance from vertex 0."""
        assert list(make_tree().bfs()) == [0, 1, 2, 3, 4]

    def test_dfs_order(self):
        """Depth-first search follows the most recently found vertex."""
        assert list(make_tree().dfs()) == [0, 2, 4, 1, 3]

    def test_each_vertex_once(self):
        """Every vertex is visited exactly once despite repeated neighbors."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(4)
        for net in range(4):
            for vertex in range(6):
                graph.add_pin(net, vertex)

        for order in (graph.bfs(), graph.dfs()):
            visited = list(order)
            assert sorted(visited) == list(range(6))

    def test_disconnected(self):
        """Disconnected components are entered at their lowest vertex."""
        from cnfpart.hypergraph import Hypergraph

        graph = Hypergraph(2)
        graph.add_pin(0, 0)
        graph.add_pin(0, 3)
        graph.add_pin(1, 1)
        graph.add_pin(1, 2)
        graph.add_vertex(4)

        assert list(graph.bfs()) == [0, 3, 1, 2, 4]
        assert list(graph.dfs()) == [0, 3, 1, 2, 4]

    def test_empty_graph(self):
        """Traversing an empty hypergraph yields nothing."""
        from cnfpart.hypergraph import Hypergraph

        assert list(Hypergraph(0).bfs()) == []
        assert list(Hypergraph(2).dfs()) == []

    def test_non_contiguous_ids(self):
        """Vertex ids with gaps cannot be traversed."""
        from cnfpart.hypergraph import Hypergraph
        from cnfpart.errors import StructureError

        graph = Hypergraph(1)
        graph.add_pin(0, 1)
        graph.add_pin(0, 2)

        with pytest.raises(StructureError):
            graph.bfs()

    def test_frontiers(self):
        """Queue removes the oldest item, Stack the newest."""
        from cnfpart.hypergraph import Queue, Stack

        queue, stack = Queue(), Stack()
        for frontier in (queue, stack):
            assert frontier.is_empty()
            assert frontier.get() is None
            frontier.extend([1, 2, 3])

        assert [queue.get(), queue.get(), queue.get()] == [1, 2, 3]
        assert [stack.get(), stack.get(), stack.get()] == [3, 2, 1]


class TestDual:
    """Tests for the dual transform."""

    def test_dual(self):
        """Nets become vertices and vertices become nets."""
        graph = make_chain()
        graph.net_weights = [3, 4]
        graph.set_vertex_weight(0, 5)

        result = graph.dual()

        assert result.vertices() == [0, 1]
        assert result.vertex_weights() == [3, 4]
        assert result.nets == [[0], [0, 1], [1]]
        assert result.net_weights == [5, 1, 1]

    def test_empty_nets_become_vertices(self):
        """An empty net turns into an isolated vertex."""
        from cnfpart.hypergraph import Hypergraph, dual

        graph = Hypergraph(3)
        graph.add_pin(0, 0)
        graph.add_pin(2, 0)

        result = dual(graph)

        assert len(result) == 3
        assert result.vertex(1).nets == []
        assert result.nets == [[0, 2]]

    def test_deduplicated_nets(self):
        """Repeated pins collapse into a single dual pin."""
        from cnfpart.hypergraph import Hypergraph, dual

        graph = Hypergraph(2)
        graph.add_pin(1, 0)
        graph.add_pin(0, 0)
        graph.add_pin(1, 0)

        assert dual(graph).nets == [[0, 1]]

    def test_double_dual(self):
        """The dual of the dual is the original hypergraph."""
        from cnfpart.hypergraph import dual

        graph = make_tree()
        graph.net_weights = [2, 3, 4]
        graph.set_vertex_weight(3, 6)

        assert dual(dual(graph)) == graph


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
