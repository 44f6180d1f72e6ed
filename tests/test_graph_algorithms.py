"""Tests for moralization and the clique cover."""

import pytest

from qmrf import GraphModel, GraphStructureError, GraphType, find_cliques, moralize


def _directed(*edges: tuple[int, int], nodes: int = 3) -> GraphModel:
    model = GraphModel(GraphType.DIRECTED)
    for node_id in range(nodes):
        model.add_node(node_id, f"N{node_id}")
    for source, target in edges:
        model.add_edge(source, target)
    return model


def _undirected(*edges: tuple[int, int], nodes: int = 3) -> GraphModel:
    model = GraphModel(GraphType.UNDIRECTED)
    for node_id in range(nodes):
        model.add_node(node_id, f"N{node_id}")
    for source, target in edges:
        model.add_edge(source, target, directed=False)
    return model


class TestMoralize:
    def test_v_structure_marries_parents(self) -> None:
        model = _directed((0, 2), (1, 2))
        moral = moralize(model)
        assert moral.graph_type is GraphType.UNDIRECTED
        assert moral.are_adjacent(0, 1)
        assert moral.has_edge(2, 0)
        assert all(not edge.directed for edge in moral.edges)

    def test_input_is_not_modified(self) -> None:
        model = _directed((0, 2), (1, 2))
        moralize(model)
        assert model.is_directed
        assert not model.are_adjacent(0, 1)
        assert len(model.edges) == 2

    def test_adjacent_parents_get_no_new_edge(self) -> None:
        model = _directed((0, 1), (0, 2), (1, 2))
        moral = moralize(model)
        assert len(moral.edges) == 3

    def test_undirected_model_returned_as_is(self) -> None:
        model = _undirected((0, 1))
        assert moralize(model) is model

    def test_chain_gains_no_edges(self) -> None:
        moral = moralize(_directed((0, 1), (1, 2)))
        assert len(moral.edges) == 2
        assert not moral.are_adjacent(0, 2)

    def test_three_parents_are_pairwise_married(self) -> None:
        moral = moralize(_directed((0, 3), (1, 3), (2, 3), nodes=4))
        assert moral.are_adjacent(0, 1)
        assert moral.are_adjacent(0, 2)
        assert moral.are_adjacent(1, 2)


class TestFindCliques:
    def test_chain(self) -> None:
        cliques = find_cliques(_undirected((0, 1), (1, 2)))
        assert cliques == [(0,), (0, 1), (1,), (1, 2), (2,)]

    def test_triangle(self) -> None:
        cliques = find_cliques(_undirected((0, 1), (1, 2), (0, 2)))
        assert cliques == [(0,), (0, 1), (0, 1, 2), (0, 2), (1,), (1, 2), (2,)]

    def test_isolated_node_is_a_singleton(self) -> None:
        assert find_cliques(_undirected(nodes=1)) == [(0,)]

    def test_empty_model(self) -> None:
        assert find_cliques(GraphModel()) == []

    def test_members_are_sorted_regardless_of_edge_orientation(self) -> None:
        cliques = find_cliques(_undirected((2, 0), nodes=3))
        assert (0, 2) in cliques
        assert (2, 0) not in cliques

    def test_no_duplicates(self) -> None:
        cliques = find_cliques(_undirected((0, 1), (1, 0), (1, 2), (0, 2)))
        assert len(cliques) == len(set(cliques))

    def test_k4_is_covered_by_triangles(self) -> None:
        edges = [(a, b) for a in range(4) for b in range(a + 1, 4)]
        cliques = find_cliques(_undirected(*edges, nodes=4))
        assert max(len(clique) for clique in cliques) == 3
        assert sum(1 for clique in cliques if len(clique) == 3) == 4

    def test_directed_model_rejected(self) -> None:
        with pytest.raises(GraphStructureError, match="moralize"):
            find_cliques(_directed((0, 1)))

    def test_deterministic(self) -> None:
        model = moralize(_directed((0, 2), (1, 2), (2, 3), nodes=4))
        assert find_cliques(model) == find_cliques(model.copy())
