"""Graphical model representation: typed nodes, edges and derived adjacency."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from qmrf._doc_enum import StrEnumWithDoc
from qmrf._errors import GraphStructureError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

type ParentStates = tuple[int, ...]
type Distribution = tuple[float, ...]
type Matrix = tuple[tuple[float, ...], ...]


class GraphType(StrEnumWithDoc):
    """Whether a model is a Bayesian network or a Markov random field."""

    DIRECTED = "directed", "Bayesian network: edges point from parent to child."
    UNDIRECTED = "undirected", "Markov random field: edges are symmetric."


@dataclass(frozen=True, slots=True)
class Node:
    """A random variable of the model.

    Attributes:
        id: Identifier, unique within a model.
        name: Display name.
        num_states: Number of states, at least 1.
        potential: Flat potential vector of length ``num_states``.
            Defaults to all ones (uniform).
        cpt: Conditional probability table mapping a tuple of parent states
            (one per parent, empty for root nodes) to a distribution over
            this node's states. ``None`` when the node has no CPT.

    """

    id: int
    name: str
    num_states: int = 2
    potential: Distribution = ()
    cpt: Mapping[ParentStates, Distribution] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.num_states < 1:
            msg = f"Node {self.id} ('{self.name}') must have at least one state, got {self.num_states}"
            raise GraphStructureError(msg)
        if not self.potential:
            object.__setattr__(self, "potential", (1.0,) * self.num_states)
        elif len(self.potential) != self.num_states:
            msg = (
                f"Node {self.id} ('{self.name}') has {self.num_states} states"
                f" but a potential of length {len(self.potential)}"
            )
            raise GraphStructureError(msg)

    @property
    def has_cpt(self) -> bool:
        """Whether a conditional probability table is attached."""
        return self.cpt is not None


@dataclass(frozen=True, slots=True)
class Edge:
    """An edge between two nodes.

    Attributes:
        source: The ``from`` node id (the parent for directed edges).
        target: The ``to`` node id (the child for directed edges).
        directed: Whether the edge is directed.
        potential: Optional ``k_source x k_target`` potential matrix.
            ``None`` means uniform.

    """

    source: int
    target: int
    directed: bool = True
    potential: Matrix | None = None

    def connects(self, first: int, second: int) -> bool:
        """Check whether this edge goes from ``first`` to ``second``.

        An undirected edge also matches in the reverse orientation.
        """
        if self.source == first and self.target == second:
            return True
        return not self.directed and self.source == second and self.target == first


def _as_distribution(values: Sequence[float]) -> Distribution:
    return tuple(float(value) for value in values)


def _transpose(matrix: Matrix) -> Matrix:
    return tuple(tuple(column) for column in zip(*matrix, strict=True))


class GraphModel:
    """A Bayesian network or Markov random field.

    Nodes live in a dense list in insertion order with an id -> index map.
    The adjacency map is owned by the model: it is derived from the edge list
    and the graph type and is never edited from outside.

    Adjacency follows the edge semantics of the model: a directed edge
    ``a -> b`` in a directed model records only ``b`` as a neighbor of ``a``;
    undirected edges, and every edge of an undirected model, are recorded in
    both directions.

    Example:
        >>> model = GraphModel(GraphType.UNDIRECTED)
        >>> _ = model.add_node(0, "A")
        >>> _ = model.add_node(1, "B")
        >>> _ = model.add_edge(0, 1, directed=False)
        >>> model.neighbors(1)
        (0,)

    """

    def __init__(self, graph_type: GraphType = GraphType.UNDIRECTED) -> None:
        self._graph_type = graph_type
        self._nodes: list[Node] = []
        self._index: dict[int, int] = {}
        self._edges: list[Edge] = []
        self._adjacency: dict[int, set[int]] = {}

    # -- structure ---------------------------------------------------------

    @property
    def graph_type(self) -> GraphType:
        """The directedness tag of the model."""
        return self._graph_type

    @property
    def is_directed(self) -> bool:
        """Whether the model is tagged DIRECTED."""
        return self._graph_type is GraphType.DIRECTED

    @property
    def nodes(self) -> tuple[Node, ...]:
        """Nodes in insertion order."""
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Edges in insertion order."""
        return tuple(self._edges)

    @property
    def node_ids(self) -> tuple[int, ...]:
        """Node ids in insertion order."""
        return tuple(node.id for node in self._nodes)

    @property
    def adjacency(self) -> Mapping[int, frozenset[int]]:
        """Read-only view of the adjacency map."""
        return MappingProxyType({node_id: frozenset(ids) for node_id, ids in self._adjacency.items()})

    def set_graph_type(self, graph_type: GraphType) -> None:
        """Change the directedness tag and rebuild the adjacency map."""
        self._graph_type = graph_type
        self._rebuild_adjacency()

    def add_node(self, node_id: int, name: str, num_states: int = 2) -> Node:
        """Add a node with a uniform potential.

        Raises:
            GraphStructureError: If the id is already taken or ``num_states < 1``.

        """
        if node_id in self._index:
            msg = f"Duplicate node id {node_id}"
            raise GraphStructureError(msg)
        node = Node(id=node_id, name=name, num_states=num_states)
        self._index[node_id] = len(self._nodes)
        self._nodes.append(node)
        self._adjacency[node_id] = set()
        return node

    def add_edge(
        self,
        source: int,
        target: int,
        *,
        directed: bool = True,
        potential: Sequence[Sequence[float]] | None = None,
    ) -> Edge:
        """Add an edge between two existing nodes.

        Raises:
            GraphStructureError: If an endpoint is unknown or the potential
                matrix does not match the endpoint state counts.

        """
        for endpoint in (source, target):
            if endpoint not in self._index:
                msg = f"Edge ({source}, {target}) references unknown node id {endpoint}"
                raise GraphStructureError(msg)
        matrix = self._checked_matrix(source, target, potential) if potential is not None else None
        edge = Edge(source=source, target=target, directed=directed, potential=matrix)
        self._edges.append(edge)
        self._link(edge)
        return edge

    def make_undirected(self) -> None:
        """Clear every edge's directed flag and tag the model UNDIRECTED."""
        self._edges = [replace(edge, directed=False) if edge.directed else edge for edge in self._edges]
        self.set_graph_type(GraphType.UNDIRECTED)

    # -- data --------------------------------------------------------------

    def set_node_potential(self, node_id: int, potential: Sequence[float]) -> None:
        """Replace a node's flat potential vector."""
        index = self._require_index(node_id)
        self._nodes[index] = replace(self._nodes[index], potential=_as_distribution(potential))

    def set_edge_potential(self, source: int, target: int, potential: Sequence[Sequence[float]]) -> None:
        """Attach a potential matrix to an existing edge.

        The matrix is indexed ``[state of source][state of target]`` in the
        orientation given by the arguments. When that is the reverse of an
        undirected edge's stored orientation it is transposed before storing.

        Raises:
            GraphStructureError: If no such edge exists or the shape is wrong.

        """
        matrix = self._checked_matrix(source, target, potential)
        for position, edge in enumerate(self._edges):
            if edge.connects(source, target):
                stored = matrix if edge.source == source else _transpose(matrix)
                self._edges[position] = replace(edge, potential=stored)
                return
        msg = f"No edge ({source}, {target}) to attach a potential to"
        raise GraphStructureError(msg)

    def set_cpt(self, node_id: int, cpt: Mapping[Sequence[int], Sequence[float]]) -> None:
        """Attach a conditional probability table to a node.

        Raises:
            GraphStructureError: If a distribution's length differs from the
                node's state count.

        """
        index = self._require_index(node_id)
        node = self._nodes[index]
        table: dict[ParentStates, Distribution] = {}
        for parent_states, distribution in cpt.items():
            if len(distribution) != node.num_states:
                msg = (
                    f"CPT row {tuple(parent_states)} of node {node_id} has {len(distribution)} entries,"
                    f" expected {node.num_states}"
                )
                raise GraphStructureError(msg)
            table[tuple(int(state) for state in parent_states)] = _as_distribution(distribution)
        self._nodes[index] = replace(node, cpt=MappingProxyType(table))

    # -- queries -----------------------------------------------------------

    def has_node(self, node_id: int) -> bool:
        """Check whether a node id exists."""
        return node_id in self._index

    def get_node(self, node_id: int) -> Node:
        """Get a node by id.

        Raises:
            GraphStructureError: If the id is unknown.

        """
        return self._nodes[self._require_index(node_id)]

    def get_edge(self, source: int, target: int) -> Edge | None:
        """Get the first edge going from ``source`` to ``target``, if any.

        Undirected edges match in either orientation.
        """
        return next((edge for edge in self._edges if edge.connects(source, target)), None)

    def neighbors(self, node_id: int) -> tuple[int, ...]:
        """Adjacent node ids in ascending order."""
        self._require_index(node_id)
        return tuple(sorted(self._adjacency[node_id]))

    def parents(self, node_id: int) -> tuple[int, ...]:
        """Sources of directed edges into a node, in edge insertion order."""
        self._require_index(node_id)
        parents: list[int] = []
        for edge in self._edges:
            if edge.directed and edge.target == node_id and edge.source not in parents:
                parents.append(edge.source)
        return tuple(parents)

    def has_edge(self, source: int, target: int) -> bool:
        """Check whether ``target`` is recorded as a neighbor of ``source``."""
        return target in self._adjacency.get(source, ())

    def are_adjacent(self, first: int, second: int) -> bool:
        """Check adjacency in either direction."""
        return self.has_edge(first, second) or self.has_edge(second, first)

    def copy(self) -> GraphModel:
        """Return an independent copy sharing only immutable nodes and edges."""
        clone = GraphModel(self._graph_type)
        clone._nodes = list(self._nodes)  # noqa: SLF001
        clone._index = dict(self._index)  # noqa: SLF001
        clone._edges = list(self._edges)  # noqa: SLF001
        clone._rebuild_adjacency()  # noqa: SLF001
        return clone

    def __len__(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        """Check if a node id is in the model."""
        return node_id in self._index

    def __iter__(self) -> Iterator[Node]:
        """Iterate over nodes in insertion order."""
        return iter(self._nodes)

    def __repr__(self) -> str:
        return (
            f"GraphModel(graph_type={self._graph_type.value!r},"
            f" nodes={len(self._nodes)}, edges={len(self._edges)})"
        )

    # -- internals ---------------------------------------------------------

    def _require_index(self, node_id: int) -> int:
        try:
            return self._index[node_id]
        except KeyError:
            msg = f"Unknown node id {node_id}"
            raise GraphStructureError(msg) from None

    def _checked_matrix(self, source: int, target: int, potential: Sequence[Sequence[float]]) -> Matrix:
        rows = self.get_node(source).num_states
        columns = self.get_node(target).num_states
        matrix = tuple(_as_distribution(row) for row in potential)
        if len(matrix) != rows or any(len(row) != columns for row in matrix):
            msg = f"Potential for edge ({source}, {target}) must be a {rows}x{columns} matrix"
            raise GraphStructureError(msg)
        return matrix

    def _link(self, edge: Edge) -> None:
        self._adjacency[edge.source].add(edge.target)
        if not edge.directed or self._graph_type is GraphType.UNDIRECTED:
            self._adjacency[edge.target].add(edge.source)

    def _rebuild_adjacency(self) -> None:
        self._adjacency = {node.id: set() for node in self._nodes}
        for edge in self._edges:
            self._link(edge)
