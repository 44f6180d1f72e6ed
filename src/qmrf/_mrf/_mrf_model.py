"""Markov random field: nodes plus a clique cover with potential tables."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from qmrf._errors import GraphStructureError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from qmrf._graph import Node

    from ._clique import Clique


@dataclass(frozen=True, slots=True)
class MRFModel:
    """An immutable Markov random field.

    Attributes:
        nodes: Nodes in the insertion order of the source model. Position
            ``i`` is the qubit assigned to the node by the encoder.
        cliques: The clique cover, in cover order.
        adjacency: Node id -> ids sharing at least one clique with it.

    """

    nodes: tuple[Node, ...]
    cliques: tuple[Clique, ...]
    adjacency: Mapping[int, frozenset[int]] = field(default_factory=dict, hash=False)
    _index: Mapping[int, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", MappingProxyType({node.id: i for i, node in enumerate(self.nodes)}))

    @classmethod
    def from_cliques(cls, nodes: Iterable[Node], cliques: Iterable[Clique]) -> MRFModel:
        """Build an MRF, deriving adjacency from clique co-membership.

        Raises:
            GraphStructureError: If a clique references a node not in ``nodes``.

        """
        nodes = tuple(nodes)
        cliques = tuple(cliques)
        adjacency: defaultdict[int, set[int]] = defaultdict(set)
        for node in nodes:
            if node.id in adjacency:
                msg = f"Duplicate node id {node.id}"
                raise GraphStructureError(msg)
            adjacency[node.id] = set()
        for clique in cliques:
            for member in clique.nodes:
                if member not in adjacency:
                    msg = f"Clique {clique.nodes} references unknown node id {member}"
                    raise GraphStructureError(msg)
            for i, first in enumerate(clique.nodes):
                for second in clique.nodes[i + 1 :]:
                    adjacency[first].add(second)
                    adjacency[second].add(first)
        return cls(
            nodes=nodes,
            cliques=cliques,
            adjacency=MappingProxyType({k: frozenset(v) for k, v in adjacency.items()}),
        )

    def get_node(self, node_id: int) -> Node:
        """Get a node by id.

        Raises:
            KeyError: If no node has the given id.

        """
        return self.nodes[self._index[node_id]]

    def qubit_index(self, node_id: int) -> int:
        """Position of a node in insertion order (its qubit).

        Raises:
            KeyError: If no node has the given id.

        """
        return self._index[node_id]

    def cliques_containing(self, node_id: int) -> list[Clique]:
        """Cliques that have the node as a member, in cover order."""
        return [clique for clique in self.cliques if node_id in clique.nodes]

    def total_states(self) -> int:
        """Size of the joint state space."""
        return math.prod(node.num_states for node in self.nodes)
