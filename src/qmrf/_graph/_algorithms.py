"""Graph algorithms: moralization and clique cover."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qmrf._errors import GraphStructureError

if TYPE_CHECKING:
    from ._model import GraphModel

logger = logging.getLogger(__name__)


def moralize(model: GraphModel) -> GraphModel:
    """Convert a directed model into its moral (undirected) graph.

    For every node, all of its parents are connected pairwise by new
    undirected edges (only where they are not already adjacent), then every
    edge loses its direction and the copy is tagged UNDIRECTED.

    The input model is never modified: a directed model is moralized on a
    private copy, and an undirected model is returned as is.

    Args:
        model: The model to moralize.

    Returns:
        An undirected model with the same nodes.

    Example:
        >>> # a -> c <- b gains the undirected edge a - b
        >>> moral = moralize(v_structure)
        >>> moral.are_adjacent(a, b)
        True

    """
    if not model.is_directed:
        return model

    moral = model.copy()
    for node in model.nodes:
        parents = model.parents(node.id)
        for i, first in enumerate(parents):
            for second in parents[i + 1 :]:
                if not moral.are_adjacent(first, second):
                    logger.debug(f"Marrying parents {first} and {second} of node {node.id}")
                    moral.add_edge(first, second, directed=False)

    moral.make_undirected()
    return moral


def find_cliques(model: GraphModel) -> list[tuple[int, ...]]:
    """Enumerate a clique cover of an undirected model.

    The cover contains every node as a singleton, every edge as a pair, and
    every triangle found by extending a node with two of its neighbors that
    are adjacent to each other. This is a bounded-size heuristic: every
    reported set is a genuine clique, but larger cliques of the graph are
    covered by several overlapping triangles rather than reported whole.

    Cliques are deduplicated by membership. Members of each clique are in
    ascending id order and the cover is sorted by the member tuples, so the
    output only depends on the graph.

    Args:
        model: An undirected model.

    Returns:
        Sorted list of cliques, each a tuple of ascending node ids.

    Raises:
        GraphStructureError: If the model is tagged DIRECTED.

    """
    if model.is_directed:
        msg = "Clique cover requires an undirected model; moralize it first"
        raise GraphStructureError(msg)

    found: set[frozenset[int]] = set()
    for node_id in model.node_ids:
        neighbors = model.neighbors(node_id)
        found.add(frozenset({node_id}))
        for neighbor in neighbors:
            found.add(frozenset({node_id, neighbor}))
        for i, first in enumerate(neighbors):
            for second in neighbors[i + 1 :]:
                if model.has_edge(first, second):
                    found.add(frozenset({node_id, first, second}))

    cliques = sorted(tuple(sorted(members)) for members in found)
    logger.debug(f"Found {len(cliques)} cliques over {len(model)} nodes")
    return cliques
