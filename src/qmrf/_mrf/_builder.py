"""Builder functions to construct an MRF from a graphical model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qmrf._graph import find_cliques, moralize

from ._clique import Clique
from ._mrf_model import MRFModel
from ._potentials import resolve_potential

if TYPE_CHECKING:
    from qmrf._graph import GraphModel

logger = logging.getLogger(__name__)


def build_mrf(model: GraphModel) -> MRFModel:
    """Build an MRFModel from a Bayesian network or Markov random field.

    The function:
    1. Moralizes a private copy of a directed model (the caller's model keeps
       its directed structure)
    2. Finds the clique cover of the undirected graph
    3. Resolves each clique's potential against the original model, so CPTs
       declared on the directed model remain usable

    The MRF's adjacency comes from clique co-membership and may differ from
    the moral graph's adjacency.

    Args:
        model: The graphical model.

    Returns:
        The MRF with one potential table per clique.

    Example:
        >>> mrf = build_mrf(chain)
        >>> [clique.nodes for clique in mrf.cliques]
        [(0,), (0, 1), (1,), (1, 2), (2,)]

    """
    undirected = moralize(model)
    if undirected is not model:
        logger.debug(f"Moralized model: {len(model.edges)} -> {len(undirected.edges)} edges")

    cliques: list[Clique] = []
    for members in find_cliques(undirected):
        potential = resolve_potential(members, model)
        num_states = tuple(model.get_node(node_id).num_states for node_id in members)
        logger.debug(f"Clique {members}: potential {list(potential)}")
        cliques.append(Clique(nodes=members, num_states=num_states, potential=potential))

    return MRFModel.from_cliques(model.nodes, cliques)
