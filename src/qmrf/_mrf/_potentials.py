"""Derivation of clique potential tables from node, edge and CPT data."""

from __future__ import annotations

import itertools
import logging
import math
from typing import TYPE_CHECKING

from ._clique import iter_joint_states

if TYPE_CHECKING:
    from collections.abc import Sequence

    from qmrf._graph import GraphModel

logger = logging.getLogger(__name__)


def select_cpt_owner(members: Sequence[int], model: GraphModel) -> int | None:
    """Choose the member whose CPT defines a clique's potential.

    Among members carrying a CPT, the owner is the one with the most parents
    inside the clique (the child of the family the clique covers). Ties go
    to the lowest node id.

    Args:
        members: Clique member ids.
        model: The original (pre-moralization) model.

    Returns:
        The owner's node id, or None when no member carries a CPT.

    """
    member_set = set(members)
    candidates = [
        (-len(member_set.intersection(model.parents(node_id))), node_id)
        for node_id in members
        if model.get_node(node_id).has_cpt
    ]
    if not candidates:
        return None
    return min(candidates)[1]


def _cpt_potential(owner_id: int, members: Sequence[int], model: GraphModel) -> tuple[float, ...]:
    owner = model.get_node(owner_id)
    cpt = owner.cpt or {}
    position = {node_id: j for j, node_id in enumerate(members)}
    owner_position = position[owner_id]
    parents = model.parents(owner_id)

    # Parents outside the clique are summed out with uniform weight.
    outside = [parent for parent in parents if parent not in position]
    outside_states = list(itertools.product(*(range(model.get_node(p).num_states) for p in outside)))

    num_states = [model.get_node(node_id).num_states for node_id in members]
    potential: list[float] = []
    for states in iter_joint_states(num_states):
        total = 0.0
        for extra in outside_states:
            extra_by_parent = dict(zip(outside, extra, strict=True))
            key = tuple(
                states[position[parent]] if parent in position else extra_by_parent[parent] for parent in parents
            )
            distribution = cpt.get(key)
            if distribution is not None:
                total += distribution[states[owner_position]]
        potential.append(total / len(outside_states))
    return tuple(potential)


def _edge_potential(members: Sequence[int], model: GraphModel) -> tuple[float, ...] | None:
    first, second = members
    edge = model.get_edge(first, second) or model.get_edge(second, first)
    if edge is None or edge.potential is None:
        return None
    matrix = edge.potential
    if edge.source != first:
        # Stored as (second, first): align rows with the first member.
        matrix = tuple(zip(*matrix, strict=True))
    return tuple(value for row in matrix for value in row)


def resolve_potential(members: Sequence[int], model: GraphModel) -> tuple[float, ...]:
    """Compute the flat potential table of a clique.

    Rules, in priority order:

    1. In a directed model where some member carries a CPT, the CPT of the
       owner (see ``select_cpt_owner``) fills the table with
       ``P(owner state | states of its parents in the clique)``. Missing CPT
       rows contribute probability 0.
    2. A singleton uses the node potential. A root node carrying a CPT in
       a directed model is already covered by rule 1, which reads its
       empty-tuple row.
    3. A pair uses its edge's potential matrix, flattened row-major and
       aligned with the member order.
    4. Anything else is uniform (all ones).

    The table is indexed row-major over ``members`` (last member fastest).

    Args:
        members: Clique member ids, in table order.
        model: The original (pre-moralization) model.

    Returns:
        Potential table of length ``prod(state counts of members)``.

    """
    size = math.prod(model.get_node(node_id).num_states for node_id in members)

    if model.is_directed:
        owner_id = select_cpt_owner(members, model)
        if owner_id is not None:
            logger.debug(f"Clique {tuple(members)}: potential from CPT of node {owner_id}")
            return _cpt_potential(owner_id, members, model)

    if len(members) == 1:
        return model.get_node(members[0]).potential

    if len(members) == 2:  # noqa: PLR2004
        edge_potential = _edge_potential(members, model)
        if edge_potential is not None:
            return edge_potential

    logger.debug(f"Clique {tuple(members)}: uniform potential")
    return (1.0,) * size
