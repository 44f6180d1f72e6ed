"""Markov random field construction.

Key types:
- Clique: member ids plus a row-major potential table
- MRFModel: nodes, clique cover and co-membership adjacency
- resolve_potential: clique potential from node potentials, edge matrices or CPTs
- build_mrf: GraphModel -> MRFModel
"""

from ._builder import build_mrf
from ._clique import Clique, iter_joint_states
from ._mrf_model import MRFModel
from ._potentials import resolve_potential, select_cpt_owner

__all__ = ["Clique", "MRFModel", "build_mrf", "iter_joint_states", "resolve_potential", "select_cpt_owner"]
