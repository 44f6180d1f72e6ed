"""Graph module providing the graphical model and its structural algorithms.

This module contains:
- GraphModel: nodes, edges, CPTs and the adjacency derived from them
- moralize: directed model -> undirected moral graph (on a private copy)
- find_cliques: deduplicated clique cover of an undirected model
"""

from ._algorithms import find_cliques, moralize
from ._model import Edge, GraphModel, GraphType, Node

__all__ = ["Edge", "GraphModel", "GraphType", "Node", "find_cliques", "moralize"]
