"""Compile Bayesian networks and Markov random fields into quantum circuits."""

__all__ = [
    "COUPLING_THRESHOLD",
    "EMITTERS",
    "CircuitBuilder",
    "Clique",
    "CompilationResult",
    "ConfigError",
    "Edge",
    "Emitter",
    "Framework",
    "GateType",
    "GraphModel",
    "GraphStructureError",
    "GraphType",
    "MRFModel",
    "ModelParseError",
    "Node",
    "PotentialDomainError",
    "QPUCircuit",
    "QmrfError",
    "QuantumGate",
    "build_mrf",
    "compile_model",
    "emit_circuit",
    "encode_clique",
    "encode_mrf",
    "example_model",
    "export_circuit_to_toml",
    "find_cliques",
    "load_circuit_from_toml",
    "load_model",
    "load_model_from_toml",
    "moralize",
    "pairwise_coupling",
    "parse_model",
    "parse_model_file",
    "resolve_potential",
    "single_node_angle",
]

from ._circuit import (
    COUPLING_THRESHOLD,
    CircuitBuilder,
    GateType,
    QPUCircuit,
    QuantumGate,
    encode_clique,
    encode_mrf,
    pairwise_coupling,
    single_node_angle,
)
from ._compile import CompilationResult, compile_model
from ._errors import ConfigError, GraphStructureError, ModelParseError, PotentialDomainError, QmrfError
from ._export import EMITTERS, Emitter, Framework, emit_circuit
from ._graph import Edge, GraphModel, GraphType, Node, find_cliques, moralize
from ._io import export_circuit_to_toml, load_circuit_from_toml, load_model, load_model_from_toml
from ._mrf import Clique, MRFModel, build_mrf, resolve_potential
from ._parser import example_model, parse_model, parse_model_file
