"""Quantum circuit IR and the Ising encoder that produces it.

Key types:
- GateType: gate tags (H, X, Y, Z, CNOT, RZ, RY, RX, CPHASE, MEASURE)
- QuantumGate: one gate application
- QPUCircuit: qubit count, gate sequence and measured qubits
- encode_mrf: MRFModel -> QPUCircuit
"""

from ._circuit import CircuitBuilder, QPUCircuit
from ._encoder import COUPLING_THRESHOLD, encode_clique, encode_mrf, pairwise_coupling, single_node_angle
from ._gate import GateType, QuantumGate

__all__ = [
    "COUPLING_THRESHOLD",
    "CircuitBuilder",
    "GateType",
    "QPUCircuit",
    "QuantumGate",
    "encode_clique",
    "encode_mrf",
    "pairwise_coupling",
    "single_node_angle",
]
