"""End-to-end compilation: graphical model -> MRF -> QPU circuit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._circuit import encode_mrf
from ._mrf import build_mrf

if TYPE_CHECKING:
    from ._circuit import QPUCircuit
    from ._graph import GraphModel
    from ._mrf import MRFModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompilationResult:
    """Output of every compiler stage.

    Attributes:
        model: The input model, unchanged.
        mrf: The Markov random field built from it.
        circuit: The encoded circuit.

    """

    model: GraphModel
    mrf: MRFModel
    circuit: QPUCircuit


def compile_model(model: GraphModel) -> CompilationResult:
    """Compile a graphical model into a QPU circuit.

    Each stage is a pure function of its input, so compiling the same model
    twice yields identical circuits.

    Raises:
        GraphStructureError: If the model is structurally invalid.
        PotentialDomainError: If a clique potential cannot be encoded.

    """
    logger.debug(f"Compiling {model!r}")
    mrf = build_mrf(model)
    logger.debug(f"MRF has {len(mrf.cliques)} cliques")
    circuit = encode_mrf(mrf)
    logger.debug(f"Circuit has {circuit.num_qubits} qubits and {len(circuit)} gates")
    return CompilationResult(model=model, mrf=mrf, circuit=circuit)
