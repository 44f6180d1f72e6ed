"""Ising-style encoding of an MRF into a QPU circuit."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from qmrf._errors import PotentialDomainError

from ._circuit import CircuitBuilder, QPUCircuit
from ._gate import GateType, QuantumGate

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from qmrf._mrf import Clique, MRFModel

logger = logging.getLogger(__name__)

COUPLING_THRESHOLD = 1e-10
"""Couplings with ``|J|`` at or below this value emit no gates."""

_PAIR_STATES = ((0, 0), (0, 1), (1, 0), (1, 1))


def _checked_entries(clique: Clique, entries: Sequence[float]) -> None:
    for value in entries:
        if not math.isfinite(value):
            raise PotentialDomainError(clique.nodes, entries, "potential entries must be finite")
        if value <= 0.0:
            raise PotentialDomainError(clique.nodes, entries, "potential entries must be strictly positive")


def single_node_angle(clique: Clique) -> float:
    """RY angle ``ln(potential[1] / potential[0])`` of a singleton clique.

    Raises:
        PotentialDomainError: If fewer than two entries exist, or an entry is
            not strictly positive and finite.

    """
    if len(clique.potential) < 2:  # noqa: PLR2004
        raise PotentialDomainError(
            clique.nodes,
            clique.potential,
            "single-node encoding needs at least two potential entries",
        )
    if len(clique.potential) > 2:  # noqa: PLR2004
        logger.debug(f"Clique {clique.nodes}: only the first two of {len(clique.potential)} states are encoded")
    entries = clique.potential[:2]
    _checked_entries(clique, entries)
    return math.log(entries[1]) - math.log(entries[0])


def pairwise_coupling(clique: Clique) -> float:
    """Ising coupling ``J`` of a two-member clique.

    ``J = ln(p11 * p00 / (p01 * p10)) / 4`` where ``pab`` is the potential at
    joint state (a, b). For binary members these are entries 0..3 of the
    row-major table. Logarithms are taken entry by entry so extreme
    magnitudes cannot overflow an intermediate product.

    Raises:
        PotentialDomainError: If a member has fewer than two states, or an
            entry is not strictly positive and finite.

    """
    if any(k < 2 for k in clique.num_states):  # noqa: PLR2004
        raise PotentialDomainError(
            clique.nodes,
            clique.potential,
            "pairwise encoding needs at least two states per member",
        )
    p00, p01, p10, p11 = (clique.value(states) for states in _PAIR_STATES)
    _checked_entries(clique, (p00, p01, p10, p11))
    return (math.log(p11) + math.log(p00) - math.log(p01) - math.log(p10)) / 4.0


def encode_clique(clique: Clique, qubit_map: Mapping[int, int]) -> list[QuantumGate]:
    """Gates realizing one clique's potential.

    - Singleton: ``RY(ln(p1 / p0))`` on the node's qubit.
    - Pair: ``CNOT(q0 -> q1)``, ``RZ(2J)`` on ``q1``, ``CNOT(q0 -> q1)``,
      or nothing when the coupling is negligible.
    - Three or more members: nothing (a warning is logged).

    Args:
        clique: The clique to encode.
        qubit_map: Node id -> qubit index.

    Returns:
        The gates, in application order.

    Raises:
        PotentialDomainError: If the potential cannot be encoded.

    """
    if len(clique) == 1:
        angle = single_node_angle(clique)
        return [QuantumGate(GateType.RY, qubit_map[clique.nodes[0]], parameter=angle)]

    if len(clique) == 2:  # noqa: PLR2004
        coupling = pairwise_coupling(clique)
        if abs(coupling) <= COUPLING_THRESHOLD:
            logger.debug(f"Clique {clique.nodes}: negligible coupling {coupling!r}, no gates")
            return []
        control = qubit_map[clique.nodes[0]]
        target = qubit_map[clique.nodes[1]]
        return [
            QuantumGate(GateType.CNOT, target, control=control),
            QuantumGate(GateType.RZ, target, parameter=2.0 * coupling),
            QuantumGate(GateType.CNOT, target, control=control),
        ]

    logger.warning(f"Skipping clique {clique.nodes}: no gate encoding for cliques with {len(clique)} members")
    return []


def encode_mrf(mrf: MRFModel) -> QPUCircuit:
    """Encode an MRF as a QPU circuit.

    Qubit ``i`` is the ``i``-th node of the MRF. The circuit is one Hadamard
    per qubit, then the gates of every clique in cover order, then one
    measurement per qubit in index order.

    Args:
        mrf: The Markov random field.

    Returns:
        The circuit. It is never partial: any clique that fails to encode
        aborts the whole encoding.

    Raises:
        PotentialDomainError: If some clique potential cannot be encoded.

    """
    qubit_map = {node.id: index for index, node in enumerate(mrf.nodes)}
    builder = CircuitBuilder(len(mrf.nodes))

    for qubit in range(len(mrf.nodes)):
        builder.add_gate(GateType.H, qubit)

    for clique in mrf.cliques:
        gates = encode_clique(clique, qubit_map)
        logger.debug(f"Clique {clique.nodes}: {', '.join(str(gate) for gate in gates) or 'no gates'}")
        builder.extend(gates)

    for qubit in range(len(mrf.nodes)):
        builder.add_measurement(qubit)

    return builder.build()
