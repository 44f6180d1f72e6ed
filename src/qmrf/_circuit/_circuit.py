"""QPU circuit IR: qubit count, ordered gates and measured qubits."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._gate import GateType, QuantumGate

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class QPUCircuit:
    """An immutable, framework-neutral quantum circuit.

    This is the contract handed to the framework emitters: qubit ``i``
    stands for the ``i``-th node of the source model, gates are in
    application order, and every measured qubit has exactly one MEASURE gate.

    Attributes:
        num_qubits: Number of qubits.
        gates: Gates in application order.
        measured_qubits: Measured qubit indices, in measurement order.

    """

    num_qubits: int
    gates: tuple[QuantumGate, ...] = ()
    measured_qubits: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.num_qubits < 0:
            msg = f"Qubit count must be non-negative, got {self.num_qubits}"
            raise ValueError(msg)
        for gate in self.gates:
            for qubit in gate.qubits:
                if qubit >= self.num_qubits:
                    msg = f"Gate {gate} acts on qubit {qubit} of a {self.num_qubits}-qubit circuit"
                    raise ValueError(msg)
        for qubit in self.measured_qubits:
            if not 0 <= qubit < self.num_qubits:
                msg = f"Measured qubit {qubit} out of range for a {self.num_qubits}-qubit circuit"
                raise ValueError(msg)

    def gate_counts(self) -> dict[GateType, int]:
        """Number of gates of each type, in first-use order."""
        return dict(Counter(gate.gate for gate in self.gates))

    def describe(self) -> str:
        """Human-readable listing, one numbered gate per line."""
        lines = [f"QPU Circuit ({self.num_qubits} qubits)", "Gates:"]
        lines.extend(f"  {i}: {gate}" for i, gate in enumerate(self.gates))
        return "\n".join(lines)

    def __len__(self) -> int:
        """Return the number of gates."""
        return len(self.gates)


class CircuitBuilder:
    """Accumulates gates and measurements, then freezes them into a QPUCircuit."""

    def __init__(self, num_qubits: int) -> None:
        self.num_qubits = num_qubits
        self._gates: list[QuantumGate] = []
        self._measured: list[int] = []

    def add_gate(
        self,
        gate: GateType,
        target: int,
        control: int | None = None,
        parameter: float | None = None,
    ) -> CircuitBuilder:
        self._gates.append(QuantumGate(gate=gate, target=target, control=control, parameter=parameter))
        return self

    def extend(self, gates: Iterable[QuantumGate]) -> CircuitBuilder:
        self._gates.extend(gates)
        return self

    def add_measurement(self, qubit: int) -> CircuitBuilder:
        """Append a MEASURE gate and record the qubit as measured."""
        self.add_gate(GateType.MEASURE, qubit)
        self._measured.append(qubit)
        return self

    def build(self) -> QPUCircuit:
        return QPUCircuit(
            num_qubits=self.num_qubits,
            gates=tuple(self._gates),
            measured_qubits=tuple(self._measured),
        )
