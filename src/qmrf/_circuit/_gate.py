"""Quantum gate types of the circuit IR."""

from __future__ import annotations

from dataclasses import dataclass

from qmrf._doc_enum import StrEnumWithDoc


class GateType(StrEnumWithDoc):
    """Gate tags understood by every framework emitter."""

    H = "h", "Hadamard."
    X = "x", "Pauli-X."
    Y = "y", "Pauli-Y."
    Z = "z", "Pauli-Z."
    CNOT = "cnot", "Controlled-NOT."
    RZ = "rz", "Rotation around the Z axis."
    RY = "ry", "Rotation around the Y axis."
    RX = "rx", "Rotation around the X axis."
    CPHASE = "cphase", "Controlled phase rotation."
    MEASURE = "measure", "Z-basis measurement into the classical bit of the same index."

    @property
    def is_controlled(self) -> bool:
        """Whether the gate acts on a control and a target qubit."""
        return self in _CONTROLLED

    @property
    def is_parametric(self) -> bool:
        """Whether the gate takes a rotation angle."""
        return self in _PARAMETRIC


_CONTROLLED = frozenset({GateType.CNOT, GateType.CPHASE})
_PARAMETRIC = frozenset({GateType.RZ, GateType.RY, GateType.RX, GateType.CPHASE})


@dataclass(frozen=True, slots=True)
class QuantumGate:
    """A single gate application.

    Attributes:
        gate: The gate tag.
        target: Target qubit index.
        control: Control qubit index for CNOT and CPHASE, otherwise None.
        parameter: Rotation angle in radians for RZ, RY, RX and CPHASE,
            otherwise None.

    """

    gate: GateType
    target: int
    control: int | None = None
    parameter: float | None = None

    def __post_init__(self) -> None:
        if self.target < 0:
            msg = f"{self.gate.name} target must be a non-negative qubit index, got {self.target}"
            raise ValueError(msg)
        if self.gate.is_controlled:
            if self.control is None or self.control < 0:
                msg = f"{self.gate.name} requires a control qubit"
                raise ValueError(msg)
            if self.control == self.target:
                msg = f"{self.gate.name} control and target must differ, both are {self.target}"
                raise ValueError(msg)
        elif self.control is not None:
            msg = f"{self.gate.name} does not take a control qubit"
            raise ValueError(msg)
        if self.gate.is_parametric and self.parameter is None:
            msg = f"{self.gate.name} requires an angle"
            raise ValueError(msg)
        if not self.gate.is_parametric and self.parameter is not None:
            msg = f"{self.gate.name} does not take an angle"
            raise ValueError(msg)

    @property
    def qubits(self) -> tuple[int, ...]:
        """Qubits the gate acts on, control first."""
        if self.control is None:
            return (self.target,)
        return (self.control, self.target)

    def __str__(self) -> str:
        args = [str(qubit) for qubit in self.qubits]
        if self.parameter is not None:
            args.append(repr(self.parameter))
        return f"{self.gate.name}({', '.join(args)})"
