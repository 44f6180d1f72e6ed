"""Source code emitters, one pure function per target framework.

Every emitter takes a circuit and a circuit name and returns the program
text. Gates are rendered in circuit order and angles with ``repr`` so the
output is reproducible to the last bit.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from qmrf._circuit import GateType

if TYPE_CHECKING:
    from collections.abc import Callable

    from qmrf._circuit import QPUCircuit, QuantumGate


def python_identifier(name: str) -> str:
    """Turn a circuit name into a valid Python identifier.

    Example:
        >>> python_identifier("my circuit-2")
        'my_circuit_2'

    """
    identifier = re.sub(r"\W", "_", name.strip())
    if not identifier:
        return "circuit"
    if identifier[0].isdigit():
        return f"_{identifier}"
    return identifier


def pascal_identifier(name: str) -> str:
    """Turn a circuit name into a PascalCase identifier (for Q# operations)."""
    words = [word for word in re.split(r"[\W_]+", name) if word]
    identifier = "".join(word[0].upper() + word[1:] for word in words)
    if not identifier:
        return "Circuit"
    if identifier[0].isdigit():
        return f"C{identifier}"
    return identifier


def _render_gates(circuit: QPUCircuit, render: Callable[[QuantumGate], list[str]], indent: str = "") -> list[str]:
    lines: list[str] = []
    for gate in circuit.gates:
        lines.extend(f"{indent}{line}" for line in render(gate))
    return lines


# =============================================================================
# OpenQASM 2.0
# =============================================================================


def _qasm_gate(gate: QuantumGate) -> list[str]:
    t = f"q[{gate.target}]"
    c = f"q[{gate.control}]"
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"{gate.gate.value} {t};"]
        case GateType.CNOT:
            return [f"cx {c},{t};"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"{gate.gate.value}({gate.parameter!r}) {t};"]
        case GateType.CPHASE:
            return [f"cp({gate.parameter!r}) {c},{t};"]
        case GateType.MEASURE:
            return [f"measure {t} -> c[{gate.target}];"]


def emit_qasm(circuit: QPUCircuit, name: str) -> str:
    lines = [
        "OPENQASM 2.0;",
        'include "qelib1.inc";',
        f"// {name}",
        f"qreg q[{circuit.num_qubits}];",
        f"creg c[{circuit.num_qubits}];",
        "",
        *_render_gates(circuit, _qasm_gate),
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Qiskit
# =============================================================================


def _qiskit_gate(gate: QuantumGate) -> list[str]:
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"qc.{gate.gate.value}({gate.target})"]
        case GateType.CNOT:
            return [f"qc.cx({gate.control}, {gate.target})"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"qc.{gate.gate.value}({gate.parameter!r}, {gate.target})"]
        case GateType.CPHASE:
            return [f"qc.cp({gate.parameter!r}, {gate.control}, {gate.target})"]
        case GateType.MEASURE:
            return [f"qc.measure({gate.target}, {gate.target})"]


def emit_qiskit(circuit: QPUCircuit, name: str) -> str:
    function = f"build_{python_identifier(name)}"
    lines = [
        "from qiskit import QuantumCircuit",
        "",
        "",
        f"def {function}() -> QuantumCircuit:",
        f"    qc = QuantumCircuit({circuit.num_qubits}, {circuit.num_qubits}, name={name!r})",
        *_render_gates(circuit, _qiskit_gate, indent="    "),
        "    return qc",
        "",
        "",
        f"{python_identifier(name)} = {function}()",
        "",
        'if __name__ == "__main__":',
        f"    print({python_identifier(name)}.draw())",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Cirq and TensorFlow Quantum
# =============================================================================


def _cirq_gate(gate: QuantumGate) -> list[str]:
    t = f"qubits[{gate.target}]"
    c = f"qubits[{gate.control}]"
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            op = f"cirq.{gate.gate.name}({t})"
        case GateType.CNOT:
            op = f"cirq.CNOT({c}, {t})"
        case GateType.RZ | GateType.RY | GateType.RX:
            op = f"cirq.{gate.gate.value}({gate.parameter!r}).on({t})"
        case GateType.CPHASE:
            op = f"cirq.CZPowGate(exponent={gate.parameter!r} / math.pi).on({c}, {t})"
        case GateType.MEASURE:
            op = f'cirq.measure({t}, key="c{gate.target}")'
    return [f"circuit.append({op})"]


def _tfq_gate(gate: QuantumGate) -> list[str]:
    # Measurements become Z readouts; TFQ circuits cannot contain them.
    if gate.gate is GateType.MEASURE:
        return []
    return _cirq_gate(gate)


def emit_cirq(circuit: QPUCircuit, name: str) -> str:
    identifier = python_identifier(name)
    lines = [
        "import math",
        "",
        "import cirq",
        "",
        "",
        f"def build_{identifier}() -> cirq.Circuit:",
        f"    qubits = cirq.LineQubit.range({circuit.num_qubits})",
        "    circuit = cirq.Circuit()",
        *_render_gates(circuit, _cirq_gate, indent="    "),
        "    return circuit",
        "",
        "",
        f"{identifier} = build_{identifier}()",
        "",
        'if __name__ == "__main__":',
        f"    print({identifier})",
    ]
    return "\n".join(lines) + "\n"


def emit_tfq(circuit: QPUCircuit, name: str) -> str:
    identifier = python_identifier(name)
    measured = ", ".join(f"cirq.Z(qubits[{q}])" for q in circuit.measured_qubits)
    lines = [
        "import math",
        "",
        "import cirq",
        "import tensorflow_quantum as tfq",
        "",
        f"qubits = cirq.GridQubit.rect(1, {circuit.num_qubits})",
        "",
        "",
        f"def build_{identifier}() -> cirq.Circuit:",
        "    circuit = cirq.Circuit()",
        *_render_gates(circuit, _tfq_gate, indent="    "),
        "    return circuit",
        "",
        "",
        f"{identifier} = build_{identifier}()",
        f"readout_operators = [{measured}]",
        f"{identifier}_tensor = tfq.convert_to_tensor([{identifier}])",
        "",
        'if __name__ == "__main__":',
        f"    expectation = tfq.layers.Expectation()({identifier}_tensor, operators=readout_operators)",
        "    print(expectation)",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# PennyLane
# =============================================================================

_PENNYLANE_OPS = {
    GateType.H: "Hadamard",
    GateType.X: "PauliX",
    GateType.Y: "PauliY",
    GateType.Z: "PauliZ",
}


def _pennylane_gate(gate: QuantumGate) -> list[str]:
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"qml.{_PENNYLANE_OPS[gate.gate]}(wires={gate.target})"]
        case GateType.CNOT:
            return [f"qml.CNOT(wires=[{gate.control}, {gate.target}])"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"qml.{gate.gate.name}({gate.parameter!r}, wires={gate.target})"]
        case GateType.CPHASE:
            return [f"qml.ControlledPhaseShift({gate.parameter!r}, wires=[{gate.control}, {gate.target}])"]
        case GateType.MEASURE:
            # Terminal measurements are returned as samples.
            return []


def emit_pennylane(circuit: QPUCircuit, name: str) -> str:
    identifier = python_identifier(name)
    if circuit.measured_qubits:
        wires = ", ".join(str(q) for q in circuit.measured_qubits)
        result = f"    return qml.sample(wires=[{wires}])"
    else:
        result = "    return qml.state()"
    lines = [
        "import pennylane as qml",
        "",
        f'dev = qml.device("default.qubit", wires={circuit.num_qubits}, shots=1024)',
        "",
        "",
        "@qml.qnode(dev)",
        f"def {identifier}():",
        *_render_gates(circuit, _pennylane_gate, indent="    "),
        result,
        "",
        "",
        'if __name__ == "__main__":',
        f"    print({identifier}())",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Q#
# =============================================================================


def _qsharp_gate(gate: QuantumGate) -> list[str]:
    t = f"qs[{gate.target}]"
    c = f"qs[{gate.control}]"
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"{gate.gate.name}({t});"]
        case GateType.CNOT:
            return [f"CNOT({c}, {t});"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"{gate.gate.name.capitalize()}({gate.parameter!r}, {t});"]
        case GateType.CPHASE:
            return [f"Controlled R1([{c}], ({gate.parameter!r}, {t}));"]
        case GateType.MEASURE:
            return [f"set results += [M({t})];"]


def emit_qsharp(circuit: QPUCircuit, name: str) -> str:
    indent = " " * 8
    lines = [
        "namespace MRFCompiler {",
        "    open Microsoft.Quantum.Intrinsic;",
        "    open Microsoft.Quantum.Canon;",
        "",
        f"    operation {pascal_identifier(name)}() : Result[] {{",
        f"{indent}use qs = Qubit[{circuit.num_qubits}];",
        f"{indent}mutable results : Result[] = [];",
        *_render_gates(circuit, _qsharp_gate, indent=indent),
        f"{indent}ResetAll(qs);",
        f"{indent}return results;",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Amazon Braket
# =============================================================================


def _braket_gate(gate: QuantumGate) -> list[str]:
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"circuit.{gate.gate.value}({gate.target})"]
        case GateType.CNOT:
            return [f"circuit.cnot({gate.control}, {gate.target})"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"circuit.{gate.gate.value}({gate.target}, {gate.parameter!r})"]
        case GateType.CPHASE:
            return [f"circuit.cphaseshift({gate.control}, {gate.target}, {gate.parameter!r})"]
        case GateType.MEASURE:
            return [f"circuit.measure({gate.target})"]


def emit_braket(circuit: QPUCircuit, name: str) -> str:
    identifier = python_identifier(name)
    lines = [
        "from braket.circuits import Circuit",
        "from braket.devices import LocalSimulator",
        "",
        "",
        f"def build_{identifier}() -> Circuit:",
        "    circuit = Circuit()",
        *_render_gates(circuit, _braket_gate, indent="    "),
        "    return circuit",
        "",
        "",
        f"{identifier} = build_{identifier}()",
        "",
        'if __name__ == "__main__":',
        f"    result = LocalSimulator().run({identifier}, shots=1024).result()",
        "    print(result.measurement_counts)",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Qulacs
# =============================================================================


def _qulacs_gate(gate: QuantumGate) -> list[str]:
    # Qulacs rotations are exp(+i * angle / 2 * P), so angles are negated.
    match gate.gate:
        case GateType.H | GateType.X | GateType.Y | GateType.Z:
            return [f"circuit.add_{gate.gate.name}_gate({gate.target})"]
        case GateType.CNOT:
            return [f"circuit.add_CNOT_gate({gate.control}, {gate.target})"]
        case GateType.RZ | GateType.RY | GateType.RX:
            return [f"circuit.add_{gate.gate.name}_gate({gate.target}, {-gate.parameter!r})"]  # type: ignore[operator]
        case GateType.CPHASE:
            half = gate.parameter / 2.0  # type: ignore[operator]
            return [
                f"circuit.add_U1_gate({gate.control}, {half!r})",
                f"circuit.add_CNOT_gate({gate.control}, {gate.target})",
                f"circuit.add_U1_gate({gate.target}, {-half!r})",
                f"circuit.add_CNOT_gate({gate.control}, {gate.target})",
                f"circuit.add_U1_gate({gate.target}, {half!r})",
            ]
        case GateType.MEASURE:
            return [f"circuit.add_gate(Measurement({gate.target}, {gate.target}))"]


def emit_qulacs(circuit: QPUCircuit, name: str) -> str:
    identifier = python_identifier(name)
    lines = [
        "from qulacs import QuantumCircuit, QuantumState",
        "from qulacs.gate import Measurement",
        "",
        "",
        f"def build_{identifier}() -> QuantumCircuit:",
        f"    circuit = QuantumCircuit({circuit.num_qubits})",
        *_render_gates(circuit, _qulacs_gate, indent="    "),
        "    return circuit",
        "",
        "",
        f"{identifier} = build_{identifier}()",
        "",
        'if __name__ == "__main__":',
        f"    state = QuantumState({circuit.num_qubits})",
        f"    {identifier}.update_quantum_state(state)",
        f"    print([state.get_classical_value(i) for i in range({circuit.num_qubits})])",
    ]
    return "\n".join(lines) + "\n"
