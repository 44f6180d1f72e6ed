"""Target framework registry for circuit export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from qmrf._doc_enum import StrEnumWithDoc

from ._emitters import (
    emit_braket,
    emit_cirq,
    emit_pennylane,
    emit_qasm,
    emit_qiskit,
    emit_qsharp,
    emit_qulacs,
    emit_tfq,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from qmrf._circuit import QPUCircuit

logger = logging.getLogger(__name__)


class Framework(StrEnumWithDoc):
    """Quantum programming frameworks a circuit can be exported to."""

    QASM = "qasm", "OpenQASM 2.0 source."
    QISKIT = "qiskit", "IBM Qiskit Python program."
    CIRQ = "cirq", "Google Cirq Python program."
    PENNYLANE = "pennylane", "Xanadu PennyLane QNode."
    QSHARP = "qsharp", "Microsoft Q# operation."
    BRAKET = "braket", "Amazon Braket Python program."
    QULACS = "qulacs", "Qulacs Python program."
    TFQ = "tfq", "TensorFlow Quantum Python program."


@dataclass(frozen=True, slots=True)
class Emitter:
    """How to render a circuit for one framework.

    Attributes:
        display_name: Human readable framework name.
        file_extension: Extension for emitted files, including the dot.
        emit: Function taking a circuit and a circuit name, returning source.

    """

    display_name: str
    file_extension: str
    emit: Callable[[QPUCircuit, str], str]


EMITTERS: Mapping[Framework, Emitter] = MappingProxyType(
    {
        Framework.QASM: Emitter("OpenQASM 2.0", ".qasm", emit_qasm),
        Framework.QISKIT: Emitter("Qiskit", ".py", emit_qiskit),
        Framework.CIRQ: Emitter("Cirq", ".py", emit_cirq),
        Framework.PENNYLANE: Emitter("PennyLane", ".py", emit_pennylane),
        Framework.QSHARP: Emitter("Q#", ".qs", emit_qsharp),
        Framework.BRAKET: Emitter("Amazon Braket", ".py", emit_braket),
        Framework.QULACS: Emitter("Qulacs", ".py", emit_qulacs),
        Framework.TFQ: Emitter("TensorFlow Quantum", ".py", emit_tfq),
    },
)


def emit_circuit(circuit: QPUCircuit, framework: Framework | str, name: str = "mrf_circuit") -> str:
    """Render a circuit as source code for a framework.

    Args:
        circuit: The compiled circuit.
        framework: Target framework, as an enum member or its tag.
        name: Circuit name used for identifiers in the emitted program.

    Returns:
        The program text, ending with a newline.

    Raises:
        ValueError: If the framework tag is unknown.

    """
    target = framework if isinstance(framework, Framework) else Framework.parse(framework)
    emitter = EMITTERS[target]
    logger.debug(f"Emitting {len(circuit)} gates for {emitter.display_name}")
    return emitter.emit(circuit, name)


def default_filename(framework: Framework, stem: str = "output") -> str:
    """File name for an emitted program, e.g. ``output_qiskit.py``."""
    return f"{stem}_{framework.value}{EMITTERS[framework].file_extension}"
