from ._emitters import pascal_identifier, python_identifier
from ._framework import EMITTERS, Emitter, Framework, default_filename, emit_circuit

__all__ = [
    "EMITTERS",
    "Emitter",
    "Framework",
    "default_filename",
    "emit_circuit",
    "pascal_identifier",
    "python_identifier",
]
