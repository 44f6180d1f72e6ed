import pytest

from qmrf import Framework, GateType, GraphType
from qmrf._doc_enum import StrEnumWithDoc


class Basis(StrEnumWithDoc):
    COMPUTATIONAL = "computational", "Z eigenbasis"
    HADAMARD = "hadamard", "X eigenbasis"
    CIRCULAR = "circular"  # No docstring provided


def test_enum_value_and_docstring() -> None:
    assert Basis.COMPUTATIONAL.value == "computational"
    assert Basis.COMPUTATIONAL.__doc__ == "Z eigenbasis"
    assert Basis.CIRCULAR.__doc__ == ""


def test_enum_is_str() -> None:
    assert isinstance(Basis.HADAMARD, str)
    assert f"{Basis.HADAMARD}" == "hadamard"


def test_enum_by_value() -> None:
    assert Basis("hadamard") is Basis.HADAMARD


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("directed", GraphType.DIRECTED),
        ("Undirected", GraphType.UNDIRECTED),
        ("  DIRECTED ", GraphType.DIRECTED),
    ],
)
def test_parse_ignores_case_and_whitespace(text: str, expected: GraphType) -> None:
    assert GraphType.parse(text) is expected


def test_parse_unknown_lists_choices() -> None:
    with pytest.raises(ValueError, match="Expected one of: qasm, qiskit"):
        Framework.parse("quil")


def test_choices_in_declaration_order() -> None:
    assert Basis.choices() == ["computational", "hadamard", "circular"]
    assert GateType.choices()[:2] == ["h", "x"]


def test_gate_type_properties() -> None:
    assert GateType.CNOT.is_controlled
    assert GateType.CPHASE.is_controlled
    assert GateType.CPHASE.is_parametric
    assert not GateType.H.is_parametric
    assert not GateType.RY.is_controlled
