"""Tests for TOML model input and circuit IR export."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from qmrf import (
    GateType,
    GraphType,
    compile_model,
    example_model,
    export_circuit_to_toml,
    load_circuit_from_toml,
    load_model,
    load_model_from_toml,
)
from qmrf._io import circuit_to_data, model_from_data

SPRINKLER_TOML = """\
type = "Directed"

[[nodes]]
id = 0
name = "Rain"
cpt = [{ probabilities = [0.8, 0.2] }]

[[nodes]]
id = 1
name = "Sprinkler"
cpt = [{ parents = [], probabilities = [0.6, 0.4] }]

[[nodes]]
id = 2
name = "WetGrass"
cpt = [
    { parents = [0, 0], probabilities = [0.99, 0.01] },
    { parents = [0, 1], probabilities = [0.1, 0.9] },
    { parents = [1, 0], probabilities = [0.2, 0.8] },
    { parents = [1, 1], probabilities = [0.01, 0.99] },
]

[[edges]]
source = 0
target = 2
directed = true

[[edges]]
source = 1
target = 2
directed = true
"""


class TestModelInput:
    def test_load_sprinkler(self, tmp_path: Path) -> None:
        path = tmp_path / "sprinkler.toml"
        path.write_text(SPRINKLER_TOML)

        model = load_model_from_toml(path)

        assert model.graph_type is GraphType.DIRECTED
        assert model.parents(2) == (0, 1)
        cpt = model.get_node(2).cpt
        assert cpt is not None
        assert cpt[(0, 1)] == (0.1, 0.9)

    def test_load_model_dispatches_on_suffix(self, tmp_path: Path) -> None:
        toml_path = tmp_path / "model.toml"
        toml_path.write_text(SPRINKLER_TOML)
        text_path = tmp_path / "model.txt"
        text_path.write_text("NODE 0 A\n")

        assert len(load_model(toml_path)) == 3
        assert len(load_model(text_path)) == 1

    def test_potentials(self) -> None:
        model = model_from_data(
            {
                "nodes": [
                    {"id": 0, "name": "A", "potential": [1.0, 1.5]},
                    {"id": 1, "name": "B", "states": 3},
                ],
                "edges": [{"source": 0, "target": 1, "potential": [[1, 2, 3], [4, 5, 6]]}],
            },
        )
        assert model.graph_type is GraphType.UNDIRECTED
        assert model.get_node(0).potential == (1.0, 1.5)
        assert model.get_node(1).potential == (1.0, 1.0, 1.0)
        assert model.edges[0].potential == ((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
        assert not model.edges[0].directed

    def test_unknown_edge_endpoint(self) -> None:
        with pytest.raises(ValidationError, match="unknown node id 3"):
            model_from_data({"nodes": [{"id": 0, "name": "A"}], "edges": [{"source": 0, "target": 3}]})

    def test_duplicate_node_ids(self) -> None:
        with pytest.raises(ValidationError, match="duplicate node ids"):
            model_from_data({"nodes": [{"id": 0, "name": "A"}, {"id": 0, "name": "B"}]})

    def test_potential_length_mismatch(self) -> None:
        with pytest.raises(ValidationError, match="potential has 3 entries for 2 states"):
            model_from_data({"nodes": [{"id": 0, "name": "A", "potential": [1, 2, 3]}]})

    def test_unknown_graph_type(self) -> None:
        with pytest.raises(ValidationError, match="Unknown GraphType"):
            model_from_data({"type": "cyclic"})

    def test_extra_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            model_from_data({"nodes": [{"id": 0, "name": "A", "colour": "red"}]})


class TestCircuitIR:
    def test_data_omits_absent_fields(self) -> None:
        data = circuit_to_data(compile_model(example_model()).circuit, name="chain")
        assert data["name"] == "chain"
        assert data["num_qubits"] == 3
        assert data["measured_qubits"] == [0, 1, 2]
        assert data["gates"][0] == {"gate": "h", "target": 0}
        assert data["gates"][4] == {"gate": "cnot", "target": 1, "control": 0}

    def test_export_and_load(self, tmp_path: Path) -> None:
        circuit = compile_model(example_model()).circuit
        path = tmp_path / "out" / "circuit.toml"

        export_circuit_to_toml(circuit, path)

        with path.open("rb") as f:
            assert tomllib.load(f)["name"] == "mrf_circuit"
        loaded = load_circuit_from_toml(path)
        assert loaded == circuit
        assert loaded.gates[3].gate is GateType.RY
