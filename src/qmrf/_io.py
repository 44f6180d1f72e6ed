"""TOML input of graphical models and TOML export of the circuit IR."""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING, Any, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ._circuit import GateType, QPUCircuit, QuantumGate
from ._graph import GraphModel, GraphType
from ._parser import parse_model_file

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)


# =============================================================================
# Model input
# =============================================================================


class CptRowInput(BaseModel):
    """One row of a conditional probability table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    parents: list[int] = Field(default_factory=list)
    probabilities: list[float]


class NodeInput(BaseModel):
    """A node declaration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int
    name: str
    states: int = Field(default=2, ge=1)
    potential: list[float] | None = None
    cpt: list[CptRowInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_lengths(self) -> Self:
        if self.potential is not None and len(self.potential) != self.states:
            msg = f"node {self.id}: potential has {len(self.potential)} entries for {self.states} states"
            raise ValueError(msg)
        for row in self.cpt:
            if len(row.probabilities) != self.states:
                msg = (
                    f"node {self.id}: CPT row {row.parents} has {len(row.probabilities)}"
                    f" probabilities for {self.states} states"
                )
                raise ValueError(msg)
        return self


class EdgeInput(BaseModel):
    """An edge declaration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: int
    target: int
    directed: bool = False
    potential: list[list[float]] | None = None


class ModelInput(BaseModel):
    """A complete graphical model as read from TOML.

    Example:
        type = "directed"

        [[nodes]]
        id = 0
        name = "Rain"
        cpt = [{ parents = [], probabilities = [0.8, 0.2] }]

        [[edges]]
        source = 0
        target = 1
        directed = true

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: GraphType = GraphType.UNDIRECTED
    nodes: list[NodeInput] = Field(default_factory=list)
    edges: list[EdgeInput] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return GraphType.parse(value)
        return value

    @model_validator(mode="after")
    def _check_references(self) -> Self:
        ids = [node.id for node in self.nodes]
        if len(set(ids)) != len(ids):
            msg = f"duplicate node ids in {ids}"
            raise ValueError(msg)
        known = set(ids)
        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in known:
                    msg = f"edge ({edge.source}, {edge.target}) references unknown node id {endpoint}"
                    raise ValueError(msg)
        return self

    def to_graph_model(self) -> GraphModel:
        """Build the GraphModel described by this input.

        Raises:
            GraphStructureError: If a potential matrix has the wrong shape.

        """
        model = GraphModel(self.type)
        for node in self.nodes:
            model.add_node(node.id, node.name, node.states)
            if node.potential is not None:
                model.set_node_potential(node.id, node.potential)
            if node.cpt:
                model.set_cpt(node.id, {tuple(row.parents): row.probabilities for row in node.cpt})
        for edge in self.edges:
            model.add_edge(edge.source, edge.target, directed=edge.directed, potential=edge.potential)
        return model


def model_from_data(data: Mapping[str, Any]) -> GraphModel:
    """Validate a parsed TOML document and build the model.

    Raises:
        pydantic.ValidationError: If the document does not match the schema.
        GraphStructureError: If the model is structurally invalid.

    """
    return ModelInput.model_validate(data).to_graph_model()


def load_model_from_toml(path: Path) -> GraphModel:
    """Load a graphical model from a TOML file."""
    logger.debug(f"Loading model from {path}")
    with path.open("rb") as f:
        data = tomllib.load(f)
    return model_from_data(data)


def load_model(path: Path) -> GraphModel:
    """Load a model, choosing the format by file suffix.

    ``.toml`` files are read as TOML, anything else as the line-oriented
    model description format.
    """
    if path.suffix.lower() == ".toml":
        return load_model_from_toml(path)
    return parse_model_file(path)


# =============================================================================
# Circuit IR
# =============================================================================


class GateRecord(BaseModel):
    """One gate of a stored circuit."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gate: GateType
    target: int
    control: int | None = None
    parameter: float | None = None


class CircuitRecord(BaseModel):
    """A stored circuit IR."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "mrf_circuit"
    num_qubits: int = Field(ge=0)
    measured_qubits: list[int] = Field(default_factory=list)
    gates: list[GateRecord] = Field(default_factory=list)

    def to_circuit(self) -> QPUCircuit:
        return QPUCircuit(
            num_qubits=self.num_qubits,
            gates=tuple(
                QuantumGate(gate=g.gate, target=g.target, control=g.control, parameter=g.parameter)
                for g in self.gates
            ),
            measured_qubits=tuple(self.measured_qubits),
        )


def circuit_to_data(circuit: QPUCircuit, name: str = "mrf_circuit") -> dict[str, Any]:
    """Convert a circuit into a TOML-compatible dictionary.

    Absent controls and parameters are left out, as TOML has no null.
    """
    gates: list[dict[str, Any]] = []
    for gate in circuit.gates:
        record: dict[str, Any] = {"gate": gate.gate.value, "target": gate.target}
        if gate.control is not None:
            record["control"] = gate.control
        if gate.parameter is not None:
            record["parameter"] = gate.parameter
        gates.append(record)
    return {
        "name": name,
        "num_qubits": circuit.num_qubits,
        "measured_qubits": list(circuit.measured_qubits),
        "gates": gates,
    }


def export_circuit_to_toml(circuit: QPUCircuit, path: Path, name: str = "mrf_circuit") -> None:
    """Write a circuit IR to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(circuit_to_data(circuit, name), f)
    logger.debug(f"Wrote circuit IR ({len(circuit)} gates) to {path}")


def load_circuit_from_toml(path: Path) -> QPUCircuit:
    """Read a circuit IR written by ``export_circuit_to_toml``."""
    with path.open("rb") as f:
        data = tomllib.load(f)
    return CircuitRecord.model_validate(data).to_circuit()
