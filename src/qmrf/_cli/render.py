"""Rich rendering utilities for the inspect and frameworks commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from qmrf._export import EMITTERS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from qmrf._circuit import QPUCircuit
    from qmrf._graph import GraphModel
    from qmrf._mrf import MRFModel


def _format_values(values: Sequence[float], limit: int = 8) -> str:
    shown = ", ".join(f"{value:g}" for value in values[:limit])
    if len(values) > limit:
        shown += f", ... ({len(values)} total)"
    return f"[{shown}]"


def render_graph_tables(model: GraphModel, console: Console) -> None:
    """Render the nodes and edges of a graphical model.

    Args:
        model: The model to render.
        console: Rich Console to output to.

    """
    console.print(f"[bold]Graph:[/bold] {model.graph_type.value}, {len(model)} nodes, {len(model.edges)} edges")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("States", justify="right")
    table.add_column("Potential")
    table.add_column("CPT rows", justify="right")

    for node in model:
        table.add_row(
            str(node.id),
            node.name,
            str(node.num_states),
            _format_values(node.potential),
            str(len(node.cpt)) if node.cpt is not None else "[dim]-[/dim]",
        )
    console.print(table)

    if not model.edges:
        console.print("[dim]No edges[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Edge")
    table.add_column("Kind")
    table.add_column("Potential")
    for edge in model.edges:
        arrow = "->" if edge.directed else "--"
        potential = (
            _format_values([value for row in edge.potential for value in row])
            if edge.potential is not None
            else "[dim]uniform[/dim]"
        )
        table.add_row(
            f"{edge.source} {arrow} {edge.target}",
            "directed" if edge.directed else "undirected",
            potential,
        )
    console.print(table)


def render_clique_table(mrf: MRFModel, console: Console) -> None:
    """Render the clique cover of an MRF with its potential tables.

    Args:
        mrf: The Markov random field to render.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Members")
    table.add_column("Size", justify="right")
    table.add_column("Potential")

    for index, clique in enumerate(mrf.cliques):
        names = ", ".join(mrf.get_node(member).name for member in clique.nodes)
        table.add_row(str(index), names, str(len(clique)), _format_values(clique.potential))

    console.print(table)
    console.print(f"\n[dim]Total: {len(mrf.cliques)} cliques, {mrf.total_states()} joint states[/dim]")


def render_gate_table(circuit: QPUCircuit, console: Console) -> None:
    """Render the gate sequence of a circuit.

    Args:
        circuit: The circuit to render.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Gate", style="bold")
    table.add_column("Target", justify="right")
    table.add_column("Control", justify="right")
    table.add_column("Parameter", justify="right")

    for index, gate in enumerate(circuit.gates):
        table.add_row(
            str(index),
            gate.gate.name,
            str(gate.target),
            str(gate.control) if gate.control is not None else "",
            f"{gate.parameter:.6f}" if gate.parameter is not None else "",
        )

    console.print(table)
    counts = ", ".join(f"{gate.name}: {count}" for gate, count in circuit.gate_counts().items())
    console.print(f"\n[dim]Total: {circuit.num_qubits} qubits, {len(circuit)} gates ({counts})[/dim]")


def render_framework_table(console: Console) -> None:
    """Render the supported export frameworks.

    Args:
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="bold")
    table.add_column("Framework")
    table.add_column("Extension")
    table.add_column("Description", style="dim")

    for framework, emitter in EMITTERS.items():
        table.add_row(framework.value, emitter.display_name, emitter.file_extension, framework.__doc__ or "")

    console.print(table)
