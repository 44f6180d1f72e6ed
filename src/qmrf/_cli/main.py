import logging
import tomllib
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from qmrf._compile import CompilationResult, compile_model
from qmrf._errors import QmrfError
from qmrf._export import EMITTERS, Framework, default_filename, emit_circuit
from qmrf._graph import GraphModel
from qmrf._io import export_circuit_to_toml, load_model
from qmrf._parser import example_model

from .config import QmrfConfig, get_config
from .render import render_clique_table, render_framework_table, render_gate_table, render_graph_tables

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

DEFAULT_CIRCUIT_NAME = "mrf_circuit"


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Compile Bayesian networks and Markov random fields into quantum circuits."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_input(input_path: Path | None) -> GraphModel:
    if input_path is None:
        logger.warning("No input model given, using the built-in example (A - B - C chain)")
        return example_model()
    err_console.print(f"[cyan]Loading model from:[/cyan] {input_path}")
    try:
        return load_model(input_path)
    except OSError as e:
        msg = f"Cannot read {input_path}: {e.strerror or e}"
        raise _fail(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {input_path}: {e}"
        raise _fail(msg) from e
    except ValidationError as e:
        msg = f"Invalid model in {input_path}:\n{e}"
        raise _fail(msg) from e
    except QmrfError as e:
        raise _fail(str(e)) from e


def _compile(model: GraphModel) -> CompilationResult:
    try:
        return compile_model(model)
    except QmrfError as e:
        raise _fail(str(e)) from e


def _load_config() -> QmrfConfig:
    try:
        return get_config()
    except QmrfError as e:
        raise _fail(str(e)) from e


def _resolve_framework(value: str | None, config: QmrfConfig) -> Framework:
    if value is None:
        return config.framework or Framework.QASM
    try:
        return Framework.parse(value)
    except ValueError as e:
        raise _fail(str(e)) from e


@app.command(name="compile")
def compile_command(  # noqa: PLR0913
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Argument(help="Model file (.toml or line-oriented text). Defaults to the built-in example."),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Output file, or output directory with --all"),
    ] = None,
    framework: Annotated[
        str | None,
        typer.Option("-f", "--framework", help="Target framework (see `qmrf frameworks`)"),
    ] = None,
    all_frameworks: Annotated[
        bool,
        typer.Option("--all", help="Emit the circuit for every supported framework"),
    ] = False,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Circuit name used in the emitted programs"),
    ] = None,
    ir: Annotated[
        Path | None,
        typer.Option("--ir", help="Also write the circuit IR as TOML to this path"),
    ] = None,
) -> None:
    """Compile a graphical model and emit the circuit for a quantum framework."""
    config = _load_config()
    input = input or config.input  # noqa: A001
    output = output or config.output
    circuit_name = name or config.circuit_name or DEFAULT_CIRCUIT_NAME
    target = _resolve_framework(framework, config)

    model = _load_input(input)
    err_console.print("[cyan]Compiling model...[/cyan]")
    result = _compile(model)
    circuit = result.circuit
    err_console.print(
        f"[green]✓[/green] {len(result.mrf.cliques)} cliques, {circuit.num_qubits} qubits, {len(circuit)} gates",
    )

    if ir is not None:
        export_circuit_to_toml(circuit, ir, circuit_name)
        err_console.print(f"[cyan]Wrote circuit IR to:[/cyan] {ir}")

    if all_frameworks:
        directory = output or Path.cwd()
        directory.mkdir(parents=True, exist_ok=True)
        for fw in Framework:
            path = directory / default_filename(fw)
            path.write_text(emit_circuit(circuit, fw, circuit_name))
            err_console.print(f"[cyan]Wrote {EMITTERS[fw].display_name}:[/cyan] {path}")
        err_console.print("[green]✓ Compilation complete[/green]")
        return

    source = emit_circuit(circuit, target, circuit_name)
    if output is None:
        typer.echo(source, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source)
    err_console.print(f"[cyan]Wrote {EMITTERS[target].display_name}:[/cyan] {output}")
    err_console.print("[green]✓ Compilation complete[/green]")


@app.command()
def inspect(
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Argument(help="Model file (.toml or line-oriented text). Defaults to the built-in example."),
    ] = None,
) -> None:
    """Show the graph, the MRF clique cover and the gate sequence for a model."""
    config = _load_config()
    model = _load_input(input or config.input)
    result = _compile(model)

    out_console.print(Panel("[bold]Graphical model[/bold]", border_style="cyan"))
    render_graph_tables(result.model, out_console)
    out_console.print()
    out_console.print(Panel("[bold]Markov random field[/bold]", border_style="cyan"))
    render_clique_table(result.mrf, out_console)
    out_console.print()
    out_console.print(Panel("[bold]QPU circuit[/bold]", border_style="cyan"))
    render_gate_table(result.circuit, out_console)


@app.command()
def frameworks() -> None:
    """List the frameworks circuits can be exported to."""
    render_framework_table(out_console)


def main() -> None:
    app()
