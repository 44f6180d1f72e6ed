"""Tests for the qmrf command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from qmrf import Framework, load_circuit_from_toml
from qmrf._cli.main import app

runner = CliRunner()

CHAIN = """\
NODE 0 A
NODE 1 B
EDGE 0 1
POTENTIAL 0 1.0 2.0
EDGE_POTENTIAL 0 1 2.0 0.5 0.5 2.0
"""


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command away from the repository's pyproject.toml."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def chain_file(tmp_path: Path) -> Path:
    path = tmp_path / "chain.txt"
    path.write_text(CHAIN)
    return path


class TestCompile:
    def test_defaults_to_example_and_qasm(self) -> None:
        result = runner.invoke(app, ["compile"])
        assert result.exit_code == 0, result.output
        assert "OPENQASM 2.0;" in result.output
        assert "qreg q[3];" in result.output

    def test_framework_option(self, chain_file: Path) -> None:
        result = runner.invoke(app, ["compile", str(chain_file), "-f", "cirq"])
        assert result.exit_code == 0, result.output
        assert "import cirq" in result.output

    def test_write_to_file(self, chain_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "out" / "chain.py"
        result = runner.invoke(app, ["compile", str(chain_file), "-f", "qiskit", "-o", str(output), "--name", "chain"])
        assert result.exit_code == 0, result.output
        source = output.read_text()
        assert "from qiskit import QuantumCircuit" in source
        assert "chain = build_chain()" in source

    def test_all_frameworks(self, chain_file: Path, tmp_path: Path) -> None:
        outdir = tmp_path / "generated"
        result = runner.invoke(app, ["compile", str(chain_file), "--all", "-o", str(outdir)])
        assert result.exit_code == 0, result.output
        assert sorted(path.name for path in outdir.iterdir()) == [
            "output_braket.py",
            "output_cirq.py",
            "output_pennylane.py",
            "output_qasm.qasm",
            "output_qiskit.py",
            "output_qsharp.qs",
            "output_qulacs.py",
            "output_tfq.py",
        ]

    def test_ir_output(self, chain_file: Path, tmp_path: Path) -> None:
        ir = tmp_path / "chain.toml"
        result = runner.invoke(app, ["compile", str(chain_file), "--ir", str(ir)])
        assert result.exit_code == 0, result.output
        circuit = load_circuit_from_toml(ir)
        assert circuit.num_qubits == 2
        assert circuit.measured_qubits == (0, 1)

    def test_unencodable_potential_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("NODE 0 A\nPOTENTIAL 0 0.0 1.0\n")
        result = runner.invoke(app, ["compile", str(path)])
        assert result.exit_code == 1
        assert "Cannot encode clique" in result.output

    def test_parse_error_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("NODE 0 A\nBOGUS\n")
        result = runner.invoke(app, ["compile", str(path)])
        assert result.exit_code == 1
        assert "unknown command" in result.output

    def test_missing_file_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["compile", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_unknown_framework_fails(self) -> None:
        result = runner.invoke(app, ["compile", "-f", "quil"])
        assert result.exit_code == 1
        assert "Unknown Framework" in result.output

    def test_uses_project_config(self, isolated_cwd: Path, chain_file: Path) -> None:
        (isolated_cwd / "pyproject.toml").write_text(
            f'[tool.qmrf]\ninput = "{chain_file.as_posix()}"\nframework = "{Framework.PENNYLANE}"\n',
        )
        result = runner.invoke(app, ["compile"])
        assert result.exit_code == 0, result.output
        assert "import pennylane as qml" in result.output
        assert "wires=2" in result.output


class TestInspect:
    def test_sections(self, chain_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(chain_file)])
        assert result.exit_code == 0, result.output
        assert "Graphical model" in result.output
        assert "Markov random field" in result.output
        assert "QPU circuit" in result.output
        assert "CNOT" in result.output

    def test_directed_model(self, tmp_path: Path) -> None:
        path = tmp_path / "bn.txt"
        path.write_text("TYPE directed\nNODE 0 Rain\nNODE 1 Wet\nEDGE 0 1 directed\nCPT 1 0 : 0.9 0.1\nCPT 1 1 : 0.2 0.8\n")
        result = runner.invoke(app, ["inspect", str(path)])
        assert result.exit_code == 0, result.output
        assert "Rain" in result.output


def test_frameworks_command() -> None:
    result = runner.invoke(app, ["frameworks"])
    assert result.exit_code == 0, result.output
    for framework in Framework:
        assert framework.value in result.output
