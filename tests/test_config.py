"""Tests for the configuration module."""

from pathlib import Path

import pytest

from qmrf import ConfigError, Framework
from qmrf._cli.config import QmrfConfig, find_pyproject_toml, load_config


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")
        subdir = tmp_path / "models" / "bn"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject


class TestLoadConfig:
    """Tests for reading the [tool.qmrf] table."""

    def test_full_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.qmrf]
input = "models/sprinkler.toml"
output = "/abs/out.py"
framework = "Qiskit"
circuit-name = "sprinkler"
""",
        )

        config = load_config(pyproject)

        assert config.input == tmp_path / "models" / "sprinkler.toml"
        assert config.output == Path("/abs/out.py")
        assert config.framework is Framework.QISKIT
        assert config.circuit_name == "sprinkler"
        assert config.project_root == tmp_path

    def test_missing_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert load_config(pyproject) == QmrfConfig(project_root=tmp_path)

    def test_unknown_framework(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.qmrf]\nframework = "quil"\n')

        with pytest.raises(ConfigError, match="framework"):
            load_config(pyproject)

    def test_non_string_input(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.qmrf]\ninput = 3\n")

        with pytest.raises(ConfigError, match="expected string path"):
            load_config(pyproject)

    def test_empty_circuit_name(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.qmrf]\ncircuit-name = " "\n')

        with pytest.raises(ConfigError, match="circuit-name"):
            load_config(pyproject)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.qmrf\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)
