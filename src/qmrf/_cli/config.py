"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from qmrf._errors import ConfigError
from qmrf._export import Framework


@dataclass(slots=True, frozen=True)
class QmrfConfig:
    """Configuration loaded from the ``[tool.qmrf]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    output: Path | None = None
    framework: Framework | None = None
    circuit_name: str | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.qmrf].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def _parse_framework(section: dict[str, object]) -> Framework | None:
    if "framework" not in section:
        return None
    value = section["framework"]
    if not isinstance(value, str):
        msg = "Invalid [tool.qmrf].framework: expected string"
        raise ConfigError(msg)
    try:
        return Framework.parse(value)
    except ValueError as e:
        msg = f"Invalid [tool.qmrf].framework: {e}"
        raise ConfigError(msg) from e


def load_config(pyproject_path: Path) -> QmrfConfig:
    """Load and validate [tool.qmrf] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed QmrfConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("qmrf", {})
    if not section:
        return QmrfConfig(project_root=project_root)

    circuit_name: str | None = None
    if "circuit-name" in section:
        value = section["circuit-name"]
        if not isinstance(value, str) or not value.strip():
            msg = "Invalid [tool.qmrf].circuit-name: expected non-empty string"
            raise ConfigError(msg)
        circuit_name = value

    return QmrfConfig(
        input=_parse_path(section, "input", project_root),
        output=_parse_path(section, "output", project_root),
        framework=_parse_framework(section),
        circuit_name=circuit_name,
        project_root=project_root,
    )


def get_config() -> QmrfConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        QmrfConfig (may be empty if no pyproject.toml or no [tool.qmrf] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return QmrfConfig()
    return load_config(pyproject_path)
