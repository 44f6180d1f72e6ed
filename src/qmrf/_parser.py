"""Parser for the line-oriented model description format.

Each non-blank line is one command; ``#`` starts a comment. Keywords are
case-insensitive::

    TYPE directed|undirected
    NODE <id> <name> [<states>]
    EDGE <from> <to> [directed|undirected]
    POTENTIAL <id> <v0> <v1> ...
    EDGE_POTENTIAL <from> <to> <v00> <v01> ... (row-major)
    CPT <id> [<parent states> ...] : <p0> <p1> ...

Nodes default to two states and edges to undirected. CPT lines accumulate
one row each into the node's table; parent states are listed in the order
the node's parent edges are declared.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._errors import GraphStructureError, ModelParseError
from ._graph import GraphModel, GraphType

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def _parse_int(token: str, line_number: int, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        msg = f"expected an integer {what}, got '{token}'"
        raise ModelParseError(line_number, msg) from None


def _parse_floats(tokens: list[str], line_number: int) -> list[float]:
    try:
        return [float(token) for token in tokens]
    except ValueError:
        msg = f"expected numbers, got '{' '.join(tokens)}'"
        raise ModelParseError(line_number, msg) from None


def _require(args: list[str], count: int, line_number: int, usage: str) -> None:
    if len(args) < count:
        msg = f"too few arguments, usage: {usage}"
        raise ModelParseError(line_number, msg)


class _ModelParser:
    def __init__(self) -> None:
        self.model = GraphModel(GraphType.UNDIRECTED)
        self.cpts: dict[int, dict[tuple[int, ...], list[float]]] = {}

    def feed(self, line: str, line_number: int) -> None:
        content = line.split("#", 1)[0].strip()
        if not content:
            return
        command, *args = content.split()
        match command.upper():
            case "TYPE":
                _require(args, 1, line_number, "TYPE directed|undirected")
                try:
                    self.model.set_graph_type(GraphType.parse(args[0]))
                except ValueError as e:
                    raise ModelParseError(line_number, str(e)) from None
            case "NODE":
                _require(args, 2, line_number, "NODE <id> <name> [<states>]")
                node_id = _parse_int(args[0], line_number, "node id")
                num_states = _parse_int(args[2], line_number, "state count") if len(args) > 2 else 2  # noqa: PLR2004
                self.model.add_node(node_id, args[1], num_states)
            case "EDGE":
                _require(args, 2, line_number, "EDGE <from> <to> [directed|undirected]")
                source = _parse_int(args[0], line_number, "node id")
                target = _parse_int(args[1], line_number, "node id")
                direction = GraphType.parse(args[2]) if len(args) > 2 else GraphType.UNDIRECTED  # noqa: PLR2004
                self.model.add_edge(source, target, directed=direction is GraphType.DIRECTED)
            case "POTENTIAL":
                _require(args, 2, line_number, "POTENTIAL <id> <v0> <v1> ...")
                node_id = _parse_int(args[0], line_number, "node id")
                self.model.set_node_potential(node_id, _parse_floats(args[1:], line_number))
            case "EDGE_POTENTIAL":
                _require(args, 3, line_number, "EDGE_POTENTIAL <from> <to> <v00> <v01> ...")
                self._edge_potential(args, line_number)
            case "CPT":
                args = " ".join(args).replace(":", " : ").split()
                _require(args, 2, line_number, "CPT <id> [<parent states> ...] : <p0> <p1> ...")
                self._cpt_row(args, line_number)
            case _:
                msg = f"unknown command '{command}'"
                raise ModelParseError(line_number, msg)

    def _edge_potential(self, args: list[str], line_number: int) -> None:
        source = _parse_int(args[0], line_number, "node id")
        target = _parse_int(args[1], line_number, "node id")
        values = _parse_floats(args[2:], line_number)
        columns = self.model.get_node(target).num_states
        rows = [values[i : i + columns] for i in range(0, len(values), columns)]
        self.model.set_edge_potential(source, target, rows)

    def _cpt_row(self, args: list[str], line_number: int) -> None:
        if ":" not in args:
            msg = "CPT row needs ':' between parent states and probabilities"
            raise ModelParseError(line_number, msg)
        separator = args.index(":")
        node_id = _parse_int(args[0], line_number, "node id")
        parent_states = tuple(_parse_int(token, line_number, "parent state") for token in args[1:separator])
        probabilities = _parse_floats(args[separator + 1 :], line_number)

        if not self.model.has_node(node_id):
            logger.warning(f"line {line_number}: ignoring CPT row for unknown node {node_id}")
            return
        num_states = self.model.get_node(node_id).num_states
        if len(probabilities) != num_states:
            logger.warning(
                f"line {line_number}: ignoring CPT row for node {node_id}:"
                f" {len(probabilities)} probabilities for {num_states} states",
            )
            return
        self.cpts.setdefault(node_id, {})[parent_states] = probabilities

    def finish(self) -> GraphModel:
        for node_id, table in self.cpts.items():
            self.model.set_cpt(node_id, table)
        return self.model


def parse_model(text: str) -> GraphModel:
    """Parse a model description.

    Args:
        text: The description, one command per line.

    Returns:
        The parsed model.

    Raises:
        ModelParseError: On a syntax error or a structural error, with the
            line number where it occurred.

    """
    parser = _ModelParser()
    for line_number, line in enumerate(text.splitlines(), start=1):
        try:
            parser.feed(line, line_number)
        except GraphStructureError as e:
            raise ModelParseError(line_number, str(e)) from e
        except ModelParseError:
            raise
        except ValueError as e:
            raise ModelParseError(line_number, str(e)) from e
    return parser.finish()


def parse_model_file(path: Path) -> GraphModel:
    """Parse a model description file."""
    logger.debug(f"Parsing model description {path}")
    return parse_model(path.read_text(encoding="utf-8"))


def example_model() -> GraphModel:
    """The built-in three-node chain A - B - C.

    Used by the command line front end when no input file is given.
    """
    model = GraphModel(GraphType.UNDIRECTED)
    model.add_node(0, "A", 2)
    model.add_node(1, "B", 2)
    model.add_node(2, "C", 2)
    model.add_edge(0, 1, directed=False)
    model.add_edge(1, 2, directed=False)

    model.set_node_potential(0, [1.0, 1.5])
    model.set_node_potential(1, [1.0, 1.2])
    model.set_node_potential(2, [1.0, 1.3])

    model.set_edge_potential(0, 1, [[2.0, 0.5], [0.5, 2.0]])
    model.set_edge_potential(1, 2, [[1.5, 0.8], [0.8, 1.5]])
    return model
