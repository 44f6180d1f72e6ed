"""Exception types raised by qmrf."""

from collections.abc import Sequence


class QmrfError(Exception):
    """Base class for all qmrf errors."""


class GraphStructureError(QmrfError, ValueError):
    """A graphical model violates a structural invariant.

    Raised for unknown node ids, duplicate node ids, invalid state counts,
    potentials whose shape disagrees with the state counts, and clique
    covers requested on a directed model.
    """


class PotentialDomainError(QmrfError, ValueError):
    """A clique potential cannot be turned into a rotation angle.

    The Ising encoding takes logarithms of potential entries, so every entry
    it reads must be strictly positive and finite.

    Attributes:
        clique: Member node ids of the offending clique.
        entries: The potential entries the encoder tried to use.

    """

    def __init__(self, clique: Sequence[int], entries: Sequence[float], reason: str) -> None:
        self.clique = tuple(clique)
        self.entries = tuple(entries)
        self.reason = reason
        members = ", ".join(str(node_id) for node_id in self.clique)
        values = ", ".join(repr(value) for value in self.entries)
        super().__init__(f"Cannot encode clique {{{members}}}: {reason} (potential entries: [{values}])")


class ModelParseError(QmrfError, ValueError):
    """A model description could not be parsed.

    Attributes:
        line_number: 1-based line number of the offending line.

    """

    def __init__(self, line_number: int, message: str) -> None:
        self.line_number = line_number
        super().__init__(f"line {line_number}: {message}")


class ConfigError(QmrfError):
    """Error in the [tool.qmrf] configuration."""
