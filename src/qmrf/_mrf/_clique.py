"""Clique with a flat potential table indexed in row-major (mixed-radix) order."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from qmrf._errors import GraphStructureError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


def iter_joint_states(num_states: Sequence[int]) -> Iterator[tuple[int, ...]]:
    """Iterate over joint states in table order.

    The last position varies fastest, so the n-th yielded tuple is the joint
    state stored at index n of a potential table.

    Example:
        >>> list(iter_joint_states((2, 2)))
        [(0, 0), (0, 1), (1, 0), (1, 1)]

    """
    return itertools.product(*(range(k) for k in num_states))


@dataclass(frozen=True, slots=True)
class Clique:
    """A set of pairwise adjacent nodes with a potential table.

    The member order fixes the table layout. Tables are row-major: the last
    member is the least significant digit, and the radix of member ``j`` is
    the product of the state counts of the members after it. A pairwise
    table therefore matches a row-major flattened ``k_0 x k_1`` matrix.

    Attributes:
        nodes: Member node ids, distinct.
        num_states: State count of each member, aligned with ``nodes``.
        potential: Flat table of length ``prod(num_states)``.

    """

    nodes: tuple[int, ...]
    num_states: tuple[int, ...]
    potential: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(set(self.nodes)) != len(self.nodes):
            msg = f"Clique members must be distinct, got {self.nodes}"
            raise GraphStructureError(msg)
        if len(self.num_states) != len(self.nodes):
            msg = f"Clique {self.nodes} needs one state count per member, got {self.num_states}"
            raise GraphStructureError(msg)
        if len(self.potential) != self.table_size:
            msg = f"Clique {self.nodes} needs a potential of length {self.table_size}, got {len(self.potential)}"
            raise GraphStructureError(msg)

    @property
    def table_size(self) -> int:
        """Number of joint states."""
        return math.prod(self.num_states)

    @property
    def radices(self) -> tuple[int, ...]:
        """Place value of each member in the flat index."""
        radices: list[int] = []
        place = 1
        for k in reversed(self.num_states):
            radices.append(place)
            place *= k
        return tuple(reversed(radices))

    def index_of(self, states: Sequence[int]) -> int:
        """Flat table index of a joint state.

        Raises:
            ValueError: If the joint state does not fit the clique.

        """
        if len(states) != len(self.nodes):
            msg = f"Expected {len(self.nodes)} states for clique {self.nodes}, got {len(states)}"
            raise ValueError(msg)
        index = 0
        for state, k, radix in zip(states, self.num_states, self.radices, strict=True):
            if not 0 <= state < k:
                msg = f"State {state} out of range for a {k}-state member of clique {self.nodes}"
                raise ValueError(msg)
            index += state * radix
        return index

    def states_of(self, index: int) -> tuple[int, ...]:
        """Joint state stored at a flat table index."""
        if not 0 <= index < self.table_size:
            msg = f"Index {index} out of range for clique {self.nodes}"
            raise ValueError(msg)
        return tuple((index // radix) % k for k, radix in zip(self.num_states, self.radices, strict=True))

    def value(self, states: Sequence[int]) -> float:
        """Potential value at a joint state."""
        return self.potential[self.index_of(states)]

    def __len__(self) -> int:
        """Return the number of members."""
        return len(self.nodes)
