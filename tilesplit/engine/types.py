"""Data types for the tilesplit layout tree.

A layout is a tree of ``Region`` values. Each region is either a colored
``Leaf`` or a ``Split`` container holding 2 or 3 ordered children whose
fractions sum to 1.0. Regions are frozen: every edit builds new nodes along
the path to the root and reuses untouched subtrees by reference, so ids of
unchanged nodes survive across versions.
"""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Union

MIN_CHILDREN = 2
MAX_CHILDREN = 3
FRACTION_TOLERANCE = 1e-6


def _new_id() -> str:
    return uuid.uuid4().hex


class Axis(enum.Enum):
    VERTICAL = "vertical"  # columns, left-to-right
    HORIZONTAL = "horizontal"  # rows, top-to-bottom

    def flipped(self) -> Axis:
        if self is Axis.VERTICAL:
            return Axis.HORIZONTAL
        return Axis.VERTICAL


class Color(enum.Enum):
    """Tile palette. Values are the names carried in drag payloads."""

    SKY_BLUE = "skyBlue"
    HOT_PINK = "hotPink"
    BRIGHT_YELLOW = "brightYellow"
    LIME_GREEN = "limeGreen"
    VIBRANT_ORANGE = "vibrantOrange"

    @property
    def hex(self) -> str:
        return _PALETTE_HEX[self]

    @staticmethod
    def from_name(name: str) -> Color | None:
        """Look up a palette color by payload name, or None if unknown."""
        try:
            return Color(name)
        except ValueError:
            return None


_PALETTE_HEX = {
    Color.SKY_BLUE: "#00CFFF",
    Color.HOT_PINK: "#FF5C93",
    Color.BRIGHT_YELLOW: "#FFEB3B",
    Color.LIME_GREEN: "#AEEA00",
    Color.VIBRANT_ORANGE: "#FF6D00",
}


def _check_fraction(fraction: float) -> None:
    if not 0.0 < fraction <= 1.0 + FRACTION_TOLERANCE:
        raise ValueError(f"Region fraction must be in (0, 1], got {fraction}")


@dataclass(frozen=True)
class Leaf:
    color: Color
    fraction: float = 1.0
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        _check_fraction(self.fraction)

    @property
    def is_leaf(self) -> bool:
        return True

    def with_fraction(self, fraction: float) -> Leaf:
        return replace(self, fraction=fraction)

    def walk(self) -> Iterator[Region]:
        yield self


@dataclass(frozen=True)
class Split:
    axis: Axis
    children: tuple[Region, ...]
    fraction: float = 1.0
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.axis, Axis):
            raise ValueError(f"Split axis must be an Axis, got {self.axis!r}")
        _check_fraction(self.fraction)
        # Accept any sequence from callers but store an immutable tuple.
        object.__setattr__(self, "children", tuple(self.children))
        n = len(self.children)
        if not MIN_CHILDREN <= n <= MAX_CHILDREN:
            raise ValueError(
                f"Split must have {MIN_CHILDREN}-{MAX_CHILDREN} children, got {n}"
            )
        total = sum(c.fraction for c in self.children)
        if abs(total - 1.0) > FRACTION_TOLERANCE:
            raise ValueError(
                f"Split children fractions must sum to 1.0, got {total}"
            )
        ids = [self.id] + [n.id for c in self.children for n in c.walk()]
        if len(ids) != len(set(ids)):
            raise ValueError("Split subtree contains duplicate region ids")

    @property
    def is_leaf(self) -> bool:
        return False

    def with_fraction(self, fraction: float) -> Split:
        return replace(self, fraction=fraction)

    def walk(self) -> Iterator[Region]:
        """Pre-order traversal of this subtree, containers included."""
        yield self
        for child in self.children:
            yield from child.walk()


Region = Union[Leaf, Split]
