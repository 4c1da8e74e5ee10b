"""Box-partition geometry shared by the locator and the renderer.

All coordinates are normalized: the canvas is the unit square with the
origin at the top-left. A ``Split`` partitions its box along its axis in
child order, each child taking ``fraction`` of the parent extent. The
renderer draws exactly these boxes, so anything that computes positions
(e.g. the new-leaf highlight) must go through here too.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .types import Axis, Leaf, Region, Split


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def scaled(self, sx: float, sy: float) -> Rect:
        """Map a normalized rect into a ``sx`` x ``sy`` pixel space."""
        return Rect(self.x * sx, self.y * sy, self.width * sx, self.height * sy)


UNIT_RECT = Rect()


def child_offsets(children: Sequence[Region]) -> list[float]:
    """Start offset of each child along the split axis.

    Exclusive prefix sum of the fractions: the first child starts at 0.
    """
    offsets = []
    running = 0.0
    for child in children:
        offsets.append(running)
        running += child.fraction
    return offsets


def partition(rect: Rect, split: Split) -> list[Rect]:
    """Sub-rectangles of ``rect`` for each child of ``split``, in order."""
    starts = child_offsets(split.children)
    if split.axis is Axis.VERTICAL:
        return [
            Rect(
                rect.x + start * rect.width,
                rect.y,
                child.fraction * rect.width,
                rect.height,
            )
            for child, start in zip(split.children, starts)
        ]
    return [
        Rect(
            rect.x,
            rect.y + start * rect.height,
            rect.width,
            child.fraction * rect.height,
        )
        for child, start in zip(split.children, starts)
    ]


def leaf_rects(
    node: Region, rect: Rect = UNIT_RECT
) -> Iterator[tuple[Leaf, Rect]]:
    """Yield ``(leaf, box)`` for every leaf under ``node``, in pre-order."""
    if isinstance(node, Leaf):
        yield node, rect
        return
    for child, child_rect in zip(node.children, partition(rect, node)):
        yield from leaf_rects(child, child_rect)


def normalize_drop(
    px: float, py: float, width: float, height: float
) -> tuple[float, float]:
    """Convert a pixel position on the canvas to normalized coordinates."""
    return px / width, py / height


def suggest_axis(drop_x: float, drop_y: float) -> Axis:
    """Split axis for a drop: whichever way the point is farther off-center.

    Dropping toward the left/right edge splits into columns; toward the
    top/bottom into rows. Exact diagonals pick rows.
    """
    dx = abs(drop_x - 0.5)
    dy = abs(drop_y - 0.5)
    return Axis.VERTICAL if dx > dy else Axis.HORIZONTAL
