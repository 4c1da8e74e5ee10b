"""Pure layout engine: tree types, geometry, insertion and drag lifecycle."""

from .controller import EditorState, LayoutController
from .geometry import (
    Rect,
    child_offsets,
    leaf_rects,
    normalize_drop,
    partition,
    suggest_axis,
)
from .insertion import find_new_leaf, insert_region
from .types import Axis, Color, Leaf, Region, Split

__all__ = [
    "Axis",
    "Color",
    "EditorState",
    "LayoutController",
    "Leaf",
    "Rect",
    "Region",
    "Split",
    "child_offsets",
    "find_new_leaf",
    "insert_region",
    "leaf_rects",
    "normalize_drop",
    "partition",
    "suggest_axis",
]
