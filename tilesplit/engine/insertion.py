"""Layout tree insertion and new-leaf lookup.

``insert_region`` places one new colored leaf into a tree in response to a
drop at a normalized point. It is a pure function: the input tree is never
touched and the returned tree shares every unchanged subtree with it. There
are three outcomes at each node:

  * **Leaf split**: a leaf becomes a two-way split along the requested
    axis. The original leaf is kept (same id) on one side and the new leaf
    goes on the side of the drop.
  * **Capacity**: a two-child split whose drop lands in the middle band or
    the outer edge margins gains a third child at the drop position. All
    children are rebalanced to equal shares; prior proportions are dropped.
  * **Recurse**: otherwise the drop descends into the nearest child. The
    coordinate along the split axis is remapped into the child's local
    range and the axis is flipped, which is what makes nested layouts
    alternate between columns and rows.

The cross-axis coordinate is carried down unchanged on recursion rather
than remapped into the child's own cross extent.

``find_new_leaf`` compares the tree before and after an insertion and
returns the id of the leaf that was added, for highlighting the preview.
"""

from __future__ import annotations

import logging

from .geometry import UNIT_RECT, child_offsets, leaf_rects
from .types import MAX_CHILDREN, Axis, Color, Leaf, Region, Split

logger = logging.getLogger(__name__)

# Drop bands (along the split axis) that add a third sibling to a
# two-child split instead of descending into a child.
CENTER_BAND = (0.33, 0.67)
EDGE_BAND = (0.1, 0.9)


def _should_split_to_3(child_count: int, drop_pos: float) -> bool:
    if child_count != MAX_CHILDREN - 1:
        return False
    in_center = CENTER_BAND[0] < drop_pos < CENTER_BAND[1]
    at_edge = drop_pos < EDGE_BAND[0] or drop_pos > EDGE_BAND[1]
    return in_center or at_edge


def _insertion_index(
    children: tuple[Region, ...], starts: list[float], drop_pos: float
) -> int:
    """First child whose center lies past the drop, else the end."""
    for i, (child, start) in enumerate(zip(children, starts)):
        if drop_pos < start + child.fraction / 2:
            return i
    return len(children)


def _nearest_child(
    children: tuple[Region, ...], starts: list[float], drop_pos: float
) -> int:
    """Index of the child whose center is closest to the drop.

    Ties go to the earlier child.
    """
    best_idx = 0
    best_dist = float("inf")
    for i, (child, start) in enumerate(zip(children, starts)):
        dist = abs(drop_pos - (start + child.fraction / 2))
        if dist < best_dist:
            best_dist = dist
            best_idx = i
    return best_idx


def _split_leaf(
    leaf: Leaf, color: Color, drop_x: float, drop_y: float, axis: Axis
) -> Split:
    kept = leaf.with_fraction(0.5)
    added = Leaf(color, 0.5)
    drop_pos = drop_x if axis is Axis.VERTICAL else drop_y
    children = (added, kept) if drop_pos < 0.5 else (kept, added)
    logger.debug(
        "split leaf %s %s, new leaf %s at %s",
        leaf.id,
        axis.value,
        added.id,
        "start" if drop_pos < 0.5 else "end",
    )
    return Split(axis, children, fraction=leaf.fraction)


def _add_sibling(
    node: Split, color: Color, starts: list[float], drop_pos: float
) -> Split:
    idx = _insertion_index(node.children, starts, drop_pos)
    count = len(node.children) + 1
    share = 1.0 / count
    children = [c.with_fraction(share) for c in node.children]
    children.insert(idx, Leaf(color, share))
    logger.debug(
        "added sibling to %s at index %d (%d children)", node.id, idx, count
    )
    return Split(node.axis, tuple(children), fraction=node.fraction, id=node.id)


def insert_region(
    node: Region,
    color: Color,
    drop_x: float,
    drop_y: float,
    axis: Axis,
) -> Region:
    """Return a new tree with one ``color`` leaf inserted at the drop point.

    Args:
        node: Subtree root to insert into.
        color: Color of the new leaf.
        drop_x: Drop x, normalized to ``node``'s box (0 = left edge).
        drop_y: Drop y, normalized to ``node``'s box (0 = top edge).
        axis: Axis to split along if ``node`` is a leaf. Existing splits
            keep their own axis; deeper levels alternate from there.

    Returns:
        The rebuilt subtree. ``node`` itself is not modified and unchanged
        descendants are shared with it.
    """
    if isinstance(node, Leaf):
        return _split_leaf(node, color, drop_x, drop_y, axis)

    is_vertical = node.axis is Axis.VERTICAL
    drop_pos = drop_x if is_vertical else drop_y
    starts = child_offsets(node.children)

    if _should_split_to_3(len(node.children), drop_pos):
        return _add_sibling(node, color, starts, drop_pos)

    idx = _nearest_child(node.children, starts, drop_pos)
    target = node.children[idx]
    local_pos = (drop_pos - starts[idx]) / target.fraction
    if is_vertical:
        local_x, local_y = local_pos, drop_y
    else:
        local_x, local_y = drop_x, local_pos
    logger.debug(
        "recursing into child %d of %s at (%.3f, %.3f)",
        idx,
        node.id,
        local_x,
        local_y,
    )

    children = list(node.children)
    children[idx] = insert_region(
        target, color, local_x, local_y, node.axis.flipped()
    )
    return Split(node.axis, tuple(children), fraction=node.fraction, id=node.id)


def find_new_leaf(
    before: Region | None,
    after: Region,
    drop_x: float,
    drop_y: float,
) -> str | None:
    """Id of the leaf present in ``after`` but not in ``before``.

    ``before`` may be None (empty canvas), in which case every leaf of
    ``after`` is new. If several leaves are new, the one whose center is
    nearest the global drop point wins. Returns None if nothing is new.
    """
    old_ids = {n.id for n in before.walk()} if before is not None else set()
    candidates = [
        (leaf.id, rect.center)
        for leaf, rect in leaf_rects(after, UNIT_RECT)
        if leaf.id not in old_ids
    ]
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0][0]

    best_id = None
    best_dist = float("inf")
    for leaf_id, (cx, cy) in candidates:
        dx = cx - drop_x
        dy = cy - drop_y
        dist = dx * dx + dy * dy
        if dist < best_dist:
            best_dist = dist
            best_id = leaf_id
    return best_id
