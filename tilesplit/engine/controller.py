"""Drag-and-drop lifecycle for a layout canvas.

``LayoutController`` keeps the committed tree, the rollback snapshot taken
when a drag enters the canvas, the live preview and the highlighted leaf.
It is the only stateful piece of the engine; the trees it holds are
immutable, so cancelling a drag is just dropping the preview reference.

States:

  * ``EMPTY``: nothing on the canvas.
  * ``COMMITTED``: a stable tree, no drag in progress.
  * ``PREVIEWING``: a drag is over the canvas. Every move re-runs the
    insertion against the rollback snapshot (never against the previous
    preview), so the preview always shows exactly one pending tile.
"""

from __future__ import annotations

import enum
import logging

from .geometry import suggest_axis
from .insertion import find_new_leaf, insert_region
from .types import Axis, Color, Leaf, Region

logger = logging.getLogger(__name__)


class EditorState(enum.Enum):
    EMPTY = "empty"
    COMMITTED = "committed"
    PREVIEWING = "previewing"


class LayoutController:
    def __init__(self) -> None:
        self._committed: Region | None = None
        self._rollback: Region | None = None
        self._preview: Region | None = None
        self._dragging = False
        self._current_color: Color | None = None
        self._highlight_id: str | None = None

    # -- read access --

    @property
    def state(self) -> EditorState:
        if self._dragging:
            return EditorState.PREVIEWING
        if self._committed is None:
            return EditorState.EMPTY
        return EditorState.COMMITTED

    @property
    def committed(self) -> Region | None:
        return self._committed

    @property
    def rollback(self) -> Region | None:
        return self._rollback

    @property
    def preview(self) -> Region | None:
        return self._preview

    @property
    def tree(self) -> Region | None:
        """The tree to display right now."""
        if self._dragging and self._preview is not None:
            return self._preview
        return self._committed

    @property
    def highlight_id(self) -> str | None:
        return self._highlight_id

    @property
    def current_color(self) -> Color | None:
        return self._current_color

    # -- events --

    def _apply(
        self,
        base: Region | None,
        color: Color,
        drop_x: float,
        drop_y: float,
        axis: Axis | None,
    ) -> Region:
        if base is None:
            return Leaf(color, 1.0)
        if axis is None:
            axis = suggest_axis(drop_x, drop_y)
        return insert_region(base, color, drop_x, drop_y, axis)

    def drag_enter(self, color: Color) -> None:
        """A drag carrying ``color`` entered the canvas."""
        if self._dragging:
            raise RuntimeError("drag_enter while a drag is already active")
        self._rollback = self._committed
        self._preview = None
        self._current_color = color
        self._dragging = True
        logger.debug("drag entered with %s", color.value)

    def drag_move(
        self, drop_x: float, drop_y: float, axis: Axis | None = None
    ) -> Region:
        """Recompute the preview for the pointer at ``(drop_x, drop_y)``."""
        if not self._dragging or self._current_color is None:
            raise RuntimeError("drag_move without an active drag")
        preview = self._apply(
            self._rollback, self._current_color, drop_x, drop_y, axis
        )
        self._preview = preview
        new_id = find_new_leaf(self._rollback, preview, drop_x, drop_y)
        # Keep the previous highlight when nothing new can be located.
        if new_id is not None:
            self._highlight_id = new_id
        return preview

    def drag_exit(self) -> None:
        """The drag left the canvas: discard the preview."""
        if not self._dragging:
            raise RuntimeError("drag_exit without an active drag")
        self._committed = self._rollback
        self._end_drag()
        logger.debug("drag exited, restored %s", self.state.value)

    def drop(
        self,
        drop_x: float,
        drop_y: float,
        color: Color | None = None,
        axis: Axis | None = None,
    ) -> Region:
        """Commit a drop at ``(drop_x, drop_y)``.

        During a drag the drop is applied to the rollback snapshot with the
        dragged color unless ``color`` overrides it. Outside a drag it is
        applied to the committed tree and ``color`` is required.
        """
        if self._dragging:
            base = self._rollback
            color = color or self._current_color
        else:
            base = self._committed
        if color is None:
            raise ValueError("drop needs a color outside of a drag")
        result = self._apply(base, color, drop_x, drop_y, axis)
        self._committed = result
        self._end_drag()
        logger.debug("dropped %s at (%.3f, %.3f)", color.value, drop_x, drop_y)
        return result

    def reset(self) -> None:
        """Clear the canvas, abandoning any drag in progress."""
        self._committed = None
        self._end_drag()
        logger.info("layout reset")

    def _end_drag(self) -> None:
        self._dragging = False
        self._rollback = None
        self._preview = None
        self._highlight_id = None
