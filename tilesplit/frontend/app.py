"""Tkinter GUI for tilesplit.

A single window with three parts:

  * the layout canvas, which shows ``LayoutController.tree`` rendered by
    ``render.py`` with the pending tile highlighted during a drag;
  * the palette row of colored circles, each of which starts a drag;
  * a Reset button that clears the canvas.

Tk has no native drag-and-drop between widgets, so the drag is tracked with
pointer events on the root window: pressing a palette circle arms a drag,
and pointer motion in or out of the canvas image becomes ``drag_enter`` /
``drag_move`` / ``drag_exit`` on the controller. Releasing over the canvas
is a ``drop``. All layout decisions live in the engine; this module only
converts pixels to normalized coordinates.
"""

import argparse
import logging
import tkinter as tk
from tkinter import ttk

from PIL import ImageTk

from ..engine.controller import EditorState, LayoutController
from ..engine.geometry import normalize_drop
from ..engine.types import Color
from .render import CANVAS_BG, render_layout

logger = logging.getLogger(__name__)

# -- Visual constants --

DEFAULT_CANVAS_WIDTH = 360
DEFAULT_CANVAS_HEIGHT = 400
PALETTE_DIAMETER = 50
PALETTE_SPACING = 20
EMPTY_HINT = "Drag and drop your widgets to unleash your creativity!"
HINT_COLOR = "#8E8E93"


# ---------------------------------------------------------------------------
# Pointer helpers
# ---------------------------------------------------------------------------


def _canvas_drop_position(root_x, root_y, origin, size):
    """Root-window pointer position -> normalized canvas coords, or None.

    ``origin`` is the canvas's top-left in root coordinates and ``size`` its
    ``(width, height)``. Points on or past the right/bottom edge are outside.
    """
    width, height = size
    px = root_x - origin[0]
    py = root_y - origin[1]
    if not (0 <= px < width and 0 <= py < height):
        return None
    return normalize_drop(px, py, width, height)


class App:
    def __init__(self, width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT):
        self.controller = LayoutController()
        self.canvas_width = width
        self.canvas_height = height
        # Palette color armed by a press, or None when no drag is active.
        self._drag_color = None
        self._photo = None

        self.root = tk.Tk()
        self.root.title("tilesplit")
        self.root.configure(bg=CANVAS_BG)
        self.root.resizable(False, False)

        style = ttk.Style()
        style.theme_use("clam")

        top = ttk.Frame(self.root, padding=(20, 10))
        top.pack(side=tk.TOP, fill=tk.X)
        ttk.Button(top, text="Reset", command=self._on_reset).pack(
            side=tk.RIGHT
        )

        self.canvas = tk.Canvas(
            self.root,
            width=width,
            height=height,
            bg=CANVAS_BG,
            highlightthickness=0,
        )
        self.canvas.pack(side=tk.TOP, padx=20, pady=(0, 40))

        self.palette = tk.Canvas(
            self.root,
            width=len(Color) * (PALETTE_DIAMETER + PALETTE_SPACING)
            + PALETTE_SPACING,
            height=PALETTE_DIAMETER + 2 * PALETTE_SPACING,
            bg=CANVAS_BG,
            highlightthickness=0,
        )
        self.palette.pack(side=tk.BOTTOM, pady=(0, 24))
        self._build_palette()

        self.root.bind("<B1-Motion>", self._on_pointer_motion)
        self.root.bind("<ButtonRelease-1>", self._on_pointer_release)

        self._render()

    def _build_palette(self):
        for i, color in enumerate(Color):
            x0 = PALETTE_SPACING + i * (PALETTE_DIAMETER + PALETTE_SPACING)
            y0 = PALETTE_SPACING
            item = self.palette.create_oval(
                x0,
                y0,
                x0 + PALETTE_DIAMETER,
                y0 + PALETTE_DIAMETER,
                fill=color.hex,
                outline="",
            )
            self.palette.tag_bind(
                item,
                "<ButtonPress-1>",
                lambda _e, name=color.value: self._on_palette_press(name),
            )

    # -- rendering --

    def _render(self):
        img = render_layout(
            self.controller.tree,
            self.canvas_width,
            self.canvas_height,
            highlight_id=self.controller.highlight_id,
            supersample=2,
        )
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")
        if self.controller.state is EditorState.EMPTY:
            self.canvas.create_text(
                self.canvas_width / 2,
                self.canvas_height / 2,
                text=EMPTY_HINT,
                fill=HINT_COLOR,
                width=self.canvas_width - 80,
                justify="center",
                font=("TkDefaultFont", 14, "bold"),
            )

    # -- pointer handling --

    def _pointer_on_canvas(self, event):
        """Normalized canvas position of a root-window event, or None."""
        return _canvas_drop_position(
            event.x_root,
            event.y_root,
            (self.canvas.winfo_rootx(), self.canvas.winfo_rooty()),
            (self.canvas_width, self.canvas_height),
        )

    def _on_palette_press(self, color_name):
        color = Color.from_name(color_name)
        if color is None:
            logger.debug("ignoring drag of unknown color %r", color_name)
            return
        self._drag_color = color

    def _on_pointer_motion(self, event):
        if self._drag_color is None:
            return
        pos = self._pointer_on_canvas(event)
        previewing = self.controller.state is EditorState.PREVIEWING
        if pos is None:
            if previewing:
                self.controller.drag_exit()
                self._render()
            return
        if not previewing:
            self.controller.drag_enter(self._drag_color)
        self.controller.drag_move(*pos)
        self._render()

    def _on_pointer_release(self, event):
        if self._drag_color is None:
            return
        self._drag_color = None
        pos = self._pointer_on_canvas(event)
        if self.controller.state is not EditorState.PREVIEWING:
            return
        if pos is None:
            self.controller.drag_exit()
        else:
            self.controller.drop(*pos)
        self._render()

    def _on_reset(self):
        self._drag_color = None
        self.controller.reset()
        self._render()

    def run(self):
        self.root.mainloop()


def main(argv=None):
    parser = argparse.ArgumentParser(description="tilesplit layout editor")
    parser.add_argument("--width", type=int, default=DEFAULT_CANVAS_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_CANVAS_HEIGHT)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    App(width=args.width, height=args.height).run()


if __name__ == "__main__":
    main()
