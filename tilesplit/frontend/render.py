"""Pillow renderer for layout trees.

Pure drawing module with no tkinter dependency, so it can be used headless
(tests, thumbnails) as well as by ``app.py``. Leaf boxes come from
``engine.geometry.leaf_rects``, the same partition the new-leaf locator
uses, so the highlighted tile is always the one drawn under the pointer.
"""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFilter

from ..engine.geometry import UNIT_RECT, Rect, leaf_rects
from ..engine.types import Region

# -- Visual constants --

CANVAS_BG = "#FFFFFF"
EMPTY_OUTLINE = "#E6E6E6"
SHADOW_COLOR = (0, 0, 0, 128)
CORNER_RADIUS = 36
SHADOW_OFFSET = 2
SHADOW_BLUR = 5
TILE_GAP = 2


class LayoutRenderer:
    """Renders a layout tree to a Pillow image of a fixed pixel size."""

    def __init__(self, width, height, line_scale=1):
        self.width = width
        self.height = height
        self.line_scale = line_scale

    def _lw(self, base_width):
        """Scale a pixel width by the supersample factor."""
        return max(1, round(base_width * self.line_scale))

    def _box(self, rect: Rect):
        """Normalized rect -> inset pixel box ``[x0, y0, x1, y1]``."""
        px = rect.scaled(self.width, self.height)
        gap = self._lw(TILE_GAP)
        x0 = px.x + gap
        y0 = px.y + gap
        x1 = max(x0, px.x + px.width - gap - 1)
        y1 = max(y0, px.y + px.height - gap - 1)
        return [x0, y0, x1, y1]

    def _radius(self, box):
        # Pillow rejects radii larger than half the shorter side.
        short = min(box[2] - box[0], box[3] - box[1])
        return max(0, min(self._lw(CORNER_RADIUS), int(short // 2)))

    def render(self, tree: Region | None, highlight_id=None):
        img = Image.new("RGBA", (self.width, self.height), CANVAS_BG)
        draw = ImageDraw.Draw(img)

        if tree is None:
            self._draw_empty(draw)
            return img

        highlighted = None
        for leaf, rect in leaf_rects(tree, UNIT_RECT):
            if leaf.id == highlight_id:
                highlighted = (leaf, rect)
                continue
            box = self._box(rect)
            draw.rounded_rectangle(
                box, radius=self._radius(box), fill=leaf.color.hex
            )

        # Drawn last so its shadow sits above its neighbours.
        if highlighted is not None:
            self._draw_highlight(img, *highlighted)
        return img

    def _draw_empty(self, draw):
        box = self._box(UNIT_RECT)
        draw.rounded_rectangle(
            box,
            radius=self._radius(box),
            outline=EMPTY_OUTLINE,
            width=self._lw(3),
        )

    def _draw_highlight(self, img, leaf, rect):
        box = self._box(rect)
        off = self._lw(SHADOW_OFFSET)
        shadow = Image.new("RGBA", img.size, (0, 0, 0, 0))
        ImageDraw.Draw(shadow).rounded_rectangle(
            [box[0], box[1] + off, box[2], box[3] + off],
            radius=self._radius(box),
            fill=SHADOW_COLOR,
        )
        shadow = shadow.filter(ImageFilter.GaussianBlur(self._lw(SHADOW_BLUR)))
        img.alpha_composite(shadow)
        ImageDraw.Draw(img).rounded_rectangle(
            box, radius=self._radius(box), fill=leaf.color.hex
        )


def render_layout(tree, width, height, highlight_id=None, supersample=1):
    """Render ``tree`` at ``width`` x ``height``.

    With ``supersample > 1`` the image is drawn larger and downsampled with
    LANCZOS to smooth the rounded corners.
    """
    renderer = LayoutRenderer(
        width * supersample, height * supersample, line_scale=supersample
    )
    img = renderer.render(tree, highlight_id=highlight_id)
    if supersample > 1:
        img = img.resize((width, height), Image.Resampling.LANCZOS)
    return img
