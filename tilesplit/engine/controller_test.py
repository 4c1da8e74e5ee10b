import pytest

from tilesplit.engine.controller import EditorState, LayoutController
from tilesplit.engine.types import Axis, Color, Leaf, Split


def _leaf_count(tree):
    return sum(1 for n in tree.walk() if n.is_leaf)


def _committed_pair():
    """Controller holding columns [sky | pink]."""
    ctl = LayoutController()
    ctl.drop(0.5, 0.5, color=Color.SKY_BLUE)
    ctl.drop(0.9, 0.5, color=Color.HOT_PINK)
    return ctl


class TestInitialState:
    def test_starts_empty(self):
        ctl = LayoutController()
        assert ctl.state is EditorState.EMPTY
        assert ctl.tree is None
        assert ctl.highlight_id is None


class TestDrop:
    def test_first_drop_creates_root_leaf(self):
        ctl = LayoutController()
        tree = ctl.drop(0.3, 0.7, color=Color.LIME_GREEN)
        assert isinstance(tree, Leaf)
        assert tree.color is Color.LIME_GREEN
        assert tree.fraction == 1.0
        assert ctl.state is EditorState.COMMITTED
        assert ctl.committed is tree

    def test_second_drop_uses_suggested_axis(self):
        ctl = _committed_pair()
        tree = ctl.committed
        # x = 0.9 is farther off-center horizontally -> columns.
        assert isinstance(tree, Split)
        assert tree.axis is Axis.VERTICAL
        assert [c.color for c in tree.children] == [
            Color.SKY_BLUE,
            Color.HOT_PINK,
        ]

    def test_explicit_axis(self):
        ctl = LayoutController()
        ctl.drop(0.5, 0.5, color=Color.SKY_BLUE)
        tree = ctl.drop(0.9, 0.5, color=Color.HOT_PINK, axis=Axis.HORIZONTAL)
        assert tree.axis is Axis.HORIZONTAL

    def test_drop_without_color_outside_drag(self):
        ctl = LayoutController()
        with pytest.raises(ValueError, match="color"):
            ctl.drop(0.5, 0.5)


class TestDragLifecycle:
    def test_enter_snapshots_committed(self):
        ctl = _committed_pair()
        committed = ctl.committed
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        assert ctl.state is EditorState.PREVIEWING
        assert ctl.rollback is committed
        assert ctl.current_color is Color.BRIGHT_YELLOW
        # No preview yet: the committed tree is still displayed.
        assert ctl.tree is committed

    def test_move_previews_against_rollback(self):
        ctl = _committed_pair()
        committed = ctl.committed
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        first = ctl.drag_move(0.5, 0.5)
        second = ctl.drag_move(0.5, 0.95)
        # Each preview adds one tile to the committed tree, not to the
        # previous preview.
        assert _leaf_count(first) == _leaf_count(committed) + 1
        assert _leaf_count(second) == _leaf_count(committed) + 1
        assert ctl.tree is second
        assert ctl.committed is committed

    def test_move_highlights_new_leaf(self):
        ctl = _committed_pair()
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        preview = ctl.drag_move(0.5, 0.5)
        highlighted = [n for n in preview.walk() if n.id == ctl.highlight_id]
        assert len(highlighted) == 1
        assert highlighted[0].color is Color.BRIGHT_YELLOW

    def test_exit_restores_rollback(self):
        ctl = _committed_pair()
        committed = ctl.committed
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        ctl.drag_move(0.5, 0.5)
        ctl.drag_exit()
        assert ctl.state is EditorState.COMMITTED
        assert ctl.tree is committed
        assert ctl.preview is None
        assert ctl.highlight_id is None

    def test_drop_commits_preview_position(self):
        ctl = _committed_pair()
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        preview = ctl.drag_move(0.5, 0.5)
        tree = ctl.drop(0.5, 0.5)
        assert ctl.state is EditorState.COMMITTED
        assert ctl.committed is tree
        assert [c.color for c in tree.children] == [
            c.color for c in preview.children
        ]
        assert ctl.highlight_id is None

    def test_drag_from_empty_previews_single_leaf(self):
        ctl = LayoutController()
        ctl.drag_enter(Color.VIBRANT_ORANGE)
        preview = ctl.drag_move(0.2, 0.2)
        assert isinstance(preview, Leaf)
        assert ctl.highlight_id == preview.id
        ctl.drag_exit()
        assert ctl.state is EditorState.EMPTY
        assert ctl.tree is None

    def test_drop_from_empty_drag(self):
        ctl = LayoutController()
        ctl.drag_enter(Color.VIBRANT_ORANGE)
        ctl.drag_move(0.2, 0.2)
        tree = ctl.drop(0.2, 0.2)
        assert isinstance(tree, Leaf)
        assert tree.color is Color.VIBRANT_ORANGE

    def test_move_without_drag_raises(self):
        ctl = _committed_pair()
        with pytest.raises(RuntimeError):
            ctl.drag_move(0.5, 0.5)

    def test_exit_without_drag_raises(self):
        with pytest.raises(RuntimeError):
            LayoutController().drag_exit()

    def test_double_enter_raises(self):
        ctl = LayoutController()
        ctl.drag_enter(Color.SKY_BLUE)
        with pytest.raises(RuntimeError):
            ctl.drag_enter(Color.HOT_PINK)


class TestReset:
    def test_reset_from_committed(self):
        ctl = _committed_pair()
        ctl.reset()
        assert ctl.state is EditorState.EMPTY
        assert ctl.committed is None

    def test_reset_during_drag(self):
        ctl = _committed_pair()
        ctl.drag_enter(Color.BRIGHT_YELLOW)
        ctl.drag_move(0.5, 0.5)
        ctl.reset()
        assert ctl.state is EditorState.EMPTY
        assert ctl.tree is None
        assert ctl.rollback is None
        assert ctl.highlight_id is None
        # A fresh drag works after a reset.
        ctl.drag_enter(Color.SKY_BLUE)
        assert ctl.state is EditorState.PREVIEWING
