"""Interactive bounding box that scales and moves a set of items."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .geometry import Point, Rect
from .node import Node
from .utils import bounding_rect

MIN_RECT_SIZE = 15.0

# which box edges each of the eight handles drags
_HANDLE_EDGES = (
    "lt",  # top-left
    "t",  # top-centre
    "rt",  # top-right
    "l",  # left-centre
    "r",  # right-centre
    "lb",  # bottom-left
    "b",  # bottom-centre
    "rb",  # bottom-right
)


class TransformRect:
    """A box around the items with eight handles that resize it.

    Dragging a handle maps every item from the old box into the new one.
    ``snap``, when set, is applied to node positions at the end of a drag.
    """

    def __init__(self, margin: float = 5.0) -> None:
        self.margin = margin
        self.move_only = False
        self.snap: Callable[[Point], Point] | None = None
        self.rect = Rect()
        self._items: list[Any] = []
        self._reset()

    def _reset(self) -> None:
        self._drag_handle = -1
        self._drag_rect = Rect()
        self._drag_pos = Point()
        self._last_pos = Point()
        self._nodes_transform: list[Any] = []
        self._nodes_move: list[Any] = []
        self._others: list[Any] = []

    @property
    def dragging(self) -> bool:
        return self._drag_handle >= 0

    def set_move_only(self, on: bool) -> None:
        """In move-only mode items are moved but keep their size."""
        self.move_only = on

    def set_items(self, items: Iterable[Any]) -> None:
        """Take the items to transform and fit the box around them."""
        self._items = list(items)
        m = self.margin
        self.rect = bounding_rect(
            item.scene_rect.adjusted(-m, -m, m, m) for item in self._items
        )

    def handle_points(self) -> list[Point]:
        """The eight handle positions, row by row; empty without a box."""
        r = self.rect
        if r.is_empty() or r.is_null() or not r.is_valid():
            return []
        c = r.center()
        return [
            r.top_left,
            Point(c.x, r.top),
            r.top_right,
            Point(r.left, c.y),
            Point(r.right, c.y),
            r.bottom_left,
            Point(c.x, r.bottom),
            r.bottom_right,
        ]

    def handle_at(self, pos: Point, tolerance: float = 4.0) -> int | None:
        """Index of the handle within tolerance of pos, or None."""
        for index, p in enumerate(self.handle_points()):
            if abs(pos.x - p.x) <= tolerance and abs(pos.y - p.y) <= tolerance:
                return index
        return None

    def begin_drag(self, handle: int, pos: Point) -> None:
        if not self.handle_points():
            raise ValueError("there is nothing to transform")
        if handle not in range(len(_HANDLE_EDGES)):
            raise ValueError(f"no such handle: {handle}")
        self._reset()
        self._drag_rect = self.rect
        self._drag_pos = self._last_pos = pos
        self._drag_handle = handle
        self._setup_items()

    def _setup_items(self) -> None:
        def add_unique(target: list[Any], node: Any) -> None:
            if node is None:
                return
            if any(n is node for n in self._nodes_transform) or any(
                n is node for n in self._nodes_move
            ):
                return
            target.append(node)

        for item in self._items:
            if isinstance(item, Node):
                self._nodes_transform.append(item)

        for item in self._items:
            if isinstance(item, Node):
                continue
            if hasattr(item, "first_node") and hasattr(item, "last_node"):
                self._others.append(item)
                add_unique(self._nodes_move, item.first_node)
                add_unique(self._nodes_move, item.last_node)
            elif hasattr(item, "transform"):
                self._others.append(item)

    def drag_to(self, pos: Point, mirror: bool = False) -> bool:
        """Move the dragged handle to pos; False if not dragging or the box would be too small.

        With mirror the opposite side moves the other way, keeping the centre.
        """
        if not self.dragging:
            return False

        if (pos - self._last_pos).is_null():
            self._last_pos = pos
            return True

        edges = _HANDLE_EDGES[self._drag_handle]
        r = self.rect
        left, top, right, bottom = r.left, r.top, r.right, r.bottom
        if "l" in edges:
            left = pos.x
        if "r" in edges:
            right = pos.x
        if "t" in edges:
            top = pos.y
        if "b" in edges:
            bottom = pos.y

        new_rect = Rect(left, top, right - left, bottom - top)
        d = self._drag_rect
        if mirror and new_rect.is_valid() and d.is_valid():
            if "l" in edges:
                right = d.right - (left - d.left)
            if "r" in edges:
                left = d.left - (right - d.right)
            if "t" in edges:
                bottom = d.bottom - (top - d.top)
            if "b" in edges:
                top = d.top - (bottom - d.bottom)
            new_rect = Rect(left, top, right - left, bottom - top)

        if not (
            new_rect.is_valid()
            and new_rect.width >= MIN_RECT_SIZE
            and new_rect.height >= MIN_RECT_SIZE
        ):
            return False

        self._transform_by(self.rect, new_rect)
        self.rect = new_rect
        self._last_pos = pos
        return True

    def end_drag(self) -> bool:
        """Finish the drag; True if it changed anything."""
        if not self.dragging:
            return False
        changed = self._last_pos != self._drag_pos
        if changed and self.snap is not None:
            for node in (*self._nodes_transform, *self._nodes_move):
                node.pos = self.snap(node.pos)
        self._reset()
        return changed

    def _transform_by(self, old_rect: Rect, new_rect: Rect) -> None:
        if old_rect == new_rect:
            return
        m = self.margin
        old_rect = old_rect.adjusted(m, m, -m, -m)
        new_rect = new_rect.adjusted(m, m, -m, -m)
        if not old_rect.is_valid() or not new_rect.is_valid():
            return

        xc = new_rect.width / old_rect.width
        yc = new_rect.height / old_rect.height
        change_size = not self.move_only

        for node in self._nodes_transform:
            node.transform(old_rect, new_rect, xc, yc, change_size, True)
        for node in self._nodes_move:
            node.transform(old_rect, new_rect, xc, yc, False, True)
        for item in self._others:
            item.transform(old_rect, new_rect, xc, yc, change_size, True)