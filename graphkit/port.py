"""Connection ports attached to the outline of a node."""

from __future__ import annotations

from enum import IntFlag
from typing import Any

from .geometry import Point, Rect, Size


class Align(IntFlag):
    """Where on the node's box a port is anchored."""

    NONE = 0
    LEFT = 0x1
    RIGHT = 0x2
    HCENTER = 0x4
    TOP = 0x20
    BOTTOM = 0x40
    VCENTER = 0x80
    CENTER = HCENTER | VCENTER


class NodePort:
    """A named port of a node, placed by alignment plus an offset."""

    def __init__(
        self,
        node: Any,
        port_id: str = "",
        align: int = Align.NONE,
        xoff: float = 0.0,
        yoff: float = 0.0,
    ) -> None:
        if node is None:
            raise ValueError("a port needs a node")
        self.node = node
        self.id = port_id
        self.align = Align(align)
        self.xoff = xoff
        self.yoff = yoff
        self.color = "gray"
        self.pen_color = "black"
        self.pen_width = 1.0
        self.rect = Rect(-4, -4, 9, 9)

    def set_id(self, port_id: str) -> None:
        """Rename the port and tell the node about it."""
        if self.id == port_id:
            return
        old_id, self.id = self.id, port_id
        if self.node is not None:
            self.node.on_port_renamed(self, old_id)

    def set_offset(self, xoff: float, yoff: float) -> None:
        self.xoff = xoff
        self.yoff = yoff

    def copy_data_from(self, other: NodePort) -> None:
        self.id = other.id
        self.align = other.align
        self.xoff = other.xoff
        self.yoff = other.yoff
        self.color = other.color
        self.pen_color = other.pen_color
        self.pen_width = other.pen_width
        self.rect = other.rect

    def layout_position(self, node_size: Size) -> Point:
        """Position relative to the node's centre, in whole units."""
        x = int(self.xoff)
        y = int(self.yoff)
        if self.align & Align.LEFT:
            x = int(x - node_size.width / 2)
        elif self.align & Align.RIGHT:
            x = int(x + node_size.width / 2)
        if self.align & Align.TOP:
            y = int(y - node_size.height / 2)
        elif self.align & Align.BOTTOM:
            y = int(y + node_size.height / 2)
        return Point(float(x), float(y))

    def on_parent_deleted(self) -> None:
        """Forget the node, which is gone already."""
        self.node = None

    def release(self) -> None:
        """Tell the owning node that this port goes away."""
        if self.node is not None:
            self.node.on_port_deleted(self)

    def store_to(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "align": int(self.align),
            "xoff": self.xoff,
            "yoff": self.yoff,
            "color": self.color,
            "pen_color": self.pen_color,
            "pen_width": self.pen_width,
            "rect": self.rect,
        }