"""Edges drawn as polylines through a list of intermediate points."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from itertools import pairwise
from typing import Any

from .geometry import Line, Point, Rect
from .item import Item
from .utils import points_from_string

_POINTS_ATTR = "points"


def _half_way(path: list[Point]) -> Point:
    """Point halfway along a polyline, measured by length."""
    if not path:
        return Point()
    segments = [Line(a, b) for a, b in pairwise(path)]
    total = sum(segment.length() for segment in segments)
    if total == 0:
        return path[0]
    remaining = total / 2
    for segment in segments:
        length = segment.length()
        if length >= remaining and length > 0:
            return segment.p1 + (segment.p2 - segment.p1) * (remaining / length)
        remaining -= length
    return path[-1]


class PolyEdge(Item):
    """An edge between two nodes that may bend through intermediate points."""

    factory_id = "CPolyEdge"
    class_id = "polyedge"
    super_class_id = "edge"

    def __init__(
        self,
        first_node: Any = None,
        last_node: Any = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(defaults)
        self.first_node = first_node
        self.last_node = last_node
        self.first_port_id = ""
        self.last_port_id = ""
        self.points: list[Point] = []
        self.line = Line()
        self.path: list[Point] = []
        self.control_point = Point()
        for node in (first_node, last_node):
            if node is not None:
                node.on_connection_attach(self)
        self.on_parent_geometry_changed()

    # points

    def set_points(self, points: Iterable[Point]) -> None:
        self.points = list(points)
        self.on_parent_geometry_changed()

    def insert_point_at(self, pos: Point) -> bool:
        """Insert pos into the segment it lies on; False if it lies on none."""
        if not self.points:
            self.points.append(pos)
            self.on_parent_geometry_changed()
            return True

        outline = [self.first_node.pos, *self.points, self.last_node.pos]
        for index, (a, b) in enumerate(pairwise(outline)):
            whole = Line(a, b).length()
            via = Line(a, pos).length() + Line(pos, b).length()
            if abs(whole - via) < 1:
                self.points.insert(index, pos)
                self.on_parent_geometry_changed()
                return True
        return False

    def reverse(self) -> None:
        """Swap the edge's ends and run its points the other way."""
        self.points.reverse()
        self.first_node, self.last_node = self.last_node, self.first_node
        self.first_port_id, self.last_port_id = self.last_port_id, self.first_port_id
        self.on_parent_geometry_changed()

    def transform(
        self,
        old_rect: Rect,
        new_rect: Rect,
        xc: float,
        yc: float,
        change_size: bool = True,
        change_pos: bool = True,
    ) -> None:
        """Map the intermediate points from old_rect into new_rect."""
        self.points = [
            Point(
                (p.x - old_rect.left) * xc + new_rect.left,
                (p.y - old_rect.top) * yc + new_rect.top,
            )
            for p in self.points
        ]
        self.on_parent_geometry_changed()

    # attributes

    def has_local_attribute(self, attr_id: str) -> bool:
        return attr_id == _POINTS_ATTR or super().has_local_attribute(attr_id)

    def set_attribute(self, attr_id: str, value: Any) -> bool:
        if attr_id == _POINTS_ATTR:
            if isinstance(value, str):
                self.set_points(points_from_string(value))
            else:
                self.set_points(value)
            return True
        return super().set_attribute(attr_id, value)

    def remove_attribute(self, attr_id: str) -> bool:
        if attr_id == _POINTS_ATTR:
            self.set_points([])
            return True
        return super().remove_attribute(attr_id)

    # moving

    def move_by(self, delta: Point) -> None:
        """Shift all intermediate points by delta."""
        self.points = [p + delta for p in self.points]
        self.on_parent_geometry_changed()

    on_item_moved = move_by

    # serialisation

    def store_to(self, version: int) -> dict[str, Any]:
        data = super().store_to(version)
        data["points"] = list(self.points)
        return data

    def restore_from(self, data: Mapping[str, Any], version: int) -> bool:
        if not super().restore_from(data, version):
            return False
        self.points = list(data["points"])
        self.on_parent_geometry_changed()
        return True

    # geometry

    @property
    def scene_rect(self) -> Rect:
        """Box around the drawn path."""
        if not self.path:
            return Rect()
        xs = [p.x for p in self.path]
        ys = [p.y for p in self.path]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @staticmethod
    def _anchor(node: Any, port_id: str) -> Point:
        port = node.get_port(port_id) if port_id else None
        return node.port_position(port) if port is not None else node.pos

    def on_parent_geometry_changed(self) -> None:
        """Recompute where the edge leaves and enters its nodes, and its path."""
        if Item.during_restore:
            return
        if self.first_node is None or self.last_node is None:
            return

        c1 = self._anchor(self.first_node, self.first_port_id)
        c2 = self._anchor(self.last_node, self.last_port_id)

        if not self.points:
            p1 = self.first_node.intersection_point(Line(c1, c2), self.first_port_id)
            p2 = self.last_node.intersection_point(Line(c2, c1), self.last_port_id)
            self.line = Line(p1, p2)
            self.path = [p1, p2]
        else:
            first, last = self.points[0], self.points[-1]
            p1 = self.first_node.intersection_point(Line(c1, first), self.first_port_id)
            p2 = self.last_node.intersection_point(Line(c2, last), self.last_port_id)
            self.line = Line(p1, p2)
            if Line(p1, first).length() < 5:
                p1 = first
            if Line(last, p2).length() < 5:
                p2 = last
            self.path = [p1, *self.points, p2]

        self.control_point = _half_way(self.path)

    # node callbacks

    def on_node_moved(self, node: Any) -> None:
        self.on_parent_geometry_changed()

    def on_node_port_deleted(self, node: Any, port_id: str) -> None:
        if self.first_node is node and self.first_port_id == port_id:
            self.first_port_id = ""
        if self.last_node is node and self.last_port_id == port_id:
            self.last_port_id = ""
        self.on_parent_geometry_changed()

    def on_node_port_renamed(self, node: Any, port_id: str, old_id: str) -> None:
        if self.first_node is node and self.first_port_id == old_id:
            self.first_port_id = port_id
        if self.last_node is node and self.last_port_id == old_id:
            self.last_port_id = port_id
        self.on_parent_geometry_changed()

    def detach(self) -> None:
        """Disconnect the edge from both of its nodes."""
        for node in (self.first_node, self.last_node):
            if node is not None:
                node.on_connection_detach(self)
        self.first_node = self.last_node = None