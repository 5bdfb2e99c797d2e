"""Node outline shapes and where a line meets them."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

from .geometry import Line, Point, Rect
from .utils import closest_intersection


class NodeShape(str, Enum):
    """Outline shapes a node can take."""

    DISC = "disc"
    SQUARE = "square"
    TRIANGLE = "triangle"
    TRIANGLE2 = "triangle2"
    DIAMOND = "diamond"
    HEXAGON = "hexagon"


def shape_polygon(shape: NodeShape | str, rect: Rect) -> list[Point]:
    """Closed outline polygon of a shape fitted to rect; empty for a disc or unknown shape."""
    try:
        kind = NodeShape(shape)
    except ValueError:
        kind = NodeShape.DISC

    c = rect.center()
    w, h = rect.width, rect.height

    if kind is NodeShape.SQUARE:
        return rect.corners()
    if kind is NodeShape.DIAMOND:
        top = Point(c.x, c.y - h / 2)
        return [top, Point(c.x + w / 2, c.y), Point(c.x, c.y + h / 2), Point(c.x - w / 2, c.y), top]
    if kind is NodeShape.HEXAGON:
        left_x = rect.left + w / 4
        right_x = rect.left + w - w / 4
        start = Point(left_x, c.y - h / 2)
        return [
            start,
            Point(right_x, c.y - h / 2),
            Point(c.x + w / 2, c.y),
            Point(right_x, c.y + h / 2),
            Point(left_x, c.y + h / 2),
            Point(rect.left, c.y),
            start,
        ]
    if kind is NodeShape.TRIANGLE:
        apex = (rect.top_right + rect.top_left) / 2
        return [rect.bottom_left, rect.bottom_right, apex, rect.bottom_left]
    if kind is NodeShape.TRIANGLE2:
        apex = (rect.bottom_right + rect.bottom_left) / 2
        return [rect.top_left, rect.top_right, apex, rect.top_left]
    return []


def outline_intersection(
    line: Line, center: Point, rect: Rect, polygon: Sequence[Point]
) -> Point:
    """Point where a line leaving center crosses a node's outline.

    rect and polygon are in node-local coordinates; an empty polygon means a
    disc (circle when rect is square, otherwise the rect's box is used).
    """
    if not polygon:
        if rect.height == rect.width:
            shift = rect.width / 2
            angle = math.radians(line.angle())
            return center + Point(shift * math.cos(angle), -shift * math.sin(angle))
        box = rect.moved_center(center)
        return closest_intersection(line, box.corners())

    scene_polygon = [p + center for p in polygon]
    return closest_intersection(line, scene_polygon)