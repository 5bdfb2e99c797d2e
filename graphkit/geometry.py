"""Plain 2D geometry value types: points, sizes, rectangles and lines."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
    """A point (or vector) in scene coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Point:
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def is_null(self) -> bool:
        """True if both coordinates are zero."""
        return self.x == 0 and self.y == 0


@dataclass(frozen=True)
class Size:
    """A width/height pair."""

    width: float = 0.0
    height: float = 0.0

    def __mul__(self, factor: float) -> Size:
        return Size(self.width * factor, self.height * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Size:
        return Size(self.width / divisor, self.height / divisor)

    def is_null(self) -> bool:
        """True if both dimensions are zero."""
        return self.width == 0 and self.height == 0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_size(cls, size: Size) -> Rect:
        """A rectangle of the given size centred on the origin."""
        return cls(-size.width / 2, -size.height / 2, size.width, size.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def adjusted(self, dx1: float, dy1: float, dx2: float, dy2: float) -> Rect:
        """Move the top-left corner by (dx1, dy1) and the bottom-right by (dx2, dy2)."""
        return Rect(
            self.x + dx1,
            self.y + dy1,
            self.width + dx2 - dx1,
            self.height + dy2 - dy1,
        )

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def moved_center(self, center: Point) -> Rect:
        return Rect(
            center.x - self.width / 2, center.y - self.height / 2, self.width, self.height
        )

    def normalized(self) -> Rect:
        """The same rectangle with non-negative width and height."""
        x, y, w, h = self.x, self.y, self.width, self.height
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        return Rect(x, y, w, h)

    def united(self, other: Rect) -> Rect:
        """The smallest rectangle holding both; a null rectangle is ignored."""
        if self.is_null():
            return other
        if other.is_null():
            return self
        a, b = self.normalized(), other.normalized()
        left = min(a.left, b.left)
        top = min(a.top, b.top)
        right = max(a.right, b.right)
        bottom = max(a.bottom, b.bottom)
        return Rect(left, top, right - left, bottom - top)

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def is_null(self) -> bool:
        return self.width == 0 and self.height == 0

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, point: Point) -> bool:
        """True if the point lies inside or on the border of the rectangle."""
        r = self.normalized()
        if r.width == 0 or r.height == 0:
            return False
        return r.left <= point.x <= r.right and r.top <= point.y <= r.bottom

    def corners(self) -> list[Point]:
        """The closed outline: four corners clockwise, first one repeated."""
        return [
            self.top_left,
            self.top_right,
            self.bottom_right,
            self.bottom_left,
            self.top_left,
        ]


class IntersectType(Enum):
    """How two lines meet."""

    NO_INTERSECTION = 0
    BOUNDED = 1
    UNBOUNDED = 2


@dataclass(frozen=True)
class Line:
    """A line segment from p1 to p2."""

    p1: Point = Point()
    p2: Point = Point()

    @classmethod
    def of(cls, x1: float, y1: float, x2: float, y2: float) -> Line:
        return cls(Point(x1, y1), Point(x2, y2))

    @property
    def dx(self) -> float:
        return self.p2.x - self.p1.x

    @property
    def dy(self) -> float:
        return self.p2.y - self.p1.y

    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    def angle(self) -> float:
        """Direction in degrees, counter-clockwise with the y axis pointing down."""
        theta = math.degrees(math.atan2(-self.dy, self.dx))
        return theta + 360.0 if theta < 0 else theta

    def intersect(self, other: Line) -> tuple[IntersectType, Point | None]:
        """Where this line's extension meets the other's, and whether both segments do."""
        a = self.p2 - self.p1
        b = other.p1 - other.p2
        c = self.p1 - other.p1
        denominator = a.y * b.x - a.x * b.y
        if denominator == 0 or not math.isfinite(denominator):
            return IntersectType.NO_INTERSECTION, None
        reciprocal = 1.0 / denominator
        na = (b.y * c.x - b.x * c.y) * reciprocal
        point = self.p1 + a * na
        if na < 0 or na > 1:
            return IntersectType.UNBOUNDED, point
        nb = (a.x * c.y - a.y * c.x) * reciprocal
        if nb < 0 or nb > 1:
            return IntersectType.UNBOUNDED, point
        return IntersectType.BOUNDED, point