"""Conversions between attribute values and text, plus small geometry helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from enum import Enum, IntEnum
from functools import reduce
from itertools import pairwise
from typing import Any

from .geometry import IntersectType, Line, Point, Rect, Size


class PenStyle(IntEnum):
    """Stroke styles for node outlines and edges."""

    NO_PEN = 0
    SOLID = 1
    DASH = 2
    DOT = 3
    DASH_DOT = 4
    DASH_DOT_DOT = 5


class ValueType(Enum):
    """Value kinds that attribute text can be converted to and from."""

    STRING = "string"
    STRING_LIST = "stringlist"
    INT = "int"
    DOUBLE = "double"
    FLOAT = "float"
    BOOL = "bool"
    POINT = "point"
    POINTF = "pointf"
    SIZE = "size"
    SIZEF = "sizef"


_PEN_STYLES = {
    "none": PenStyle.NO_PEN,
    "solid": PenStyle.SOLID,
    "dashed": PenStyle.DASH,
    "dotted": PenStyle.DOT,
    "dashdot": PenStyle.DASH_DOT,
    "dashdotdot": PenStyle.DASH_DOT_DOT,
}
_PEN_STYLE_NAMES = {style: name for name, style in _PEN_STYLES.items()}


def _round_half_away(v: float) -> int:
    return int(v + 0.5) if v >= 0 else int(v - 0.5)


def _num(v: float) -> str:
    return f"{v:g}"


def _infer_type(value: Any) -> ValueType:
    if isinstance(value, bool):
        return ValueType.BOOL
    if isinstance(value, float):
        return ValueType.DOUBLE
    if isinstance(value, Point):
        return ValueType.POINTF
    if isinstance(value, Size):
        return ValueType.SIZEF
    if isinstance(value, (list, tuple)) and all(isinstance(s, str) for s in value):
        return ValueType.STRING_LIST
    return ValueType.STRING


def variant_to_text(value: Any, value_type: ValueType | None = None) -> str:
    """Render an attribute value as text; the kind is inferred when not given."""
    if value_type is None:
        value_type = _infer_type(value)

    if value_type is ValueType.POINT:
        return f"{_round_half_away(value.x)};{_round_half_away(value.y)}"
    if value_type is ValueType.POINTF:
        return f"{_num(value.x)};{_num(value.y)}"
    if value_type is ValueType.SIZE:
        return f"{_round_half_away(value.width)}:{_round_half_away(value.height)}"
    if value_type is ValueType.SIZEF:
        return f"{_num(value.width)}:{_num(value.height)}"
    if value_type is ValueType.BOOL:
        return "true" if value else "false"
    if value_type in (ValueType.DOUBLE, ValueType.FLOAT):
        return f"{float(value):.4f}"
    if value_type is ValueType.STRING_LIST:
        return "|".join(value)
    if value is None:
        return ""
    return str(value)


def text_to_variant(text: str, value_type: ValueType = ValueType.STRING) -> Any:
    """Parse attribute text; numbers that do not parse become zero."""
    if value_type is ValueType.STRING_LIST:
        return [part for part in text.split("|") if part]
    if value_type is ValueType.INT:
        try:
            return int(text.strip())
        except ValueError:
            return 0
    if value_type in (ValueType.DOUBLE, ValueType.FLOAT):
        try:
            return float(text.strip())
        except ValueError:
            return 0.0
    if value_type is ValueType.BOOL:
        return text.lower() == "true"
    return text


def text_to_pen_style(text: str, default: PenStyle = PenStyle.NO_PEN) -> PenStyle:
    return _PEN_STYLES.get(text, default)


def pen_style_to_text(style: int) -> str:
    return _PEN_STYLE_NAMES.get(style, "none")


def vis_to_string(vis_ids: Iterable[str]) -> str:
    return "|".join(sorted(vis_ids))


def vis_from_string(text: str) -> set[str]:
    return set(text.split("|"))


def byte_array_set_to_string_list(ids: Iterable[str]) -> list[str]:
    return sorted(ids)


def points_to_string(points: Iterable[Point]) -> str:
    """Space-separated x and y of each point, each followed by a space."""
    return "".join(f"{_num(p.x)} {_num(p.y)} " for p in points)


def points_from_string(text: str) -> list[Point]:
    """Parse pairs of numbers; a missing final y counts as zero."""
    tokens = text.split()
    try:
        values = [float(t) for t in tokens]
    except ValueError as exc:
        raise ValueError(f"invalid point list: {text!r}") from exc
    if len(values) % 2:
        values.append(0.0)
    return [Point(x, y) for x, y in zip(values[::2], values[1::2])]


def insert_unique(dest: MutableMapping, source: Mapping) -> None:
    """Copy entries from source whose keys dest does not have yet."""
    for key, value in source.items():
        dest.setdefault(key, value)


def closest_intersection(line: Line, polygon: Sequence[Point]) -> Point:
    """First polygon edge, in order, that the line segment crosses; origin if none."""
    if not polygon:
        raise ValueError("polygon is empty")
    for p1, p2 in pairwise(polygon):
        kind, point = Line(p1, p2).intersect(line)
        if kind is IntersectType.BOUNDED:
            return point
    return Point()


def cut_last_suffix(file_name: str) -> str:
    head, dot, _ = file_name.rpartition(".")
    return head if dot else file_name


def bounding_rect(rects: Iterable[Rect]) -> Rect:
    return reduce(Rect.united, rects, Rect())


def extend_line(line: Line, from_start: float, from_end: float) -> Line:
    """Shift both ends back along the line's direction by the given amounts."""
    length = line.length()
    if length == 0:
        raise ValueError("cannot extend a zero-length line")
    v = Point(line.dx / length, line.dy / length)
    return Line(line.p1 - v * from_start, line.p2 - v * from_end)


__all__ = [
    "PenStyle",
    "ValueType",
    "variant_to_text",
    "text_to_variant",
    "text_to_pen_style",
    "pen_style_to_text",
    "vis_to_string",
    "vis_from_string",
    "byte_array_set_to_string_list",
    "points_to_string",
    "points_from_string",
    "insert_unique",
    "closest_intersection",
    "cut_last_suffix",
    "bounding_rect",
    "extend_line",
]

_ = math  # used by callers through geometry helpers