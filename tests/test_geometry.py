import pytest

from graphkit.geometry import IntersectType, Line, Point, Rect, Size


def test_center_is_midpoint_of_corners():
    r = Rect(2, 4, 10, 20)
    assert r.center() == (r.top_left + r.bottom_right) / 2


def test_adjusted_round_trip():
    r = Rect(1, 2, 30, 40)
    assert r.adjusted(5, 5, -5, -5).adjusted(-5, -5, 5, 5) == r


def test_adjusted_shrinks():
    r = Rect(0, 0, 30, 40)
    shrunk = r.adjusted(5, 5, -5, -5)
    assert shrunk.width < r.width
    assert shrunk.center() == r.center()


def test_united_contains_both():
    a = Rect(0, 0, 10, 10)
    b = Rect(20, 30, 5, 5)
    u = a.united(b)
    for p in a.corners() + b.corners():
        assert u.contains(p)


def test_united_with_null_is_identity():
    a = Rect(3, 4, 5, 6)
    assert a.united(Rect()) == a
    assert Rect().united(a) == a


def test_is_valid():
    assert Rect(0, 0, 1, 1).is_valid()
    assert not Rect(0, 0, 0, 1).is_valid()
    assert not Rect(0, 0, -1, 1).is_valid()


def test_contains_border_and_outside():
    r = Rect(0, 0, 10, 10)
    assert r.contains(r.bottom_right)
    assert r.contains(r.center())
    assert not r.contains(Point(11, 5))
    assert not Rect(0, 0, 0, 10).contains(Point(0, 5))


def test_from_size_is_centred():
    r = Rect.from_size(Size(8, 6))
    assert r.center() == Point()
    assert r.size == Size(8, 6)


def test_line_length():
    assert Line.of(0, 0, 3, 4).length() == pytest.approx(5.0)


def test_line_angle_horizontal_and_reverse():
    line = Line.of(0, 0, 10, 0)
    assert line.angle() == pytest.approx(0.0)
    reverse = Line(line.p2, line.p1)
    assert (reverse.angle() - line.angle()) % 360 == pytest.approx(180.0)


def test_line_angle_y_down():
    up = Line.of(0, 0, 0, -5)
    down = Line.of(0, 0, 0, 5)
    assert up.angle() < down.angle()
    assert 0 <= down.angle() < 360


def test_intersect_bounded_diagonals_meet_at_center():
    r = Rect(0, 0, 10, 10)
    kind, p = Line(r.top_left, r.bottom_right).intersect(Line(r.top_right, r.bottom_left))
    assert kind is IntersectType.BOUNDED
    assert p.x == pytest.approx(r.center().x)
    assert p.y == pytest.approx(r.center().y)


def test_intersect_parallel():
    kind, p = Line.of(0, 0, 10, 0).intersect(Line.of(0, 1, 10, 1))
    assert kind is IntersectType.NO_INTERSECTION
    assert p is None


def test_intersect_unbounded():
    kind, p = Line.of(0, 0, 1, 0).intersect(Line.of(5, -1, 5, 1))
    assert kind is IntersectType.UNBOUNDED
    assert p.y == pytest.approx(0.0)


def test_point_arithmetic_round_trip():
    a, b = Point(1.5, -2), Point(3, 4)
    assert (a + b) - b == a
    assert (a * 2) / 2 == a
    assert -(-a) == a