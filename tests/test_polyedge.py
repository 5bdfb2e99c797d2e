import math

import pytest

from graphkit.geometry import Point, Rect
from graphkit.item import Item
from graphkit.node import Node
from graphkit.polyedge import PolyEdge


def make_nodes():
    a = Node()
    b = Node()
    b.pos = Point(100, 0)
    return a, b


def test_attaches_to_nodes():
    a, b = make_nodes()
    PolyEdge(a, b)
    assert a.get_attribute("degree") == 1
    assert b.get_attribute("degree") == 1


def test_set_points_builds_path_through_points():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    points = [Point(50, 50)]
    edge.set_points(points)
    assert edge.points == points
    assert edge.path[1:-1] == points
    start = edge.path[0]
    assert math.hypot(start.x - a.pos.x, start.y - a.pos.y) == pytest.approx(4.5)


def test_straight_edge_control_point_is_midpoint():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    p1, p2 = edge.path
    assert edge.control_point == (p1 + p2) / 2


def test_insert_point_into_empty_edge():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    assert edge.insert_point_at(Point(30, 30)) is True
    assert edge.points == [Point(30, 30)]


def test_insert_point_on_segment():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(50, 50)])
    assert edge.insert_point_at(Point(25, 25)) is True
    assert edge.points == [Point(25, 25), Point(50, 50)]


def test_insert_point_off_segments_fails():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(50, 50)])
    assert edge.insert_point_at(Point(0, 80)) is False
    assert edge.points == [Point(50, 50)]


def test_reverse_swaps_ends_and_points():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(10, 10), Point(20, 20)])
    edge.reverse()
    assert edge.points == [Point(20, 20), Point(10, 10)]
    assert edge.first_node is b
    assert edge.last_node is a


def test_transform_round_trip():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    original = [Point(10, 20), Point(30, 40)]
    edge.set_points(original)
    small = Rect(0, 0, 100, 100)
    big = Rect(10, 10, 200, 400)
    edge.transform(small, big, 2.0, 4.0, True, True)
    assert edge.points != original
    edge.transform(big, small, 0.5, 0.25, True, True)
    for got, want in zip(edge.points, original):
        assert got.x == pytest.approx(want.x)
        assert got.y == pytest.approx(want.y)


def test_points_attribute_from_text():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    assert edge.set_attribute("points", "10 20 30 40") is True
    assert edge.points == [Point(10, 20), Point(30, 40)]
    assert edge.has_local_attribute("points") is True
    assert edge.has_local_attribute("color") is False


def test_remove_points_attribute_clears_points():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(5, 5)])
    assert edge.remove_attribute("points") is True
    assert edge.points == []
    assert len(edge.path) == 2


def test_other_attributes_go_to_item():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_attribute("weight", 2.0)
    assert edge.get_attribute("weight") == 2.0
    assert edge.remove_attribute("weight") is True
    assert edge.remove_attribute("weight") is False


def test_move_by_shifts_points():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    points = [Point(10, 10), Point(20, 30)]
    edge.set_points(points)
    delta = Point(5, -5)
    edge.move_by(delta)
    assert edge.points == [p + delta for p in points]


def test_store_restore_round_trip():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(40, 40), Point(60, 40)])
    edge.set_attribute("color", "red")
    edge.id = "E1"
    data = edge.store_to(4)

    copy = PolyEdge(a, b)
    assert copy.restore_from(data, 4) is True
    assert copy.points == edge.points
    assert copy.get_attribute("color") == "red"
    assert copy.id == "E1"


def test_restore_from_empty_data_fails():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(1, 2)])
    assert edge.restore_from({}, 4) is False
    assert edge.points == [Point(1, 2)]


def test_moving_node_updates_path():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(50, 50)])
    a.pos = Point(0, 100)
    start = edge.path[0]
    assert math.hypot(start.x - a.pos.x, start.y - a.pos.y) == pytest.approx(4.5)


def test_no_update_during_restore():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    before = list(edge.path)
    with Item.restoring():
        edge.set_points([Point(50, 50)])
    assert edge.path == before


def test_port_rename_follows_edge():
    a, b = make_nodes()
    a.add_port("in")
    edge = PolyEdge(a, b)
    edge.first_port_id = "in"
    assert a.rename_port("in", "out") is True
    assert edge.first_port_id == "out"


def test_port_delete_clears_edge_port():
    a, b = make_nodes()
    a.add_port("in")
    edge = PolyEdge(a, b)
    edge.first_port_id = "in"
    assert a.remove_port("in") is True
    assert edge.first_port_id == ""


def test_detach_removes_connections():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.detach()
    assert a.get_attribute("degree") == 0
    assert edge.first_node is None


def test_scene_rect_covers_path():
    a, b = make_nodes()
    edge = PolyEdge(a, b)
    edge.set_points([Point(50, 50)])
    r = edge.scene_rect
    assert all(r.left <= p.x <= r.right and r.top <= p.y <= r.bottom for p in edge.path)