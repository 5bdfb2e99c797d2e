import pytest

from graphkit.geometry import Point, Rect, Size
from graphkit.port import Align, NodePort


class FakeNode:
    def __init__(self):
        self.renamed = []
        self.deleted = []

    def on_port_renamed(self, port, old_id):
        self.renamed.append((port.id, old_id))

    def on_port_deleted(self, port):
        self.deleted.append(port.id)


def test_requires_node():
    with pytest.raises(ValueError):
        NodePort(None, "p")


def test_defaults():
    port = NodePort(FakeNode())
    assert port.id == ""
    assert port.align == Align.NONE
    assert (port.xoff, port.yoff) == (0.0, 0.0)
    assert port.rect == Rect(-4, -4, 9, 9)


def test_set_id_notifies_node():
    node = FakeNode()
    port = NodePort(node, "a")
    port.set_id("b")
    assert port.id == "b"
    assert node.renamed == [("b", "a")]


def test_set_same_id_does_not_notify():
    node = FakeNode()
    port = NodePort(node, "a")
    port.set_id("a")
    assert node.renamed == []


def test_after_parent_deleted_no_notification():
    node = FakeNode()
    port = NodePort(node, "a")
    port.on_parent_deleted()
    assert port.node is None
    port.set_id("b")
    assert port.id == "b"
    assert node.renamed == []


def test_release_notifies_node():
    node = FakeNode()
    port = NodePort(node, "p")
    port.release()
    assert node.deleted == ["p"]


def test_set_offset():
    port = NodePort(FakeNode(), "p")
    port.set_offset(3.5, -2.0)
    assert (port.xoff, port.yoff) == (3.5, -2.0)


def test_center_layout_uses_offset():
    port = NodePort(FakeNode(), "p", Align.CENTER, 3, 4)
    assert port.layout_position(Size(20, 20)) == Point(3, 4)


def test_left_layout_moves_by_half_width():
    port = NodePort(FakeNode(), "p", Align.LEFT, 0, 0)
    assert port.layout_position(Size(10, 10)) == Point(-5, 0)


def test_right_bottom_is_mirror_of_left_top():
    size = Size(10, 20)
    left_top = NodePort(FakeNode(), "p", Align.LEFT | Align.TOP).layout_position(size)
    right_bottom = NodePort(FakeNode(), "q", Align.RIGHT | Align.BOTTOM).layout_position(size)
    assert right_bottom == -left_top
    assert right_bottom.x == size.width / 2
    assert right_bottom.y == size.height / 2


def test_layout_truncates_offset():
    port = NodePort(FakeNode(), "p", Align.NONE, 1.7, -1.7)
    assert port.layout_position(Size(10, 10)) == Point(1, -1)


def test_copy_data_from():
    source = NodePort(FakeNode(), "src", Align.TOP, 1.0, 2.0)
    source.color = "red"
    target = NodePort(FakeNode())
    target.copy_data_from(source)
    assert target.store_to() == source.store_to()


def test_store_to_holds_fields():
    port = NodePort(FakeNode(), "p1", Align.RIGHT, 2.0, 3.0)
    data = port.store_to()
    assert data["id"] == "p1"
    assert data["align"] == int(Align.RIGHT)
    assert (data["xoff"], data["yoff"]) == (2.0, 3.0)
    assert data["rect"] == port.rect