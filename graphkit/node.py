"""Graph nodes: size, position, outline shape, ports and connections."""

from __future__ import annotations

import math
from collections.abc import Collection, Mapping
from enum import IntFlag
from typing import Any, Protocol

from .defines import ATTR_SHAPE, ATTR_SIZE
from .geometry import Line, Point, Rect, Size
from .item import Item, ItemFlags, ItemStateFlags
from .port import Align, NodePort
from .shapes import NodeShape, outline_intersection
from .shapes import shape_polygon as _outline_polygon


class NodeFlags(IntFlag):
    """Behaviour switches of a node."""

    NONE = 0
    ORPHAN_ALLOWED = 1  # the node may exist without connections


class Connection(Protocol):
    """What a node expects from the edges attached to it."""

    first_node: Any
    last_node: Any
    first_port_id: str
    last_port_id: str

    def on_node_moved(self, node: Node) -> None: ...

    def on_parent_geometry_changed(self) -> None: ...

    def on_node_port_deleted(self, node: Node, port_id: str) -> None: ...

    def on_node_port_renamed(self, node: Node, port_id: str, old_id: str) -> None: ...


_POSITION_ATTRS = frozenset({"width", "height", "pos", "x", "y", "z"})


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class Node(Item):
    """A node of the graph, centred on its position."""

    factory_id = "CNode"
    class_id = "node"
    super_class_id = "item"

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        super().__init__(defaults)
        self.item_flags |= ItemFlags.FRAMELESS_SELECTION
        self._size = Size(9.0, 9.0)
        self._pos = Point()
        self.z = 0.0
        self.node_flags = NodeFlags.ORPHAN_ALLOWED
        self.ports: dict[str, NodePort] = {}
        self.connections: dict[Any, None] = {}
        self.existing_ids: Collection[str] | None = None
        self._shape_cache: list[Point] = []
        self._size_cache = self.rect

    # geometry

    @property
    def size(self) -> Size:
        return self._size

    @property
    def rect(self) -> Rect:
        """The node's box in local coordinates, centred on the origin."""
        return Rect.from_size(self._size)

    @property
    def pos(self) -> Point:
        return self._pos

    @pos.setter
    def pos(self, value: Point) -> None:
        delta = value - self._pos
        self._pos = value
        self.state_flags |= ItemStateFlags.ATTRIBUTE_CHANGED
        self.on_item_moved(delta)

    @property
    def scene_rect(self) -> Rect:
        return self.rect.translated(self._pos.x, self._pos.y)

    def _resize(self, size: Size) -> None:
        self._size = Size(float(size.width), float(size.height))

    # ids

    def create_new_id(self) -> str:
        return self.create_unique_id("N{}", self.existing_ids)

    # attributes

    def set_size(self, width: float, height: float) -> bool:
        return self.set_attribute(ATTR_SIZE, Size(width, height))

    def has_local_attribute(self, attr_id: str) -> bool:
        return attr_id in _POSITION_ATTRS or super().has_local_attribute(attr_id)

    def set_attribute(self, attr_id: str, value: Any) -> bool:
        self.state_flags |= ItemStateFlags.ATTRIBUTE_CHANGED

        if attr_id == ATTR_SHAPE:
            super().set_attribute(attr_id, value)
            self.update_cached_items()
            return True

        if attr_id == ATTR_SIZE:
            if isinstance(value, Size):
                if value.is_null():
                    return False
                size = value
            else:
                s = _to_float(value)
                if s <= 0:
                    return False
                size = Size(s, s)
            super().set_attribute(attr_id, size)
            self._resize(size)
            self.update_cached_items()
            return True

        if attr_id == "width":
            size = Size(_to_float(value), self._size.height)
            super().set_attribute(ATTR_SIZE, size)
            self._resize(size)
            return True

        if attr_id == "height":
            size = Size(self._size.width, _to_float(value))
            super().set_attribute(ATTR_SIZE, size)
            self._resize(size)
            return True

        if attr_id == "x":
            self.pos = Point(_to_float(value), self._pos.y)
            return True
        if attr_id == "y":
            self.pos = Point(self._pos.x, _to_float(value))
            return True
        if attr_id == "z":
            self.z = _to_float(value)
            return True
        if attr_id == "pos":
            self.pos = value
            return True

        return super().set_attribute(attr_id, value)

    def remove_attribute(self, attr_id: str) -> bool:
        if not super().remove_attribute(attr_id):
            return False
        self.update_cached_items()
        return True

    def get_attribute(self, attr_id: str) -> Any:
        if attr_id == "x":
            return self._pos.x
        if attr_id == "y":
            return self._pos.y
        if attr_id == "z":
            return self.z
        if attr_id == "pos":
            return self._pos
        if attr_id == "degree":
            return len(self.connections)
        return super().get_attribute(attr_id)

    # ports

    def add_port(
        self,
        port_id: str = "",
        align: int = Align.CENTER,
        xoff: float = 0.0,
        yoff: float = 0.0,
    ) -> NodePort | None:
        """Create a port; an empty id picks the first free "Port N". None if taken."""
        if port_id in self.ports:
            return None
        new_id = port_id
        if not port_id:
            suffix = 1
            while (new_id := f"Port {suffix}") in self.ports:
                suffix += 1
        port = NodePort(self, new_id, align, xoff, yoff)
        self.ports[new_id] = port
        self.update_cached_items()
        return port

    def remove_port(self, port_id: str) -> bool:
        if not port_id or port_id not in self.ports:
            return False
        port = self.ports.pop(port_id)
        port.release()
        self.update_cached_items()
        return True

    def move_port(
        self,
        port_id: str,
        align: int = Align.CENTER,
        xoff: float = 0.0,
        yoff: float = 0.0,
    ) -> bool:
        port = self.ports.get(port_id)
        if port is None:
            return False
        port.align = Align(align)
        port.set_offset(xoff, yoff)
        self.update_ports_layout()
        return True

    def rename_port(self, port_id: str, new_id: str) -> bool:
        """Give a port a new id; fails if the port is missing or new_id is taken."""
        if port_id not in self.ports:
            return False
        if port_id == new_id:
            return True
        if new_id in self.ports:
            return False
        port = self.ports.pop(port_id)
        self.ports[new_id] = port
        port.set_id(new_id)
        self.update_cached_items()
        return True

    def get_port(self, port_id: str) -> NodePort | None:
        if not port_id:
            return None
        return self.ports.get(port_id)

    def port_ids(self) -> list[str]:
        return sorted(self.ports)

    def port_position(self, port: NodePort) -> Point:
        """Scene position of one of this node's ports."""
        return self._pos + port.layout_position(self._size)

    # transformations

    def transform(
        self,
        old_rect: Rect,
        new_rect: Rect,
        xc: float,
        yc: float,
        change_size: bool = True,
        change_pos: bool = True,
    ) -> None:
        """Map the node from old_rect into new_rect, scaled by xc and yc."""
        w, h = self._size.width, self._size.height
        wc, hc = w, h
        if change_size:
            wc, hc = w * xc, h * yc
            self.set_size(wc, hc)
        else:
            w = h = wc = hc = 0.0

        if change_pos:
            dx = self._pos.x - w / 2
            dy = self._pos.y - h / 2
            xp = (dx - old_rect.left) * xc + new_rect.left + wc / 2
            yp = (dy - old_rect.top) * yc + new_rect.top + hc / 2
            self.pos = Point(xp, yp)

    # shape

    def shape_polygon(self) -> list[Point]:
        """Closed outline in local coordinates; empty for a disc."""
        shape = self.get_attribute(ATTR_SHAPE) or NodeShape.DISC
        return _outline_polygon(shape, self.rect)

    def intersection_point(self, line: Line, port_id: str = "") -> Point:
        """Where line, leaving the node or one of its ports, crosses the outline."""
        port = self.get_port(port_id) if port_id else None
        if port is not None:
            shift = port.rect.width / 2
            angle = math.radians(line.angle())
            return self.port_position(port) + Point(
                shift * math.cos(angle), -shift * math.sin(angle)
            )
        return outline_intersection(line, self._pos, self.rect, self.shape_polygon())

    # copying

    def copy_data_from(self, other: Item) -> None:
        super().copy_data_from(other)
        if isinstance(other, Node):
            self._resize(other.size)
            self.pos = other.pos
            self.z = other.z
            for port in list(self.ports.values()):
                port.release()
            self.ports.clear()
            for key, source in other.ports.items():
                port = NodePort(self)
                port.copy_data_from(source)
                self.ports[key] = port
            self.update_ports_layout()
        self.update_cached_items()

    # serialisation

    def store_to(self, version: int) -> dict[str, Any]:
        data = {
            "size": self._size,
            "pos": self._pos,
            "flags": int(self.item_flags),
            "z": self.z,
            "ports": [self.ports[key].store_to() for key in self.port_ids()],
        }
        data.update(super().store_to(version))
        return data

    def restore_from(self, data: Mapping[str, Any], version: int) -> bool:
        if version >= 7:
            self._resize(data["size"])
        elif version > 0:
            s = data["size"]
            self._resize(s if isinstance(s, Size) else Size(float(s), float(s)))

        self.pos = data["pos"]

        if version > 0:
            self.z = data["z"]

        self.ports.clear()
        if version >= 11:
            for entry in data["ports"]:
                port = NodePort(self, entry["id"], entry["align"], entry["xoff"], entry["yoff"])
                if version >= 12:
                    port.color = entry["color"]
                    port.pen_color = entry["pen_color"]
                    port.pen_width = entry["pen_width"]
                    port.rect = entry["rect"]
                self.ports[port.id] = port

        return super().restore_from(data, version)

    # connections

    def in_connections(self) -> list[Any]:
        return [edge for edge in self.connections if edge.last_node is self]

    def out_connections(self) -> list[Any]:
        return [edge for edge in self.connections if edge.first_node is self]

    def on_connection_attach(self, edge: Connection) -> None:
        if edge is None:
            raise ValueError("edge is required")
        self.connections[edge] = None
        self.update_connections()

    def on_connection_detach(self, edge: Connection) -> None:
        if edge is None:
            raise ValueError("edge is required")
        self.connections.pop(edge, None)
        self.update_connections()

    def on_connection_deleted(self, edge: Connection) -> bool:
        """Detach a deleted edge; True if the node is now an orphan that must go."""
        self.on_connection_detach(edge)
        return not self.connections and not (self.node_flags & NodeFlags.ORPHAN_ALLOWED)

    def update_connections(self) -> None:
        """Spread parallel edges apart by giving each a distinct bend factor."""
        if Item.during_restore:
            return

        groups: dict[frozenset, list[Any]] = {}
        for edge in self.connections:
            if not hasattr(edge, "set_bend_factor"):
                continue
            key = frozenset(
                {(edge.first_node, edge.first_port_id), (edge.last_node, edge.last_port_id)}
            )
            groups.setdefault(key, []).append(edge)

        for edges in groups.values():
            if len(edges) == 1:
                edges[0].set_bend_factor(0)
            elif edges[0].is_circled():
                for bf, edge in enumerate(edges):
                    edge.set_bend_factor(bf)
            else:
                bf = 0 if len(edges) % 2 else 1
                for edge in edges:
                    edge.set_bend_factor(bf)
                    bf = -bf if bf > 0 else 1 - bf

    def on_port_deleted(self, port: NodePort) -> None:
        for edge in list(self.connections):
            edge.on_node_port_deleted(self, port.id)
        self.ports.pop(port.id, None)

    def on_port_renamed(self, port: NodePort, old_id: str) -> None:
        for edge in list(self.connections):
            edge.on_node_port_renamed(self, port.id, old_id)

    def on_item_moved(self, delta: Point) -> None:
        for edge in list(self.connections):
            edge.on_node_moved(self)

    def on_item_restored(self) -> None:
        self.update_cached_items()
        self.update_connections()

    # caches

    def update_ports_layout(self) -> None:
        for edge in list(self.connections):
            edge.on_parent_geometry_changed()

    def update_cached_items(self) -> None:
        super().update_cached_items()
        old_shape, old_size = self._shape_cache, self._size_cache
        self._recalculate_shape()
        if self._shape_cache != old_shape or self._size_cache != old_size:
            self.update_ports_layout()

    def _recalculate_shape(self) -> None:
        size = self.get_attribute(ATTR_SIZE)
        if isinstance(size, Size):
            self._resize(size)
        self._size_cache = self.rect
        self._shape_cache = self.shape_polygon()