# graphkit

A pure-Python data model for visual graph editors. It holds the parts of an
editor that do not need a GUI toolkit: item attributes with class defaults,
node shapes and sizes, ports, polyline edges, a snapshot-based undo history
and a bounding-box tool that scales and moves a selection.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `graphkit.geometry`: frozen value types `Point`, `Size`, `Rect` and `Line`.
  `Rect` offers `center`, `adjusted`, `united`, `contains`, `is_valid` and
  `corners`; `Line` offers `length`, `angle` (degrees, y axis pointing down)
  and `intersect`, which returns an `IntersectType` and the meeting point.
- `graphkit.defines`: the enumerations `SceneInfoState`, `PropertyId` and
  `ItemDragTestResult`, and the standard attribute names such as `ATTR_SIZE`,
  `ATTR_SHAPE` and `ATTR_LABELS_VIS_IDS`.
- `graphkit.utils`: `variant_to_text` and `text_to_variant` convert attribute
  values to and from text according to a `ValueType`; `text_to_pen_style` and
  `pen_style_to_text` map names such as `"dashed"` to `PenStyle`;
  `vis_to_string` / `vis_from_string` handle `|`-separated label sets;
  `points_to_string` / `points_from_string` handle space-separated point
  lists. Geometry helpers: `closest_intersection`, `extend_line`,
  `bounding_rect`, plus `insert_unique` and `cut_last_suffix`.
- `graphkit.shapes`: `NodeShape` (disc, square, triangle, triangle2, diamond,
  hexagon), `shape_polygon` for the closed outline of a shape fitted to a
  rectangle, and `outline_intersection` for where a line leaving a node's
  centre crosses its outline.
- `graphkit.undo`: the `UndoManager` interface and `SimpleUndoManager`, a
  stack of zlib-compressed snapshots of any object with `store_to()`
  returning bytes and `restore_from(data)`.
- `graphkit.item`: `Item`, the base of scene items: local attributes over
  class defaults, ids (`set_default_id`, `create_unique_id`), label text
  built from visible attributes, flags (`ItemFlags`, `ItemStateFlags`) and
  versioned `store_to` / `restore_from` as plain dictionaries. The
  `Item.restoring()` context manager marks a bulk restore.
- `graphkit.port`: `NodePort`, placed on a node by `Align` flags plus an
  offset.
- `graphkit.node`: `Node`, adding size, position, z order, shape, ports
  (`add_port`, `remove_port`, `move_port`, `rename_port`), `transform`,
  `intersection_point` and bend factors for parallel edges.
- `graphkit.polyedge`: `PolyEdge`, an edge between two nodes that can bend
  through intermediate points; with no points it runs straight from outline
  to outline.
- `graphkit.transform`: `TransformRect`, a box around a set of items with
  eight handles; dragging a handle maps every item from the old box into the
  new one, optionally mirrored about the centre, with an optional `snap`
  applied to node positions when the drag ends.

## Example

```python
from graphkit.geometry import Point, Size
from graphkit.node import Node
from graphkit.polyedge import PolyEdge
from graphkit.port import Align
from graphkit.transform import TransformRect

a = Node({"size": Size(11.0, 11.0), "shape": "disc"})
b = Node()
b.pos = Point(100.0, 0.0)
b.set_attribute("shape", "diamond")
b.set_attribute("size", 20)
b.add_port("in", Align.LEFT, 0.0, 0.0)

edge = PolyEdge(a, b)
edge.last_port_id = "in"
edge.set_points([Point(50.0, 40.0)])
print(edge.path)

box = TransformRect(margin=5.0)
box.set_items([a, b, edge])
box.begin_drag(7, box.handle_points()[7])
box.drag_to(box.handle_points()[7] + Point(30.0, 30.0))
box.end_drag()
```

Undo history with any object that stores and restores itself as bytes:

```python
from graphkit.undo import SimpleUndoManager

history = SimpleUndoManager(scene)
history.add_state()
# ... change the scene ...
history.add_state()
history.undo()
```

## What it does not do

graphkit is a model only. It does not draw or render anything, has no
editor window, scene container, mouse or keyboard handling, and no menus.
It reads and writes no graph file formats and exports no images; items
serialise to plain dictionaries and leave storage to the caller. It provides
no command-line program.