"""Common scene states, attribute names and interaction results."""

from enum import IntEnum


class SceneInfoState(IntEnum):
    """What the scene is currently doing under the cursor."""

    SELECT = 0
    HOVER = 1
    DRAG = 2
    HOVER_PORT = 3
    EDIT_LABEL = 4


class PropertyId(IntEnum):
    """Well-known item property ids."""

    ITEM_ID = 0
    ITEM_LABEL = 1
    ITEM_COMMENT = 2
    ID_USER = 1000


class ItemDragTestResult(IntEnum):
    """Answer of an item asked whether it accepts a dragged item."""

    REJECTED = 0
    ACCEPTED = 1
    IGNORED = 2


CLASS_SCENE = ""
CLASS_ITEM = "item"
CLASS_NODE = "node"
CLASS_EDGE = "edge"

ATTR_ID = "id"
ATTR_SIZE = "size"
ATTR_WEIGHT = "weight"
ATTR_COLOR = "color"
ATTR_STYLE = "style"
ATTR_SHAPE = "shape"
ATTR_STROKE_COLOR = "stroke.color"
ATTR_STROKE_STYLE = "stroke.style"
ATTR_STROKE_SIZE = "stroke.size"
ATTR_LABEL = "label"
ATTR_LABEL_FONT = "label.font"
ATTR_LABEL_COLOR = "label.color"
ATTR_LABEL_POSITION = "label.position"
ATTR_LABELS_POLICY = "labels.policy"
ATTR_LABELS_VIS_IDS = "labels.visibleIds"
ATTR_EDGE_DIRECTION = "direction"