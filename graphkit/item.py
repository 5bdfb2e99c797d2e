"""Base scene item: flags, attributes, ids, labels and serialisation."""

from __future__ import annotations

import itertools
from collections.abc import Collection, Iterator, Mapping
from contextlib import contextmanager
from enum import IntEnum, IntFlag
from typing import Any, ClassVar

from .defines import ATTR_ID, ATTR_LABEL
from .utils import variant_to_text


class ItemFlags(IntFlag):
    FRAMELESS_SELECTION = 1
    DELETE_ALLOWED = 2
    LAST_FLAG = 4


class ItemStateFlags(IntFlag):
    NORMAL = 0
    SELECTED = 1
    HOVER = 2
    DRAG_ACCEPTED = 4
    DRAG_REJECTED = 8
    ATTRIBUTE_CHANGED = 16
    NEED_UPDATE = 32


class VisibleFlags(IntEnum):
    ANY = 0
    LABEL = 1
    TOOLTIP = 2


_free_counter = itertools.count(1)


class Item:
    """A scene item holding local attributes on top of class defaults.

    ``defaults`` maps attribute ids to the class-wide default values;
    ``visible_class_ids`` names the class attributes shown in labels.
    """

    factory_id: ClassVar[str] = "CItem"
    class_id: ClassVar[str] = "item"
    super_class_id: ClassVar[str] = ""

    during_restore: ClassVar[bool] = False

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self.defaults: Mapping[str, Any] = defaults if defaults is not None else {}
        self.visible_class_ids: set[str] = set()
        self.item_flags = ItemFlags.DELETE_ALLOWED | ItemFlags.FRAMELESS_SELECTION
        self.state_flags = ItemStateFlags.ATTRIBUTE_CHANGED | ItemStateFlags.NEED_UPDATE
        self.attributes: dict[str, Any] = {}
        self.id = ""

    @property
    def type_id(self) -> str:
        return self.factory_id

    @classmethod
    @contextmanager
    def restoring(cls) -> Iterator[None]:
        """Mark that items are being restored in bulk, so updates can be skipped."""
        Item.during_restore = True
        try:
            yield
        finally:
            Item.during_restore = False

    # ids

    def create_new_id(self) -> str:
        return str(id(self))

    def create_unique_id(self, template: str, taken: Collection[str] | None = None) -> str:
        """Fill ``{}`` in template with the first number giving an id not in taken.

        Without a collection of taken ids a process-wide counter is used.
        """
        if taken is None:
            return template.format(next(_free_counter))
        return next(
            candidate
            for candidate in (template.format(n) for n in itertools.count(1))
            if candidate not in taken
        )

    def set_default_id(self) -> bool:
        """Give the item a fresh id if it has none; True if one was assigned."""
        if self.id:
            return False
        self.id = self.create_new_id()
        return True

    # attributes

    def has_local_attribute(self, attr_id: str) -> bool:
        return attr_id == ATTR_ID or attr_id in self.attributes

    def set_attribute(self, attr_id: str, value: Any) -> bool:
        self.state_flags |= ItemStateFlags.ATTRIBUTE_CHANGED
        if attr_id == ATTR_ID:
            self.id = str(value)
        else:
            self.attributes[attr_id] = value
        return True

    def remove_attribute(self, attr_id: str) -> bool:
        if attr_id not in self.attributes:
            return False
        del self.attributes[attr_id]
        self.state_flags |= ItemStateFlags.ATTRIBUTE_CHANGED
        return True

    def get_attribute(self, attr_id: str) -> Any:
        """Local value, else the class default, else None."""
        if attr_id == ATTR_ID:
            return self.id
        if attr_id in self.attributes:
            return self.attributes[attr_id]
        return self.defaults.get(attr_id)

    def visible_attribute_ids(self, flags: VisibleFlags = VisibleFlags.ANY) -> set[str]:
        result: set[str] = set()
        if flags in (VisibleFlags.ANY, VisibleFlags.TOOLTIP):
            result |= self.attributes.keys()
            result |= self.defaults.keys()
        else:
            if flags == VisibleFlags.LABEL:
                result.add(ATTR_LABEL)
            result |= self.visible_class_ids
        return result

    # labels

    def label_text(self) -> str:
        """The text the item's label shows, built from its visible attributes."""
        ids_to_show = self.visible_attribute_ids(VisibleFlags.LABEL)
        visible = {}
        for attr_id in sorted(ids_to_show):
            text = variant_to_text(self.get_attribute(attr_id))
            if text:
                visible[attr_id] = text

        lines: list[str] = []
        if ATTR_ID in ids_to_show:
            lines.append(f"[{visible.pop(ATTR_ID, '')}]")

        if len(visible) == 1 and ATTR_LABEL in ids_to_show:
            lines.extend(visible.values())
        else:
            lines.extend(f"{key}: {value}" for key, value in visible.items())
        return "\n".join(lines)

    def tooltip(self) -> str:
        return variant_to_text(self.get_attribute("tooltip"))

    # copying

    def copy_data_from(self, other: Item) -> None:
        """Take over flags and attributes (not the id) of another item."""
        self.item_flags = other.item_flags
        self.attributes = dict(other.attributes)
        self.update_cached_items()

    # callbacks

    def update_cached_items(self) -> None:
        self.state_flags |= ItemStateFlags.ATTRIBUTE_CHANGED

    def on_item_restored(self) -> None:
        self.update_cached_items()

    def on_item_selected(self, state: bool) -> None:
        if state:
            self.state_flags |= ItemStateFlags.SELECTED
        else:
            self.state_flags &= ~ItemStateFlags.SELECTED

    # serialisation

    def store_to(self, version: int) -> dict[str, Any]:
        """Data describing the item in the given format version."""
        data: dict[str, Any] = {}
        if version >= 2:
            data["attributes"] = dict(self.attributes)
        if version >= 4:
            data["id"] = self.id
        return data

    def restore_from(self, data: Mapping[str, Any], version: int) -> bool:
        """Load what store_to produced; False if there is nothing to read."""
        if not data:
            return False
        if version >= 2:
            self.attributes = dict(data["attributes"])
        else:
            self.attributes.clear()
        if version >= 4:
            self.id = data["id"]
        return True