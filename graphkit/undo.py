"""Undo history built from compressed snapshots of a scene."""

from __future__ import annotations

import zlib
from abc import ABC, abstractmethod
from typing import Protocol


class Snapshotable(Protocol):
    """Anything that can dump its whole state to bytes and load it back."""

    def store_to(self) -> bytes: ...

    def restore_from(self, data: bytes) -> object: ...


class UndoManager(ABC):
    """Common interface of undo managers."""

    @abstractmethod
    def reset(self) -> None: ...

    @abstractmethod
    def add_state(self) -> None: ...

    @abstractmethod
    def revert_state(self) -> None: ...

    @abstractmethod
    def undo(self) -> None: ...

    @abstractmethod
    def redo(self) -> None: ...

    @abstractmethod
    def available_undo_count(self) -> int: ...

    @abstractmethod
    def available_redo_count(self) -> int: ...


class SimpleUndoManager(UndoManager):
    """Keeps a linear stack of compressed scene snapshots."""

    def __init__(self, scene: Snapshotable) -> None:
        self._scene = scene
        self._stack: list[bytes] = []
        self._index = -1

    def reset(self) -> None:
        """Forget the whole history."""
        self._index = -1
        self._stack.clear()

    def add_state(self) -> None:
        """Snapshot the scene; any redo history past the current state is dropped."""
        snapshot = zlib.compress(self._scene.store_to())
        self._index += 1
        del self._stack[self._index:]
        self._stack.append(snapshot)

    def _restore(self) -> None:
        self._scene.restore_from(zlib.decompress(self._stack[self._index]))

    def revert_state(self) -> None:
        """Load the current snapshot back into the scene."""
        if self.available_undo_count():
            self._restore()

    def undo(self) -> None:
        if self.available_undo_count():
            self._index -= 1
            self._restore()

    def redo(self) -> None:
        if self.available_redo_count():
            self._index += 1
            self._restore()

    def available_undo_count(self) -> int:
        return int(self._index > 0)

    def available_redo_count(self) -> int:
        return int(0 <= self._index < len(self._stack) - 1)