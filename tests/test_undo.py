import json

from graphkit.undo import SimpleUndoManager, UndoManager


class FakeScene:
    def __init__(self):
        self.items = []
        self.restores = 0

    def store_to(self):
        return json.dumps(self.items).encode()

    def restore_from(self, data):
        self.items = json.loads(data.decode())
        self.restores += 1


def make():
    scene = FakeScene()
    return scene, SimpleUndoManager(scene)


def test_is_an_undo_manager():
    _, manager = make()
    assert isinstance(manager, UndoManager)
    assert manager.available_undo_count() == 0


def test_initially_nothing_available():
    _, manager = make()
    assert manager.available_undo_count() == 0
    assert manager.available_redo_count() == 0


def test_single_state_cannot_be_undone():
    scene, manager = make()
    manager.add_state()
    assert manager.available_undo_count() == 0
    assert manager.available_redo_count() == 0
    manager.undo()
    assert scene.restores == 0


def test_undo_and_redo_restore_snapshots():
    scene, manager = make()
    scene.items = ["a"]
    manager.add_state()
    scene.items = ["a", "b"]
    manager.add_state()

    assert manager.available_undo_count() == 1
    manager.undo()
    assert scene.items == ["a"]
    assert manager.available_undo_count() == 0
    assert manager.available_redo_count() == 1

    manager.redo()
    assert scene.items == ["a", "b"]
    assert manager.available_redo_count() == 0


def test_add_after_undo_drops_redo_history():
    scene, manager = make()
    for items in (["a"], ["b"], ["c"]):
        scene.items = items
        manager.add_state()
    manager.undo()
    manager.undo()
    assert manager.available_redo_count() == 1

    scene.items = ["d"]
    manager.add_state()
    assert manager.available_redo_count() == 0
    manager.undo()
    assert scene.items == ["a"]
    manager.redo()
    assert scene.items == ["d"]


def test_revert_state_reloads_current_snapshot():
    scene, manager = make()
    scene.items = ["a"]
    manager.add_state()
    scene.items = ["b"]
    manager.add_state()
    scene.items = ["changed"]
    manager.revert_state()
    assert scene.items == ["b"]


def test_revert_state_with_single_snapshot_does_nothing():
    scene, manager = make()
    scene.items = ["a"]
    manager.add_state()
    scene.items = ["changed"]
    manager.revert_state()
    assert scene.items == ["changed"]


def test_reset_clears_history():
    scene, manager = make()
    manager.add_state()
    manager.add_state()
    manager.reset()
    assert manager.available_undo_count() == 0
    assert manager.available_redo_count() == 0
    manager.undo()
    assert scene.restores == 0