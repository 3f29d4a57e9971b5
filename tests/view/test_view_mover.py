import unittest

from fakes import FakeDriveApi, file, folder

from driveview.api.protocol import Scope
from driveview.errors import ConflictError, LocalPreconditionError
from driveview.view.cache import ItemCache
from driveview.view.mover import DragDropMover


class TestDragDropMover(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.api = FakeDriveApi(
            [
                folder("A"),
                folder("B", parent="A"),
                folder("C", parent="B"),
                folder("D"),
                file("f"),
            ]
        )
        self.cache = ItemCache(self.api)
        await self.cache.load(Scope.folder())
        self.links: dict = {}
        self.mover = DragDropMover(self.api, self.cache, parent_links=self.links)
        self.api.calls.clear()

    async def test_drop_into_child_is_rejected_without_move(self) -> None:
        self.mover.begin_drag("A")
        result = await self.mover.drop("B")

        self.assertEqual(result.status, "rejected")
        self.assertEqual(self.api.calls_to("move_entry"), [])

    async def test_drop_into_grandchild_is_rejected_without_move(self) -> None:
        self.mover.begin_drag("A")
        result = await self.mover.drop("C")

        self.assertEqual(result.status, "rejected")
        self.assertEqual(self.api.calls_to("get_entry_meta"), ["C", "B"])
        self.assertEqual(self.api.calls_to("move_entry"), [])

    async def test_drag_over_uses_known_links(self) -> None:
        self.links.update({"C": "B", "B": "A"})
        self.mover.begin_drag("A")

        self.assertFalse(self.mover.drag_over("C"))
        self.assertIsNone(self.mover.drop_target_id)
        self.assertTrue(self.mover.drag_over("D"))
        self.assertEqual(self.mover.drop_target_id, "D")
        self.assertEqual(self.api.calls, [])

    async def test_self_drop_is_rejected(self) -> None:
        self.mover.begin_drag("A")
        self.assertFalse(self.mover.drag_over("A"))

        result = await self.mover.drop("A")
        self.assertEqual(result.status, "rejected")
        self.assertEqual(self.api.calls, [])

    async def test_drop_on_current_parent_is_rejected(self) -> None:
        self.mover.begin_drag("f")
        result = await self.mover.drop(None)

        self.assertEqual(result.status, "rejected")
        self.assertEqual(self.api.calls, [])

    async def test_drop_onto_file_is_rejected(self) -> None:
        self.mover.begin_drag("A")
        self.assertFalse(self.mover.drag_over("f"))

    async def test_successful_move_refreshes_once(self) -> None:
        self.mover.begin_drag("f")
        result = await self.mover.drop("A")

        self.assertTrue(result.moved)
        self.assertEqual(self.api.calls_to("move_entry"), ["f"])
        self.assertEqual(len(self.api.calls_to("list_entries")), 1)
        self.assertNotIn("f", self.cache)
        self.assertIsNone(self.mover.token)

    async def test_folder_move_to_sibling_walks_ancestry(self) -> None:
        self.mover.begin_drag("A")
        result = await self.mover.drop("D")

        self.assertTrue(result.moved)
        self.assertEqual(self.api.calls_to("move_entry"), ["A"])

    async def test_failed_move_leaves_cache_untouched(self) -> None:
        self.api.fail("move_entry", "f", ConflictError("Name already exists"))
        before = [e.id for e in self.cache.items]

        self.mover.begin_drag("f")
        result = await self.mover.drop("A")

        self.assertEqual(result.status, "failed")
        self.assertEqual(result.reason, "Name already exists")
        self.assertEqual([e.id for e in self.cache.items], before)
        self.assertEqual(self.api.calls_to("list_entries"), [])

    async def test_drop_without_drag(self) -> None:
        result = await self.mover.drop("A")
        self.assertEqual(result.status, "rejected")

    def test_begin_drag_requires_cached_entry(self) -> None:
        with self.assertRaises(LocalPreconditionError):
            self.mover.begin_drag("C")


if __name__ == "__main__":
    unittest.main()
