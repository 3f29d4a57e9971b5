import asyncio
import os
import tempfile
import unittest

from fakes import FakeDriveApi, file, folder

from driveview.api.protocol import Scope
from driveview.config import ClientConfig
from driveview.dashboard import DriveDashboard
from driveview.errors import NetworkError, NotFoundError, PermissionError
from driveview.models import BulkAction
from driveview.notify import RecordingNotifier


class TestDriveDashboard(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.api = FakeDriveApi(
            [
                folder("A", "Alpha"),
                folder("B", "Beta", parent="A"),
                file("r1", "report.pdf", mime="application/pdf", size=30),
                file("r2", "photo.png", mime="image/png", size=10),
                file("r3", "Report notes.txt", size=20),
                file("b1", "inside.txt", parent="B"),
            ]
        )
        self.notifier = RecordingNotifier()
        self.dash = DriveDashboard(self.api, notifier=self.notifier)
        await self.dash.open_folder(None)

    def row_ids(self) -> list[str]:
        return [e.id for e in self.dash.rows]

    async def test_navigate_projects_rows_and_crumbs(self) -> None:
        self.assertEqual(self.row_ids(), ["A", "r2", "r3", "r1"])
        self.assertEqual([c.name for c in self.dash.crumbs], ["My Drive"])

        await self.dash.open_folder("B")
        self.assertEqual(self.row_ids(), ["b1"])
        self.assertEqual([c.name for c in self.dash.crumbs], ["My Drive", "Alpha", "Beta"])
        self.assertEqual(self.dash.current_folder_id, "B")

        await self.dash.go_up()
        self.assertEqual(self.dash.current_folder_id, "A")
        self.assertEqual(self.row_ids(), ["B"])

    async def test_search_and_sort(self) -> None:
        self.dash.set_search_text("report")
        self.assertEqual(self.row_ids(), ["r3", "r1"])

        self.dash.set_sort("size", "desc")
        self.assertEqual(self.row_ids(), ["r1", "r3"])

        self.dash.set_search_text("")
        self.dash.set_category("image")
        self.assertEqual(self.row_ids(), ["r2"])

    async def test_filter_prunes_selection(self) -> None:
        self.dash.select_all()
        self.dash.set_category("document")
        self.assertEqual(self.dash.selection.selected_ids, {"r1", "r3"})

    async def test_starred_and_trash_views_reset_crumbs(self) -> None:
        await self.dash.open_folder("B")
        await self.dash.navigate(Scope.starred())
        self.assertEqual([c.name for c in self.dash.crumbs], ["My Drive"])
        self.assertIsNone(self.dash.current_folder_id)

    async def test_stale_navigation_is_discarded(self) -> None:
        gate = self.api.hold("list_entries", Scope.folder("A"))

        slow = asyncio.ensure_future(self.dash.open_folder("A"))
        await asyncio.sleep(0)
        await self.dash.open_folder("B")
        gate.set()

        self.assertFalse(await slow)
        self.assertEqual(self.row_ids(), ["b1"])
        self.assertEqual(self.dash.current_folder_id, "B")

    async def test_load_failure_notifies_once(self) -> None:
        self.api.fail("list_entries", Scope.trash(), NetworkError("Unable to connect"))
        self.assertFalse(await self.dash.navigate(Scope.trash()))
        self.assertEqual(self.notifier.of_level("error"), ["Unable to connect"])

    async def test_failed_navigation_keeps_previous_view(self) -> None:
        await self.dash.open_folder("A")
        self.api.fail("list_entries", Scope.folder("B"), NetworkError("Unable to connect"))

        self.assertFalse(await self.dash.open_folder("B"))

        self.assertEqual(self.dash.scope, Scope.folder("A"))
        self.assertEqual(self.dash.current_folder_id, "A")
        self.assertEqual([c.name for c in self.dash.crumbs], ["My Drive", "Alpha"])
        self.assertEqual(self.row_ids(), ["B"])

        entry = await self.dash.create_folder("New")
        self.assertEqual(entry.parent_id, "A")
        self.assertIn(entry.id, self.row_ids())

    async def test_failed_navigation_to_trash_keeps_crumbs(self) -> None:
        await self.dash.open_folder("A")
        self.api.fail("list_entries", Scope.trash(), NetworkError("Unable to connect"))

        await self.dash.navigate(Scope.trash())

        self.assertEqual([c.name for c in self.dash.crumbs], ["My Drive", "Alpha"])
        self.assertEqual(self.dash.current_folder_id, "A")

    async def test_create_folder_validates_name(self) -> None:
        self.assertIsNone(await self.dash.create_folder("   "))
        self.assertEqual(self.notifier.of_level("error"), ["Enter a folder name."])
        self.assertEqual(self.api.calls_to("create_folder"), [])

        entry = await self.dash.create_folder("  Gamma ")
        self.assertEqual(entry.name, "Gamma")
        self.assertIn(entry.id, self.row_ids())

    async def test_rename_skips_blank_and_unchanged(self) -> None:
        self.assertFalse(await self.dash.rename("r1", "  "))
        self.assertFalse(await self.dash.rename("r1", "report.pdf"))
        self.assertEqual(self.api.calls_to("rename_entry"), [])

        self.assertTrue(await self.dash.rename("r1", "final.pdf"))
        self.assertEqual(self.dash.cache.get("r1").name, "final.pdf")

    async def test_toggle_star(self) -> None:
        await self.dash.toggle_star("r1")
        self.assertTrue(self.dash.cache.get("r1").is_starred)
        await self.dash.toggle_star("r1")
        self.assertFalse(self.dash.cache.get("r1").is_starred)

    async def test_bulk_star_toggles_all_or_nothing(self) -> None:
        self.api.entries["r1"].is_starred = True

        batch = await self.dash.star(["r1", "r2"])
        self.assertEqual(batch.action, "star")
        self.assertTrue(self.api.entries["r2"].is_starred)

        batch = await self.dash.star(["r1", "r2"])
        self.assertEqual(batch.action, "unstar")
        self.assertFalse(self.api.entries["r1"].is_starred)
        self.assertFalse(self.api.entries["r2"].is_starred)

    async def test_trash_removes_rows_and_clears_selection(self) -> None:
        self.dash.click("r1")
        self.dash.click("r3", ctrl=True)

        batch = await self.dash.bulk_action(BulkAction.TRASH)

        self.assertEqual(batch.succeeded, ["r1", "r3"])
        self.assertEqual(self.row_ids(), ["A", "r2"])
        self.assertEqual(len(self.dash.selection), 0)
        self.assertEqual(self.notifier.of_level("success"), ["Trash: 2 items"])

    async def test_failed_trash_rolls_back_and_reports_each_item(self) -> None:
        self.api.fail("trash_entry", "r3", PermissionError("Insufficient permissions"))
        self.dash.click("r1")
        self.dash.click("r3", ctrl=True)

        batch = await self.dash.bulk_action(BulkAction.TRASH)

        self.assertEqual(batch.succeeded, ["r1"])
        self.assertEqual(self.row_ids(), ["A", "r2", "r3"])
        self.assertEqual(
            self.notifier.of_level("error"), ["Report notes.txt: Insufficient permissions"]
        )
        self.assertEqual(self.dash.selection.selected_ids, {"r3"})

    async def test_rollback_is_visible_before_refresh(self) -> None:
        self.api.fail("delete_forever", "r1", NotFoundError("gone"))
        self.api.fail("list_entries", Scope.folder(), NetworkError("offline"))

        await self.dash.delete_forever(["r1"])

        self.assertIn("r1", self.row_ids())

    async def test_trash_view_restore_and_empty(self) -> None:
        await self.dash.trash(["r1", "r2"])
        await self.dash.navigate(Scope.trash())
        self.assertEqual(sorted(self.row_ids()), ["r1", "r2"])

        await self.dash.restore(["r1"])
        self.assertEqual(self.row_ids(), ["r2"])

        self.assertTrue(await self.dash.empty_trash())
        self.assertEqual(self.row_ids(), [])
        self.assertNotIn("r2", self.api.entries)

    async def test_drop_notifies(self) -> None:
        self.dash.mover.begin_drag("r1")
        result = await self.dash.drop("A")

        self.assertTrue(result.moved)
        self.assertEqual(self.notifier.of_level("success"), ['Moved "report.pdf".'])
        self.assertNotIn("r1", self.row_ids())

    async def test_upload_refreshes_open_folder(self) -> None:
        await self.dash.open_folder("B")
        items = await self.dash.upload(["/tmp/new.txt"])

        self.assertEqual(items[0].status.value, "completed")
        self.assertIn("new.txt", [e.name for e in self.dash.rows])

    async def test_upload_folder_recreates_tree_in_open_folder(self) -> None:
        await self.dash.open_folder("B")
        with tempfile.TemporaryDirectory() as tmp:
            album = os.path.join(tmp, "album")
            os.makedirs(os.path.join(album, "sub"))
            for rel in ("a.txt", os.path.join("sub", "b.txt")):
                with open(os.path.join(album, rel), "w") as f:
                    f.write("x")

            items = await self.dash.upload_folder(album)

        self.assertEqual([i.status.value for i in items], ["completed", "completed"])
        album_entry = next(e for e in self.dash.rows if e.name == "album")
        self.assertEqual(album_entry.parent_id, "B")

    async def test_clear_selection_on_navigate_option(self) -> None:
        dash = DriveDashboard(self.api, ClientConfig(clear_selection_on_navigate=True))
        await dash.open_folder(None)
        dash.select_all()
        await dash.refresh()
        self.assertEqual(len(dash.selection), 4)

        await dash.open_folder("A")
        self.assertEqual(len(dash.selection), 0)


if __name__ == "__main__":
    unittest.main()
