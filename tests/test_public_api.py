import unittest

import driveview


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(driveview, "DriveDashboard"))
        self.assertTrue(hasattr(driveview, "Session"))
        self.assertTrue(hasattr(driveview, "ClientConfig"))
        self.assertTrue(hasattr(driveview, "AuthInfo"))
        self.assertTrue(hasattr(driveview, "OAuthClient"))

        self.assertTrue(hasattr(driveview, "Scope"))
        self.assertTrue(hasattr(driveview, "GoogleDriveApi"))
        self.assertTrue(hasattr(driveview, "AsyncDriveApi"))
        self.assertTrue(hasattr(driveview, "project"))
        self.assertTrue(hasattr(driveview, "SelectionState"))
        self.assertTrue(hasattr(driveview, "Entry"))

        self.assertTrue(hasattr(driveview, "DriveViewError"))
        self.assertTrue(hasattr(driveview, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(driveview, "__all__"))
        self.assertIn("DriveDashboard", driveview.__all__)
        self.assertIn("DriveViewError", driveview.__all__)
        for name in driveview.__all__:
            self.assertTrue(hasattr(driveview, name), name)


if __name__ == "__main__":
    unittest.main()
