import unittest

from driveview.config import DRIVE_FULL_SCOPE, ClientConfig


class TestClientConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ClientConfig()
        self.assertEqual(config.root_label, "My Drive")
        self.assertEqual(config.max_breadcrumb_hops, 25)
        self.assertFalse(config.clear_selection_on_navigate)
        self.assertTrue(config.supports_all_drives)
        self.assertEqual(config.scopes, (DRIVE_FULL_SCOPE,))
        self.assertIsNone(config.max_upload_size)

    def test_validation(self) -> None:
        with self.assertRaises(ValueError):
            ClientConfig(root_label=" ")
        with self.assertRaises(ValueError):
            ClientConfig(max_breadcrumb_hops=0)
        with self.assertRaises(ValueError):
            ClientConfig(scopes=())
        with self.assertRaises(ValueError):
            ClientConfig(max_upload_size=0)

    def test_from_mapping_ignores_unknown_keys(self) -> None:
        config = ClientConfig.from_mapping(
            {
                "root_label": "Drive",
                "clear_selection_on_navigate": True,
                "scopes": ["https://www.googleapis.com/auth/drive.readonly"],
                "theme": "dark",
            }
        )
        self.assertEqual(config.root_label, "Drive")
        self.assertTrue(config.clear_selection_on_navigate)
        self.assertEqual(config.scopes, ("https://www.googleapis.com/auth/drive.readonly",))

    def test_from_mapping_empty(self) -> None:
        self.assertEqual(ClientConfig.from_mapping(None), ClientConfig())


if __name__ == "__main__":
    unittest.main()
