import unittest

from driveview.notify import LoggingNotifier, RecordingNotifier


class TestNotifiers(unittest.TestCase):
    def test_recording_notifier(self) -> None:
        n = RecordingNotifier()
        n.notify("success", "Renamed.")
        n.notify("error", "File not found")
        self.assertEqual(n.messages, [("success", "Renamed."), ("error", "File not found")])
        self.assertEqual(n.of_level("error"), ["File not found"])

    def test_logging_notifier_maps_levels(self) -> None:
        n = LoggingNotifier()
        with self.assertLogs("driveview.notify", level="INFO") as logs:
            n.notify("success", "Folder created.")
            n.notify("error", "Move failed.")
        self.assertEqual(
            logs.output,
            ["INFO:driveview.notify:Folder created.", "WARNING:driveview.notify:Move failed."],
        )


if __name__ == "__main__":
    unittest.main()
