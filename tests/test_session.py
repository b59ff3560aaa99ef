import unittest
from unittest.mock import MagicMock

from core.launcher import LaunchResult, LaunchStatus
from core.module_scanner import ScanResult
from core.session import SearchSession
from shared.module_descriptor import ModuleDescriptor


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def show(self, title, message):
        self.messages.append((title, message))


def _modules():
    return [
        ModuleDescriptor(
            id="kcm_bluetooth",
            name="Bluetooth",
            keywords=("wireless", "BT"),
            launch_command="systemsettings kcm_bluetooth",
        ),
        ModuleDescriptor(id="kcm_fonts", name="Fonts", launch_command="kcmshell6 kcm_fonts", schema="legacy"),
    ]


class TestSearchSession(unittest.TestCase):
    def setUp(self):
        self.scanner = MagicMock()
        self.scanner.scan.return_value = ScanResult(modules=_modules(), errors=[])
        self.notifier = RecordingNotifier()
        self.launcher = MagicMock()
        self.close_session = MagicMock()
        self.session = SearchSession(
            scanner=self.scanner,
            notifier=self.notifier,
            launcher=self.launcher,
            close_session=self.close_session,
            launch_timeout_seconds=7,
        )

    def test_start_scans_once(self):
        self.session.start()
        self.session.start()

        self.scanner.scan.assert_called_once_with()
        self.assertEqual([module.id for module in self.session.modules], ["kcm_bluetooth", "kcm_fonts"])

    def test_query_updates_results(self):
        self.session.start()

        self.assertEqual(len(self.session.results), 2)
        self.assertEqual([module.id for module in self.session.set_query("bt")], ["kcm_bluetooth"])
        self.assertEqual(self.session.query, "bt")

    def test_initial_query_applies_after_start(self):
        session = SearchSession(scanner=self.scanner, notifier=self.notifier, initial_query="font")
        session.start()

        self.assertEqual([module.id for module in session.results], ["kcm_fonts"])

    def test_successful_open_notifies_and_closes(self):
        module = _modules()[0]
        self.launcher.return_value = LaunchResult(status=LaunchStatus.SUCCESS, command=module.launch_command)

        result = self.session.open_module(module)

        self.assertTrue(result.ok)
        self.launcher.assert_called_once_with("systemsettings kcm_bluetooth", timeout=7)
        self.assertEqual(
            self.notifier.messages,
            [
                ("Opening Bluetooth...", "Launching KDE System Settings"),
                ("Success", "Bluetooth opened successfully"),
            ],
        )
        self.close_session.assert_called_once_with()

    def test_timeout_is_reported_through_notifier(self):
        module = _modules()[1]
        self.launcher.return_value = LaunchResult(status=LaunchStatus.TIMEOUT, command=module.launch_command)

        result = self.session.open_module(module)

        self.assertEqual(result.status, LaunchStatus.TIMEOUT)
        title, message = self.notifier.messages[-1]
        self.assertEqual(title, "Error")
        self.assertTrue(message.startswith("Failed to open Fonts: Command timed out"))
        self.close_session.assert_not_called()

    def test_failing_close_signal_is_reported_not_raised(self):
        module = _modules()[0]
        self.launcher.return_value = LaunchResult(status=LaunchStatus.SUCCESS, command=module.launch_command)
        self.close_session.side_effect = RuntimeError("window gone")

        result = self.session.open_module(module)

        self.assertEqual(result.status, LaunchStatus.PROCESS_ERROR)
        self.assertEqual(self.notifier.messages[-1], ("Error", "Failed to open Bluetooth: window gone"))

    def test_raising_launcher_is_reported_not_raised(self):
        module = _modules()[1]
        self.launcher.side_effect = ValueError("bad command")

        result = self.session.open_module(module)

        self.assertFalse(result.ok)
        self.assertEqual(self.notifier.messages[-1], ("Error", "Failed to open Fonts: bad command"))
        self.close_session.assert_not_called()

    def test_raising_notifier_does_not_escape(self):
        notifier = MagicMock()
        notifier.show.side_effect = RuntimeError("no display")
        session = SearchSession(scanner=self.scanner, notifier=notifier, launcher=self.launcher)

        result = session.open_module(_modules()[0])

        self.assertEqual(result.status, LaunchStatus.PROCESS_ERROR)
        self.launcher.assert_not_called()

    def test_copy_module_id_uses_clipboard(self):
        clipboard = MagicMock()
        session = SearchSession(scanner=self.scanner, notifier=self.notifier, copy_to_clipboard=clipboard)

        self.assertEqual(session.copy_module_id(_modules()[1]), "kcm_fonts")
        clipboard.assert_called_once_with("kcm_fonts")

    def test_find_by_id(self):
        self.session.start()

        self.assertEqual(self.session.find("kcm_fonts").name, "Fonts")
        self.assertIsNone(self.session.find("kcm_missing"))


if __name__ == "__main__":
    unittest.main()
