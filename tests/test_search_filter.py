import unittest

from core.search_filter import filter_modules, matches
from shared.module_descriptor import ModuleDescriptor


def _module(module_id, name, description="", keywords=()):
    return ModuleDescriptor(
        id=module_id,
        name=name,
        description=description,
        keywords=keywords,
        launch_command=f"systemsettings {module_id}",
    )


class TestSearchFilter(unittest.TestCase):
    def setUp(self):
        self.modules = [
            _module("kcm_bluetooth", "Bluetooth", "Configure Bluetooth devices", ("wireless", "BT")),
            _module("kcm_fonts", "Fonts", "Configure user interface fonts", ("typeface",)),
            _module("kcm_mouse", "Mouse", "Pointer settings", ("cursor", "click")),
            _module("kcm_networkmanagement", "Connections", "Network connections", ("wifi", "vpn")),
        ]

    def test_empty_query_returns_everything_in_order(self):
        result = filter_modules(self.modules, "")

        self.assertEqual(result, self.modules)
        self.assertIsNot(result, self.modules)

    def test_keyword_match_is_case_insensitive(self):
        result = filter_modules(self.modules, "bt")

        self.assertEqual([module.id for module in result], ["kcm_bluetooth"])

    def test_matches_name_description_or_keyword(self):
        self.assertTrue(matches(self.modules[1], "FON"))
        self.assertTrue(matches(self.modules[2], "pointer"))
        self.assertTrue(matches(self.modules[3], "VPN"))
        self.assertFalse(matches(self.modules[2], "vpn"))

    def test_result_preserves_relative_order(self):
        result = filter_modules(self.modules, "configure")

        self.assertEqual([module.id for module in result], ["kcm_bluetooth", "kcm_fonts"])

    def test_filter_is_idempotent(self):
        for query in ("", "c", "configure", "wi", "nothing-matches"):
            once = filter_modules(self.modules, query)
            self.assertEqual(filter_modules(once, query), once)

    def test_no_match_returns_empty_list(self):
        self.assertEqual(filter_modules(self.modules, "printer"), [])


if __name__ == "__main__":
    unittest.main()
