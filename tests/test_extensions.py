import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pinepreview.extensions import EXTENSIONS_DIR_ENV, discover_extensions, extensions_dir, script_tags


class DiscoverExtensionsTests(unittest.TestCase):
    def test_keeps_only_script_files_in_name_order(self):
        with tempfile.TemporaryDirectory() as tmp:
            for name in ("b.js", "note.txt", "a.js"):
                Path(tmp, name).write_text("// x", encoding="utf-8")
            Path(tmp, "folder.js").mkdir()
            scripts = discover_extensions(tmp)
            self.assertEqual(len(scripts), 2)
            self.assertTrue(scripts[0].startswith("file://"))
            self.assertTrue(scripts[0].endswith("/a.js"))
            self.assertTrue(scripts[1].endswith("/b.js"))

    def test_urls_are_percent_decoded(self):
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "my plugin.js").write_text("// x", encoding="utf-8")
            scripts = discover_extensions(tmp)
            self.assertEqual(len(scripts), 1)
            self.assertTrue(scripts[0].endswith("/my plugin.js"))

    def test_missing_directory_yields_empty_list(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(discover_extensions(Path(tmp) / "absent"), [])
        self.assertEqual(discover_extensions(None), [])

    def test_unreadable_directory_yields_empty_list(self):
        with tempfile.TemporaryDirectory() as tmp:
            not_a_dir = Path(tmp) / "plugins.js"
            not_a_dir.write_text("// x", encoding="utf-8")
            with self.assertLogs("pinepreview.extensions", level="WARNING"):
                self.assertEqual(discover_extensions(not_a_dir), [])

    def test_symlinked_script_keeps_listed_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "vendor" / "real.js"
            target.parent.mkdir()
            target.write_text("// x", encoding="utf-8")
            plugins = Path(tmp) / "plugins"
            plugins.mkdir()
            (plugins / "linked.js").symlink_to(target)
            scripts = discover_extensions(plugins)
            self.assertEqual(len(scripts), 1)
            self.assertTrue(scripts[0].endswith("/plugins/linked.js"))

    def test_scan_is_stable(self):
        with tempfile.TemporaryDirectory() as tmp:
            for name in ("c.js", "a.js", "b.js"):
                Path(tmp, name).write_text("", encoding="utf-8")
            self.assertEqual(discover_extensions(tmp), discover_extensions(tmp))


class ExtensionHelpersTests(unittest.TestCase):
    def test_script_tags_escape_attribute(self):
        tags = script_tags(["file:///tmp/a.js", "file:///tmp/it's.js"])
        self.assertEqual(tags.count("<script src="), 2)
        self.assertIn("<script src='file:///tmp/a.js'></script>", tags)
        self.assertIn("it&#x27;s.js", tags)
        self.assertEqual(script_tags([]), "")

    def test_directory_resolution_order(self):
        with mock.patch.dict(os.environ, {EXTENSIONS_DIR_ENV: "/opt/pine/plugins"}):
            self.assertEqual(extensions_dir("/srv/plugins"), Path("/srv/plugins"))
            self.assertEqual(extensions_dir(), Path("/opt/pine/plugins"))
        with mock.patch.dict(os.environ, {EXTENSIONS_DIR_ENV: ""}):
            self.assertEqual(extensions_dir().name, "plugins")


if __name__ == "__main__":
    unittest.main()
