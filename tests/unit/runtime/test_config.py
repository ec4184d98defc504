"""Tests for config persistence, sanitization and interactive editing.

Ensures malformed config data is safely normalized on load and that the
editor flow never overwrites the stored config with invalid JSON.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytree.runtime import config
from lazytree.tree_model import WalkMode


class ConfigBehaviorTests(unittest.TestCase):
    def test_ensure_config_creates_default_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_dir = Path(tmp) / "lazytree"
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", config_dir):
                loaded = config.ensure_config()

                self.assertEqual(loaded, config.AppConfig())
                self.assertTrue((config_dir / "config.json").is_file())
                template = json.loads((config_dir / "templates" / "default.json").read_text(encoding="utf-8"))
                self.assertEqual(template["prefix"]["branch"], "├──")
                self.assertEqual(template["colors"]["dir"], "#1e88e5")

    def test_ensure_config_keeps_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_dir = Path(tmp)
            (config_dir / "config.json").write_text('{"max_depth": 3}', encoding="utf-8")
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", config_dir):
                loaded = config.ensure_config()

            self.assertEqual(loaded.max_depth, 3)

    def test_save_and_load_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            expected = config.AppConfig(
                font_path="/fonts/mono.ttf",
                log_level="debug",
                image_width=800,
                show_hidden_files=True,
                max_depth=4,
                ignore_patterns=("*.log", "node_modules"),
                template="ascii",
                color="never",
                theme="ocean",
                walk_mode="strict",
            )
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", Path(tmp)):
                config.save_config(expected)
                self.assertEqual(config.load_config(), expected)

    def test_malformed_file_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", Path(tmp)):
                config.config_file().write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config_data(), {})
                self.assertEqual(config.load_config(), config.AppConfig())

                config.config_file().write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config_data(), {})

    def test_from_dict_drops_wrong_typed_values(self) -> None:
        loaded = config.AppConfig.from_dict(
            {
                "font_path": "  ",
                "log_level": "WARNING",
                "image_width": -5,
                "show_hidden_files": "yes",
                "max_depth": True,
                "ignore_patterns": ["*.tmp", 3, ""],
                "template": 7,
                "color": "sometimes",
                "theme": "unknown",
                "walk_mode": "STRICT",
            }
        )

        self.assertIsNone(loaded.font_path)
        self.assertEqual(loaded.log_level, "warn")
        self.assertEqual(loaded.image_width, config.DEFAULT_IMAGE_WIDTH)
        self.assertFalse(loaded.show_hidden_files)
        self.assertEqual(loaded.max_depth, config.DEFAULT_MAX_DEPTH)
        self.assertEqual(loaded.ignore_patterns, ("*.tmp",))
        self.assertEqual(loaded.template, "default")
        self.assertEqual(loaded.color, "auto")
        self.assertEqual(loaded.theme, "default")
        self.assertEqual(loaded.walk_mode, "strict")

    def test_scan_options_follow_config(self) -> None:
        options = config.AppConfig(
            show_hidden_files=True,
            max_depth=2,
            ignore_patterns=("dist",),
            walk_mode="strict",
        ).scan_options()

        self.assertTrue(options.show_hidden)
        self.assertEqual(options.max_depth, 2)
        self.assertEqual(options.ignore_patterns, ("dist",))
        self.assertIs(options.mode, WalkMode.STRICT)

    def test_save_config_reports_unwritable_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("x", encoding="utf-8")
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", blocker / "sub"):
                with self.assertRaises(config.ConfigError):
                    config.save_config(config.AppConfig())


class EditConfigTests(unittest.TestCase):
    def _fake_editor(self, text: str, returncode: int = 0):
        def run(cmd, check=False):
            Path(cmd[-1]).write_text(text, encoding="utf-8")
            return mock.Mock(returncode=returncode)

        return mock.patch("lazytree.runtime.config.subprocess.run", side_effect=run)

    def test_valid_edit_is_saved(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", Path(tmp)), mock.patch.dict(
                "os.environ", {"EDITOR": "nano -w"}
            ), self._fake_editor('{"max_depth": 2, "color": "never"}') as run:
                updated = config.edit_config_interactive()
                stored = config.load_config()

            self.assertEqual(run.call_args.args[0][:2], ["nano", "-w"])
            self.assertEqual(updated.max_depth, 2)
            self.assertEqual(stored.color, "never")
            self.assertFalse(Path(run.call_args.args[0][-1]).exists())

    def test_invalid_edit_leaves_config_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", Path(tmp)), self._fake_editor("{broken"):
                with self.assertRaises(config.ConfigError):
                    config.edit_config_interactive()
                self.assertEqual(config.load_config(), config.AppConfig())

    def test_failing_editor_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazytree.runtime.config.CONFIG_DIR", Path(tmp)), self._fake_editor("{}", returncode=1):
                with self.assertRaises(config.ConfigError):
                    config.edit_config_interactive()

    def test_editor_defaults_to_vi(self) -> None:
        with mock.patch.dict("os.environ", {"EDITOR": ""}):
            self.assertEqual(config._editor_command(), ["vi"])


if __name__ == "__main__":
    unittest.main()
