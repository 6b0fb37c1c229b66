import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from formula_core.config import FormulaConfig, load_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json", apply_env=False)
            self.assertIsInstance(cfg, FormulaConfig)
            self.assertEqual(cfg.release.repo, "cloudmanic/tradier")
            self.assertEqual(cfg.release.tag, "latest")
            self.assertTrue(cfg.verify.enabled)
            self.assertIsNone(cfg.install.bin_dir)

    def test_load_values_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"install": {"bin_dir": "/opt/tools/bin"}, "release": {"tag": "v1.0.0"}}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path, apply_env=False)
            self.assertEqual(cfg.install.bin_dir, "/opt/tools/bin")
            self.assertEqual(cfg.release.tag, "v1.0.0")

    def test_wrong_types_fall_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "install": {"bin_dir": 42},
                "network": {"timeout_s": "fast", "ca_bundle": ["not", "a", "path"]},
                "verify": {"timeout_s": None, "enabled": "false"},
                "logging": {"keep_log_files": "many"},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path, apply_env=False)
            self.assertIsNone(cfg.install.bin_dir)
            self.assertEqual(cfg.network.timeout_s, 180)
            self.assertIsNone(cfg.network.ca_bundle)
            self.assertEqual(cfg.verify.timeout_s, 30)
            self.assertFalse(cfg.verify.enabled)
            self.assertEqual(cfg.logging.keep_log_files, 7)

    def test_numeric_strings_are_accepted(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"network": {"timeout_s": "60"}}), encoding="utf-8")
            cfg = load_config(path, apply_env=False)
            self.assertEqual(cfg.network.timeout_s, 60)

    def test_values_are_normalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "network": {"timeout_s": 1, "unknown": True},
                "verify": {"timeout_s": 9999},
                "logging": {"level": "chatty", "keep_log_files": 0},
                "release": {"tag": "  "},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path, apply_env=False)
            self.assertEqual(cfg.network.timeout_s, 5)
            self.assertEqual(cfg.verify.timeout_s, 300)
            self.assertEqual(cfg.logging.level, "INFO")
            self.assertEqual(cfg.logging.keep_log_files, 2)
            self.assertEqual(cfg.release.tag, "latest")
            self.assertFalse(hasattr(cfg.network, "unknown"))

    def test_unreadable_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            cfg = load_config(path, apply_env=False)
            self.assertEqual(cfg.network.timeout_s, 180)

    def test_environment_overrides(self):
        with tempfile.TemporaryDirectory() as tmp:
            env = {"TRADIER_FORMULA_BIN_DIR": "/srv/bin", "TRADIER_CA_BUNDLE": "/etc/ca.pem"}
            with patch.dict(os.environ, env):
                cfg = load_config(Path(tmp) / "missing.json")
            self.assertEqual(cfg.install.bin_dir, "/srv/bin")
            self.assertEqual(cfg.network.ca_bundle, "/etc/ca.pem")


if __name__ == "__main__":
    unittest.main()
