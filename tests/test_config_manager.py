import json
import os
import tempfile
import unittest
from core.config_manager import ConfigManager, get_config

class TestConfigManager(unittest.TestCase):
    def setUp(self):
        # 重置单例以保证测试隔离
        ConfigManager._instance = None
        self.config = get_config()

    def tearDown(self):
        ConfigManager._instance = None

    def test_singleton(self):
        c1 = get_config()
        c2 = get_config()
        self.assertIs(c1, c2)

    def test_default_values(self):
        self.assertEqual(self.config.default_attacker_stats["atk"], 1000.0)
        self.assertEqual(self.config.default_defender_stats["def"], 800.0)
        self.assertEqual(self.config.default_crit_damage_pct, 50.0)
        self.assertEqual(self.config.coefficient("hp_coef"), 0.19)
        self.assertEqual(self.config.coefficient("spd_div"), 620.0)
        self.assertEqual(self.config.log_level, "INFO")

    def test_load_from_dict_merges_nested(self):
        self.config.load_from_dict({
            "default_defender_stats": {"def": 1200.0},
            "log_level": "DEBUG",
            "unknown_key": 1,
        })
        self.assertEqual(self.config.default_defender_stats["def"], 1200.0)
        self.assertEqual(self.config.default_defender_stats["hp"], 8000.0)
        self.assertEqual(self.config.log_level, "DEBUG")
        self.assertFalse(hasattr(self.config, "unknown_key"))

    def test_load_from_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.yaml")
            with open(path, 'w', encoding='utf-8') as f:
                f.write("default_skill_name: Fireball\ndefault_coefficients:\n  atk_coef: 2.0\n")
            self.config.load_from_file(path)

        self.assertEqual(self.config.default_skill_name, "Fireball")
        self.assertEqual(self.config.coefficient("atk_coef"), 2.0)
        self.assertEqual(self.config.coefficient("def_coef"), 3.6)

    def test_save_and_load_json(self):
        self.config.load_from_dict({"default_attacker_name": "Hero"})
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out", "config.json")
            self.config.save_to_json(path)
            with open(path, 'r', encoding='utf-8') as f:
                saved = json.load(f)
            self.assertEqual(saved["default_attacker_name"], "Hero")
            self.assertNotIn("_initialized", saved)

            self.config.reset_to_defaults()
            self.assertEqual(self.config.default_attacker_name, "Attacker")
            self.config.load_from_file(path)
            self.assertEqual(self.config.default_attacker_name, "Hero")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            self.config.load_from_yaml("/nonexistent/config.yaml")
        with self.assertRaises(FileNotFoundError):
            self.config.load_from_json("/nonexistent/config.json")

if __name__ == '__main__':
    unittest.main()
