import os
import tempfile
import unittest
from core.config_manager import ConfigManager
from core.enums import Element, FormulaType, ScalingMode
from simulation.presets import PRESETS
from simulation.scenario import Scenario, load_scenario, compare_formulas, sweep_defense

SCENARIO_YAML = """
attacker:
  name: Fire Knight
  element: fire
  base_atk: 1000
  crit_rate_pct: 20
defender:
  name: Wind Golem
  element: wind
  base_def: 800
skill:
  name: Flame Slash
  mode: atk_coef
  coef: 2.0
  hits: 2
formula: summoner_war_like
"""


class TestScenario(unittest.TestCase):
    def setUp(self):
        ConfigManager._instance = None
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()
        ConfigManager._instance = None

    def write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def test_load_scenario(self):
        scenario = load_scenario(self.write("s.yaml", SCENARIO_YAML))
        self.assertEqual(scenario.attacker.element, Element.FIRE)
        self.assertEqual(scenario.attacker.crit_rate, 0.2)
        self.assertEqual(scenario.defender.total_def(), 800.0)
        self.assertEqual(scenario.skill.mode, ScalingMode.ATK_COEF)
        self.assertEqual(scenario.skill.hits, 2)
        self.assertEqual(scenario.formula, FormulaType.SUMMONER_WAR_LIKE)

        result = scenario.run()
        self.assertGreater(result.avg_damage, result.min_damage)

    def test_empty_scenario_uses_defaults(self):
        scenario = load_scenario(self.write("empty.yaml", ""))
        result = scenario.run()
        self.assertAlmostEqual(result.min_damage, 1000 * 100 / 900)

    def test_unknown_enum_is_rejected(self):
        path = self.write("bad.yaml", "attacker:\n  element: lava\n")
        with self.assertRaises(ValueError):
            load_scenario(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_scenario(os.path.join(self.tmp.name, "missing.yaml"))

    def test_presets_build(self):
        for name, preset in PRESETS.items():
            scenario = Scenario.from_dict(preset)
            result = scenario.run()
            self.assertGreaterEqual(result.avg_damage, result.min_damage, name)
            self.assertLessEqual(result.avg_damage, result.max_damage, name)

    def test_compare_formulas(self):
        scenario = Scenario.from_dict({})
        results = compare_formulas(scenario)
        self.assertEqual(set(results), set(FormulaType))
        self.assertAlmostEqual(results[FormulaType.GENERIC].min_damage, 1000 * 100 / 900)
        self.assertAlmostEqual(results[FormulaType.SUMMONER_WAR_LIKE].min_damage, 1000 * 1000 / 1800)

    def test_sweep_defense(self):
        scenario = Scenario.from_dict({})
        values = [0, 100, 800, 5000]
        sweep = sweep_defense(scenario, values)
        self.assertEqual([v for v, _ in sweep], values)
        self.assertAlmostEqual(sweep[0][1].min_damage, 1000.0)
        averages = [r.avg_damage for _, r in sweep]
        self.assertEqual(averages, sorted(averages, reverse=True))

    def test_sweep_with_ignore_defense_is_flat(self):
        scenario = Scenario.from_dict({"skill": {"ignore_defense": True}})
        results = {r for _, r in sweep_defense(scenario, range(0, 10001, 500))}
        self.assertEqual(len(results), 1)

    def test_with_defender_def(self):
        scenario = Scenario.from_dict({"defender": {"base_def": 300, "bonus_def": 200}})
        updated = scenario.with_defender_def(900)
        self.assertEqual(updated.defender.total_def(), 900.0)
        self.assertEqual(scenario.defender.total_def(), 500.0)


if __name__ == '__main__':
    unittest.main()
