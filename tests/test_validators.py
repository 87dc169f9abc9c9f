import unittest
from core.config_manager import ConfigManager
from core.enums import Element, FormulaType, ScalingMode
from core.validators import (parse_float_or_default, parse_int_or_default, parse_bool,
                             parse_element, parse_mode, parse_formula,
                             validate_non_negative, validate_percentage, validate_hits,
                             validate_divisor, build_attacker, build_defender, build_skill)


class TestParsing(unittest.TestCase):
    def test_parse_float(self):
        self.assertEqual(parse_float_or_default(" 12.5 ", 1.0), 12.5)
        self.assertEqual(parse_float_or_default(7, 1.0), 7.0)
        self.assertEqual(parse_float_or_default("", 5.0), 5.0)
        self.assertEqual(parse_float_or_default(None, 5.0), 5.0)
        self.assertEqual(parse_float_or_default("abc", 5.0), 5.0)
        self.assertEqual(parse_float_or_default("nan", 5.0), 5.0)
        self.assertEqual(parse_float_or_default("inf", 5.0), 5.0)

    def test_parse_int_truncates(self):
        self.assertEqual(parse_int_or_default("3.9", 1), 3)
        self.assertEqual(parse_int_or_default("x", 1), 1)

    def test_parse_bool(self):
        self.assertTrue(parse_bool("y"))
        self.assertTrue(parse_bool("YES"))
        self.assertTrue(parse_bool(True))
        self.assertFalse(parse_bool(""))
        self.assertFalse(parse_bool("n"))
        self.assertFalse(parse_bool(None))

    def test_parse_element_menu_codes(self):
        self.assertEqual(parse_element("1"), Element.FIRE)
        self.assertEqual(parse_element(2), Element.WIND)
        self.assertEqual(parse_element("3"), Element.WATER)
        self.assertEqual(parse_element("4"), Element.LIGHT)
        self.assertEqual(parse_element("5"), Element.DARK)
        self.assertEqual(parse_element("9"), Element.NONE)
        self.assertEqual(parse_element(""), Element.NONE)

    def test_parse_element_names(self):
        self.assertEqual(parse_element("fire"), Element.FIRE)
        self.assertEqual(parse_element("DARK"), Element.DARK)
        self.assertEqual(parse_element(Element.WATER), Element.WATER)

    def test_parse_element_unknown(self):
        warnings = []
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(parse_element("lava", warnings=warnings), Element.NONE)
        self.assertEqual(len(warnings), 1)

        with self.assertRaises(ValueError):
            parse_element("lava", "attacker.element", strict=True)

    def test_parse_mode(self):
        self.assertEqual(parse_mode("1"), ScalingMode.ATK_COEF)
        self.assertEqual(parse_mode("4"), ScalingMode.ATK_DEF_COMBO)
        self.assertEqual(parse_mode("7"), ScalingMode.SPD_WITH_HP)
        self.assertEqual(parse_mode("8"), ScalingMode.NORMAL_ATK)
        self.assertEqual(parse_mode("spd_with_def"), ScalingMode.SPD_WITH_DEF)

    def test_parse_formula(self):
        self.assertEqual(parse_formula("2"), FormulaType.SUMMONER_WAR_LIKE)
        self.assertEqual(parse_formula(1), FormulaType.GENERIC)
        self.assertEqual(parse_formula("3"), FormulaType.GENERIC)
        self.assertEqual(parse_formula("summoner_war_like"), FormulaType.SUMMONER_WAR_LIKE)


class TestValidation(unittest.TestCase):
    def test_non_negative(self):
        warnings = []
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(validate_non_negative(-5, "基础ATK", warnings), 0.0)
        self.assertEqual(len(warnings), 1)
        self.assertEqual(validate_non_negative(12.0, "基础ATK"), 12.0)

    def test_percentage(self):
        self.assertEqual(validate_percentage(25, "暴击率"), 0.25)
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(validate_percentage(150, "暴击率"), 1.0)
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(validate_percentage(-10, "暴击率"), 0.0)

    def test_hits(self):
        self.assertEqual(validate_hits(3), 3)
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(validate_hits(0), 1)

    def test_divisor(self):
        self.assertEqual(validate_divisor(500, "SPD除数", 620.0), 500)
        with self.assertLogs("validators", level="WARNING"):
            self.assertEqual(validate_divisor(0, "SPD除数", 620.0), 620.0)


class TestBuilders(unittest.TestCase):
    def setUp(self):
        ConfigManager._instance = None

    def tearDown(self):
        ConfigManager._instance = None

    def test_attacker_defaults(self):
        attacker = build_attacker({})
        self.assertEqual(attacker.name, "Attacker")
        self.assertEqual(attacker.element, Element.NONE)
        self.assertEqual(attacker.total_atk(), 1000.0)
        self.assertEqual(attacker.total_hp(), 4000.0)
        self.assertEqual(attacker.total_def(), 500.0)
        self.assertEqual(attacker.total_spd(), 100.0)
        self.assertEqual(attacker.crit_damage, 0.5)
        self.assertEqual(attacker.crit_rate, 0.0)

    def test_attacker_percent_conversion(self):
        warnings = []
        attacker = build_attacker({
            "element": "2", "base_atk": "1200", "bonus_atk": "-50",
            "attack_buff_pct": "30", "crit_rate_pct": "150", "defense_break_pct": 70,
        }, warnings=warnings)
        self.assertEqual(attacker.element, Element.WIND)
        self.assertEqual(attacker.base_atk, 1200.0)
        self.assertEqual(attacker.bonus_atk, 0.0)
        self.assertEqual(attacker.attack_buff, 0.3)
        self.assertEqual(attacker.crit_rate, 1.0)
        self.assertEqual(attacker.defense_break, 0.7)
        self.assertEqual(len(warnings), 2)

    def test_unparseable_falls_back(self):
        attacker = build_attacker({"base_atk": "lots"})
        self.assertEqual(attacker.base_atk, 1000.0)

    def test_defender_defaults(self):
        defender = build_defender({"damage_reduction_pct": "20"})
        self.assertEqual(defender.name, "Defender")
        self.assertEqual(defender.total_hp(), 8000.0)
        self.assertEqual(defender.total_def(), 800.0)
        self.assertEqual(defender.damage_reduction, 0.2)

    def test_skill_defaults(self):
        skill = build_skill({})
        self.assertEqual(skill.name, "Basic")
        self.assertEqual(skill.mode, ScalingMode.NORMAL_ATK)
        self.assertEqual(skill.multiplier, 1.0)
        self.assertEqual(skill.hits, 1)
        self.assertFalse(skill.ignore_defense)

    def test_skill_mode_coefficients(self):
        self.assertEqual(build_skill({"mode": "1"}).coef, 1.7)
        self.assertEqual(build_skill({"mode": "2"}).coef, 3.6)
        self.assertEqual(build_skill({"mode": "3"}).coef, 0.19)

        combo = build_skill({"mode": "4"})
        self.assertEqual((combo.a_coef, combo.d_coef), (1.7, 2.9))

        speed = build_skill({"mode": "6", "spd_add": "80"})
        self.assertEqual((speed.spd_add, speed.spd_div), (80.0, 620.0))

    def test_skill_inactive_coefficients_ignored(self):
        # 非当前取值规则的系数不读取也不校验
        skill = build_skill({"mode": "atk_coef", "a_coef": -5, "spd_div": 0})
        self.assertEqual(skill.a_coef, 1.0)
        self.assertEqual(skill.spd_div, 620.0)
        self.assertEqual(skill.relevant_coefficients(), {"coef": 1.7})

    def test_skill_validation(self):
        warnings = []
        skill = build_skill({"mode": "5", "multiplier": "-2", "hits": "0",
                             "spd_div": "0", "ignore_defense": "y"}, warnings=warnings)
        self.assertEqual(skill.multiplier, 0.0)
        self.assertEqual(skill.hits, 1)
        self.assertEqual(skill.spd_div, 620.0)
        self.assertTrue(skill.ignore_defense)
        self.assertEqual(len(warnings), 3)

    def test_builders_follow_config(self):
        ConfigManager().load_from_dict({"default_attacker_stats": {"atk": 2500.0},
                                        "default_coefficients": {"atk_coef": 2.2}})
        self.assertEqual(build_attacker({}).base_atk, 2500.0)
        self.assertEqual(build_attacker({}).base_hp, 4000.0)
        self.assertEqual(build_skill({"mode": "1"}).coef, 2.2)


if __name__ == '__main__':
    unittest.main()
