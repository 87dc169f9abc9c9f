import argparse
import sys
import traceback

from core.config_manager import get_config
from core.log_setup import setup_logging
from core.validators import parse_formula, parse_mode
from core.enums import ScalingMode
from simulation.presets import PRESETS
from simulation.report import format_details, format_result, format_summary
from simulation.scenario import Scenario, load_scenario


ELEMENT_PROMPT = "选择元素: 1=FIRE, 2=WIND, 3=WATER, 4=LIGHT, 5=DARK, 其他=NONE"

MODE_MENU_TEXT = [
    "1) ATK_COEF        (coef * ATK)",
    "2) DEF_COEF        (coef * DEF)",
    "3) HP_COEF         (coef * MAX_HP)",
    "4) ATK_DEF_COMBO   (aCoef*ATK + dCoef*DEF)",
    "5) SPD_WITH_ATK    (ATK * (SPD + add) / div)",
    "6) SPD_WITH_DEF    (DEF * (SPD + add) / div)",
    "7) SPD_WITH_HP     (MAX_HP * (SPD + add) / div)",
    "其他 -> NORMAL_ATK",
]


def ask(prompt: str, default):
    """提示输入，空输入返回默认值"""
    raw = input(f"{prompt} [{default}]: ").strip()
    return raw if raw else default


def ask_yes_no(prompt: str) -> str:
    return input(f"{prompt} (y/N): ").strip()


def prompt_attacker() -> dict:
    config = get_config()
    defaults = config.default_attacker_stats
    raw = {"name": ask("攻击方名称", config.default_attacker_name)}

    print(ELEMENT_PROMPT)
    raw["element"] = input().strip()

    raw["base_atk"] = ask("攻击方 基础ATK", defaults["atk"])
    raw["bonus_atk"] = ask("攻击方 额外ATK", 0.0)
    raw["base_hp"] = ask("攻击方 基础HP", defaults["hp"])
    raw["bonus_hp"] = ask("攻击方 额外HP", 0.0)
    raw["base_def"] = ask("攻击方 基础DEF", defaults["def"])
    raw["bonus_def"] = ask("攻击方 额外DEF", 0.0)
    raw["base_spd"] = ask("攻击方 基础SPD", defaults["spd"])
    raw["bonus_spd"] = ask("攻击方 额外SPD", 0.0)

    raw["attack_buff_pct"] = ask("攻击方 攻击力%", 0.0)
    raw["flat_attack"] = ask("攻击方 固定攻击力", 0.0)
    raw["crit_rate_pct"] = ask("攻击方 暴击率%", 0.0)
    raw["crit_damage_pct"] = ask("攻击方 暴击伤害%", config.default_crit_damage_pct)
    raw["defense_break_pct"] = ask("攻击方 破防%", 0.0)
    raw["ignore_defense_pct"] = ask("攻击方 无视防御%", 0.0)
    raw["damage_amplify_pct"] = ask("攻击方 增伤%", 0.0)
    return raw


def prompt_defender() -> dict:
    config = get_config()
    defaults = config.default_defender_stats
    raw = {"name": ask("防御方名称", config.default_defender_name)}

    print(ELEMENT_PROMPT)
    raw["element"] = input().strip()

    raw["base_hp"] = ask("防御方 基础HP", defaults["hp"])
    raw["bonus_hp"] = ask("防御方 额外HP", 0.0)
    raw["base_def"] = ask("防御方 基础DEF", defaults["def"])
    raw["bonus_def"] = ask("防御方 额外DEF", 0.0)
    raw["damage_reduction_pct"] = ask("防御方 减伤%", 0.0)
    return raw


def prompt_skill() -> dict:
    config = get_config()
    raw = {"name": ask("技能名称", config.default_skill_name)}

    print("\n选择取值规则:")
    for line in MODE_MENU_TEXT:
        print(line)
    raw["mode"] = ask("取值规则", 1)

    raw["multiplier"] = ask("技能倍率", config.default_skill_multiplier)
    raw["flat_damage"] = ask("每段固定伤害", 0.0)
    raw["hits"] = ask("段数", config.default_skill_hits)
    raw["ignore_defense"] = ask_yes_no("技能是否完全无视防御?")

    # 只询问当前取值规则用到的系数
    mode = parse_mode(raw["mode"], "skill.mode")
    if mode == ScalingMode.ATK_COEF:
        raw["coef"] = ask("ATK系数 (coef * ATK)", config.coefficient("atk_coef"))
    elif mode == ScalingMode.DEF_COEF:
        raw["coef"] = ask("DEF系数 (coef * DEF)", config.coefficient("def_coef"))
    elif mode == ScalingMode.HP_COEF:
        raw["coef"] = ask("HP系数 (coef * MAX_HP)", config.coefficient("hp_coef"))
    elif mode == ScalingMode.ATK_DEF_COMBO:
        raw["a_coef"] = ask("aCoef (aCoef * ATK)", config.coefficient("a_coef"))
        raw["d_coef"] = ask("dCoef (dCoef * DEF)", config.coefficient("d_coef"))
    elif mode in (ScalingMode.SPD_WITH_ATK, ScalingMode.SPD_WITH_DEF, ScalingMode.SPD_WITH_HP):
        raw["spd_add"] = ask("SPD加值 (SPD + add)", config.coefficient("spd_add"))
        raw["spd_div"] = ask("SPD除数 (/div)", config.coefficient("spd_div"))
    return raw


def prompt_formula() -> str:
    print("\n选择防御公式:")
    print("1) GENERIC")
    print("2) SUMMONER_WAR_LIKE")
    return ask("选择", 1)


def prompt_scenario() -> Scenario:
    """交互式收集一次计算的全部输入"""
    attacker = prompt_attacker()
    print()
    defender = prompt_defender()
    print()
    skill = prompt_skill()
    print()
    formula = prompt_formula()
    return Scenario.from_dict(
        {"attacker": attacker, "defender": defender, "skill": skill, "formula": formula},
        strict=False,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="伤害计算器（多取值规则、SPD配合、多段技能、元素克制）")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--preset", help="使用预设场景")
    source.add_argument("--scenario", help="从YAML文件加载场景")
    source.add_argument("--list-presets", action="store_true", help="列出全部预设")
    parser.add_argument("--formula", help="覆盖防御公式 (generic / summoner_war_like / 1 / 2)")
    parser.add_argument("--config", help="配置文件 (YAML 或 JSON)")
    parser.add_argument("--log-level", help="日志级别 (DEBUG, INFO, WARNING, ERROR)")
    return parser


def print_report(scenario: Scenario):
    breakdown = scenario.breakdown()
    print(format_summary(scenario.attacker, scenario.defender, scenario.skill))
    print(format_result(f"伤害结果 ({scenario.formula.name})", breakdown.result))
    print(format_details(scenario.attacker, scenario.defender, scenario.skill, breakdown))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    if args.config:
        try:
            config.load_from_file(args.config)
        except (FileNotFoundError, ValueError) as e:
            print(f"错误: {e}")
            return 1
    setup_logging(args.log_level)

    if args.list_presets:
        for name, preset in PRESETS.items():
            print(f"{name}: {preset['description']}")
        return 0

    try:
        if args.preset:
            if args.preset not in PRESETS:
                print(f"错误: 未知预设 '{args.preset}'")
                return 1
            scenario = Scenario.from_dict(PRESETS[args.preset])
        elif args.scenario:
            scenario = load_scenario(args.scenario)
        else:
            print("伤害计算器（多取值规则、SPD配合、多段技能、元素克制）")
            print()
            scenario = prompt_scenario()

        if args.formula:
            scenario = scenario.with_formula(parse_formula(args.formula, "--formula", strict=True))

        print()
        print("计算中...")
        print_report(scenario)
    except (FileNotFoundError, ValueError) as e:
        print(f"错误: {e}")
        return 1
    except Exception as e:
        print(f"错误: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
