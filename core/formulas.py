"""
伤害公式计算模块
提取各阶段的纯计算公式，供伤害引擎与展示层共用
"""
from .enums import FormulaType, ScalingMode
from .stats import Unit, Skill

# 通用防御公式常数
GENERIC_DEF_DIVISOR = 100.0
EPSILON = 1e-9


def calculate_effective_attack(attacker: Unit) -> float:
    """
    计算有效攻击力

    公式: 有效攻击 = (基础ATK + 额外ATK) × (1 + 攻击力%) + 固定攻击力
    """
    return attacker.total_atk() * (1.0 + attacker.attack_buff) + attacker.flat_attack


def _speed_pairing(stat_value: float, attacker: Unit, skill: Skill) -> float:
    # 除数非正时视为无伤害，保证引擎对任意有限输入不抛异常
    if skill.spd_div <= 0:
        return 0.0
    return stat_value * ((attacker.total_spd() + skill.spd_add) / skill.spd_div)


def calculate_base_scaled(attacker: Unit, defender: Unit, skill: Skill,
                          effective_attack: float) -> float:
    """
    按技能取值规则计算每段基础值

    Args:
        attacker: 攻击方
        defender: 防御方
        skill: 技能
        effective_attack: 有效攻击力

    Returns:
        每段基础值（未乘技能倍率）
    """
    mode = skill.mode
    if mode == ScalingMode.ATK_COEF:
        return skill.coef * effective_attack
    elif mode == ScalingMode.DEF_COEF:
        return skill.coef * defender.total_def()
    elif mode == ScalingMode.HP_COEF:
        return skill.coef * attacker.total_hp()
    elif mode == ScalingMode.ATK_DEF_COMBO:
        return skill.a_coef * effective_attack + skill.d_coef * defender.total_def()
    elif mode == ScalingMode.SPD_WITH_ATK:
        return _speed_pairing(effective_attack, attacker, skill)
    elif mode == ScalingMode.SPD_WITH_DEF:
        return _speed_pairing(defender.total_def(), attacker, skill)
    elif mode == ScalingMode.SPD_WITH_HP:
        return _speed_pairing(attacker.total_hp(), attacker, skill)
    # NORMAL_ATK 及兜底
    return effective_attack


def calculate_effective_defense(defender: Unit, attacker: Unit) -> float:
    """
    计算有效防御

    公式: max(0, DEF × (1 - 破防%) × (1 - 无视防御%))
    """
    effective_def = defender.total_def() * (1.0 - attacker.defense_break)
    effective_def = effective_def * (1.0 - attacker.ignore_defense)
    return max(0.0, effective_def)


def calculate_defense_factor(effective_attack: float, effective_def: float,
                             formula: FormulaType) -> float:
    """
    计算防御乘区

    通用公式: 100 / (100 + 有效防御)
    比值公式: 有效攻击 / (有效攻击 + 有效防御 + ε)，二者之和为0时返回0
    """
    if formula == FormulaType.SUMMONER_WAR_LIKE:
        if effective_attack + effective_def > 0:
            return effective_attack / (effective_attack + effective_def + EPSILON)
        return 0.0
    return GENERIC_DEF_DIVISOR / (GENERIC_DEF_DIVISOR + effective_def)


def pre_defense_per_hit(attacker: Unit, defender: Unit, skill: Skill) -> float:
    """每段伤害（技能倍率与固定伤害之后，暴击/防御之前）"""
    effective_attack = calculate_effective_attack(attacker)
    base_scaled = calculate_base_scaled(attacker, defender, skill, effective_attack)
    return base_scaled * skill.multiplier + skill.flat_damage
