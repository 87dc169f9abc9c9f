"""
文本报告
将计算输入与结果格式化为控制台输出
"""
from typing import List

from core.calculator import DamageBreakdown, DamageResult
from core.elements import describe_element_effect, element_relation
from core.enums import ScalingMode
from core.formulas import pre_defense_per_hit
from core.stats import Unit, Skill


def fmt_amount(value: float) -> str:
    """千分位，保留两位小数 (1,234.50)"""
    return f"{value:,.2f}"


def fmt_compact(value: float) -> str:
    """千分位，最多两位小数，去掉末尾的0 (1,234.5)"""
    text = f"{value:,.2f}"
    return text.rstrip('0').rstrip('.')


def fmt_pct(fraction: float) -> str:
    return f"{int(round(fraction * 100))}%"


def describe_formula(skill: Skill) -> str:
    """技能取值公式说明"""
    mode = skill.mode
    if mode == ScalingMode.ATK_COEF:
        return f"{skill.coef} * ATK"
    if mode == ScalingMode.DEF_COEF:
        return f"{skill.coef} * 目标DEF"
    if mode == ScalingMode.HP_COEF:
        return f"{skill.coef} * 最大HP"
    if mode == ScalingMode.ATK_DEF_COMBO:
        return f"{skill.a_coef} * ATK  +  {skill.d_coef} * 目标DEF"
    if mode == ScalingMode.SPD_WITH_ATK:
        return f"ATK * (SPD + {skill.spd_add}) / {skill.spd_div}"
    if mode == ScalingMode.SPD_WITH_DEF:
        return f"目标DEF * (SPD + {skill.spd_add}) / {skill.spd_div}"
    if mode == ScalingMode.SPD_WITH_HP:
        return f"最大HP * (SPD + {skill.spd_add}) / {skill.spd_div}"
    return "ATK * 倍率"


def _stat_line(label: str, total: float, base: float, bonus: float) -> str:
    return f"  {label:<6}{fmt_compact(total)} (基础 {fmt_compact(base)} + 额外 {fmt_compact(bonus)})"


def format_summary(attacker: Unit, defender: Unit, skill: Skill) -> str:
    lines: List[str] = ["", "=== 战斗概要 ==="]

    # 攻击方
    lines.append(f"攻击方: {attacker.name}  (元素: {attacker.element.name})")
    lines.append(_stat_line("ATK:", attacker.total_atk(), attacker.base_atk, attacker.bonus_atk))
    lines.append(_stat_line("SPD:", attacker.total_spd(), attacker.base_spd, attacker.bonus_spd))
    lines.append(_stat_line("HP:", attacker.total_hp(), attacker.base_hp, attacker.bonus_hp))
    lines.append(f"  攻击力%: {fmt_pct(attacker.attack_buff)}, 固定攻击: {fmt_compact(attacker.flat_attack)}")
    lines.append(f"  暴击率: {fmt_pct(attacker.crit_rate)}  |  暴击伤害: +{fmt_pct(attacker.crit_damage)}")
    lines.append(f"  破防: {fmt_pct(attacker.defense_break)}  |  无视防御: {fmt_pct(attacker.ignore_defense)}")
    lines.append(f"  增伤: {fmt_pct(attacker.damage_amplify)}")
    lines.append("")

    # 防御方
    lines.append(f"防御方: {defender.name}  (元素: {defender.element.name})")
    lines.append(_stat_line("DEF:", defender.total_def(), defender.base_def, defender.bonus_def))
    lines.append(f"  HP:    {fmt_compact(defender.total_hp())}")
    lines.append(f"  减伤: {fmt_pct(defender.damage_reduction)}")
    lines.append("")

    # 技能
    lines.append(f"技能: {skill.name}")
    lines.append(f"  取值规则: {skill.mode.name}")
    lines.append(f"  倍率:     {skill.multiplier}   每段固定伤害: {fmt_compact(skill.flat_damage)}")
    if skill.hits > 1:
        lines.append(f"  段数:     {skill.hits} (多段)")
    else:
        lines.append("  段数:     1")
    lines.append(f"  无视防御: {'是 (跳过防御区)' if skill.ignore_defense else '否'}")
    lines.append(f"  公式:     {describe_formula(skill)}")

    # 元素
    relation = element_relation(attacker.element, defender.element)
    lines.append("")
    lines.append(f"元素关系: 攻击方 {attacker.element.name} vs 防御方 {defender.element.name} -> {relation.name}")
    lines.extend(f"  {line}" for line in describe_element_effect(relation))

    # 防御前伤害
    per_hit = pre_defense_per_hit(attacker, defender, skill)
    lines.append("")
    lines.append(f"防御前 (每段, 不暴击): {fmt_compact(per_hit)}")
    lines.append(f"防御前 (总计, 不暴击): {fmt_compact(per_hit * skill.hits)}")
    lines.append("")
    return "\n".join(lines)


def format_result(title: str, result: DamageResult) -> str:
    return "\n".join([
        f"=== {title} ===",
        f"最小 (不暴击): {fmt_amount(result.min_damage)}",
        f"最大 (暴击):   {fmt_amount(result.max_damage)}",
        f"期望:          {fmt_amount(result.avg_damage)}",
        "",
    ])


def format_details(attacker: Unit, defender: Unit, skill: Skill,
                   breakdown: DamageBreakdown) -> str:
    """结果之后的补充信息"""
    return "\n".join([
        f"防御前基础值 (每段, 不暴击): {fmt_compact(breakdown.per_hit_pre_modifier)}",
        f"总段数: {skill.hits}",
        f"防御前总计 (不暴击): {fmt_compact(breakdown.per_hit_pre_modifier * skill.hits)}",
        f"暴击倍率: x{fmt_compact(breakdown.crit_multiplier)} (基础暴击率 {fmt_pct(attacker.crit_rate)}, "
        f"元素修正后 {fmt_pct(breakdown.adjusted_crit_rate)})",
        f"防御区: {breakdown.defense_factor:.4f} (有效防御 {fmt_compact(breakdown.effective_defense)})",
        f"元素关系: 攻击方 {attacker.element.name} vs 防御方 {defender.element.name} -> {breakdown.relation.name}",
        "",
    ])
