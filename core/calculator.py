import logging
from dataclasses import dataclass
from .enums import ElemRelation, FormulaType
from .elements import ElementalModifiers, element_relation, modifiers_for
from .formulas import (calculate_base_scaled, calculate_defense_factor,
                       calculate_effective_attack, calculate_effective_defense)
from .stats import Unit, Skill

logger = logging.getLogger("DamageEngine")


@dataclass(frozen=True)
class DamageResult:
    """总伤害（已乘段数）"""
    min_damage: float  # 不暴击
    max_damage: float  # 暴击
    avg_damage: float  # 期望

    def as_tuple(self):
        return (self.min_damage, self.max_damage, self.avg_damage)


@dataclass(frozen=True)
class DamageBreakdown:
    """伤害计算各阶段中间值"""
    effective_attack: float
    base_scaled: float
    per_hit_pre_modifier: float
    relation: ElemRelation
    modifiers: ElementalModifiers
    per_hit_base: float
    crit_multiplier: float
    adjusted_crit_rate: float
    avg_crit_factor: float
    effective_defense: float
    defense_factor: float
    hits: int
    result: DamageResult


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class DamageEngine:
    @staticmethod
    def breakdown(attacker: Unit, defender: Unit, skill: Skill,
                  formula: FormulaType = FormulaType.GENERIC) -> DamageBreakdown:
        """
        伤害计算流水线：
        有效攻击 → 取值规则 → 技能倍率区 → 增伤/减伤/元素区 → 擦伤分轨 →
        暴击区 → 防御区 → 擦伤概率合并 × 段数

        期望值为解析解（暴击率、擦伤概率加权），不做随机模拟。
        """

        # ============================================================
        # 1. 有效攻击
        # ============================================================
        effective_attack = calculate_effective_attack(attacker)

        # ============================================================
        # 2. 取值规则（每段基础值）
        # ============================================================
        base_scaled = calculate_base_scaled(attacker, defender, skill, effective_attack)

        # ============================================================
        # 3. 技能倍率区（固定伤害按段计算）
        # ============================================================
        per_hit_pre_modifier = base_scaled * skill.multiplier + skill.flat_damage

        # ============================================================
        # 4. 增伤区 × 减伤区 × 元素区
        # ============================================================
        relation = element_relation(attacker.element, defender.element)
        mods = modifiers_for(relation)

        net_damage_mul = (1.0 + attacker.damage_amplify) * (1.0 - defender.damage_reduction)
        per_hit_base = per_hit_pre_modifier * net_damage_mul * mods.elem_damage_mul

        # ============================================================
        # 5. 擦伤分轨（正常命中 / 擦伤）
        # ============================================================
        no_crit_normal = per_hit_base * mods.non_glance_multiplier
        no_crit_glance = per_hit_base * mods.glancing_multiplier

        # ============================================================
        # 6. 暴击区
        # ============================================================
        crit_multiplier = 1.0 + attacker.crit_damage
        adjusted_crit_rate = _clamp(attacker.crit_rate + mods.elem_crit_delta, 0.0, 1.0)
        avg_crit_factor = 1.0 + adjusted_crit_rate * (crit_multiplier - 1.0)

        crit_normal = no_crit_normal * crit_multiplier
        crit_glance = no_crit_glance * crit_multiplier
        avg_normal = no_crit_normal * avg_crit_factor
        avg_glance = no_crit_glance * avg_crit_factor

        # ============================================================
        # 7. 防御区
        # ============================================================
        effective_def = calculate_effective_defense(defender, attacker)
        if skill.ignore_defense:
            def_factor = 1.0
        else:
            def_factor = calculate_defense_factor(effective_attack, effective_def, formula)

        no_crit_normal *= def_factor
        no_crit_glance *= def_factor
        crit_normal *= def_factor
        crit_glance *= def_factor
        avg_normal *= def_factor
        avg_glance *= def_factor

        # ============================================================
        # 8. 擦伤概率合并 × 段数
        # ============================================================
        p = mods.glancing_prob
        total_no_crit = ((1.0 - p) * no_crit_normal + p * no_crit_glance) * skill.hits
        total_crit = ((1.0 - p) * crit_normal + p * crit_glance) * skill.hits
        total_avg = ((1.0 - p) * avg_normal + p * avg_glance) * skill.hits

        # ============================================================
        # 9. 下限截断
        # ============================================================
        result = DamageResult(
            min_damage=max(0.0, total_no_crit),
            max_damage=max(0.0, total_crit),
            avg_damage=max(0.0, total_avg),
        )

        logger.debug(
            f"[{attacker.name} -> {defender.name}] {skill.name} ({skill.mode.name}, {formula.name}) "
            f"有效攻击={effective_attack:.2f} 基础值={base_scaled:.2f} 元素={relation.name} "
            f"暴击率={adjusted_crit_rate:.2f} 防御区={def_factor:.4f} "
            f"结果={result.min_damage:.2f}/{result.max_damage:.2f}/{result.avg_damage:.2f}"
        )

        return DamageBreakdown(
            effective_attack=effective_attack,
            base_scaled=base_scaled,
            per_hit_pre_modifier=per_hit_pre_modifier,
            relation=relation,
            modifiers=mods,
            per_hit_base=per_hit_base,
            crit_multiplier=crit_multiplier,
            adjusted_crit_rate=adjusted_crit_rate,
            avg_crit_factor=avg_crit_factor,
            effective_defense=effective_def,
            defense_factor=def_factor,
            hits=skill.hits,
            result=result,
        )

    @staticmethod
    def calculate(attacker: Unit, defender: Unit, skill: Skill,
                  formula: FormulaType = FormulaType.GENERIC) -> DamageResult:
        return DamageEngine.breakdown(attacker, defender, skill, formula).result


def calculate_damage(attacker: Unit, defender: Unit, skill: Skill,
                     formula: FormulaType = FormulaType.GENERIC) -> DamageResult:
    """返回 (不暴击, 暴击, 期望) 三项总伤害"""
    return DamageEngine.calculate(attacker, defender, skill, formula)
