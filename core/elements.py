"""
元素克制系统
火 → 风 → 水 → 火 三角循环，光暗互克
"""
from dataclasses import dataclass
from types import MappingProxyType
from .enums import Element, ElemRelation

# 克制方 → 加成
ELEMENT_STRONGER_DAMAGE_MUL = 1.05
ELEMENT_STRONGER_CRIT_DELTA = 0.15
# 被克制方 → 惩罚
ELEMENT_WEAKER_CRIT_DELTA = -0.15
ELEMENT_WEAKER_GLANCE_PROB = 0.5
ELEMENT_WEAKER_NORMAL_MUL = 0.95
ELEMENT_WEAKER_GLANCE_MUL = 0.70 * 0.84  # 0.588

# (攻击方, 防御方) -> 关系，未列出的组合均为中立
ELEMENT_RELATIONS = MappingProxyType({
    (Element.FIRE, Element.WIND): ElemRelation.STRONGER,
    (Element.WIND, Element.WATER): ElemRelation.STRONGER,
    (Element.WATER, Element.FIRE): ElemRelation.STRONGER,
    (Element.LIGHT, Element.DARK): ElemRelation.STRONGER,
    (Element.DARK, Element.LIGHT): ElemRelation.STRONGER,

    (Element.FIRE, Element.WATER): ElemRelation.WEAKER,
    (Element.WIND, Element.FIRE): ElemRelation.WEAKER,
    (Element.WATER, Element.WIND): ElemRelation.WEAKER,
})


@dataclass(frozen=True)
class ElementalModifiers:
    """元素关系带来的整组修正"""
    elem_damage_mul: float = 1.0
    elem_crit_delta: float = 0.0
    glancing_prob: float = 0.0
    non_glance_multiplier: float = 1.0
    glancing_multiplier: float = 1.0


NEUTRAL_MODIFIERS = ElementalModifiers()

STRONGER_MODIFIERS = ElementalModifiers(
    elem_damage_mul=ELEMENT_STRONGER_DAMAGE_MUL,
    elem_crit_delta=ELEMENT_STRONGER_CRIT_DELTA,
)

WEAKER_MODIFIERS = ElementalModifiers(
    elem_damage_mul=1.0,
    elem_crit_delta=ELEMENT_WEAKER_CRIT_DELTA,
    glancing_prob=ELEMENT_WEAKER_GLANCE_PROB,
    non_glance_multiplier=ELEMENT_WEAKER_NORMAL_MUL,
    glancing_multiplier=ELEMENT_WEAKER_GLANCE_MUL,
)

_MODIFIERS_BY_RELATION = MappingProxyType({
    ElemRelation.STRONGER: STRONGER_MODIFIERS,
    ElemRelation.WEAKER: WEAKER_MODIFIERS,
    ElemRelation.NEUTRAL: NEUTRAL_MODIFIERS,
})


def element_relation(attacker: Element, defender: Element) -> ElemRelation:
    """攻击方元素相对防御方元素的关系，任一方无元素时为中立"""
    if attacker == Element.NONE or defender == Element.NONE:
        return ElemRelation.NEUTRAL
    return ELEMENT_RELATIONS.get((attacker, defender), ElemRelation.NEUTRAL)


def modifiers_for(relation: ElemRelation) -> ElementalModifiers:
    return _MODIFIERS_BY_RELATION[relation]


def compute_elemental_modifiers(attacker: Element, defender: Element) -> ElementalModifiers:
    return modifiers_for(element_relation(attacker, defender))


def describe_element_effect(relation: ElemRelation) -> list:
    """
    元素效果说明文本

    Returns:
        说明行列表，供控制台与网页展示
    """
    if relation == ElemRelation.STRONGER:
        return ["克制: 伤害 +5%，暴击率 +15%"]
    if relation == ElemRelation.WEAKER:
        return [
            "被克制: 暴击率固定 -15%",
            "  - 50% 概率擦伤: 伤害 -30%，被克制额外 -16% (合计 x0.588)",
            "  - 50% 概率正常命中: 普通/暴击伤害 -5% (x0.95)",
        ]
    return ["中立: 无加成/惩罚"]
