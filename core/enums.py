from enum import Enum

class Element(Enum):
    NONE = "none"
    FIRE = "fire"
    WIND = "wind"
    WATER = "water"
    LIGHT = "light"
    DARK = "dark"

# 伤害基础值的取值规则
class ScalingMode(Enum):
    ATK_COEF = "atk_coef"           # coef * ATK
    DEF_COEF = "def_coef"           # coef * 目标DEF
    HP_COEF = "hp_coef"             # coef * 最大生命
    ATK_DEF_COMBO = "atk_def_combo" # aCoef * ATK + dCoef * 目标DEF
    SPD_WITH_ATK = "spd_with_atk"   # ATK * (SPD + add) / div
    SPD_WITH_DEF = "spd_with_def"   # 目标DEF * (SPD + add) / div
    SPD_WITH_HP = "spd_with_hp"     # 最大生命 * (SPD + add) / div
    NORMAL_ATK = "normal_atk"       # 兜底: ATK

# 防御公式
class FormulaType(Enum):
    GENERIC = "generic"                     # 100 / (100 + DEF)
    SUMMONER_WAR_LIKE = "summoner_war_like" # ATK / (ATK + DEF)

# 元素克制关系
class ElemRelation(Enum):
    NEUTRAL = "neutral"
    STRONGER = "stronger"
    WEAKER = "weaker"
