# core/stats.py
from dataclasses import dataclass
from typing import Dict
from .enums import Element, ScalingMode

@dataclass(frozen=True)
class Unit:
    """
    战斗单位（攻击方或防御方）

    所有百分比字段均以小数存储 (0.25 = 25%)，由输入边界负责换算与截断。
    构造后不可修改，同一次计算内保持不变。
    """
    name: str = "Unit"
    element: Element = Element.NONE

    # --- 1. 基础属性 ---
    base_atk: float = 0.0
    base_hp: float = 0.0
    base_def: float = 0.0
    base_spd: float = 0.0

    # --- 2. 额外属性 (符文/装备) ---
    bonus_atk: float = 0.0
    bonus_hp: float = 0.0
    bonus_def: float = 0.0
    bonus_spd: float = 0.0

    # --- 3. 攻击方修正 ---
    attack_buff: float = 0.0      # 攻击力%
    flat_attack: float = 0.0      # 固定攻击力
    crit_rate: float = 0.0
    crit_damage: float = 0.5
    defense_break: float = 0.0    # 破防%
    ignore_defense: float = 0.0   # 无视防御%
    damage_amplify: float = 0.0   # 增伤%

    # --- 4. 防御方修正 ---
    damage_reduction: float = 0.0 # 减伤%

    def total_atk(self) -> float:
        return self.base_atk + self.bonus_atk

    def total_hp(self) -> float:
        return self.base_hp + self.bonus_hp

    def total_def(self) -> float:
        return self.base_def + self.bonus_def

    def total_spd(self) -> float:
        return self.base_spd + self.bonus_spd


# 各取值规则实际使用的系数字段
MODE_COEFFICIENTS = {
    ScalingMode.ATK_COEF: ("coef",),
    ScalingMode.DEF_COEF: ("coef",),
    ScalingMode.HP_COEF: ("coef",),
    ScalingMode.ATK_DEF_COMBO: ("a_coef", "d_coef"),
    ScalingMode.SPD_WITH_ATK: ("spd_add", "spd_div"),
    ScalingMode.SPD_WITH_DEF: ("spd_add", "spd_div"),
    ScalingMode.SPD_WITH_HP: ("spd_add", "spd_div"),
    ScalingMode.NORMAL_ATK: (),
}


@dataclass(frozen=True)
class Skill:
    """
    伤害技能

    只有当前 mode 对应的系数有意义，其余字段会被引擎忽略。
    """
    name: str = "Basic"
    mode: ScalingMode = ScalingMode.NORMAL_ATK
    multiplier: float = 1.0   # 基础值之后的倍率
    flat_damage: float = 0.0  # 每段固定伤害

    hits: int = 1
    ignore_defense: bool = False  # 完全跳过防御区

    coef: float = 1.0     # ATK_COEF / DEF_COEF / HP_COEF
    a_coef: float = 1.0   # ATK_DEF_COMBO
    d_coef: float = 0.0   # ATK_DEF_COMBO
    spd_add: float = 60.0
    spd_div: float = 620.0

    def relevant_coefficients(self) -> Dict[str, float]:
        """仅返回当前取值规则用到的系数"""
        return {key: getattr(self, key) for key in MODE_COEFFICIENTS[self.mode]}
