"""
输入校验与构造
原始输入（字符串/数字）在此统一换算为引擎使用的 Unit / Skill。
百分比字段按 0-100 输入，换算为 0-1 小数只在这里发生一次。
"""
import logging
import math
from typing import Any, List, Mapping, Optional

from core.config_manager import get_config
from core.enums import Element, FormulaType, ScalingMode
from core.stats import Unit, Skill

logger = logging.getLogger("validators")

# 菜单编号 -> 枚举
ELEMENT_MENU = {
    1: Element.FIRE,
    2: Element.WIND,
    3: Element.WATER,
    4: Element.LIGHT,
    5: Element.DARK,
}

MODE_MENU = {
    1: ScalingMode.ATK_COEF,
    2: ScalingMode.DEF_COEF,
    3: ScalingMode.HP_COEF,
    4: ScalingMode.ATK_DEF_COMBO,
    5: ScalingMode.SPD_WITH_ATK,
    6: ScalingMode.SPD_WITH_DEF,
    7: ScalingMode.SPD_WITH_HP,
}

FORMULA_MENU = {
    1: FormulaType.GENERIC,
    2: FormulaType.SUMMONER_WAR_LIKE,
}

# 单系数取值规则对应的默认系数键
_SINGLE_COEF_DEFAULT = {
    ScalingMode.ATK_COEF: "atk_coef",
    ScalingMode.DEF_COEF: "def_coef",
    ScalingMode.HP_COEF: "hp_coef",
}

_SPEED_MODES = (ScalingMode.SPD_WITH_ATK, ScalingMode.SPD_WITH_DEF, ScalingMode.SPD_WITH_HP)


def _warn(message: str, warnings: Optional[List[str]]):
    logger.warning(f"警告: {message}")
    if warnings is not None:
        warnings.append(message)


# ============================================================
# 解析（无法解析时回退默认值）
# ============================================================
def parse_float_or_default(raw: Any, default: float) -> float:
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    return value


def parse_int_or_default(raw: Any, default: int) -> int:
    return int(parse_float_or_default(raw, default))


def parse_bool(raw: Any, default: bool = False) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return default
    text = str(raw).strip().lower()
    if not text:
        return default
    return text in ("y", "yes", "true", "1")


def _parse_enum(raw: Any, enum_cls, menu: Mapping[int, Any], fallback,
                field_name: str, strict: bool, warnings: Optional[List[str]]):
    """
    枚举解析：支持枚举本身、菜单编号、名称或值（不区分大小写）

    菜单编号超出范围时取 fallback；名称无法识别时，strict 模式抛出
    ValueError，否则回退 fallback 并给出警告。
    """
    if isinstance(raw, enum_cls):
        return raw
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return fallback
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return menu.get(int(raw), fallback)

    text = str(raw).strip()
    if text.lstrip('-').isdigit():
        return menu.get(int(text), fallback)

    key = text.upper()
    for member in enum_cls:
        if member.name == key or member.value == text.lower():
            return member

    if strict:
        raise ValueError(f"{field_name}: 无法识别的取值 '{raw}'")
    _warn(f"{field_name} 无法识别 '{raw}'，使用 {fallback.name}", warnings)
    return fallback


def parse_element(raw: Any, field_name: str = "element", strict: bool = False,
                  warnings: Optional[List[str]] = None) -> Element:
    return _parse_enum(raw, Element, ELEMENT_MENU, Element.NONE, field_name, strict, warnings)


def parse_mode(raw: Any, field_name: str = "mode", strict: bool = False,
               warnings: Optional[List[str]] = None) -> ScalingMode:
    return _parse_enum(raw, ScalingMode, MODE_MENU, ScalingMode.NORMAL_ATK, field_name, strict, warnings)


def parse_formula(raw: Any, field_name: str = "formula", strict: bool = False,
                  warnings: Optional[List[str]] = None) -> FormulaType:
    # 菜单中只有 2 为比值公式，其余均为通用公式
    return _parse_enum(raw, FormulaType, FORMULA_MENU, FormulaType.GENERIC, field_name, strict, warnings)


# ============================================================
# 校验
# ============================================================
def validate_non_negative(value: float, field_name: str,
                          warnings: Optional[List[str]] = None) -> float:
    if value < 0:
        _warn(f"{field_name} 不能为负数，使用 0", warnings)
        return 0.0
    return value


def validate_percentage(value: float, field_name: str,
                        warnings: Optional[List[str]] = None) -> float:
    """校验 0-100 的百分比并换算为 0-1 小数"""
    if value < 0 or value > 100:
        _warn(f"{field_name} 应在 0-100% 之间，已截断", warnings)
        value = max(0.0, min(100.0, value))
    return value / 100.0


def validate_hits(value: int, warnings: Optional[List[str]] = None) -> int:
    if value < 1:
        _warn(f"段数至少为 1 (输入 {value})", warnings)
        return 1
    return value


def validate_divisor(value: float, field_name: str, default: float,
                     warnings: Optional[List[str]] = None) -> float:
    if value <= 0:
        _warn(f"{field_name} 必须为正数，使用默认值 {default}", warnings)
        return default
    return value


# ============================================================
# 构造
# ============================================================
def _stat(raw: Mapping[str, Any], key: str, default: float, label: str,
          warnings: Optional[List[str]]) -> float:
    return validate_non_negative(parse_float_or_default(raw.get(key), default), label, warnings)


def _pct(raw: Mapping[str, Any], key: str, default: float, label: str,
         warnings: Optional[List[str]]) -> float:
    return validate_percentage(parse_float_or_default(raw.get(key), default), label, warnings)


def build_attacker(raw: Mapping[str, Any], strict: bool = False,
                   warnings: Optional[List[str]] = None) -> Unit:
    """
    从原始输入构造攻击方

    Args:
        raw: 键为 Unit 字段名，百分比字段使用 *_pct 后缀 (0-100)
        strict: 元素名无法识别时是否抛出 ValueError
        warnings: 收集警告信息的列表

    Returns:
        Unit: 已校验的攻击方
    """
    config = get_config()
    defaults = config.default_attacker_stats
    name = str(raw.get("name") or config.default_attacker_name)

    return Unit(
        name=name,
        element=parse_element(raw.get("element"), "attacker.element", strict, warnings),
        base_atk=_stat(raw, "base_atk", defaults["atk"], "基础ATK", warnings),
        bonus_atk=_stat(raw, "bonus_atk", 0.0, "额外ATK", warnings),
        base_hp=_stat(raw, "base_hp", defaults["hp"], "基础HP", warnings),
        bonus_hp=_stat(raw, "bonus_hp", 0.0, "额外HP", warnings),
        base_def=_stat(raw, "base_def", defaults["def"], "基础DEF", warnings),
        bonus_def=_stat(raw, "bonus_def", 0.0, "额外DEF", warnings),
        base_spd=_stat(raw, "base_spd", defaults["spd"], "基础SPD", warnings),
        bonus_spd=_stat(raw, "bonus_spd", 0.0, "额外SPD", warnings),
        attack_buff=_pct(raw, "attack_buff_pct", 0.0, "攻击力%", warnings),
        flat_attack=_stat(raw, "flat_attack", 0.0, "固定攻击力", warnings),
        crit_rate=_pct(raw, "crit_rate_pct", 0.0, "暴击率", warnings),
        crit_damage=_pct(raw, "crit_damage_pct", config.default_crit_damage_pct, "暴击伤害", warnings),
        defense_break=_pct(raw, "defense_break_pct", 0.0, "破防", warnings),
        ignore_defense=_pct(raw, "ignore_defense_pct", 0.0, "无视防御", warnings),
        damage_amplify=_pct(raw, "damage_amplify_pct", 0.0, "增伤", warnings),
    )


def build_defender(raw: Mapping[str, Any], strict: bool = False,
                   warnings: Optional[List[str]] = None) -> Unit:
    """从原始输入构造防御方（只关心生命、防御与减伤）"""
    config = get_config()
    defaults = config.default_defender_stats
    name = str(raw.get("name") or config.default_defender_name)

    return Unit(
        name=name,
        element=parse_element(raw.get("element"), "defender.element", strict, warnings),
        base_hp=_stat(raw, "base_hp", defaults["hp"], "基础HP", warnings),
        bonus_hp=_stat(raw, "bonus_hp", 0.0, "额外HP", warnings),
        base_def=_stat(raw, "base_def", defaults["def"], "基础DEF", warnings),
        bonus_def=_stat(raw, "bonus_def", 0.0, "额外DEF", warnings),
        damage_reduction=_pct(raw, "damage_reduction_pct", 0.0, "减伤", warnings),
    )


def build_skill(raw: Mapping[str, Any], strict: bool = False,
                warnings: Optional[List[str]] = None) -> Skill:
    """
    从原始输入构造技能

    只读取并校验当前取值规则用到的系数，其余系数保持 Skill 默认值。
    """
    config = get_config()
    mode = parse_mode(raw.get("mode"), "skill.mode", strict, warnings)

    hits = parse_int_or_default(raw.get("hits"), config.default_skill_hits)
    fields = {
        "name": str(raw.get("name") or config.default_skill_name),
        "mode": mode,
        "multiplier": _stat(raw, "multiplier", config.default_skill_multiplier, "技能倍率", warnings),
        "flat_damage": _stat(raw, "flat_damage", 0.0, "固定伤害", warnings),
        "hits": validate_hits(hits, warnings),
        "ignore_defense": parse_bool(raw.get("ignore_defense")),
    }

    if mode in _SINGLE_COEF_DEFAULT:
        default = config.coefficient(_SINGLE_COEF_DEFAULT[mode])
        fields["coef"] = _stat(raw, "coef", default, "系数", warnings)
    elif mode == ScalingMode.ATK_DEF_COMBO:
        fields["a_coef"] = _stat(raw, "a_coef", config.coefficient("a_coef"), "aCoef", warnings)
        fields["d_coef"] = _stat(raw, "d_coef", config.coefficient("d_coef"), "dCoef", warnings)
    elif mode in _SPEED_MODES:
        default_div = config.coefficient("spd_div")
        fields["spd_add"] = _stat(raw, "spd_add", config.coefficient("spd_add"), "SPD加值", warnings)
        spd_div = parse_float_or_default(raw.get("spd_div"), default_div)
        fields["spd_div"] = validate_divisor(spd_div, "SPD除数", default_div, warnings)

    return Skill(**fields)
