from core.enums import FormulaType

# 原始输入格式，与场景 YAML 相同（百分比为 0-100）
PRESETS = {
    "默认普攻": {
        "description": "默认攻防属性，普通攻击，通用防御公式。",
        "attacker": {},
        "defender": {},
        "skill": {"name": "Basic", "mode": "normal_atk"},
        "formula": FormulaType.GENERIC.value,
    },
    "火克风三连击": {
        "description": "火属性攻击方打风属性目标，ATK系数三段技能，30%暴击。",
        "attacker": {"name": "Fire Knight", "element": "fire", "bonus_atk": 600,
                     "attack_buff_pct": 70, "crit_rate_pct": 30, "crit_damage_pct": 80},
        "defender": {"name": "Wind Golem", "element": "wind", "base_def": 900},
        "skill": {"name": "Triple Slash", "mode": "atk_coef", "coef": 1.7,
                  "multiplier": 1.0, "hits": 3},
        "formula": FormulaType.GENERIC.value,
    },
    "风打火擦伤": {
        "description": "被克制的风属性攻击方，期望伤害包含50%擦伤。",
        "attacker": {"name": "Wind Archer", "element": "wind", "crit_rate_pct": 40,
                     "crit_damage_pct": 100},
        "defender": {"name": "Fire Imp", "element": "fire", "base_def": 600},
        "skill": {"name": "Gust Shot", "mode": "atk_coef", "coef": 2.0},
        "formula": FormulaType.GENERIC.value,
    },
    "速度流破防": {
        "description": "SPD配合ATK取值，附带破防与无视防御，比值防御公式。",
        "attacker": {"name": "Swift Blade", "element": "water", "base_spd": 220,
                     "bonus_spd": 80, "defense_break_pct": 70, "ignore_defense_pct": 15,
                     "crit_rate_pct": 60},
        "defender": {"name": "Iron Turtle", "element": "fire", "base_def": 1500,
                     "damage_reduction_pct": 15},
        "skill": {"name": "Tempest Strike", "mode": "spd_with_atk", "spd_add": 60,
                  "spd_div": 620, "hits": 2},
        "formula": FormulaType.SUMMONER_WAR_LIKE.value,
    },
    "坦克反击": {
        "description": "以防御方DEF与自身ATK组合取值的技能。",
        "attacker": {"name": "Bulwark", "element": "light", "bonus_atk": 300},
        "defender": {"name": "Shade", "element": "dark", "base_def": 700},
        "skill": {"name": "Shield Bash", "mode": "atk_def_combo", "a_coef": 1.7,
                  "d_coef": 2.9},
        "formula": FormulaType.GENERIC.value,
    },
    "无视防御真伤": {
        "description": "技能完全跳过防御区，目标防御不影响结果。",
        "attacker": {"name": "Assassin", "crit_rate_pct": 50},
        "defender": {"name": "Fortress", "base_def": 5000},
        "skill": {"name": "Soul Pierce", "mode": "hp_coef", "coef": 0.19,
                  "ignore_defense": True},
        "formula": FormulaType.GENERIC.value,
    },
}
