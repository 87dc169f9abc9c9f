import streamlit as st
import pandas as pd
import plotly.express as px

from core.config_manager import get_config
from core.enums import Element, FormulaType, ScalingMode
from core.elements import describe_element_effect
from core.stats import MODE_COEFFICIENTS
from simulation.presets import PRESETS
from simulation.report import describe_formula
from simulation.scenario import Scenario, compare_formulas, sweep_defense

FORMULA_LABELS = {
    FormulaType.GENERIC: "通用 100/(100+DEF)",
    FormulaType.SUMMONER_WAR_LIKE: "比值 ATK/(ATK+DEF)",
}

# 单系数取值规则的默认系数键
COEF_DEFAULT_KEY = {
    ScalingMode.ATK_COEF: "atk_coef",
    ScalingMode.DEF_COEF: "def_coef",
    ScalingMode.HP_COEF: "hp_coef",
}


def _preset_value(preset: dict, section: str, key: str, default):
    return preset.get(section, {}).get(key, default)


def render_attacker_inputs(preset: dict) -> dict:
    config = get_config()
    defaults = config.default_attacker_stats
    v = lambda key, default: _preset_value(preset, "attacker", key, default)

    st.sidebar.write("⚔️ **攻击方**")
    raw = {"name": st.sidebar.text_input("名称", v("name", config.default_attacker_name), key="atk_name")}
    elements = [e.value for e in Element]
    raw["element"] = st.sidebar.selectbox("元素", elements, index=elements.index(v("element", "none")), key="atk_elem")

    c1, c2 = st.sidebar.columns(2)
    raw["base_atk"] = c1.number_input("基础ATK", value=float(v("base_atk", defaults["atk"])), key="atk_batk")
    raw["bonus_atk"] = c2.number_input("额外ATK", value=float(v("bonus_atk", 0.0)), key="atk_xatk")
    raw["base_hp"] = c1.number_input("基础HP", value=float(v("base_hp", defaults["hp"])), key="atk_bhp")
    raw["bonus_hp"] = c2.number_input("额外HP", value=float(v("bonus_hp", 0.0)), key="atk_xhp")
    raw["base_def"] = c1.number_input("基础DEF", value=float(v("base_def", defaults["def"])), key="atk_bdef")
    raw["bonus_def"] = c2.number_input("额外DEF", value=float(v("bonus_def", 0.0)), key="atk_xdef")
    raw["base_spd"] = c1.number_input("基础SPD", value=float(v("base_spd", defaults["spd"])), key="atk_bspd")
    raw["bonus_spd"] = c2.number_input("额外SPD", value=float(v("bonus_spd", 0.0)), key="atk_xspd")

    raw["attack_buff_pct"] = st.sidebar.slider("攻击力%", 0.0, 100.0, float(v("attack_buff_pct", 0.0)), 1.0, key="atk_buff")
    raw["flat_attack"] = st.sidebar.number_input("固定攻击力", value=float(v("flat_attack", 0.0)), key="atk_flat")
    raw["crit_rate_pct"] = st.sidebar.slider("暴击率%", 0.0, 100.0, float(v("crit_rate_pct", 0.0)), 1.0, key="atk_cr")
    raw["crit_damage_pct"] = st.sidebar.slider("暴击伤害%", 0.0, 100.0,
                                               float(v("crit_damage_pct", config.default_crit_damage_pct)), 1.0, key="atk_cd")
    raw["defense_break_pct"] = st.sidebar.slider("破防%", 0.0, 100.0, float(v("defense_break_pct", 0.0)), 1.0, key="atk_brk")
    raw["ignore_defense_pct"] = st.sidebar.slider("无视防御%", 0.0, 100.0, float(v("ignore_defense_pct", 0.0)), 1.0, key="atk_ign")
    raw["damage_amplify_pct"] = st.sidebar.slider("增伤%", 0.0, 100.0, float(v("damage_amplify_pct", 0.0)), 1.0, key="atk_amp")
    return raw


def render_defender_inputs(preset: dict) -> dict:
    config = get_config()
    defaults = config.default_defender_stats
    v = lambda key, default: _preset_value(preset, "defender", key, default)

    st.sidebar.write("🛡️ **防御方**")
    raw = {"name": st.sidebar.text_input("名称", v("name", config.default_defender_name), key="def_name")}
    elements = [e.value for e in Element]
    raw["element"] = st.sidebar.selectbox("元素", elements, index=elements.index(v("element", "none")), key="def_elem")

    c1, c2 = st.sidebar.columns(2)
    raw["base_hp"] = c1.number_input("基础HP", value=float(v("base_hp", defaults["hp"])), key="def_bhp")
    raw["bonus_hp"] = c2.number_input("额外HP", value=float(v("bonus_hp", 0.0)), key="def_xhp")
    raw["base_def"] = c1.number_input("基础DEF", value=float(v("base_def", defaults["def"])), key="def_bdef")
    raw["bonus_def"] = c2.number_input("额外DEF", value=float(v("bonus_def", 0.0)), key="def_xdef")
    raw["damage_reduction_pct"] = st.sidebar.slider("减伤%", 0.0, 100.0, float(v("damage_reduction_pct", 0.0)), 1.0, key="def_red")
    return raw


def render_skill_inputs(preset: dict) -> dict:
    config = get_config()
    v = lambda key, default: _preset_value(preset, "skill", key, default)

    st.sidebar.write("✨ **技能**")
    raw = {"name": st.sidebar.text_input("名称", v("name", config.default_skill_name), key="sk_name")}
    modes = [m.value for m in ScalingMode]
    raw["mode"] = st.sidebar.selectbox("取值规则", modes, index=modes.index(v("mode", "normal_atk")), key="sk_mode")
    mode = ScalingMode(raw["mode"])

    raw["multiplier"] = st.sidebar.number_input("技能倍率", min_value=0.0,
                                                value=float(v("multiplier", config.default_skill_multiplier)), key="sk_mul")
    raw["flat_damage"] = st.sidebar.number_input("每段固定伤害", min_value=0.0, value=float(v("flat_damage", 0.0)), key="sk_flat")
    raw["hits"] = st.sidebar.number_input("段数", min_value=1, value=int(v("hits", config.default_skill_hits)), step=1, key="sk_hits")
    raw["ignore_defense"] = st.sidebar.checkbox("完全无视防御", value=bool(v("ignore_defense", False)), key="sk_ign")

    # 只展示当前取值规则用到的系数
    for field in MODE_COEFFICIENTS[mode]:
        default_key = COEF_DEFAULT_KEY.get(mode, field)
        raw[field] = st.sidebar.number_input(field, min_value=0.0,
                                             value=float(v(field, config.coefficient(default_key))), key=f"sk_{field}")
    return raw


def render_damage_calc():
    st.title("🧮 伤害计算器")

    preset_options = ["自定义"] + list(PRESETS.keys())
    selected_preset = st.sidebar.selectbox("📥 加载预设", preset_options)
    preset = PRESETS.get(selected_preset, {})
    if preset:
        st.info(f"**当前预设**: {selected_preset}\n\n{preset['description']}")

    formulas = [f.value for f in FormulaType]
    default_formula = preset.get("formula", FormulaType.GENERIC.value)
    formula_value = st.sidebar.radio("防御公式", formulas, index=formulas.index(default_formula),
                                     format_func=lambda x: FORMULA_LABELS[FormulaType(x)])
    st.sidebar.divider()

    raw = {
        "attacker": render_attacker_inputs(preset),
        "defender": render_defender_inputs(preset),
        "skill": render_skill_inputs(preset),
        "formula": formula_value,
    }

    warnings = []
    scenario = Scenario.from_dict(raw, strict=False, warnings=warnings)
    for message in warnings:
        st.warning(message)

    breakdown = scenario.breakdown()
    result = breakdown.result

    # --- 结果 ---
    c1, c2, c3 = st.columns(3)
    c1.metric("最小 (不暴击)", f"{result.min_damage:,.2f}")
    c2.metric("最大 (暴击)", f"{result.max_damage:,.2f}")
    c3.metric("期望", f"{result.avg_damage:,.2f}")

    tab_detail, tab_compare, tab_sweep = st.tabs(["📊 计算明细", "⚖️ 公式对比", "📈 防御扫描"])

    with tab_detail:
        st.markdown(f"**公式**: {describe_formula(scenario.skill)}")
        st.markdown(f"**元素关系**: {scenario.attacker.element.name} vs "
                    f"{scenario.defender.element.name} -> {breakdown.relation.name}")
        for line in describe_element_effect(breakdown.relation):
            st.caption(line)

        rows = [
            {"阶段": "有效攻击", "数值": breakdown.effective_attack},
            {"阶段": "每段基础值", "数值": breakdown.base_scaled},
            {"阶段": "倍率/固定伤害后 (每段)", "数值": breakdown.per_hit_pre_modifier},
            {"阶段": "增伤/减伤/元素后 (每段)", "数值": breakdown.per_hit_base},
            {"阶段": "暴击倍率", "数值": breakdown.crit_multiplier},
            {"阶段": "修正后暴击率", "数值": breakdown.adjusted_crit_rate},
            {"阶段": "期望暴击系数", "数值": breakdown.avg_crit_factor},
            {"阶段": "擦伤概率", "数值": breakdown.modifiers.glancing_prob},
            {"阶段": "有效防御", "数值": breakdown.effective_defense},
            {"阶段": "防御区", "数值": breakdown.defense_factor},
            {"阶段": "段数", "数值": float(breakdown.hits)},
        ]
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)

    with tab_compare:
        rows = []
        for formula, res in compare_formulas(scenario).items():
            rows.append({
                "防御公式": FORMULA_LABELS[formula],
                "最小": round(res.min_damage, 2),
                "最大": round(res.max_damage, 2),
                "期望": round(res.avg_damage, 2),
            })
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)

    with tab_sweep:
        max_def = st.slider("防御上限", 500, 10000, 3000, 500)
        step = max(1, max_def // 50)
        values = list(range(0, max_def + 1, step))

        rows = []
        for formula in FormulaType:
            for defense, res in sweep_defense(scenario, values, formula):
                for label, amount in (("最小", res.min_damage), ("最大", res.max_damage), ("期望", res.avg_damage)):
                    rows.append({"DEF": defense, "伤害": amount, "类型": label,
                                 "公式": FORMULA_LABELS[formula]})
        df_sweep = pd.DataFrame(rows)

        fig = px.line(df_sweep, x="DEF", y="伤害", color="类型", line_dash="公式")
        fig.update_layout(xaxis_title="防御方 DEF", yaxis_title="总伤害", height=420)
        st.plotly_chart(fig, use_container_width=True)
