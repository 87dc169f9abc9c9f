"""
计算场景
一次计算所需的攻击方、防御方、技能与防御公式，支持从 YAML 加载
"""
import yaml
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.calculator import DamageBreakdown, DamageEngine, DamageResult
from core.enums import FormulaType
from core.stats import Unit, Skill
from core.validators import build_attacker, build_defender, build_skill, parse_formula


@dataclass(frozen=True)
class Scenario:
    attacker: Unit
    defender: Unit
    skill: Skill
    formula: FormulaType = FormulaType.GENERIC

    def run(self) -> DamageResult:
        return DamageEngine.calculate(self.attacker, self.defender, self.skill, self.formula)

    def breakdown(self) -> DamageBreakdown:
        return DamageEngine.breakdown(self.attacker, self.defender, self.skill, self.formula)

    def with_formula(self, formula: FormulaType) -> 'Scenario':
        return replace(self, formula=formula)

    def with_defender_def(self, defense: float) -> 'Scenario':
        """替换防御方总防御（额外防御清零）"""
        defender = replace(self.defender, base_def=max(0.0, defense), bonus_def=0.0)
        return replace(self, defender=defender)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], strict: bool = True,
                  warnings: Optional[List[str]] = None) -> 'Scenario':
        """
        从原始字典构造场景

        格式:
            attacker: {name, element, base_atk, ..., crit_rate_pct, ...}
            defender: {name, element, base_hp, base_def, damage_reduction_pct}
            skill:    {name, mode, multiplier, hits, ignore_defense, coef, ...}
            formula:  generic | summoner_war_like
        """
        data = data or {}
        return cls(
            attacker=build_attacker(data.get("attacker") or {}, strict, warnings),
            defender=build_defender(data.get("defender") or {}, strict, warnings),
            skill=build_skill(data.get("skill") or {}, strict, warnings),
            formula=parse_formula(data.get("formula"), "formula", strict, warnings),
        )


def load_scenario(file_path: str, warnings: Optional[List[str]] = None) -> Scenario:
    """从YAML文件加载场景"""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"场景文件不存在: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    return Scenario.from_dict(data, strict=True, warnings=warnings)


def compare_formulas(scenario: Scenario) -> Dict[FormulaType, DamageResult]:
    """同一场景下对比两种防御公式"""
    return {formula: scenario.with_formula(formula).run() for formula in FormulaType}


def sweep_defense(scenario: Scenario, values: Iterable[float],
                  formula: Optional[FormulaType] = None) -> List[Tuple[float, DamageResult]]:
    """
    防御扫描

    Args:
        scenario: 基准场景
        values: 防御方总防御取值序列
        formula: 指定防御公式，缺省使用场景自身的公式

    Returns:
        [(防御, 结果), ...]
    """
    base = scenario if formula is None else scenario.with_formula(formula)
    return [(value, base.with_defender_def(value).run()) for value in values]
