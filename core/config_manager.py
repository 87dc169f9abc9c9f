"""
统一配置管理系统
集中管理输入默认值与日志配置，支持从 YAML/JSON 覆盖
"""
import json
import yaml
from pathlib import Path
from typing import Dict, Any


class ConfigManager:
    """单例配置管理器"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        # 默认名称
        self.default_attacker_name = "Attacker"
        self.default_defender_name = "Defender"
        self.default_skill_name = "Basic"

        # 攻击方默认属性
        self.default_attacker_stats = {
            "atk": 1000.0,
            "hp": 4000.0,
            "def": 500.0,
            "spd": 100.0,
        }

        # 防御方默认属性
        self.default_defender_stats = {
            "hp": 8000.0,
            "def": 800.0,
        }

        # 暴击伤害默认值 (百分比)
        self.default_crit_damage_pct = 50.0

        # 技能默认值
        self.default_skill_multiplier = 1.0
        self.default_skill_hits = 1

        # 各取值规则的默认系数
        self.default_coefficients = {
            "atk_coef": 1.7,
            "def_coef": 3.6,
            "hp_coef": 0.19,
            "a_coef": 1.7,
            "d_coef": 2.9,
            "spd_add": 60.0,
            "spd_div": 620.0,
        }

        # 日志配置
        self.log_level = "INFO"  # DEBUG, INFO, WARNING, ERROR

        self._initialized = True

    def load_from_dict(self, config_dict: Dict[str, Any]):
        """从字典加载配置，嵌套字典按键合并"""
        for key, value in config_dict.items():
            if not hasattr(self, key):
                continue
            current = getattr(self, key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged = dict(current)
                merged.update(value)
                setattr(self, key, merged)
            else:
                setattr(self, key, value)

    def load_from_json(self, file_path: str):
        """从JSON文件加载配置"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"配置文件不存在: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            config_dict = json.load(f)
            self.load_from_dict(config_dict)

    def load_from_yaml(self, file_path: str):
        """从YAML文件加载配置"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"配置文件不存在: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
            self.load_from_dict(config_dict)

    def load_from_file(self, file_path: str):
        """按扩展名选择加载方式"""
        if Path(file_path).suffix.lower() == ".json":
            self.load_from_json(file_path)
        else:
            self.load_from_yaml(file_path)

    def save_to_json(self, file_path: str):
        """保存配置到JSON文件"""
        config_dict = self.to_dict()
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config_dict, f, indent=2, ensure_ascii=False)

    def to_dict(self) -> Dict[str, Any]:
        """导出为字典"""
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith('_')
        }

    def coefficient(self, name: str) -> float:
        return float(self.default_coefficients[name])

    def reset_to_defaults(self):
        """重置为默认配置"""
        self._initialized = False
        self.__init__()

    @classmethod
    def get_instance(cls) -> 'ConfigManager':
        """获取单例实例"""
        return cls()


# 提供全局访问点
def get_config() -> ConfigManager:
    """获取配置管理器实例"""
    return ConfigManager.get_instance()
