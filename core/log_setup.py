import logging
import sys
from core.config_manager import get_config

# 避免重复配置
_LOGGING_CONFIGURED = False

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR
}


def setup_logging(level: str = None):
    """
    配置根日志

    Args:
        level: 日志级别，缺省时取配置中的 log_level
    """
    global _LOGGING_CONFIGURED
    root = logging.getLogger()

    # 如果已经配置过，只更新级别
    if not _LOGGING_CONFIGURED:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(message)s'))
        root.addHandler(handler)
        _LOGGING_CONFIGURED = True

    level_name = (level or get_config().log_level).upper()
    root.setLevel(_LEVEL_MAP.get(level_name, logging.INFO))
    return root
