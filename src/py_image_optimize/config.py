"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessingDefaults:
    """处理相关的默认配置"""

    # 并发设置
    MAX_WORKERS: int = 4


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.processing = ProcessingDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if max_workers := os.getenv("PIO_MAX_WORKERS"):
            workers = int(max_workers)
            if workers <= 0:
                raise ValueError(f"PIO_MAX_WORKERS 必须大于 0，当前值: {workers}")
            object.__setattr__(self.processing, "MAX_WORKERS", workers)

        if log_level := os.getenv("PIO_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if log_format := os.getenv("PIO_LOG_FORMAT"):
            object.__setattr__(self.logging, "LOG_FORMAT", log_format)


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
