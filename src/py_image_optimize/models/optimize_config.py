"""优化配置模型。

定义单次调用的配置参数：输出目录、插件链和 glob 开关。
"""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator


# 单个转换插件：bytes -> bytes，允许返回 awaitable
Transform: TypeAlias = Callable[[bytes], bytes | Awaitable[bytes]]


class OptimizeConfig(BaseModel):
    """优化配置"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    destination: Path | None = Field(None, description="输出目录，None 时不写盘")
    plugins: list[Callable[..., Any]] = Field(
        default_factory=list, description="按顺序执行的转换插件"
    )
    glob: bool = Field(True, description="是否展开 glob 模式")

    @field_validator("plugins", mode="before")
    @classmethod
    def validate_plugins(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list | tuple):
            raise ValueError(f"plugins 应为 list，实际为 {type(v).__name__}")
        return list(v)

    @property
    def has_plugins(self) -> bool:
        """是否配置了插件"""
        return bool(self.plugins)

    @property
    def should_write(self) -> bool:
        """是否需要写入输出目录"""
        return self.destination is not None
