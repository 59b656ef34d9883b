"""配置构建器模块。

统一的优化配置构建逻辑，把 pydantic 验证错误转换为 InvalidArgumentError。
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import InvalidArgumentError
from ..models.optimize_config import OptimizeConfig


class ConfigBuilder:
    """优化配置构建器"""

    def build(
        self,
        destination: str | Path | None = None,
        plugins: Any = None,
        glob: bool = True,
    ) -> OptimizeConfig:
        """构建优化配置

        Args:
            destination: 输出目录（可选）
            plugins: 插件列表，None 视为空列表
            glob: 是否展开 glob 模式

        Returns:
            OptimizeConfig: 构建的配置对象

        Raises:
            InvalidArgumentError: 参数验证失败
        """
        try:
            return OptimizeConfig(destination=destination, plugins=plugins, glob=glob)
        except PydanticValidationError as e:
            raise InvalidArgumentError(self._format_validation_error(e)) from e

    def _format_validation_error(self, error: PydanticValidationError) -> str:
        """格式化验证错误"""
        messages = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            if field:
                messages.append(f"{field}: {msg}")
            else:
                messages.append(msg)
        return "; ".join(messages)


# 全局配置构建器实例
_default_builder = ConfigBuilder()


def build_config(**kwargs: Any) -> OptimizeConfig:
    """便捷的配置构建函数"""
    return _default_builder.build(**kwargs)
