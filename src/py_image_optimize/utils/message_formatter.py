"""消息格式化工具模块。

提供统一的错误消息、日志消息格式化功能。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def invalid_type(name: str, expected: str, value: Any) -> str:
        """参数类型错误消息"""
        return f"参数 {name} 应为 {expected}，实际为 {type(value).__name__}"

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def size_change(original_size: int, new_size: int) -> str:
        """文件大小变化消息"""
        return (
            f"{naturalsize(original_size, binary=True)} → "
            f"{naturalsize(new_size, binary=True)}"
        )
