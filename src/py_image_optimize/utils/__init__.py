"""工具模块包。

提供纯工具函数，不包含业务逻辑。路径解析在 path_helpers 中按需导入。
"""

# 从日志工具模块导入
from .logging_helpers import get_logger, setup_logging

# 从消息格式化模块导入
from .message_formatter import MessageFormatter


__all__ = [
    "MessageFormatter",
    "get_logger",
    "setup_logging",
]
