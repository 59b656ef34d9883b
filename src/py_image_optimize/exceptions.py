"""图像优化异常处理模块。

定义统一的异常类和错误处理机制。
"""

from pathlib import Path

from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()


# 统一的异常类型
class OptimizeError(Exception):
    """优化相关错误基类"""

    def __init__(self, message: str, input_path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.input_path = input_path


class InvalidArgumentError(OptimizeError, TypeError):
    """参数类型或结构错误 - 两个入口共用"""

    pass


class TransformError(OptimizeError):
    """转换插件执行错误，消息原样保留"""

    pass


class ErrorHandler:
    """统一错误处理器

    只负责标准化的日志记录，异常本身原样向调用方传播。
    """

    @staticmethod
    def log_error(
        operation: str, path: str | Path, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称（如"文件优化"、"插件转换"等）
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)
