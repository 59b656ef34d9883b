"""批量图像优化编排库。

把文件或内存数据交给可插拔的转换插件链，基于 Pillow 嗅探输出格式。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "批量图像优化编排库，插件式转换链"

# 核心功能导出
from .exceptions import InvalidArgumentError, OptimizeError, TransformError
from .models.transform_result import TransformResult
from .optimizer import (
    ImageOptimizer,
    optimize,
    optimize_buffer,
    optimize_buffer_sync,
    optimize_sync,
)


__all__ = [
    "ImageOptimizer",
    "InvalidArgumentError",
    "OptimizeError",
    "TransformError",
    "TransformResult",
    "get_version",
    "optimize",
    "optimize_buffer",
    "optimize_buffer_sync",
    "optimize_sync",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
