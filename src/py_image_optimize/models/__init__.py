"""数据模型包。

定义图像优化相关的数据结构和常量。
"""

from .constants import (
    ImageFormats,
    JunkFiles,
    get_extension,
    get_format_alias,
    is_junk,
)
from .optimize_config import OptimizeConfig, Transform
from .transform_result import TransformResult


__all__ = [
    "ImageFormats",
    "JunkFiles",
    "OptimizeConfig",
    "Transform",
    "TransformResult",
    "get_extension",
    "get_format_alias",
    "is_junk",
]
