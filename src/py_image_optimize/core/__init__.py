"""核心模块包。

转换链、单文件处理、格式嗅探和内置插件。
"""

from . import plugins
from .chain import TransformChain
from .processor import FileProcessor, write_output
from .sniffer import FormatSniffer, PillowSniffer, extension_for, is_svg


__all__ = [
    "FileProcessor",
    "FormatSniffer",
    "PillowSniffer",
    "TransformChain",
    "extension_for",
    "is_svg",
    "plugins",
    "write_output",
]
