"""格式嗅探模块。

根据数据头部的二进制签名判断真实格式，而不是相信文件扩展名。
"""

import io
import re
import zlib
from typing import Protocol, runtime_checkable

from PIL import Image

from ..models.constants import ImageFormats, get_extension, get_format_alias
from ..utils.logging_helpers import get_logger


logger = get_logger()

# 只检查开头部分，足以越过 XML 声明、注释和 DOCTYPE
SVG_SNIFF_BYTES = 4096
_SVG_PATTERN = re.compile(
    rb"^\s*(?:<\?xml[^>]*>\s*)?(?:<!--.*?-->\s*)*(?:<!DOCTYPE[^>]*>\s*)?(?:<!--.*?-->\s*)*<svg[\s>]",
    re.IGNORECASE | re.DOTALL,
)
_GZIP_MAGIC = b"\x1f\x8b"


@runtime_checkable
class FormatSniffer(Protocol):
    """格式嗅探接口：bytes -> 格式标识（无法识别时为 None）"""

    def sniff(self, data: bytes) -> str | None: ...


class PillowSniffer:
    """基于 Pillow 插件注册表的格式嗅探器

    Image.open 只解析文件头，不解码像素数据。SVG 不在 Pillow 支持范围内，单独按文本识别。
    """

    def sniff(self, data: bytes) -> str | None:
        if not data:
            return None

        try:
            with Image.open(io.BytesIO(data)) as img:
                return get_format_alias(img.format) if img.format else None
        except (OSError, Image.DecompressionBombError, ValueError) as e:
            logger.debug(f"Pillow 无法识别数据头: {e}")

        if is_svg(data):
            return "SVG"
        return None


def is_svg(data: bytes) -> bool:
    """检查数据是否为 SVG（支持 gzip 压缩的 svgz）"""
    head = data[:SVG_SNIFF_BYTES]
    if head.startswith(_GZIP_MAGIC):
        try:
            head = zlib.decompressobj(16 + zlib.MAX_WBITS).decompress(
                data, SVG_SNIFF_BYTES
            )
        except zlib.error:
            return False
    return _SVG_PATTERN.match(head.lstrip(b"\xef\xbb\xbf")) is not None


def extension_for(format_name: str | None, original_suffix: str) -> str:
    """根据嗅探出的格式确定输出扩展名

    原扩展名已对应同一格式时保留原扩展名（.jpeg 不会被改成 .jpg），
    无法识别格式时也保留原扩展名。
    """
    if format_name is None:
        return original_suffix

    original_format = ImageFormats.format_for_extension(original_suffix)
    if original_format and get_format_alias(original_format) == get_format_alias(
        format_name
    ):
        return original_suffix

    return get_extension(format_name)
