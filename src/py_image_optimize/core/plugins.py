"""内置转换插件。

基于 Pillow 编解码器的插件工厂，每个工厂返回一个 bytes -> bytes 的函数。
压缩本身完全交给 Pillow，这里只负责选择保存参数。
"""

import io
from collections.abc import Callable
from typing import Any

from PIL import Image, ImageOps

from ..utils.logging_helpers import get_logger


logger = get_logger()

BytesTransform = Callable[[bytes], bytes]


def _encode(img: Image.Image, format_name: str, **params: Any) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=format_name, **params)
    return buffer.getvalue()


def _open(data: bytes) -> Image.Image:
    """打开并完整解码图片，损坏数据在这里以 OSError 形式抛出"""
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def get_jpeg_params(
    img: Image.Image, quality: int | None, progressive: bool
) -> dict[str, Any]:
    """获取JPEG压缩参数

    - quality=None 且输入是 JPEG：quality='keep'，沿用原量化表，只做霍夫曼表优化
    - quality=None 且输入非 JPEG：使用 85
    - 质量100会禁用部分压缩算法，自动降到98
    """
    params: dict[str, Any] = {"optimize": True, "progressive": progressive}

    if quality is None:
        if img.format == "JPEG":
            params["quality"] = "keep"
            return params
        quality = 85

    jpeg_quality = max(1, min(100, quality))
    if jpeg_quality == 100:
        logger.info("自动调整质量从100到98以优化文件大小")
        jpeg_quality = 98

    params["quality"] = jpeg_quality
    # 色度子采样：高质量 4:2:2，其余 4:2:0
    params["subsampling"] = 1 if jpeg_quality >= 85 else 2
    return params


def get_webp_params(quality: int, lossless: bool, method: int) -> dict[str, Any]:
    """获取WebP压缩参数

    - method: 0=快速，6=最慢但最佳压缩
    - alpha_quality：高质量时透明通道无损
    """
    if lossless:
        return {"lossless": True, "quality": quality, "method": method, "exact": True}

    webp_quality = max(1, min(100, quality))
    params: dict[str, Any] = {"quality": webp_quality, "method": method}
    if webp_quality >= 85:
        params["alpha_quality"] = 100
    elif webp_quality >= 70:
        params["alpha_quality"] = min(100, webp_quality + 10)
    else:
        params["alpha_quality"] = webp_quality
    return params


def _prepare_for_jpeg(img: Image.Image) -> Image.Image:
    """JPEG不支持透明度，合成到白色背景上"""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode not in ("RGB", "L"):
        return img.convert("RGB")
    return img


def jpeg(quality: int | None = None, progressive: bool = False) -> BytesTransform:
    """JPEG 重新编码插件

    Args:
        quality: 1-100，None 时 JPEG 输入沿用原质量
        progressive: 是否输出渐进式 JPEG
    """
    if quality is not None and not 1 <= quality <= 100:
        raise ValueError(f"质量参数必须在 1-100 之间，当前值: {quality}")

    def transform(data: bytes) -> bytes:
        with _open(data) as img:
            params = get_jpeg_params(img, quality, progressive)
            if params.get("quality") == "keep":
                return _encode(img, "JPEG", **params)
            prepared = _prepare_for_jpeg(ImageOps.exif_transpose(img))
            return _encode(prepared, "JPEG", **params)

    transform.__name__ = "jpeg"
    return transform


def png(compress_level: int = 9) -> BytesTransform:
    """PNG 无损重新编码插件"""
    if not 0 <= compress_level <= 9:
        raise ValueError(f"compress_level 必须在 0-9 之间，当前值: {compress_level}")

    def transform(data: bytes) -> bytes:
        with _open(data) as img:
            return _encode(img, "PNG", optimize=True, compress_level=compress_level)

    transform.__name__ = "png"
    return transform


def webp(quality: int = 75, lossless: bool = False, method: int = 6) -> BytesTransform:
    """转换为 WebP 的插件

    Args:
        quality: 有损模式下的质量 1-100，无损模式下为压缩努力程度
        lossless: 是否无损
        method: 0-6，越大越慢、压缩越好
    """
    if not 0 <= method <= 6:
        raise ValueError(f"method 必须在 0-6 之间，当前值: {method}")

    params = get_webp_params(quality, lossless, method)

    def transform(data: bytes) -> bytes:
        with _open(data) as img:
            prepared = ImageOps.exif_transpose(img)
            if prepared.mode not in ("RGB", "RGBA"):
                has_alpha = "A" in prepared.getbands() or "transparency" in prepared.info
                prepared = prepared.convert("RGBA" if has_alpha else "RGB")
            return _encode(prepared, "WEBP", **params)

    transform.__name__ = "webp"
    return transform
