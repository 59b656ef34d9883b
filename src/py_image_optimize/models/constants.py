"""图像优化相关常量定义。

基于 Pillow 动态能力的格式与扩展名管理，以及固定的垃圾文件名单。
"""

from typing import Final

from PIL import Image


class ImageFormats:
    """基于 Pillow 的动态图像格式管理"""

    # 用户友好的别名
    ALIASES: Final[dict[str, str]] = {
        "JPG": "JPEG",
        "TIF": "TIFF",
        # 多帧 JPEG（手机、相机直出），文件头仍是 JPEG
        "MPO": "JPEG",
    }

    # 首选扩展名（当 Pillow 有多个选择时）
    PREFERRED_EXTENSIONS: Final[dict[str, str]] = {
        "JPEG": ".jpg",  # 而不是 .jpeg
        "PNG": ".png",  # 而不是 .apng
        "WEBP": ".webp",
        "GIF": ".gif",
        "TIFF": ".tiff",  # 而不是 .tif
        "SVG": ".svg",  # Pillow 不识别 SVG
    }

    # Pillow 注册表之外、但嗅探器能识别的格式
    EXTRA_EXTENSIONS: Final[dict[str, str]] = {
        ".svg": "SVG",
        ".svgz": "SVG",
    }

    @classmethod
    def registered_extensions(cls) -> dict[str, str]:
        """扩展名到格式名的映射（Pillow 注册表 + 额外格式）"""
        extensions = {
            ext.lower(): fmt.upper()
            for ext, fmt in Image.registered_extensions().items()
            if fmt
        }
        extensions.update(cls.EXTRA_EXTENSIONS)
        return extensions

    @classmethod
    def format_for_extension(cls, suffix: str) -> str | None:
        """根据扩展名获取格式名"""
        return cls.registered_extensions().get(suffix.lower())

    @classmethod
    def get_extension(cls, format_name: str) -> str:
        """动态获取扩展名，优先使用首选扩展名"""
        format_upper = format_name.upper()

        if format_upper in cls.PREFERRED_EXTENSIONS:
            return cls.PREFERRED_EXTENSIONS[format_upper]

        for ext, fmt in Image.registered_extensions().items():
            if fmt and fmt.upper() == format_upper:
                return ext.lower()

        return f".{format_upper.lower()}"


class JunkFiles:
    """操作系统生成的元数据文件名单（按文件名精确匹配，不可配置）"""

    NAMES: Final[frozenset[str]] = frozenset(
        {
            # macOS
            ".DS_Store",
            ".AppleDouble",
            ".LSOverride",
            ".Spotlight-V100",
            ".Trashes",
            ".fseventsd",
            ".localized",
            "Icon\r",
            "__MACOSX",
            # Windows
            "Thumbs.db",
            "ehthumbs.db",
            "Desktop.ini",
            "desktop.ini",
            # Synology
            "@eaDir",
            # npm
            "npm-debug.log",
        }
    )

    @classmethod
    def is_junk(cls, name: str) -> bool:
        """检查文件名是否为垃圾文件"""
        return name in cls.NAMES


# 便捷访问函数
def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_upper = format_str.upper()
    return ImageFormats.ALIASES.get(format_upper, format_upper)


def get_extension(format_str: str) -> str:
    """获取格式的首选扩展名"""
    return ImageFormats.get_extension(get_format_alias(format_str))


def is_junk(name: str) -> bool:
    """检查文件名是否在垃圾文件名单中"""
    return JunkFiles.is_junk(name)
