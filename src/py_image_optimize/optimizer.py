"""图像优化器接口。

路径模式和缓冲区模式两个入口，插件链由调用方提供。
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from .config import get_config
from .core.chain import TransformChain
from .core.sniffer import FormatSniffer
from .engine.batch import BatchRunner
from .engine.config import ConfigBuilder
from .exceptions import InvalidArgumentError
from .models import Transform, TransformResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter
from .utils.path_helpers import PathInput, PathResolver


logger = get_logger()


class ImageOptimizer:
    """图像优化器。

    把文件或内存数据交给调用方提供的插件链，返回优化后的数据，
    可选写入输出目录。
    """

    def __init__(
        self,
        max_workers: int | None = None,
        sniffer: FormatSniffer | None = None,
    ):
        """初始化优化器。

        Args:
            max_workers: 批量处理时的最大并发数，None 读取全局配置
            sniffer: 格式嗅探器，None 使用基于 Pillow 的默认实现
        """
        if max_workers is None:
            max_workers = get_config().processing.MAX_WORKERS
        if max_workers <= 0:
            raise InvalidArgumentError("max_workers 必须大于 0")

        self.max_workers = max_workers
        self.config_builder = ConfigBuilder()
        self.path_resolver = PathResolver()
        self.batch_runner = BatchRunner(max_workers=max_workers, sniffer=sniffer)

        logger.debug("初始化图像优化器")

    async def optimize(
        self,
        inputs: Sequence[PathInput],
        destination: str | Path | None = None,
        plugins: Sequence[Transform] | None = None,
        glob: bool = True,
    ) -> list[TransformResult]:
        """优化一组文件。

        Args:
            inputs: 文件路径或 glob 模式列表
            destination: 输出目录，None 时只返回数据不写盘
            plugins: 按顺序执行的插件，None 或空列表时原样返回
            glob: 是否展开 glob 模式

        Returns:
            list[TransformResult]: 与解析出的文件顺序一致的结果

        Raises:
            InvalidArgumentError: inputs 不是字符串列表或配置非法
            OSError: 读写失败或数据损坏
            TransformError: 插件执行失败

        Examples:
            >>> from py_image_optimize.core import plugins
            >>> files = await ImageOptimizer().optimize(
            ...     ["images/*.jpg"], destination="build", plugins=[plugins.jpeg()]
            ... )
        """
        config = self.config_builder.build(
            destination=destination, plugins=plugins, glob=glob
        )
        files = self.path_resolver.resolve(inputs, use_glob=config.glob)
        return await self.batch_runner.run(files, config)

    async def optimize_buffer(
        self,
        data: bytes | bytearray | memoryview,
        plugins: Sequence[Transform] | None = None,
    ) -> bytes:
        """优化内存中的数据。

        Args:
            data: 输入数据
            plugins: 按顺序执行的插件，None 或空列表时原样返回

        Returns:
            bytes: 优化后的数据

        Raises:
            InvalidArgumentError: data 不是 bytes 类数据或插件配置非法
            TransformError: 插件执行失败
        """
        if not isinstance(data, bytes | bytearray | memoryview):
            raise InvalidArgumentError(
                MessageFormatter.invalid_type("data", "bytes", data)
            )

        config = self.config_builder.build(plugins=plugins)
        if not config.has_plugins:
            return bytes(data)
        return await TransformChain(config.plugins).apply(bytes(data))


# 便捷函数


async def optimize(
    inputs: Sequence[PathInput],
    destination: str | Path | None = None,
    plugins: Sequence[Transform] | None = None,
    glob: bool = True,
) -> list[TransformResult]:
    """便捷的路径模式优化函数

    Examples:
        >>> files = await optimize(["photos/*.jpg"], destination="out")
        >>> print(files[0].get_summary())
    """
    return await ImageOptimizer().optimize(
        inputs, destination=destination, plugins=plugins, glob=glob
    )


async def optimize_buffer(
    data: bytes | bytearray | memoryview,
    plugins: Sequence[Transform] | None = None,
) -> bytes:
    """便捷的缓冲区模式优化函数"""
    return await ImageOptimizer().optimize_buffer(data, plugins=plugins)


def optimize_sync(
    inputs: Sequence[PathInput],
    destination: str | Path | None = None,
    plugins: Sequence[Transform] | None = None,
    glob: bool = True,
) -> list[TransformResult]:
    """同步版本的 optimize，供没有事件循环的调用方使用"""
    return asyncio.run(
        optimize(inputs, destination=destination, plugins=plugins, glob=glob)
    )


def optimize_buffer_sync(
    data: bytes | bytearray | memoryview,
    plugins: Sequence[Transform] | None = None,
) -> bytes:
    """同步版本的 optimize_buffer"""
    return asyncio.run(optimize_buffer(data, plugins=plugins))
