"""文件处理模块。

单个文件的完整流程：读取 → 插件链 → 嗅探格式 → 按需写入输出目录。
"""

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, TypeVar

from ..models.optimize_config import OptimizeConfig
from ..models.transform_result import TransformResult
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from ..utils.path_helpers import PathResolver
from .chain import TransformChain
from .sniffer import FormatSniffer, PillowSniffer, extension_for


logger = get_logger()
T = TypeVar("T")


class FileProcessor:
    """单文件处理器

    读写和同步插件都在线程池中执行，不阻塞事件循环。
    """

    def __init__(
        self,
        config: OptimizeConfig,
        sniffer: FormatSniffer | None = None,
        executor: Executor | None = None,
    ):
        """初始化文件处理器

        Args:
            config: 优化配置
            sniffer: 格式嗅探器，默认使用 PillowSniffer
            executor: 执行阻塞操作的线程池，None 使用事件循环默认线程池
        """
        self.config = config
        self.sniffer = sniffer or PillowSniffer()
        self.executor = executor
        self.chain = TransformChain(config.plugins)

    async def process(self, path: Path, base: Path | None = None) -> TransformResult:
        """处理单个文件

        Args:
            path: 已解析的输入文件
            base: 所有输入的公共父目录，用于在输出目录中保留相对结构

        Returns:
            TransformResult: 优化结果

        Raises:
            OSError: 读取或写入失败
            TransformError: 插件执行失败
        """
        original = await self._run(path.read_bytes)
        data = await self.chain.apply(original, self.executor, input_path=path)

        format_name = await self._run(self.sniffer.sniff, data)
        logger.debug(
            f"{path}: {MessageFormatter.size_change(len(original), len(data))}"
            f" [{format_name or '未知格式'}]"
        )

        destination_path = None
        if self.config.destination is not None:
            extension = extension_for(format_name, path.suffix)
            destination_path = PathResolver.destination_for(
                path, self.config.destination, base, extension
            )
            await self._run(write_output, destination_path, data)
            logger.debug(f"已写入: {destination_path}")

        return TransformResult(
            source_path=path,
            destination_path=destination_path,
            data=data,
            original_size=len(original),
            format=format_name,
        )

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        """在线程池中执行阻塞调用"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, func, *args)


def write_output(path: Path, data: bytes) -> None:
    """写入输出文件，父目录并发创建时已存在不视为错误"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
