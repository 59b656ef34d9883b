"""转换链模块。

按顺序把数据依次交给各个插件，前一个的输出作为后一个的输入。
"""

import asyncio
import inspect
from collections.abc import Sequence
from concurrent.futures import Executor
from pathlib import Path

from ..exceptions import OptimizeError, TransformError
from ..models.optimize_config import Transform
from ..utils.logging_helpers import get_logger


logger = get_logger()


class TransformChain:
    """有序插件链

    同步插件在线程池中执行，异步插件直接 await。
    任一插件失败即中止，不重试。
    """

    def __init__(self, plugins: Sequence[Transform] | None = None):
        self.plugins = list(plugins or [])

    async def apply(
        self,
        data: bytes,
        executor: Executor | None = None,
        input_path: Path | None = None,
    ) -> bytes:
        """依次执行所有插件

        Args:
            data: 输入数据
            executor: 执行同步插件的线程池，None 使用事件循环默认线程池
            input_path: 数据来源文件，用于错误上下文

        Returns:
            bytes: 最后一个插件的输出；插件列表为空时原样返回输入

        Raises:
            TransformError: 插件抛出非 IO 异常或返回了非 bytes 数据
            OSError: 插件报告的读写或数据损坏错误
        """
        for index, plugin in enumerate(self.plugins):
            name = getattr(plugin, "__name__", type(plugin).__name__)
            try:
                result = await self._invoke(plugin, data, executor)
            except (OptimizeError, OSError):
                # 读写失败、编解码器报告的损坏数据原样传播
                raise
            except Exception as e:
                raise TransformError(str(e), input_path) from e

            if not isinstance(result, bytes | bytearray | memoryview):
                raise TransformError(
                    f"插件 {name} 应返回 bytes，实际返回 {type(result).__name__}",
                    input_path,
                )

            output = bytes(result)
            logger.debug(f"插件 #{index} {name}: {len(data)} → {len(output)} 字节")
            data = output

        return data

    @staticmethod
    async def _invoke(
        plugin: Transform, data: bytes, executor: Executor | None
    ) -> object:
        """执行单个插件，兼容同步和异步实现"""
        if inspect.iscoroutinefunction(plugin):
            return await plugin(data)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(executor, plugin, data)
        if inspect.isawaitable(result):
            return await result
        return result
