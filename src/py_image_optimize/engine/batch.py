"""批量处理器模块。

把已解析的文件列表并发交给 FileProcessor，结果按输入顺序汇总。
"""

import asyncio
from pathlib import Path

from ..core.processor import FileProcessor
from ..core.sniffer import FormatSniffer
from ..models.optimize_config import OptimizeConfig
from ..models.transform_result import TransformResult
from ..utils.logging_helpers import get_logger
from ..utils.path_helpers import PathResolver
from .concurrent_executor import ConcurrentExecutor


logger = get_logger()


class BatchRunner:
    """批量图像处理器

    每个文件相互独立；任一文件失败则整批失败，异常原样抛给调用方。
    """

    def __init__(self, max_workers: int = 4, sniffer: FormatSniffer | None = None):
        """初始化批量处理器

        Args:
            max_workers: 最大并发数
            sniffer: 格式嗅探器，None 使用默认实现
        """
        self.max_workers = max_workers
        self.sniffer = sniffer
        self.concurrent_executor = ConcurrentExecutor(max_workers)

    async def run(
        self, files: list[Path], config: OptimizeConfig
    ) -> list[TransformResult]:
        """并发处理文件列表

        Args:
            files: 已解析的文件列表
            config: 优化配置

        Returns:
            list[TransformResult]: 与 files 顺序一致的结果列表
        """
        if not files:
            logger.debug("没有需要处理的文件")
            return []

        base = PathResolver.common_base(files) if config.should_write else None
        if config.should_write:
            logger.debug(f"输出目录: {config.destination}，公共父目录: {base}")

        pool = self.concurrent_executor.create_pool()
        try:
            processor = FileProcessor(config, sniffer=self.sniffer, executor=pool)

            async def process(path: Path) -> TransformResult:
                return await processor.process(path, base)

            results = await self.concurrent_executor.execute_tasks(files, process)
        finally:
            # 失败时线程中可能仍有插件在运行，在事件循环之外等待其结束
            await asyncio.to_thread(pool.shutdown, wait=True, cancel_futures=True)

        logger.info(self._summary(results))
        return results

    @staticmethod
    def _summary(results: list[TransformResult]) -> str:
        """批量处理摘要"""
        total_original = sum(r.original_size or 0 for r in results)
        total_optimized = sum(r.size for r in results)
        saved = max(0, total_original - total_optimized)
        return (
            f"处理 {len(results)} 个文件, "
            f"总节省 {TransformResult.format_size(saved)}"
        )
