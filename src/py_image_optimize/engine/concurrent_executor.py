"""并发执行器模块。

提供通用的异步并发任务执行功能，结果按输入顺序返回。
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from ..exceptions import ErrorHandler
from ..utils.logging_helpers import get_logger


logger = get_logger()

T = TypeVar("T")
R = TypeVar("R")


class ConcurrentExecutor:
    """通用并发执行器

    每个输入一个 asyncio 任务，阻塞操作交给有界线程池。
    任一任务失败时取消其余任务并抛出该异常，不返回部分结果。
    """

    def __init__(self, max_workers: int = 4):
        """初始化并发执行器

        Args:
            max_workers: 线程池最大并发数
        """
        self.max_workers = max_workers

    def create_pool(self) -> ThreadPoolExecutor:
        """创建本批次使用的线程池"""
        return ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="py-image-optimize"
        )

    async def execute_tasks(
        self,
        items: Sequence[T],
        task_function: Callable[[T], Awaitable[R]],
    ) -> list[R]:
        """并发执行任务

        Args:
            items: 任务输入列表
            task_function: 对单个输入执行的协程函数

        Returns:
            list[R]: 与 items 一一对应的结果列表
        """
        if not items:
            return []

        tasks = [asyncio.ensure_future(task_function(item)) for item in items]
        try:
            # gather 按提交顺序返回结果，与完成顺序无关
            return list(await asyncio.gather(*tasks))
        except BaseException as e:
            await self._cancel_pending(tasks)
            failed = next(
                (items[i] for i, t in enumerate(tasks) if self._failed_with(t, e)),
                None,
            )
            if failed is not None and isinstance(e, Exception):
                ErrorHandler.log_error("并发任务处理", str(failed), e)
            raise

    @staticmethod
    async def _cancel_pending(tasks: list[asyncio.Future]) -> None:
        """取消未完成的任务并等待其结束"""
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    def _failed_with(task: asyncio.Future, error: BaseException) -> bool:
        return task.done() and not task.cancelled() and task.exception() is error
