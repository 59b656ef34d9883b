"""路径解析工具模块。

把路径和 glob 模式展开为去重、保序的文件列表，并计算输出路径。
"""

import glob as globlib
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..exceptions import InvalidArgumentError
from ..models.constants import is_junk
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger()

PathInput = str | os.PathLike[str]


def to_posix_separators(pattern: str) -> str:
    """把反斜杠统一为正斜杠，Windows 扩展长度路径（\\\\?\\）保持不变"""
    if pattern.startswith("\\\\?\\"):
        return pattern
    return pattern.replace("\\", "/")


class PathResolver:
    """路径解析器"""

    def resolve(self, inputs: object, use_glob: bool = True) -> list[Path]:
        """解析输入路径列表

        Args:
            inputs: 路径或 glob 模式列表
            use_glob: 是否展开 glob 模式，关闭时按字面路径处理

        Returns:
            list[Path]: 去重且保持首次出现顺序的文件列表

        Raises:
            InvalidArgumentError: 输入不是字符串列表
        """
        patterns = self.validate_inputs(inputs)

        if use_glob:
            candidates = self._expand_patterns(patterns)
        else:
            candidates = (Path(p) for p in patterns)

        files = list(self._unique(f for f in candidates if not is_junk(f.name)))
        logger.debug(f"解析 {len(patterns)} 个输入，得到 {len(files)} 个文件")
        return files

    @staticmethod
    def validate_inputs(inputs: object) -> list[str]:
        """验证输入为字符串（或 PathLike）列表"""
        if not isinstance(inputs, list | tuple):
            raise InvalidArgumentError(
                MessageFormatter.invalid_type("inputs", "list", inputs)
            )

        patterns = []
        for item in inputs:
            if not isinstance(item, str | os.PathLike):
                raise InvalidArgumentError(
                    MessageFormatter.invalid_type("inputs[]", "str", item)
                )
            patterns.append(os.fspath(item))
        return patterns

    def _expand_patterns(self, patterns: list[str]) -> Iterator[Path]:
        """展开 glob 模式，处理 ! 开头的排除模式"""
        normalized = [to_posix_separators(p) for p in patterns]
        excluded = {
            self._key(path)
            for pattern in normalized
            if pattern.startswith("!")
            for path in self._glob_files(pattern[1:])
        }

        for pattern in normalized:
            if pattern.startswith("!"):
                continue
            for path in self._glob_files(pattern):
                if self._key(path) not in excluded:
                    yield path

    @staticmethod
    def _glob_files(pattern: str) -> list[Path]:
        """展开单个模式，只保留普通文件（is_file 会跟随链接，悬空链接被排除）"""
        matches = sorted(globlib.glob(pattern, recursive=True))
        return [Path(m) for m in matches if os.path.isfile(m)]

    @classmethod
    def _unique(cls, paths: Iterable[Path]) -> Iterator[Path]:
        """按绝对路径去重，保持首次出现顺序"""
        seen: set[str] = set()
        for path in paths:
            key = cls._key(path)
            if key not in seen:
                seen.add(key)
                yield path

    @staticmethod
    def _key(path: Path) -> str:
        return os.path.normcase(os.path.abspath(path))

    @staticmethod
    def common_base(paths: list[Path]) -> Path | None:
        """计算所有文件的公共父目录

        Returns:
            Path | None: 公共父目录；列表为空、跨盘符或仅剩文件系统根目录时返回 None
        """
        if not paths:
            return None

        parents = [os.path.abspath(p.parent) for p in paths]
        try:
            base = Path(os.path.commonpath(parents))
        except ValueError:
            # 不同盘符或绝对/相对路径混合
            return None

        if base == Path(base.anchor):
            return None
        return base

    @staticmethod
    def destination_for(
        path: Path, destination: Path, base: Path | None, extension: str
    ) -> Path:
        """计算输出路径，保留相对 base 的目录结构并替换扩展名

        Args:
            path: 输入文件路径
            destination: 输出根目录
            base: 公共父目录，None 时只保留文件名
            extension: 输出扩展名（含点）
        """
        relative = Path(path.name)
        if base is not None:
            try:
                relative = Path(os.path.abspath(path)).relative_to(base)
            except ValueError:
                # 不在 base 之下，退回到文件名
                pass
        return destination / relative.with_suffix(extension)
