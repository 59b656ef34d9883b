"""优化结果模型。

定义单个文件优化后的结果数据结构。
"""

from pathlib import Path

from humanize import naturalsize
from pydantic import BaseModel, ConfigDict, Field


class TransformResult(BaseModel):
    """单个输入的优化结果，返回后不可修改"""

    model_config = ConfigDict(frozen=True)

    source_path: Path | None = Field(None, description="输入文件路径")
    destination_path: Path | None = Field(
        None, description="输出文件路径，仅在配置了输出目录并写入后存在"
    )
    data: bytes = Field(description="优化后的数据", repr=False)

    original_size: int | None = Field(None, description="原始数据大小（字节）")
    format: str | None = Field(None, description="嗅探出的输出格式")

    @property
    def size(self) -> int:
        """优化后大小（字节）"""
        return len(self.data)

    def get_size_saved(self) -> int:
        """节省的字节数"""
        if self.original_size is None:
            return 0
        return max(0, self.original_size - self.size)

    def get_compression_ratio(self) -> float:
        """压缩比例（百分比）"""
        if not self.original_size:
            return 0.0
        return (self.get_size_saved() / self.original_size) * 100

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)

    def get_summary(self) -> str:
        """优化结果摘要"""
        name = self.source_path.name if self.source_path else "<buffer>"
        if self.original_size is None:
            return f"{name}: {self.format_size(self.size)}"
        return (
            f"{name}: {self.format_size(self.original_size)} → "
            f"{self.format_size(self.size)} "
            f"({self.get_compression_ratio():.1f}% 压缩)"
        )
