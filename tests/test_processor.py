"""单文件处理测试。"""

import asyncio
from pathlib import Path

import pytest

from py_image_optimize.core.processor import FileProcessor, write_output
from py_image_optimize.engine.config import build_config


class StubSniffer:
    """固定返回指定格式的嗅探器"""

    def __init__(self, format_name: str | None):
        self.format_name = format_name
        self.calls = 0

    def sniff(self, data: bytes) -> str | None:
        self.calls += 1
        return self.format_name


class TestFileProcessor:
    """FileProcessor 测试"""

    async def test_without_destination(self, fixtures_dir: Path, jpeg_bytes: bytes):
        """未配置输出目录时只返回数据"""
        path = fixtures_dir / "fixture.jpg"
        result = await FileProcessor(build_config()).process(path)

        assert result.source_path == path
        assert result.destination_path is None
        assert result.data == jpeg_bytes
        assert result.original_size == len(jpeg_bytes)
        assert result.format == "JPEG"

    async def test_writes_under_destination(self, fixtures_dir: Path, tmp_path: Path):
        destination = tmp_path / "out"
        path = fixtures_dir / "fixture.jpg"
        processor = FileProcessor(
            build_config(destination=destination, plugins=[lambda d: d[:-2] + b"xx"])
        )

        result = await processor.process(path, base=fixtures_dir)

        assert result.destination_path == destination / "fixture.jpg"
        assert result.destination_path.read_bytes() == result.data
        assert result.data.endswith(b"xx")

    async def test_preserves_relative_structure(self, tmp_path: Path):
        source = tmp_path / "src" / "icons" / "logo.png"
        source.parent.mkdir(parents=True)
        source.write_bytes(b"not sniffable")
        destination = tmp_path / "out"

        processor = FileProcessor(build_config(destination=destination))
        result = await processor.process(source, base=tmp_path / "src")

        assert result.destination_path == destination / "icons" / "logo.png"
        assert result.destination_path.exists()

    async def test_extension_follows_sniffed_format(
        self, fixtures_dir: Path, tmp_path: Path
    ):
        """扩展名由嗅探器决定，不信任原文件名"""
        sniffer = StubSniffer("WEBP")
        processor = FileProcessor(
            build_config(destination=tmp_path / "out"), sniffer=sniffer
        )

        result = await processor.process(fixtures_dir / "fixture.jpg")

        assert result.destination_path.suffix == ".webp"
        assert result.format == "WEBP"
        assert sniffer.calls == 1

    async def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await FileProcessor(build_config()).process(tmp_path / "missing.jpg")


class TestWriteOutput:
    """输出写入"""

    async def test_concurrent_sibling_directories(self, tmp_path: Path):
        """多个任务同时创建同一父目录不会报错"""
        paths = [tmp_path / "out" / "shared" / f"{i}.bin" for i in range(16)]

        await asyncio.gather(
            *(asyncio.to_thread(write_output, p, str(i).encode()) for i, p in enumerate(paths))
        )

        assert [p.read_bytes() for p in paths] == [str(i).encode() for i in range(16)]

    def test_existing_directory(self, tmp_path: Path):
        target = tmp_path / "exists" / "a.bin"
        target.parent.mkdir()

        write_output(target, b"abc")

        assert target.read_bytes() == b"abc"
