"""测试配置文件。

提供测试所需的fixtures和配置，测试图片全部用 Pillow 现场生成。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from py_image_optimize.config import reset_config


SVG_SOURCE = b"""<?xml version="1.0" encoding="UTF-8"?>
<!-- fixture -->
<svg width="100" height="100" viewBox="0 0 100 100">
    <rect x="10" y="10" width="80" height="80" fill="red" />
    <circle cx="50" cy="50" r="20" fill="blue" />
</svg>
"""


def _draw_pattern(img: Image.Image) -> None:
    """绘制有一定复杂度的图案，保证编码后体积有压缩空间"""
    draw = ImageDraw.Draw(img)
    width, height = img.size
    for i in range(60):
        x, y = (i * 23) % width, (i * 17) % height
        color = (i * 5 % 256, i * 7 % 256, i * 11 % 256)
        draw.rectangle([x, y, x + 40, y + 30], fill=color)


def create_jpeg(path: Path, size: tuple[int, int] = (320, 240)) -> Path:
    """生成高质量、未优化的JPEG"""
    img = Image.new("RGB", size, color="white")
    _draw_pattern(img)
    img.save(path, "JPEG", quality=95, optimize=False)
    return path


def create_mpo(path: Path, size: tuple[int, int] = (160, 120)) -> Path:
    """生成两帧的 MPO（多帧 JPEG，手机和相机常见）"""
    first = Image.new("RGB", size, color="white")
    _draw_pattern(first)
    second = Image.new("RGB", size, color="black")
    first.save(path, "MPO", save_all=True, append_images=[second])
    return path


def create_png(path: Path, size: tuple[int, int] = (120, 90)) -> Path:
    """生成带透明度的PNG"""
    img = Image.new("RGBA", size, color=(0, 0, 0, 0))
    _draw_pattern(img)
    img.save(path, "PNG", compress_level=0)
    return path


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """每个测试使用干净的全局配置"""
    for name in ("PIO_MAX_WORKERS", "PIO_LOG_LEVEL", "PIO_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fixtures_dir(tmp_path: Path) -> Path:
    """生成测试素材：正常JPEG、PNG、SVG 以及损坏的JPEG"""
    fixtures = tmp_path / "fixtures"
    fixtures.mkdir()

    create_jpeg(fixtures / "fixture.jpg")
    create_png(fixtures / "fixture.png")
    (fixtures / "fixture.svg").write_bytes(SVG_SOURCE)
    (fixtures / "fixture-corrupt.jpg").write_bytes(b"this is not an image at all" * 10)

    return fixtures


@pytest.fixture
def in_fixtures(fixtures_dir: Path, monkeypatch) -> Path:
    """切换工作目录到素材目录，便于使用相对路径"""
    monkeypatch.chdir(fixtures_dir)
    return fixtures_dir


@pytest.fixture
def jpeg_bytes(fixtures_dir: Path) -> bytes:
    """JPEG素材的原始数据"""
    return (fixtures_dir / "fixture.jpg").read_bytes()
