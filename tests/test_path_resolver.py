"""路径解析测试。"""

import os
from pathlib import Path

import pytest

from py_image_optimize.exceptions import InvalidArgumentError
from py_image_optimize.utils.path_helpers import PathResolver, to_posix_separators


@pytest.fixture
def resolver():
    return PathResolver()


@pytest.fixture
def image_tree(tmp_path: Path) -> Path:
    """a.jpg b.jpg c.png sub/d.jpg 以及一个目录和垃圾文件"""
    for name in ("b.jpg", "a.jpg", "c.png", "Thumbs.db", ".DS_Store"):
        (tmp_path / name).write_bytes(b"data")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "d.jpg").write_bytes(b"data")
    (tmp_path / "folder.jpg").mkdir()
    return tmp_path


class TestResolve:
    """glob 展开与过滤"""

    def test_expands_sorted_files_only(self, resolver, image_tree: Path):
        """只返回普通文件，目录即使匹配也被排除"""
        files = resolver.resolve([f"{image_tree}/*.jpg"])

        assert [f.name for f in files] == ["a.jpg", "b.jpg"]

    def test_recursive_pattern(self, resolver, image_tree: Path):
        files = resolver.resolve([f"{image_tree}/**/*.jpg"])

        assert {f.name for f in files} == {"a.jpg", "b.jpg", "d.jpg"}

    def test_filters_junk_files(self, resolver, image_tree: Path):
        """垃圾文件无论通过模式还是字面路径都被过滤"""
        files = resolver.resolve(
            [f"{image_tree}/*", f"{image_tree}/.DS_Store", f"{image_tree}/Thumbs.db"]
        )
        names = [f.name for f in files]

        assert "Thumbs.db" not in names
        assert ".DS_Store" not in names
        assert names == ["a.jpg", "b.jpg", "c.png"]

    def test_windows_delimiter_normalized(self, resolver, image_tree: Path):
        """反斜杠分隔的模式与正斜杠形式结果相同"""
        native = resolver.resolve([f"{image_tree}/*.jpg"])
        windows = resolver.resolve([f"{image_tree}\\*.jpg"])

        assert windows == native
        assert len(windows) == 2

    def test_deduplicates_preserving_first_seen_order(
        self, resolver, image_tree: Path
    ):
        files = resolver.resolve(
            [f"{image_tree}/b.jpg", f"{image_tree}/*.jpg", f"{image_tree}/b.jpg"]
        )

        assert [f.name for f in files] == ["b.jpg", "a.jpg"]

    def test_negation_pattern(self, resolver, image_tree: Path):
        """! 开头的模式从结果中排除匹配的文件"""
        files = resolver.resolve([f"{image_tree}/*", f"!{image_tree}/*.png"])

        assert [f.name for f in files] == ["a.jpg", "b.jpg"]

    def test_missing_pattern_resolves_to_nothing(self, resolver, tmp_path: Path):
        assert resolver.resolve([f"{tmp_path}/nothing/*.jpg"]) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="需要符号链接支持")
    def test_dangling_symlink_excluded(self, resolver, tmp_path: Path):
        (tmp_path / "real.jpg").write_bytes(b"data")
        os.symlink(tmp_path / "gone.jpg", tmp_path / "dangling.jpg")

        files = resolver.resolve([f"{tmp_path}/*.jpg"])

        assert [f.name for f in files] == ["real.jpg"]


class TestLiteralMode:
    """关闭 glob 时按字面路径处理"""

    def test_glob_characters_taken_literally(self, resolver, tmp_path: Path):
        literal = tmp_path / "photo[1].jpg"
        literal.write_bytes(b"data")

        assert resolver.resolve([str(literal)]) == []
        assert resolver.resolve([str(literal)], use_glob=False) == [literal]

    def test_missing_file_kept(self, resolver, tmp_path: Path):
        """不检查存在性，读取时才报错"""
        missing = tmp_path / "missing.jpg"

        assert resolver.resolve([str(missing)], use_glob=False) == [missing]

    def test_junk_still_filtered(self, resolver, tmp_path: Path):
        assert resolver.resolve([str(tmp_path / "Thumbs.db")], use_glob=False) == []


class TestValidation:
    """输入类型验证"""

    @pytest.mark.parametrize("bad_input", ["foo", None, 42, {"a": 1}])
    def test_rejects_non_list(self, resolver, bad_input):
        with pytest.raises(InvalidArgumentError, match="list"):
            resolver.resolve(bad_input)

    def test_rejects_non_string_items(self, resolver):
        with pytest.raises(InvalidArgumentError):
            resolver.resolve(["ok.jpg", 1])

    def test_invalid_argument_is_type_error(self, resolver):
        with pytest.raises(TypeError):
            resolver.resolve("foo")

    def test_accepts_path_objects(self, resolver, image_tree: Path):
        files = resolver.resolve([image_tree / "a.jpg"])

        assert files == [image_tree / "a.jpg"]


class TestOutputPaths:
    """公共父目录和输出路径计算"""

    def test_common_base(self, tmp_path: Path):
        files = [tmp_path / "a" / "x.jpg", tmp_path / "a" / "b" / "y.jpg"]

        assert PathResolver.common_base(files) == tmp_path / "a"

    def test_common_base_single_file(self, tmp_path: Path):
        assert PathResolver.common_base([tmp_path / "x.jpg"]) == tmp_path

    def test_common_base_root_is_not_meaningful(self):
        assert PathResolver.common_base([Path("/x.jpg"), Path("/y.jpg")]) is None

    def test_common_base_empty(self):
        assert PathResolver.common_base([]) is None

    def test_destination_keeps_relative_structure(self, tmp_path: Path):
        dest = PathResolver.destination_for(
            tmp_path / "src" / "icons" / "a.jpg",
            tmp_path / "out",
            tmp_path / "src",
            ".webp",
        )

        assert dest == tmp_path / "out" / "icons" / "a.webp"

    def test_destination_without_base_uses_name(self, tmp_path: Path):
        dest = PathResolver.destination_for(
            tmp_path / "src" / "a.jpg", tmp_path / "out", None, ".jpg"
        )

        assert dest == tmp_path / "out" / "a.jpg"

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("C:\\images\\*.jpg", "C:/images/*.jpg"),
            ("images/*.jpg", "images/*.jpg"),
            ("\\\\?\\C:\\images\\a.jpg", "\\\\?\\C:\\images\\a.jpg"),
        ],
    )
    def test_to_posix_separators(self, pattern: str, expected: str):
        assert to_posix_separators(pattern) == expected
