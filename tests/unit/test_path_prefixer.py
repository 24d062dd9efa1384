"""
路径前缀处理单元测试
"""

import pytest

from cos_filesystem.storage.path_prefixer import PathPrefixer


@pytest.mark.unit
@pytest.mark.storage
class TestPathPrefixer:
    """PathPrefixer 单元测试类"""

    def test_prefix_path_joins_with_separator(self):
        """测试前缀与路径用分隔符拼接"""
        prefixer = PathPrefixer("uploads")
        assert prefixer.prefix_path("docs/a.txt") == "uploads/docs/a.txt"

    def test_prefix_path_collapses_redundant_separators(self):
        """测试合并重复分隔符并去掉开头的分隔符"""
        prefixer = PathPrefixer("/uploads//")
        assert prefixer.prefix_path("//docs///a.txt") == "uploads/docs/a.txt"

    def test_prefix_path_keeps_trailing_separator(self):
        """测试保留目录标记的结尾分隔符"""
        prefixer = PathPrefixer("uploads")
        assert prefixer.prefix_path("docs/") == "uploads/docs/"

    def test_prefix_empty_path_yields_prefix(self):
        """测试空路径得到去掉开头分隔符的前缀本身"""
        assert PathPrefixer("/uploads/").prefix_path("") == "uploads"

    def test_identity_without_prefix(self):
        """测试未配置前缀时只做分隔符规范化"""
        prefixer = PathPrefixer("")
        assert prefixer.prefix_path("a/b.txt") == "a/b.txt"
        assert prefixer.prefix_path("/a//b.txt") == "a/b.txt"
        assert prefixer.prefix_path("") == ""
        assert prefixer.strip_prefix("a/b.txt") == "a/b.txt"

    @pytest.mark.parametrize("key", [
        "uploads/a.txt",
        "uploads/a/b/c.txt",
        "uploads/a/",
        "uploads",
    ])
    def test_round_trip(self, key):
        """测试已带前缀的键经过 strip/prefix 后保持不变"""
        prefixer = PathPrefixer("uploads")
        assert prefixer.prefix_path(prefixer.strip_prefix(key)) == key

    def test_strip_prefix_leaves_foreign_keys(self):
        """测试不带前缀的键原样返回"""
        prefixer = PathPrefixer("uploads")
        assert prefixer.strip_prefix("other/a.txt") == "other/a.txt"
        assert prefixer.strip_prefix("uploadsx/a.txt") == "uploadsx/a.txt"

    def test_directory_paths(self):
        """测试目录路径转换"""
        prefixer = PathPrefixer("uploads")
        assert prefixer.prefix_directory_path("docs") == "uploads/docs/"
        assert prefixer.prefix_directory_path("docs/") == "uploads/docs/"
        assert prefixer.prefix_directory_path("") == "uploads/"
        assert PathPrefixer("").prefix_directory_path("") == ""
        assert prefixer.strip_directory_prefix("uploads/docs/") == "docs"
