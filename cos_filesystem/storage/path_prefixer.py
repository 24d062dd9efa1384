"""
路径前缀处理
在逻辑路径与对象键之间转换，保证对象键恰好带一次配置前缀
"""

import re


class PathPrefixer:
    """
    路径前缀处理器

    prefix_path 将配置前缀与逻辑路径用分隔符拼接，合并重复分隔符并去掉开头的分隔符，
    逻辑路径结尾的分隔符（目录标记）会被保留；strip_prefix 是它的逆运算。
    """

    def __init__(self, prefix: str = "", separator: str = "/") -> None:
        self.separator = separator
        self._redundant = re.compile("{}{{2,}}".format(re.escape(separator)))
        self.prefix = self._collapse(prefix or "").strip(separator)

    def _collapse(self, path: str) -> str:
        return self._redundant.sub(self.separator, path)

    def prefix_path(self, path: str) -> str:
        """
        逻辑路径 -> 对象键

        Args:
            path: 逻辑路径

        Returns:
            str: 对象键
        """
        path = self._collapse(path or "")
        relative = path.strip(self.separator)
        key = self.separator.join(part for part in (self.prefix, relative) if part)
        if relative and path.endswith(self.separator):
            key += self.separator
        return key

    def prefix_directory_path(self, path: str) -> str:
        """逻辑目录路径 -> 以分隔符结尾的对象键前缀，根目录且无前缀时为空字符串"""
        key = self.prefix_path((path or "").rstrip(self.separator))
        if not key:
            return ""
        return key + self.separator

    def strip_prefix(self, key: str) -> str:
        """
        对象键 -> 逻辑路径

        Args:
            key: 对象键

        Returns:
            str: 逻辑路径，不带配置前缀的对象键原样返回
        """
        if not self.prefix:
            return key
        if key == self.prefix or key == self.prefix + self.separator:
            return ""
        head = self.prefix + self.separator
        if key.startswith(head):
            return key[len(head):]
        return key

    def strip_directory_prefix(self, key: str) -> str:
        """对象键 -> 不带结尾分隔符的逻辑目录路径"""
        return self.strip_prefix(key).rstrip(self.separator)
