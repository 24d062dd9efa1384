"""
存储抽象基类
定义统一的文件系统适配器接口，支持多种对象存储后端

所有路径参数均为逻辑路径（不含配置前缀）。实现类必须把厂商异常转换为
cos_filesystem.storage.exceptions 中定义的存储异常。
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Iterator, Mapping, Optional, Union

from cos_filesystem.storage.models import FileAttributes, MoveResult, StorageAttributes, Visibility

VisibilityLike = Union[Visibility, str]


class BaseStorage(ABC):
    """存储抽象基类"""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """
        检查文件是否存在

        Args:
            path: 逻辑路径

        Returns:
            bool: 文件是否存在

        Raises:
            ExistenceCheckError: 除"不存在"以外的厂商错误
        """

    @abstractmethod
    def write(
        self,
        path: str,
        contents: Union[bytes, str],
        visibility: Optional[VisibilityLike] = None,
        mime_type: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        写入文件

        Args:
            path: 逻辑路径
            contents: 文件内容
            visibility: 可见性，为空时使用配置的默认可见性
            mime_type: MIME类型
            metadata: 自定义元数据

        Raises:
            WriteError: 写入失败时抛出
        """

    @abstractmethod
    def write_stream(
        self,
        path: str,
        stream: BinaryIO,
        visibility: Optional[VisibilityLike] = None,
        mime_type: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        以流的形式写入文件

        Raises:
            WriteError: 写入失败时抛出
        """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        读取文件全部内容

        Raises:
            ReadError: 读取失败时抛出
        """

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """
        以流的形式读取文件，内容不会一次性加载到内存

        Raises:
            ReadError: 读取失败时抛出
        """

    @abstractmethod
    def delete(self, path: str) -> None:
        """
        删除文件

        Raises:
            DeleteError: 删除失败时抛出
        """

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """
        删除目录及其下所有对象，部分删除失败不会回滚

        Raises:
            DeleteError: 任一对象删除失败时抛出，绑定目录路径
        """

    @abstractmethod
    def create_directory(self, path: str, visibility: Optional[VisibilityLike] = None) -> None:
        """
        创建目录标记对象

        Raises:
            WriteError: 创建失败时抛出
        """

    @abstractmethod
    def set_visibility(self, path: str, visibility: VisibilityLike) -> None:
        """
        设置文件可见性

        Raises:
            VisibilityError: 设置失败时抛出
        """

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """
        获取文件可见性

        Raises:
            MetadataError: 获取失败时抛出
        """

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """获取文件MIME类型，缺失时抛出 MetadataError"""

    @abstractmethod
    def last_modified(self, path: str) -> FileAttributes:
        """获取文件最后修改时间，缺失时抛出 MetadataError"""

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """获取文件大小，缺失时抛出 MetadataError"""

    @abstractmethod
    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[StorageAttributes]:
        """
        列举目录内容

        Args:
            path: 逻辑目录路径
            deep: 是否递归列举

        Returns:
            Iterator[StorageAttributes]: 惰性的文件/目录属性序列
        """

    @abstractmethod
    def copy(self, source: str, destination: str, visibility: Optional[VisibilityLike] = None) -> None:
        """
        服务端复制文件

        Raises:
            CopyError: 复制失败时抛出
        """

    @abstractmethod
    def move(self, source: str, destination: str) -> MoveResult:
        """
        移动文件（先复制再删除，非原子操作）

        Returns:
            MoveResult: 各阶段完成情况

        Raises:
            CopyError: 复制阶段失败时抛出
        """

    @abstractmethod
    def get_metadata(self, path: str) -> FileAttributes:
        """
        获取文件元数据

        Raises:
            MetadataError: 获取失败时抛出
        """

    @abstractmethod
    def set_metadata(self, path: str, metadata: Mapping[str, str]) -> None:
        """
        更新文件自定义元数据

        Raises:
            CopyError: 更新失败时抛出
        """

    @abstractmethod
    def get_url(self, path: str) -> str:
        """获取文件公开访问URL"""

    @abstractmethod
    def get_temporary_url(
        self,
        path: str,
        expires: Optional[int] = None,
        method: str = "GET"
    ) -> str:
        """
        生成临时访问URL

        Raises:
            URLError: 生成失败时抛出
        """

    @abstractmethod
    def get_client(self) -> Any:
        """获取底层厂商客户端"""


__all__ = ['BaseStorage', 'VisibilityLike']
