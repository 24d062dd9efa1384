"""
存储服务数据模型
定义文件系统操作中使用的所有数据结构

对象存储没有真实的目录，目录由以分隔符结尾的键或列举结果中的公共前缀模拟，
因此列举结果是 FileAttributes 与 DirectoryAttributes 两种记录的混合序列。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from cos_filesystem.storage.exceptions import StorageError


class Visibility(str, Enum):
    """
    文件可见性

    DEFAULT 表示继承存储桶策略，对应厂商ACL字符串 default。
    """
    PUBLIC = "public"
    PRIVATE = "private"
    DEFAULT = ""


@dataclass(frozen=True)
class FileAttributes:
    """
    文件属性

    Attributes:
        path: 逻辑路径（不含配置前缀）
        file_size: 文件大小（字节）
        visibility: 可见性
        last_modified: 最后修改时间（Unix时间戳，秒）
        mime_type: MIME类型
        extra_metadata: 厂商返回的其他元数据（ETag、存储类型、原始响应头等）
    """
    path: str
    file_size: Optional[int] = None
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    mime_type: Optional[str] = None
    extra_metadata: Dict[str, Any] = field(default_factory=dict)

    is_file = True
    is_dir = False


@dataclass(frozen=True)
class DirectoryAttributes:
    """
    目录属性

    Attributes:
        path: 逻辑路径，不带结尾分隔符
        visibility: 可见性
        last_modified: 最后修改时间（Unix时间戳，秒），公共前缀没有该信息
        extra_metadata: 厂商返回的其他元数据
    """
    path: str
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    extra_metadata: Dict[str, Any] = field(default_factory=dict)

    is_file = False
    is_dir = True


StorageAttributes = Union[FileAttributes, DirectoryAttributes]


@dataclass(frozen=True)
class MoveResult:
    """
    移动结果

    移动由复制和删除两个阶段组成，不具备原子性。删除阶段失败时源文件与目标文件同时存在，
    失败原因记录在 error 中。

    Attributes:
        source: 源逻辑路径
        destination: 目标逻辑路径
        copied: 复制阶段是否完成
        deleted: 删除阶段是否完成
        error: 删除阶段的异常
    """
    source: str
    destination: str
    copied: bool = False
    deleted: bool = False
    error: Optional[StorageError] = None

    @property
    def completed(self) -> bool:
        """两个阶段是否都已完成"""
        return self.copied and self.deleted


__all__ = [
    'Visibility',
    'FileAttributes',
    'DirectoryAttributes',
    'StorageAttributes',
    'MoveResult',
]
