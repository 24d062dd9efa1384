"""
腾讯云COS文件系统适配器
把通用文件系统操作翻译为腾讯云COS对象存储调用
"""

from cos_filesystem.storage import (
    BaseStorage,
    DirectoryAttributes,
    FileAttributes,
    MoveResult,
    StorageError,
    TencentCosAdapter,
    Visibility,
    get_storage_service,
)

__version__ = "1.0.0"

__all__ = [
    "BaseStorage",
    "TencentCosAdapter",
    "FileAttributes",
    "DirectoryAttributes",
    "MoveResult",
    "Visibility",
    "StorageError",
    "get_storage_service",
]
