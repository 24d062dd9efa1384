"""
存储服务异常定义
定义存储模块中使用的所有异常类型

每个异常都携带出错的逻辑路径（存放在 details 中）以及底层的厂商异常（cause）。
"""

from typing import Any, Dict, List, Optional


class StorageError(Exception):
    """
    存储操作基础异常

    所有存储相关异常的基类。

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
        cause: 底层异常
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


def _reason(cause: Optional[BaseException]) -> str:
    return ": {}".format(cause) if cause is not None else ""


class ConfigurationError(StorageError):
    """存储配置错误"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ExistenceCheckError(StorageError):
    """文件存在性检查错误"""

    def __init__(self, location: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            "检查文件是否存在失败 {}{}".format(location, _reason(cause)),
            code="EXISTENCE_CHECK_ERROR",
            details={"location": location},
            cause=cause
        )
        self.location = location


class ReadError(StorageError):
    """文件读取错误"""

    def __init__(
        self,
        location: str,
        cause: Optional[BaseException] = None,
        code: str = "READ_ERROR",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            "读取文件失败 {}{}".format(location, _reason(cause)),
            code=code,
            details={"location": location, **(details or {})},
            cause=cause
        )
        self.location = location


class HTTPError(ReadError):
    """通过CDN读取文件时的HTTP错误"""

    def __init__(
        self,
        location: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(
            location, cause=cause, code="HTTP_ERROR", details={"status_code": status_code}
        )
        self.status_code = status_code


class NetworkError(ReadError):
    """通过CDN读取文件时的网络错误"""

    def __init__(self, location: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(location, cause=cause, code="NETWORK_ERROR")


class WriteError(StorageError):
    """文件写入错误"""

    def __init__(self, location: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            "写入文件失败 {}{}".format(location, _reason(cause)),
            code="WRITE_ERROR",
            details={"location": location},
            cause=cause
        )
        self.location = location


class DeleteError(StorageError):
    """文件或目录删除错误"""

    def __init__(
        self,
        location: str,
        cause: Optional[BaseException] = None,
        failed_keys: Optional[List[str]] = None
    ) -> None:
        details: Dict[str, Any] = {"location": location}
        if failed_keys:
            details["failed_keys"] = failed_keys
        super().__init__(
            "删除失败 {}{}".format(location, _reason(cause)),
            code="DELETE_ERROR",
            details=details,
            cause=cause
        )
        self.location = location
        self.failed_keys = failed_keys or []


class CopyError(StorageError):
    """文件复制错误"""

    def __init__(
        self,
        source: str,
        destination: str,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(
            "复制文件失败 {} -> {}{}".format(source, destination, _reason(cause)),
            code="COPY_ERROR",
            details={"source": source, "destination": destination},
            cause=cause
        )
        self.source = source
        self.destination = destination


class MetadataError(StorageError):
    """
    元数据获取错误

    metadata_type 标识缺失的元数据字段：mime_type、file_size、last_modified、
    visibility，整体获取失败时为 metadata。
    """

    def __init__(
        self,
        location: str,
        metadata_type: str = "metadata",
        cause: Optional[BaseException] = None,
        reason: str = ""
    ) -> None:
        message = "获取文件元数据失败 {} ({})".format(location, metadata_type)
        if reason:
            message = "{}: {}".format(message, reason)
        elif cause is not None:
            message += _reason(cause)
        super().__init__(
            message,
            code="METADATA_ERROR",
            details={"location": location, "metadata_type": metadata_type},
            cause=cause
        )
        self.location = location
        self.metadata_type = metadata_type

    @classmethod
    def mime_type(cls, location: str, cause: Optional[BaseException] = None) -> "MetadataError":
        return cls(location, "mime_type", cause, reason="" if cause else "响应中缺少 Content-Type")

    @classmethod
    def file_size(cls, location: str, cause: Optional[BaseException] = None) -> "MetadataError":
        return cls(location, "file_size", cause, reason="" if cause else "响应中缺少 Content-Length")

    @classmethod
    def last_modified(cls, location: str, cause: Optional[BaseException] = None) -> "MetadataError":
        return cls(location, "last_modified", cause, reason="" if cause else "响应中缺少 Last-Modified")

    @classmethod
    def visibility(cls, location: str, cause: Optional[BaseException] = None) -> "MetadataError":
        return cls(location, "visibility", cause)


class VisibilityError(StorageError):
    """设置文件可见性错误"""

    def __init__(self, location: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            "设置文件可见性失败 {}{}".format(location, _reason(cause)),
            code="VISIBILITY_ERROR",
            details={"location": location},
            cause=cause
        )
        self.location = location


class URLError(StorageError):
    """临时URL生成错误"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="URL_ERROR", details=details)


__all__ = [
    'StorageError',
    'ConfigurationError',
    'ExistenceCheckError',
    'ReadError',
    'HTTPError',
    'NetworkError',
    'WriteError',
    'DeleteError',
    'CopyError',
    'MetadataError',
    'VisibilityError',
    'URLError',
]
