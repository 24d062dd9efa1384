"""
厂商异常边界
所有存储操作都通过 fault_boundary 把腾讯云SDK异常转换为存储异常
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from qcloud_cos import CosClientError, CosServiceError

from cos_filesystem.log_messages import log_messages
from cos_filesystem.log_utils import get_logger
from cos_filesystem.storage.exceptions import StorageError

logger = get_logger(__name__)

# 腾讯云SDK抛出的异常：服务端错误与客户端错误（超时、网络等）
VENDOR_ERRORS = (CosServiceError, CosClientError)


def is_not_found(error: BaseException) -> bool:
    """判断厂商异常是否为 404"""
    return isinstance(error, CosServiceError) and error.get_status_code() == 404


@contextmanager
def fault_boundary(
    error_factory: Callable[[BaseException], StorageError],
    operation: str,
    **log_context: Any
) -> Iterator[None]:
    """
    厂商异常边界

    捕获块内抛出的厂商异常，记录错误日志后转换为 error_factory 构造的存储异常，
    原始异常保存在 __cause__ 中。块内抛出的其他异常原样传播。

    Args:
        error_factory: 根据厂商异常构造存储异常的函数
        operation: 操作名称，用于日志
        **log_context: 附加到日志的上下文

    Example:
        >>> with fault_boundary(lambda e: ReadError(path, e), "read", key=key):
        ...     client.get_object(Bucket=bucket, Key=key)
    """
    try:
        yield
    except VENDOR_ERRORS as e:
        error = error_factory(e)
        logger.error(
            log_messages.VENDOR_FAULT,
            exception=e,
            operation=operation,
            error_code=error.code,
            **log_context
        )
        raise error from e


__all__ = ['VENDOR_ERRORS', 'fault_boundary', 'is_not_found']
