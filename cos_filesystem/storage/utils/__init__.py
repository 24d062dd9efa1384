"""
存储工具模块
提供异常边界、ACL转换和响应头解析等工具函数
"""

from cos_filesystem.storage.utils.acl import (
    is_public_read,
    normalize_visibility,
)
from cos_filesystem.storage.utils.errors import VENDOR_ERRORS, fault_boundary, is_not_found

__all__ = [
    'VENDOR_ERRORS',
    'fault_boundary',
    'is_not_found',
    'normalize_visibility',
    'is_public_read',
]
