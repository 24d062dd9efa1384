"""
响应头与时间解析工具
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Mapping, Optional

META_PREFIX = "x-cos-meta-"


def get_header(headers: Mapping[str, Any], name: str) -> Optional[Any]:
    """大小写不敏感地读取响应头"""
    if name in headers:
        return headers[name]
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def parse_http_date(value: Optional[str]) -> Optional[int]:
    """RFC 1123 日期（Last-Modified 响应头）-> Unix时间戳"""
    if not value:
        return None
    try:
        return int(parsedate_to_datetime(value).timestamp())
    except (TypeError, ValueError):
        return None


def parse_iso_date(value: Optional[str]) -> Optional[int]:
    """ISO 8601 日期（列举结果中的 LastModified）-> Unix时间戳"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def parse_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_meta_key(key: str) -> str:
    """自定义元数据键统一为 x-cos-meta-<key> 形式"""
    lowered = key.lower()
    if lowered.startswith(META_PREFIX):
        return lowered
    return META_PREFIX + lowered


def extract_custom_metadata(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """提取响应头中的 x-cos-meta-* 自定义元数据"""
    return {
        key.lower(): value
        for key, value in headers.items()
        if key.lower().startswith(META_PREFIX)
    }


__all__ = [
    'META_PREFIX',
    'get_header',
    'parse_http_date',
    'parse_iso_date',
    'parse_int',
    'normalize_meta_key',
    'extract_custom_metadata',
]
