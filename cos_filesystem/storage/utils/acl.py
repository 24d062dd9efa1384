"""
可见性与ACL转换
"""

from typing import Any, Dict, Iterator, Optional, Union

from cos_filesystem.storage.models import Visibility

ACL_PUBLIC_READ = "public-read"
ACL_DEFAULT = "default"

ALL_USERS_GROUP = "/groups/global/AllUsers"


def normalize_visibility(visibility: Optional[Union[Visibility, str]]) -> str:
    """
    可见性 -> 厂商ACL字符串

    空值映射为 default（继承存储桶策略），PUBLIC 映射为 public-read，
    其他值（private 或厂商自定义ACL）原样传递。
    """
    if visibility is None:
        return ACL_DEFAULT
    value = visibility.value if isinstance(visibility, Visibility) else str(visibility)
    if value == "":
        return ACL_DEFAULT
    if value == Visibility.PUBLIC.value:
        return ACL_PUBLIC_READ
    return value


def _iter_grants(acl_response: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    access_control_list = acl_response.get("AccessControlList") or {}
    grants = access_control_list.get("Grant") or []
    # 只有一条授权时SDK返回的是字典
    if isinstance(grants, dict):
        grants = [grants]
    for grant in grants:
        if isinstance(grant, dict):
            yield grant


def is_public_read(acl_response: Dict[str, Any]) -> bool:
    """ACL中是否存在授予所有用户组 READ 权限的条目"""
    for grant in _iter_grants(acl_response):
        if grant.get("Permission") != "READ":
            continue
        grantee = grant.get("Grantee") or {}
        if ALL_USERS_GROUP in (grantee.get("URI") or ""):
            return True
    return False


__all__ = [
    'ACL_PUBLIC_READ',
    'ACL_DEFAULT',
    'normalize_visibility',
    'is_public_read',
]
