"""
存储服务模块
提供统一的文件系统适配器访问接口，支持多种存储适配器
"""

from typing import Any, Dict, Optional, Union

from cos_filesystem.config.cos_config import CosAdapterConfig, get_cos_config, validate_cos_config
from cos_filesystem.storage.abc import BaseStorage
from cos_filesystem.storage.adapters.tencent_cos import TencentCosAdapter
from cos_filesystem.storage.exceptions import *
from cos_filesystem.storage.factory import (
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from cos_filesystem.storage.models import *
from cos_filesystem.storage.path_prefixer import PathPrefixer

# 自动注册腾讯云COS适配器
register_adapter(TencentCosAdapter.ADAPTER_NAME, TencentCosAdapter)


def get_storage_service(
    adapter_name: Optional[str] = None,
    config: Union[CosAdapterConfig, Dict[str, Any], None] = None
) -> BaseStorage:
    """
    获取存储服务实例

    Args:
        adapter_name: 适配器名称（如 'tencent_cos'），不指定则自动检测
        config: 适配器配置，不指定则从全局配置读取并校验

    Returns:
        BaseStorage: 存储服务实例

    Raises:
        ConfigurationError: 当没有可用的存储服务时抛出

    Example:
        >>> storage = get_storage_service()
        >>> storage.write('docs/readme.txt', b'hello')
    """
    if config is None:
        cos_config = get_cos_config()
        if not validate_cos_config(cos_config):
            raise ConfigurationError(
                "没有可用的存储服务。请配置腾讯云COS存储（bucket、app_id、secret_id、secret_key）"
            )
        config = cos_config

    return create_adapter(adapter_name or TencentCosAdapter.ADAPTER_NAME, config)


__all__ = [
    # 工厂函数
    'get_storage_service',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 抽象接口
    'BaseStorage',
    'PathPrefixer',
    # 适配器类
    'TencentCosAdapter',
    # 模型
    'Visibility',
    'FileAttributes',
    'DirectoryAttributes',
    'StorageAttributes',
    'MoveResult',
    # 异常
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
