"""
配置模块
包含应用配置以及COS适配器配置
"""

from cos_filesystem.config.config import settings, get_settings
from cos_filesystem.config.cos_config import (
    CosAdapterConfig,
    get_cos_base_url,
    get_cos_config,
    get_cos_endpoint,
    validate_cos_config,
)

__all__ = [
    "settings",
    "get_settings",
    "CosAdapterConfig",
    "get_cos_config",
    "validate_cos_config",
    "get_cos_endpoint",
    "get_cos_base_url",
]
