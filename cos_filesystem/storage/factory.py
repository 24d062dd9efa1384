"""
文件系统适配器注册表
按名称登记适配器类，并用 COS 配置构造实例
"""

from typing import Any, Dict, List, Type, Union

from cos_filesystem.config.cos_config import CosAdapterConfig
from cos_filesystem.log_messages import log_messages
from cos_filesystem.log_utils import get_logger
from cos_filesystem.storage.abc import BaseStorage
from cos_filesystem.storage.exceptions import ConfigurationError

logger = get_logger(__name__)

AdapterConfig = Union[CosAdapterConfig, Dict[str, Any], None]

_adapter_registry: Dict[str, Type[BaseStorage]] = {}


def register_adapter(name: str, adapter_class: Type[BaseStorage]) -> None:
    """登记适配器类，同名时覆盖；只接受 BaseStorage 的子类"""
    if not (isinstance(adapter_class, type) and issubclass(adapter_class, BaseStorage)):
        raise ConfigurationError(
            "存储适配器 '{}' 必须继承 BaseStorage".format(name)
        )
    _adapter_registry[name] = adapter_class
    logger.debug(log_messages.ADAPTER_REGISTERED, adapter=name)


def get_adapter_class(name: str) -> Type[BaseStorage]:
    """
    按名称查找适配器类

    Raises:
        ConfigurationError: 名称未登记时抛出，消息中列出已登记的名称
    """
    try:
        return _adapter_registry[name]
    except KeyError:
        raise ConfigurationError(
            "存储适配器 '{}' 不存在，可用适配器: {}".format(
                name, ', '.join(list_available_adapters())
            )
        ) from None


def create_adapter(name: str, config: AdapterConfig = None) -> BaseStorage:
    """
    构造适配器实例

    Args:
        name: 已登记的适配器名称
        config: CosAdapterConfig 或原始配置字典，为空时由适配器读取全局配置

    Raises:
        ConfigurationError: 名称未登记，或配置校验、实例构造失败时抛出
    """
    adapter_class = get_adapter_class(name)
    try:
        return adapter_class(config)
    except Exception as e:
        logger.error(log_messages.ADAPTER_CREATE_FAILED, exception=e, adapter=name)
        raise ConfigurationError(
            "创建存储适配器 '{}' 失败: {}".format(name, str(e))
        ) from e


def list_available_adapters() -> List[str]:
    return sorted(_adapter_registry)


__all__ = [
    'register_adapter',
    'get_adapter_class',
    'create_adapter',
    'list_available_adapters',
]
