"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和 .env 文件配置
"""

from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "COS Filesystem"
    app_version: str = "1.0.0"
    app_debug: bool = False
    app_env: str = "development"

    # ==================== COS存储配置 ====================
    cos_bucket: str = ""
    cos_app_id: str = ""
    cos_secret_id: str = ""
    cos_secret_key: str = ""
    cos_token: Optional[str] = None
    cos_region: str = "ap-guangzhou"
    cos_scheme: str = "https"
    cos_timeout: int = 30

    cos_prefix: str = ""
    cos_url: Optional[str] = None
    cos_cdn: Optional[str] = None
    cos_read_from_cdn: bool = False
    cos_visibility: str = ""

    cos_batch_delete: bool = True
    cos_url_expires: int = 3600

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    return Settings()


# 全局配置实例
settings = get_settings()
