"""
腾讯云COS适配器配置
定义适配器配置模型以及配置加载、校验工具
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from cos_filesystem.config.config import settings


class CosAdapterConfig(BaseModel):
    """COS适配器配置数据类，构造后不可变"""

    bucket: str = Field(default="", description="COS存储桶短名称（不含APPID）")
    app_id: str = Field(
        default="",
        validation_alias=AliasChoices("app_id", "appId"),
        description="腾讯云账号APPID，存储桶域名中的数字部分"
    )
    secret_id: str = Field(
        default="",
        validation_alias=AliasChoices("secret_id", "secretId"),
        description="腾讯云COS SecretId"
    )
    secret_key: str = Field(
        default="",
        validation_alias=AliasChoices("secret_key", "secretKey"),
        description="腾讯云COS SecretKey"
    )
    token: Optional[str] = Field(default=None, description="临时密钥Token")
    region: str = Field(default="ap-guangzhou", description="COS地域")
    scheme: str = Field(
        default="https",
        validation_alias=AliasChoices("scheme", "schema"),
        description="连接协议"
    )
    timeout: int = Field(default=30, description="请求超时时间（秒）")

    prefix: str = Field(default="", description="所有对象键的统一前缀")
    url: Optional[str] = Field(default=None, description="公开访问URL前缀")
    cdn: Optional[str] = Field(default=None, description="CDN域名")
    read_from_cdn: bool = Field(default=False, description="是否通过CDN读取文件")
    visibility: str = Field(default="", description="默认可见性")

    batch_delete: bool = Field(default=True, description="删除目录时是否使用批量删除")
    url_expires: int = Field(default=3600, description="临时URL过期时间（秒）")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def flatten_credentials(cls, data: Any) -> Any:
        """展开嵌套的 credentials 配置项"""
        if isinstance(data, dict) and isinstance(data.get("credentials"), dict):
            data = dict(data)
            credentials = data.pop("credentials")
            for key, value in credentials.items():
                data.setdefault(key, value)
        return data

    @field_validator("app_id", mode="before")
    @classmethod
    def coerce_app_id(cls, value: Any) -> Any:
        """APPID 允许以整数形式配置"""
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("scheme", "timeout", mode="before")
    @classmethod
    def blank_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """配置文件中留空的连接协议和超时时间按默认值处理"""
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("scheme")
    @classmethod
    def check_scheme(cls, value: str) -> str:
        """校验连接协议"""
        value = value.lower()
        if value not in ("http", "https"):
            raise ValueError("不支持的连接协议: {}".format(value))
        return value

    @field_validator("url", "cdn")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value:
            return value.rstrip("/")
        return value or None


def get_cos_config() -> CosAdapterConfig:
    """从全局配置获取COS适配器配置"""
    return CosAdapterConfig(
        bucket=settings.cos_bucket,
        app_id=settings.cos_app_id,
        secret_id=settings.cos_secret_id,
        secret_key=settings.cos_secret_key,
        token=settings.cos_token,
        region=settings.cos_region,
        scheme=settings.cos_scheme,
        timeout=settings.cos_timeout,
        prefix=settings.cos_prefix,
        url=settings.cos_url,
        cdn=settings.cos_cdn,
        read_from_cdn=settings.cos_read_from_cdn,
        visibility=settings.cos_visibility,
        batch_delete=settings.cos_batch_delete,
        url_expires=settings.cos_url_expires,
    )


def validate_cos_config(config: CosAdapterConfig) -> bool:
    """验证COS配置完整性"""
    required_fields = ["bucket", "app_id", "secret_id", "secret_key"]

    for field in required_fields:
        if not getattr(config, field):
            return False

    return True


def get_bucket_name(config: CosAdapterConfig) -> str:
    """构建完整存储桶名称: <bucket>-<app_id>"""
    return "{}-{}".format(config.bucket, config.app_id)


def get_cos_endpoint(config: CosAdapterConfig) -> str:
    """构建COS端点域名"""
    return f"{get_bucket_name(config)}.cos.{config.region}.myqcloud.com"


def get_cos_base_url(config: CosAdapterConfig) -> str:
    """构建基础访问URL"""
    return f"{config.scheme}://{get_cos_endpoint(config)}"


def load_cos_config(options: Optional[Dict[str, Any]] = None) -> CosAdapterConfig:
    """
    加载COS适配器配置

    Args:
        options: 配置字典，为空时从全局配置读取

    Returns:
        CosAdapterConfig: 适配器配置
    """
    if options is None:
        return get_cos_config()
    return CosAdapterConfig.model_validate(options)
