"""
日志工具模块
按模板渲染存储操作日志，并把模板参数作为结构化字段附加到日志记录
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from cos_filesystem.config import settings
from cos_filesystem.log_messages import log_messages

# SDK与HTTP客户端的日志只保留警告以上
QUIET_LOGGERS = ("qcloud_cos", "urllib3", "httpx")


class StorageLogger:
    """存储操作日志记录器"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def _render(self, message_template: str, **kwargs: Any) -> str:
        """只有提供了参数时才渲染模板，已格式化的消息中的花括号原样输出"""
        if not kwargs:
            return message_template
        try:
            return log_messages.format_message(message_template, **kwargs)
        except (KeyError, ValueError, IndexError):
            return message_template

    def _log(
        self,
        level: int,
        message_template: str,
        /,
        exception: Optional[BaseException] = None,
        **kwargs: Any
    ) -> None:
        extra: Dict[str, Any] = {'log_module': self.name}
        extra.update(kwargs)
        if exception is not None:
            extra['exception_type'] = type(exception).__name__
            extra['exception_message'] = str(exception)
        self.logger.log(
            level,
            self._render(message_template, **kwargs),
            extra=extra,
            exc_info=exception,
        )

    def info(self, message_template: str, **kwargs: Any) -> None:
        """
        记录信息级别日志

        Args:
            message_template: 日志消息模板或已格式化的消息
            **kwargs: 模板参数，同时作为结构化字段

        示例:
            logger.info(log_messages.FILE_WRITE_SUCCESS, key="uploads/a.txt")
        """
        self._log(logging.INFO, message_template, **kwargs)

    def warning(self, message_template: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message_template, **kwargs)

    def error(self, message_template: str, exception: Optional[BaseException] = None, **kwargs: Any) -> None:
        """记录错误级别日志，提供 exception 时附带异常类型、消息与堆栈"""
        self._log(logging.ERROR, message_template, exception=exception, **kwargs)

    def debug(self, message_template: str, **kwargs: Any) -> None:
        """逐个对象的成功日志走这里，仅在 app_debug 打开时输出"""
        if settings.app_debug:
            self._log(logging.DEBUG, message_template, **kwargs)


_loggers: Dict[str, StorageLogger] = {}


def get_logger(name: str = __name__) -> StorageLogger:
    """按名称获取日志记录器，同名复用同一实例"""
    if name not in _loggers:
        _loggers[name] = StorageLogger(name)
    return _loggers[name]


def setup_logging() -> None:
    """
    配置根日志记录器

    输出到标准输出，配置了 log_file 时同时写入文件。app_debug 打开时使用
    DEBUG 级别，否则使用 log_level。
    """
    root_logger = logging.getLogger()
    log_level = logging.DEBUG if settings.app_debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(settings.log_format)
    handlers = [logging.StreamHandler(sys.stdout)]

    if settings.log_file:
        log_file_path = Path(settings.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    get_logger(__name__).info(
        log_messages.LOGGING_CONFIGURED,
        level=logging.getLevelName(log_level),
        log_file=settings.log_file or "-",
    )
