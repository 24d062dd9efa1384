"""
日志消息模板模块
COS文件系统各操作共用的日志消息模板
"""

from typing import Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 日志系统 ====================
    LOGGING_CONFIGURED = "日志系统已配置，级别 {level}，日志文件 {log_file}"

    # ==================== 存储适配器相关 ====================
    ADAPTER_REGISTERED = "已注册存储适配器: {adapter}"
    ADAPTER_CREATE_FAILED = "创建存储适配器失败: {adapter}"
    CLIENT_CREATED = "COS客户端已创建: {bucket} ({region})"

    # ==================== 文件操作相关 ====================
    FILE_WRITE_SUCCESS = "COS文件写入成功: {key}"
    FILE_READ_SUCCESS = "COS文件读取成功: {key}"
    FILE_DELETE_SUCCESS = "COS文件删除成功: {key}"
    FILE_COPY_SUCCESS = "COS文件复制成功: {source} -> {destination}"
    DIRECTORY_CREATE_SUCCESS = "COS目录创建成功: {key}"
    DIRECTORY_DELETE_SUCCESS = "COS目录删除成功: {key}，共删除 {count} 个对象"
    DIRECTORY_DELETE_SKIPPED = "未配置前缀时不删除存储桶根目录: {path!r}"
    VISIBILITY_SET_SUCCESS = "COS文件可见性已更新: {key} -> {acl}"
    METADATA_SET_SUCCESS = "COS文件元数据已更新: {key}"
    MOVE_DELETE_FAILED = "移动文件时删除源文件失败，源文件与目标文件同时存在: {source} -> {destination}"
    LIST_PAGE_FETCHED = "COS列举分页完成: {prefix}，本页 {count} 项"

    # ==================== 错误边界相关 ====================
    VENDOR_FAULT = "COS操作失败: {operation}"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)


# 全局实例
log_messages = LogMessages()
