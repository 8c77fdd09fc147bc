"""消息格式化工具模块。

提供统一的错误消息、文件大小等格式化功能。
"""

from pathlib import Path
from typing import Any


KB = 1024
MB = 1024 * 1024


def format_file_size(size_bytes: int) -> str:
    """格式化文件大小

    小于 1 KB 显示字节数，小于 1 MB 显示两位小数的 KB，否则显示 MB。

    >>> format_file_size(2048)
    '2.00 KB'
    """
    if size_bytes < KB:
        return f"{size_bytes} bytes"
    if size_bytes < MB:
        return f"{size_bytes / KB:.2f} KB"
    return f"{size_bytes / MB:.2f} MB"


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        """文件不存在错误消息"""
        return f"文件不存在: {file_path}"

    @staticmethod
    def unsupported_extension(file_name: str, accepted: tuple[str, ...]) -> str:
        """扩展名不受支持消息"""
        return f"不支持的文件类型: {file_name}（支持: {', '.join(accepted)}）"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def validation_error(field: str, value: Any, reason: str | None = None) -> str:
        """参数验证错误消息"""
        msg = f"参数验证失败 - {field}: {value}"
        if reason:
            msg += f" ({reason})"
        return msg

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def image_processed(
        name: str,
        dimensions: tuple[int, int],
        original_size: int,
        processed_size: int,
    ) -> str:
        """单张图片处理完成消息"""
        width, height = dimensions
        return (
            f"已处理 {name}: {width}x{height}, "
            f"原始: {format_file_size(original_size)}, "
            f"处理后: {format_file_size(processed_size)}"
        )

    @staticmethod
    def progress(current: int, total: int) -> str:
        """进度消息"""
        return f"{current}/{total} 张图片已处理"
