"""图片批量转换与打包库。

批量解码、缩放、重新编码图片，并把结果打包为单个 ZIP 归档。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "批量转换、缩放图片并打包为 ZIP"

# 核心功能导出
from .engine.batch import BatchProcessor
from .models import BatchResult, ImageInput, OutputFormat, TransformConfig
from .session import ZipperSession
from .utils.message_formatter import format_file_size


__all__ = [
    "BatchProcessor",
    "BatchResult",
    "ImageInput",
    "OutputFormat",
    "TransformConfig",
    "ZipperSession",
    "format_file_size",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
