"""数据模型包。

定义图片批量转换相关的数据结构和模型。
"""

from .batch_result import (
    BatchResult,
    FileSizeRecord,
    ImageInput,
    ProcessedImage,
    ProgressState,
)
from .constants import (
    ImageFormats,
    OutputFormat,
    QualityDefaults,
    get_default_quality,
    get_format_alias,
    is_lossy_format,
)
from .transform_config import TransformConfig, coerce_output_format


__all__ = [
    # 核心模型
    "BatchResult",
    "FileSizeRecord",
    "ImageInput",
    "ProcessedImage",
    "ProgressState",
    "TransformConfig",
    # 常量和工具
    "ImageFormats",
    "OutputFormat",
    "QualityDefaults",
    "coerce_output_format",
    "get_default_quality",
    "get_format_alias",
    "is_lossy_format",
]
