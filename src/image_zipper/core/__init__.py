"""核心模块包。

单张图片的尺寸计算、格式处理和转换。
"""

from .formats import FormatProcessor, get_save_parameters
from .resize import compute_target_dimensions
from .transformer import transform_image


__all__ = [
    "FormatProcessor",
    "compute_target_dimensions",
    "get_save_parameters",
    "transform_image",
]
