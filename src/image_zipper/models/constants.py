"""图像格式相关常量定义。

输出格式枚举与 Pillow 格式名、扩展名之间的映射，集中在此处管理。
"""

from enum import Enum
from typing import Final

from ..config import get_config


class OutputFormat(str, Enum):
    """输出格式枚举"""

    ORIGINAL = "original"  # 保持原格式
    WEBP = "webp"
    PNG = "png"
    JPEG = "jpeg"

    @property
    def pil_format(self) -> str | None:
        """对应的 Pillow 格式名，original 没有固定格式"""
        return ImageFormats.PIL_FORMATS.get(self.value)

    @property
    def extension(self) -> str | None:
        """规范扩展名（不含点），original 沿用输入文件扩展名"""
        if self is OutputFormat.ORIGINAL:
            return None
        return self.value


class ImageFormats:
    """格式分类与映射"""

    PIL_FORMATS: Final[dict[str, str]] = {
        "webp": "WEBP",
        "png": "PNG",
        "jpeg": "JPEG",
    }

    # 只定义必要的别名映射
    ALIASES: Final[dict[str, str]] = {
        "JPG": "JPEG",
        "MPO": "JPEG",  # 部分相机输出的 JPEG 被 Pillow 识别为 MPO
    }

    # 有质量参数的格式
    LOSSY_FORMATS: Final[set[str]] = {"JPEG", "WEBP"}


class QualityDefaults:
    """质量相关默认值"""

    MIN_QUALITY: Final[int] = 1
    MAX_QUALITY: Final[int] = 100


def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_upper = format_str.upper()
    return ImageFormats.ALIASES.get(format_upper, format_upper)


def is_lossy_format(format_str: str) -> bool:
    """检查是否为支持质量参数的有损格式"""
    return get_format_alias(format_str) in ImageFormats.LOSSY_FORMATS


def get_default_quality(output_format: "OutputFormat | str") -> int:
    """获取格式对应的默认质量"""
    key = (
        output_format.value
        if isinstance(output_format, OutputFormat)
        else str(output_format)
    )
    return get_config().transform.get_format_quality(key)
