"""格式处理器模块。

为目标格式准备色彩模式，并生成 Pillow 保存参数。
"""

import logging
from typing import Any

from PIL import Image

from ..models.constants import is_lossy_format


logger = logging.getLogger(__name__)

# JPEG 合成透明图片时使用的背景色
BACKGROUND_COLOR = (255, 255, 255)


class FormatProcessor:
    """格式处理器"""

    def prepare_for_resample(self, img: Image.Image) -> Image.Image:
        """为重采样准备图片

        调色板和二值图像在 Pillow 中只能最近邻缩放，先展开为真彩色。
        """
        if img.mode in ("P", "1"):
            has_alpha = img.mode == "P" and "transparency" in img.info
            return img.convert("RGBA" if has_alpha else "RGB")
        return img

    def prepare_for_format(self, img: Image.Image, target_format: str) -> Image.Image:
        """为目标格式准备图片

        Args:
            img: PIL图片对象
            target_format: Pillow 格式名（如 "JPEG"）

        Returns:
            Image.Image: 处理后的图片对象
        """
        match target_format:
            case "JPEG":
                return self._prepare_for_jpeg(img)
            case "PNG":
                return self._prepare_for_png(img)
            case "WEBP":
                return self._prepare_for_webp(img)
            case _:
                return img

    def _prepare_for_jpeg(self, img: Image.Image) -> Image.Image:
        """JPEG不支持透明度，透明图片合成到白色背景"""
        if img.mode == "P":
            img = img.convert("RGBA" if "transparency" in img.info else "RGB")

        if img.mode in ("RGBA", "LA"):
            if img.mode == "LA":
                img = img.convert("RGBA")
            background = Image.new("RGB", img.size, BACKGROUND_COLOR)
            background.paste(img, mask=img.split()[-1])
            return background

        if img.mode in ("RGB", "L"):
            return img

        # CMYK、I;16 等其他模式统一转为RGB
        return img.convert("RGB")

    def _prepare_for_png(self, img: Image.Image) -> Image.Image:
        """PNG支持大部分色彩模式，仅转换CMYK"""
        if img.mode == "CMYK":
            return img.convert("RGB")
        return img

    def _prepare_for_webp(self, img: Image.Image) -> Image.Image:
        """WebP支持RGB和RGBA"""
        if img.mode == "P":
            return img.convert("RGBA" if "transparency" in img.info else "RGB")
        if img.mode == "LA":
            return img.convert("RGBA")
        if img.mode not in ("RGB", "RGBA"):
            return img.convert("RGB")
        return img


def get_save_parameters(format_name: str, quality: int) -> dict[str, Any]:
    """获取保存参数

    质量值只传给有损格式，无损格式忽略质量设置。

    Returns:
        dict: 保存参数字典（包含 format）
    """
    params: dict[str, Any] = {"format": format_name}

    if is_lossy_format(format_name):
        params["quality"] = max(1, min(100, quality))
    else:
        logger.debug(f"{format_name} 为无损格式，忽略质量参数 {quality}")

    return params
