"""单张图片转换模块。

解码、按约束缩放、重新编码一张图片，是批量处理的核心步骤。
"""

from io import BytesIO

from PIL import Image, ImageOps

from ..exceptions import EncodeError, ImageZipperError, handle_image_errors
from ..models.batch_result import ImageInput, ProcessedImage
from ..models.constants import get_format_alias
from ..models.transform_config import TransformConfig
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from ..utils.naming_helpers import FileNamingStrategy
from .formats import FormatProcessor, get_save_parameters
from .resize import compute_target_dimensions


logger = get_logger()

format_processor = FormatProcessor()


def transform_image(image: ImageInput, config: TransformConfig) -> ProcessedImage:
    """转换单张图片

    Args:
        image: 输入图片
        config: 转换配置

    Returns:
        ProcessedImage: 处理结果

    Raises:
        DecodeError: 输入不是可识别的图像
        EncodeError: 无法按目标格式编码
    """
    try:
        img, source_format = _decode(image.content)
        with img:
            target_format = _resolve_target_format(config, source_format)
            processed, original_dimensions = _resample(img, config)
            content = _encode(processed, target_format, config.quality)
            final_dimensions = processed.size
    except ImageZipperError as e:
        e.file_name = e.file_name or image.name
        raise

    result = ProcessedImage(
        name=FileNamingStrategy.generate_output_name(image.name, config.output_format),
        content=content,
        original_size=image.size,
        format_used=target_format,
        original_dimensions=original_dimensions,
        final_dimensions=final_dimensions,
    )

    logger.info(
        MessageFormatter.image_processed(
            image.name, result.final_dimensions, result.original_size, result.size
        )
    )
    return result


@handle_image_errors("图像解码", stage="decode")
def _decode(content: bytes) -> tuple[Image.Image, str | None]:
    """解码字节为图片对象，返回图片和原始格式"""
    img = Image.open(BytesIO(content))
    try:
        img.load()
    except Exception:
        img.close()
        raise
    return img, img.format


def _resolve_target_format(config: TransformConfig, source_format: str | None) -> str:
    """确定目标 Pillow 格式，original 使用图片自身格式"""
    if config.output_format.pil_format:
        return config.output_format.pil_format
    if not source_format:
        raise EncodeError("无法确定原始图像格式")
    return get_format_alias(source_format)


@handle_image_errors("图像缩放", stage="encode")
def _resample(
    img: Image.Image, config: TransformConfig
) -> tuple[Image.Image, tuple[int, int]]:
    """处理EXIF旋转并缩放到目标尺寸"""
    img = ImageOps.exif_transpose(img)
    original_dimensions = img.size

    target_size = compute_target_dimensions(
        *original_dimensions,
        max_length=config.max_length,
        max_width=config.max_width,
        max_height=config.max_height,
    )
    if target_size == original_dimensions:
        return img, original_dimensions

    img = format_processor.prepare_for_resample(img)
    return img.resize(target_size, Image.Resampling.LANCZOS), original_dimensions


@handle_image_errors("图像编码", stage="encode")
def _encode(img: Image.Image, target_format: str, quality: int) -> bytes:
    """按目标格式编码图片"""
    img = format_processor.prepare_for_format(img, target_format)
    buffer = BytesIO()
    img.save(buffer, **get_save_parameters(target_format, quality))
    return buffer.getvalue()
