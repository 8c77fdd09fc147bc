"""服务端批量处理入口。

接收上传的图片和表单参数，运行批量处理，把归档写入固定输出路径，
并返回 base64 编码的归档与大小统计。
"""

import base64
import binascii
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .engine.batch import BatchProcessor
from .engine.collector import InputCollector
from .exceptions import ValidationError
from .models.transform_config import TransformConfig
from .reporter import ResultReporter
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()


def build_config(
    format: str | None = None,
    max_width: int | None = None,
    max_height: int | None = None,
    quality: int | None = None,
) -> TransformConfig:
    """根据表单参数构建转换配置

    Raises:
        ValidationError: 参数无效
    """
    try:
        return TransformConfig(
            output_format=format or "original",
            max_width=max_width,
            max_height=max_height,
            quality=quality,
        )
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"参数验证失败: {details}") from e


def handle_images(
    collector: InputCollector,
    format: str | None = None,
    max_width: int | None = None,
    max_height: int | None = None,
    quality: int | None = None,
    output_path: str | Path | None = None,
) -> dict[str, Any]:
    """处理收集到的图片并持久化归档

    Args:
        collector: 已收集的输入图片
        format: 输出格式 original/webp/png/jpeg，默认 original
        max_width: 最大宽度（可选）
        max_height: 最大高度（可选）
        quality: 质量 1-100（可选，默认取格式默认值）
        output_path: 覆盖默认的固定输出路径

    Returns:
        dict: {success, zipContent, totalOriginalSize, totalProcessedSize,
        zipSize, fileSizes}

    Raises:
        ImageZipperError: 参数无效或任一图片处理失败
    """
    config = build_config(format, max_width, max_height, quality)
    if len(collector) == 0:
        raise ValidationError("没有可处理的图片")

    result = BatchProcessor().process(collector.images, config)
    return ResultReporter.persist_for_server(result, output_path)


def collect_payloads(images: Iterable[Mapping[str, Any]]) -> InputCollector:
    """从 {name, content(base64)} 列表收集图片"""
    collector = InputCollector()
    for index, payload in enumerate(images):
        name = payload.get("name")
        encoded = payload.get("content")
        if not name or encoded is None:
            raise ValidationError(
                MessageFormatter.validation_error(
                    f"images[{index}]", payload.get("name"), "需要 name 和 content"
                )
            )
        try:
            content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(
                MessageFormatter.validation_error(
                    f"images[{index}].content", name, "不是有效的 base64"
                ),
                name,
            ) from e
        collector.add(name, content)

    _ensure_all_accepted(collector)
    return collector


def collect_paths(paths: Iterable[str | Path], recursive: bool = False) -> InputCollector:
    """从文件或目录路径收集图片

    目录展开时跳过扩展名不支持的文件；显式给出的文件必须全部被接受。
    """
    collector = InputCollector()
    collector.add_paths(paths, recursive=recursive)
    _ensure_all_accepted(collector)
    return collector


def _ensure_all_accepted(collector: InputCollector) -> None:
    """存在未被接受的输入时报参数错误"""
    if collector.rejected:
        raise ValidationError(
            MessageFormatter.validation_error(
                "images",
                ", ".join(collector.rejected),
                "扩展名不支持或文件名重复",
            )
        )
