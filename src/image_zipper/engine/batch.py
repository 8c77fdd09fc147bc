"""批量处理器模块。

顺序处理输入图片、组装归档并汇总大小统计。任何一张图片失败都会中止
整批处理，不返回部分结果。
"""

import time
from collections.abc import Sequence

from ..core.transformer import transform_image
from ..models.batch_result import BatchResult, FileSizeRecord, ImageInput
from ..models.transform_config import TransformConfig
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .archive import ArchiveAssembler
from .progress import ProgressCallback, ProgressTracker


logger = get_logger()


class BatchProcessor:
    """批量图像处理器

    严格顺序处理，一次一张，不做并发。
    """

    def __init__(self, progress_callback: ProgressCallback | None = None):
        """初始化批量处理器

        Args:
            progress_callback: 进度回调 (current, total)，开始时和每张图片完成后调用
        """
        self.progress = ProgressTracker(progress_callback)

    def process(
        self, images: Sequence[ImageInput], config: TransformConfig
    ) -> BatchResult:
        """处理一批图片

        Args:
            images: 按顺序排列的输入图片
            config: 本批共享的转换配置

        Returns:
            BatchResult: 批量处理结果

        Raises:
            ImageZipperError: 任一图片转换或归档失败
        """
        total = len(images)
        started = time.perf_counter()
        archive = ArchiveAssembler()

        total_original = 0
        total_processed = 0
        records: list[FileSizeRecord] = []

        logger.info(
            f"开始批量处理 {total} 张图片: 格式={config.output_format.value}, "
            f"质量={config.quality}, 最长边={config.max_length}"
        )
        self.progress.start(total)

        try:
            for image in images:
                processed = transform_image(image, config)
                entry_name = archive.add(processed.name, processed.content)

                total_original += processed.original_size
                total_processed += processed.size
                records.append(
                    FileSizeRecord(
                        name=entry_name,
                        original_size=processed.original_size,
                        processed_size=processed.size,
                    )
                )
                self.progress.advance()

            zip_content = archive.finalize()

        except Exception as e:
            archive.discard()
            file_name = getattr(e, "file_name", None) or "<batch>"
            logger.error(MessageFormatter.format_error("批量处理", file_name, e))
            raise
        finally:
            self.progress.reset()

        result = BatchResult(
            total_original_size=total_original,
            total_processed_size=total_processed,
            zip_content=zip_content,
            file_sizes=records,
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.info(result.get_summary())
        return result
