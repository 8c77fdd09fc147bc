"""交互式会话模块。

保存用户当前选择的图片和转换参数，提交时运行批量处理并把归档保存到本地。
"""

from collections.abc import Iterable
from pathlib import Path

from .config import get_config
from .engine.batch import BatchProcessor
from .engine.collector import InputCollector
from .engine.progress import ProgressCallback
from .exceptions import BatchInProgressError, ImageZipperError, ValidationError
from .models.batch_result import BatchResult, ProgressState
from .models.constants import OutputFormat
from .models.transform_config import TransformConfig
from .reporter import ResultReporter
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter, format_file_size


logger = get_logger()

GENERIC_ERROR_MESSAGE = "处理图片时出错，请重试"


class ZipperSession:
    """交互式批量转换会话

    同一时刻只允许一次批量处理。添加新文件会清除上一次的结果。
    """

    def __init__(
        self,
        output_format: OutputFormat | str | None = None,
        max_length: int | None = None,
        progress_callback: ProgressCallback | None = None,
        collector: InputCollector | None = None,
    ):
        transform_defaults = get_config().transform
        self.collector = collector or InputCollector()
        self.config = TransformConfig(
            output_format=output_format or transform_defaults.DEFAULT_FORMAT,
            max_length=max_length
            if max_length is not None
            else transform_defaults.MAX_LENGTH,
        )
        self.processor = BatchProcessor(progress_callback)
        self.result: BatchResult | None = None
        self.error: str | None = None
        self.is_processing = False

    # ------------------------------------------------------------------
    # 参数设置
    # ------------------------------------------------------------------

    def set_format(self, output_format: OutputFormat | str) -> None:
        """切换输出格式，质量重置为该格式默认值"""
        try:
            self.config = self.config.with_format(output_format)
        except ValueError as e:
            raise ValidationError(
                MessageFormatter.validation_error("format", output_format, str(e))
            ) from e

    def set_quality(self, quality: int) -> None:
        """设置质量（1-100）"""
        self._update_config(quality=quality)

    def set_max_length(self, max_length: int | None) -> None:
        """设置最长边上限，None 表示不限制"""
        self._update_config(max_length=max_length)

    def _update_config(self, **changes) -> None:
        try:
            self.config = TransformConfig(**{**self.config.model_dump(), **changes})
        except ValueError as e:
            field, value = next(iter(changes.items()))
            raise ValidationError(
                MessageFormatter.validation_error(field, value, str(e))
            ) from e

    # ------------------------------------------------------------------
    # 文件选择
    # ------------------------------------------------------------------

    def add_file(self, name: str, content: bytes) -> bool:
        """添加一张图片，清除上次结果"""
        added = self.collector.add(name, content)
        self._clear_result()
        return added

    def add_paths(self, paths: Iterable[str | Path], recursive: bool = False) -> int:
        """从文件系统添加图片，清除上次结果"""
        added = self.collector.add_paths(paths, recursive=recursive)
        self._clear_result()
        return added

    def _clear_result(self) -> None:
        self.result = None
        self.error = None

    @property
    def progress(self) -> ProgressState | None:
        return self.processor.progress.state

    @property
    def can_submit(self) -> bool:
        return len(self.collector) > 0 and not self.is_processing

    # ------------------------------------------------------------------
    # 提交
    # ------------------------------------------------------------------

    def submit(self, save_path: str | Path | None = None) -> BatchResult | None:
        """运行批量处理并保存归档

        没有图片时不做任何事。失败时记录日志并保存通用错误信息。

        Returns:
            BatchResult | None: 成功时返回结果，否则返回 None
        """
        if self.is_processing:
            raise BatchInProgressError("已有批量处理正在进行")
        if len(self.collector) == 0:
            return None

        self.is_processing = True
        self._clear_result()
        try:
            result = self.processor.process(self.collector.images, self.config)
            ResultReporter.save_local(result, save_path)
        except ImageZipperError as e:
            logger.warning(f"批量处理失败: {e}")
            self.error = GENERIC_ERROR_MESSAGE
            return None
        finally:
            self.is_processing = False

        self.result = result
        return result

    def file_table(self) -> list[tuple[str, str, str]]:
        """所选文件的大小表，未处理的文件显示 "-" """
        processed_sizes = (
            [record.processed_size for record in self.result.file_sizes]
            if self.result
            else []
        )
        rows = []
        for index, image in enumerate(self.collector):
            processed = (
                format_file_size(processed_sizes[index])
                if index < len(processed_sizes)
                else "-"
            )
            rows.append((image.name, format_file_size(image.size), processed))
        return rows
