"""结果报告模块。

把批量处理结果交付给调用方：交互式场景保存到本地并展示统计，
服务端场景写入固定输出路径并返回内联的 base64 归档。
"""

from pathlib import Path
from typing import Any

from .config import get_config
from .engine.archive import write_archive
from .models.batch_result import BatchResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import format_file_size


logger = get_logger()


class ResultReporter:
    """批量处理结果报告器"""

    @staticmethod
    def render_statistics(result: BatchResult) -> str:
        """汇总统计文本"""
        return "\n".join(
            [
                f"原始总大小: {format_file_size(result.total_original_size)}",
                f"处理后总大小: {format_file_size(result.total_processed_size)}",
                f"ZIP 文件大小: {format_file_size(result.zip_size)}",
            ]
        )

    @staticmethod
    def render_table(rows: list[tuple[str, str, str]]) -> str:
        """渲染文件大小表格

        Args:
            rows: (文件名, 原始大小, 处理后大小) 的列表
        """
        header = ("文件名", "原始大小", "处理后大小")
        widths = [
            max(len(row[col]) for row in [header, *rows]) for col in range(3)
        ]
        lines = [
            "  ".join(cell.ljust(width) for cell, width in zip(row, widths, strict=True))
            for row in [header, *rows]
        ]
        lines.insert(1, "  ".join("-" * width for width in widths))
        return "\n".join(line.rstrip() for line in lines)

    @classmethod
    def render_file_sizes(cls, result: BatchResult) -> str:
        """按输入顺序渲染每个文件的大小"""
        return cls.render_table(
            [
                (
                    record.name,
                    format_file_size(record.original_size),
                    format_file_size(record.processed_size),
                )
                for record in result.file_sizes
            ]
        )

    @staticmethod
    def save_local(result: BatchResult, save_path: str | Path | None = None) -> Path:
        """交互式交付：把归档保存到本地

        Args:
            result: 批量处理结果
            save_path: 保存路径，默认当前目录下的 images.zip
        """
        if save_path is None:
            save_path = Path.cwd() / get_config().archive.ARCHIVE_NAME
        return write_archive(result.zip_content, save_path)

    @staticmethod
    def persist_for_server(
        result: BatchResult, output_path: str | Path | None = None
    ) -> dict[str, Any]:
        """服务端交付：写入固定输出路径并返回响应结构

        每次调用都会覆盖同一个输出文件。
        """
        if output_path is None:
            output_path = get_config().archive.get_output_path()
        write_archive(result.zip_content, output_path)

        return {"success": True, **result.to_response()}
