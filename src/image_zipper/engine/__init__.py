"""批量处理引擎模块。

包含输入收集、进度跟踪、归档组装和批量处理驱动。
"""

from .archive import ArchiveAssembler, write_archive
from .batch import BatchProcessor
from .collector import InputCollector
from .progress import ProgressCallback, ProgressTracker


__all__ = [
    "ArchiveAssembler",
    "BatchProcessor",
    "InputCollector",
    "ProgressCallback",
    "ProgressTracker",
    "write_archive",
]
