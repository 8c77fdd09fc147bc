"""归档组装模块。

把处理后的图片收集到一个内存中的 ZIP 归档，并提供持久化到磁盘的功能。
"""

import zipfile
from io import BytesIO
from pathlib import Path

from ..exceptions import ArchiveIOError, handle_image_errors
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter, format_file_size
from ..utils.naming_helpers import UniqueNameRegistry


logger = get_logger()


class ArchiveAssembler:
    """ZIP 归档组装器

    所有条目位于归档根目录，使用 ZIP_DEFLATED 默认压缩级别。
    重名条目追加数字后缀，不会互相覆盖。
    """

    def __init__(self):
        self._buffer = BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression=zipfile.ZIP_DEFLATED)
        self._names = UniqueNameRegistry()
        self._content: bytes | None = None
        self._closed = False

    @property
    def is_finalized(self) -> bool:
        return self._content is not None

    @property
    def entry_count(self) -> int:
        return len(self._names)

    @handle_image_errors("写入归档条目", stage="io")
    def add(self, file_name: str, content: bytes) -> str:
        """添加一个条目

        Args:
            file_name: 期望的条目名（只取文件名部分）
            content: 条目内容

        Returns:
            str: 归档中实际使用的条目名
        """
        if self.is_finalized:
            raise ArchiveIOError("归档已完成，无法继续添加条目", file_name)

        base_name = Path(file_name).name
        entry_name = self._names.claim(base_name)
        if entry_name != base_name:
            logger.warning(f"归档内文件名冲突，{base_name} 重命名为 {entry_name}")

        self._zip.writestr(entry_name, content)
        return entry_name

    @handle_image_errors("生成归档", stage="io")
    def finalize(self) -> bytes:
        """完成归档并返回完整字节内容，重复调用返回同一结果"""
        if self._content is None:
            self._closed = True
            self._zip.close()
            self._content = self._buffer.getvalue()
            logger.debug(
                f"归档完成: {self.entry_count} 个条目, "
                f"{format_file_size(len(self._content))}"
            )
        return self._content

    def discard(self) -> None:
        """放弃归档内容，之后不能再添加条目"""
        if not self._closed:
            self._closed = True
            self._zip.close()
        self._buffer = BytesIO()


@handle_image_errors("保存归档", stage="io")
def write_archive(content: bytes, output_path: str | Path) -> Path:
    """将归档写入磁盘，自动创建父目录，已存在时覆盖

    Returns:
        Path: 写入的文件路径
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)
    except OSError as e:
        raise ArchiveIOError(
            MessageFormatter.operation_failed("保存归档", output_path, e)
        ) from e

    logger.info(f"归档已保存: {output_path} ({format_file_size(len(content))})")
    return output_path
