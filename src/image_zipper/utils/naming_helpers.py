"""文件命名工具模块。

提供输出文件名生成和归档内重名处理功能。
"""

import itertools

from ..models.constants import OutputFormat


class FileNamingStrategy:
    """文件命名策略类"""

    @staticmethod
    def split_name(file_name: str) -> tuple[str, str | None]:
        """拆分文件名为基础名称和扩展名（不含点）

        以最后一个点为界；没有扩展名时返回 None。隐藏文件（如 ".png"）
        视为没有扩展名。
        """
        base, sep, ext = file_name.rpartition(".")
        if not sep or not base:
            return file_name, None
        return base, ext

    @staticmethod
    def generate_output_name(
        file_name: str, output_format: OutputFormat | str
    ) -> str:
        """生成输出文件名

        Args:
            file_name: 原始文件名
            output_format: 输出格式，original 保持原扩展名

        Returns:
            str: 生成的文件名（不含路径）
        """
        output_format = OutputFormat(output_format)
        base_name, original_ext = FileNamingStrategy.split_name(file_name)

        ext = output_format.extension or original_ext
        if ext is None:
            return base_name
        return f"{base_name}.{ext}"


class UniqueNameRegistry:
    """归档内文件名去重器

    重名时在扩展名前追加数字后缀：photo.webp、photo_1.webp、photo_2.webp。
    """

    def __init__(self):
        self._used: set[str] = set()

    def claim(self, file_name: str) -> str:
        """登记文件名，返回归档中实际使用的唯一名称"""
        if file_name not in self._used:
            self._used.add(file_name)
            return file_name

        base, ext = FileNamingStrategy.split_name(file_name)
        suffix = f".{ext}" if ext is not None else ""

        for counter in itertools.count(1):
            candidate = f"{base}_{counter}{suffix}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate

        return file_name  # pragma: no cover

    def __contains__(self, file_name: str) -> bool:
        return file_name in self._used

    def __len__(self) -> int:
        return len(self._used)
