"""输入收集模块。

按用户选择顺序收集待处理图片，仅基于文件名和扩展名做验证与去重。
"""

from collections.abc import Iterable
from pathlib import Path

from ..config import get_config
from ..exceptions import ValidationError
from ..models.batch_result import ImageInput
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class InputCollector:
    """有序的输入图片列表

    同名文件只保留第一次添加的那一个。
    """

    def __init__(self, accepted_extensions: Iterable[str] | None = None):
        if accepted_extensions is None:
            accepted_extensions = get_config().archive.ACCEPTED_EXTENSIONS
        self.accepted_extensions = tuple(ext.lower() for ext in accepted_extensions)
        self._images: list[ImageInput] = []
        self._names: set[str] = set()
        self._rejected: list[str] = []

    @property
    def images(self) -> list[ImageInput]:
        """当前收集的图片（副本）"""
        return list(self._images)

    @property
    def names(self) -> list[str]:
        return [image.name for image in self._images]

    @property
    def rejected(self) -> list[str]:
        """因扩展名不支持或重名而未加入的文件名"""
        return list(self._rejected)

    def is_accepted(self, file_name: str) -> bool:
        """检查文件扩展名是否受支持"""
        return Path(file_name).suffix.lower() in self.accepted_extensions

    def add(self, name: str, content: bytes) -> bool:
        """添加一张图片

        Returns:
            bool: 是否实际加入列表（扩展名不支持或重名时返回 False）
        """
        if not self.is_accepted(name):
            logger.warning(
                MessageFormatter.unsupported_extension(name, self.accepted_extensions)
            )
            self._rejected.append(name)
            return False

        if name in self._names:
            logger.info(f"跳过重复文件: {name}")
            self._rejected.append(name)
            return False

        self._images.append(ImageInput(name=name, content=content))
        self._names.add(name)
        return True

    def add_path(self, file_path: str | Path) -> bool:
        """从文件系统添加一张图片"""
        file_path = Path(file_path)
        if not file_path.is_file():
            raise ValidationError(
                MessageFormatter.file_not_found(file_path), file_path.name
            )

        # 扩展名不支持或重名时不读取文件内容
        if not self.is_accepted(file_path.name) or file_path.name in self._names:
            return self.add(file_path.name, b"")

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise ValidationError(
                MessageFormatter.operation_failed("读取文件", file_path, e),
                file_path.name,
            ) from e

        return self.add(file_path.name, content)

    def add_paths(self, paths: Iterable[str | Path], recursive: bool = False) -> int:
        """添加多个文件或目录，目录按文件名排序展开

        Returns:
            int: 实际加入的图片数量
        """
        added = 0
        for path in paths:
            path = Path(path)
            if path.is_dir():
                pattern = "**/*" if recursive else "*"
                files = sorted(
                    (p for p in path.glob(pattern) if p.is_file()),
                    key=lambda p: str(p),
                )
                for file_path in files:
                    if self.is_accepted(file_path.name):
                        added += self.add_path(file_path)
            else:
                added += self.add_path(path)
        return added

    def clear(self) -> None:
        """清空列表"""
        self._images.clear()
        self._names.clear()
        self._rejected.clear()

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self):
        return iter(self._images)
