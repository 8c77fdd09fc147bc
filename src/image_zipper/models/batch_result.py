"""批量处理数据模型。

定义输入图片、处理后图片、进度状态和批量处理结果的数据结构。
"""

import base64
from typing import Any

from humanize import naturaldelta
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from ..utils.message_formatter import format_file_size


class ImageInput(BaseModel):
    """用户提供的单张输入图片"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="原始文件名")
    content: bytes = Field(repr=False, description="原始字节内容")

    @property
    def size(self) -> int:
        """原始字节长度"""
        return len(self.content)


class ProcessedImage(BaseModel):
    """单张图片的处理结果"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="输出文件名")
    content: bytes = Field(repr=False, description="编码后的字节内容")
    original_size: int = Field(ge=0, description="原始文件大小（字节）")
    format_used: str = Field(description="实际使用的编码格式")
    original_dimensions: tuple[int, int] = Field(description="原始尺寸")
    final_dimensions: tuple[int, int] = Field(description="最终尺寸")

    @property
    def size(self) -> int:
        """处理后字节长度"""
        return len(self.content)

    @property
    def was_resized(self) -> bool:
        """是否调整了尺寸"""
        return self.original_dimensions != self.final_dimensions


class ProgressState(BaseModel):
    """批量处理进度"""

    model_config = ConfigDict(frozen=True)

    current: int = Field(0, ge=0, description="已处理数量")
    total: int = Field(0, ge=0, description="总数量")

    @property
    def percent(self) -> float:
        """完成百分比"""
        if self.total == 0:
            return 0.0
        return self.current / self.total * 100


class FileSizeRecord(BaseModel):
    """单个文件的大小统计"""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str
    original_size: int = Field(ge=0)
    processed_size: int = Field(ge=0)


class BatchResult(BaseModel):
    """批量处理结果

    仅在整批处理成功后生成，不存在部分结果。
    """

    model_config = ConfigDict(frozen=True)

    total_original_size: int = Field(ge=0, description="原始文件总大小")
    total_processed_size: int = Field(ge=0, description="处理后文件总大小")
    zip_content: bytes = Field(repr=False, description="归档字节内容")
    file_sizes: list[FileSizeRecord] = Field(description="按输入顺序的文件统计")
    elapsed_seconds: float = Field(0.0, ge=0, description="处理耗时（秒）")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def zip_size(self) -> int:
        """归档字节长度"""
        return len(self.zip_content)

    def get_file_count(self) -> int:
        """文件数量"""
        return len(self.file_sizes)

    def get_size_saved(self) -> int:
        """节省的字节数"""
        return max(0, self.total_original_size - self.total_processed_size)

    def get_compression_ratio(self) -> float:
        """整体压缩比例（百分比）"""
        if self.total_original_size == 0:
            return 0.0
        return self.get_size_saved() / self.total_original_size * 100

    def get_summary(self) -> str:
        """批量处理摘要"""
        return (
            f"处理 {self.get_file_count()} 个文件，"
            f"{format_file_size(self.total_original_size)} → "
            f"{format_file_size(self.total_processed_size)} "
            f"({self.get_compression_ratio():.1f}% 压缩)，"
            f"ZIP {format_file_size(self.zip_size)}，"
            f"耗时 {naturaldelta(self.elapsed_seconds)}"
        )

    def to_response(self) -> dict[str, Any]:
        """转换为服务端响应结构，归档内容以 base64 编码"""
        return {
            "zipContent": base64.b64encode(self.zip_content).decode("ascii"),
            "totalOriginalSize": self.total_original_size,
            "totalProcessedSize": self.total_processed_size,
            "zipSize": self.zip_size,
            "fileSizes": [
                record.model_dump(by_alias=True) for record in self.file_sizes
            ],
        }
