"""转换配置模型。

定义一次批量处理中所有图片共享的转换参数。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import OutputFormat, QualityDefaults, get_default_quality


def coerce_output_format(value: Any) -> OutputFormat:
    """标准化输出格式（大小写不敏感，jpg 视为 jpeg）"""
    if isinstance(value, OutputFormat):
        return value

    normalized = str(value).strip().lower()
    if normalized == "jpg":
        return OutputFormat.JPEG

    supported = [f.value for f in OutputFormat]
    if normalized not in supported:
        raise ValueError(f"不支持的格式: {value}，支持的格式: {supported}")
    return OutputFormat(normalized)


class TransformConfig(BaseModel):
    """转换配置，一次批量处理内保持不变"""

    model_config = ConfigDict(frozen=True)

    output_format: OutputFormat = Field(OutputFormat.WEBP, description="输出格式")
    quality: int = Field(
        ...,
        ge=QualityDefaults.MIN_QUALITY,
        le=QualityDefaults.MAX_QUALITY,
        description="质量值（仅对有损格式有效）",
    )

    # 尺寸约束
    max_length: int | None = Field(None, gt=0, description="最长边上限（像素）")
    max_width: int | None = Field(None, gt=0, description="最大宽度（像素）")
    max_height: int | None = Field(None, gt=0, description="最大高度（像素）")

    @model_validator(mode="before")
    @classmethod
    def fill_default_quality(cls, data: Any) -> Any:
        """未指定质量时取输出格式的默认质量"""
        if isinstance(data, dict) and data.get("quality") in (None, ""):
            output_format = coerce_output_format(
                data.get("output_format", OutputFormat.WEBP)
            )
            data = {**data, "quality": get_default_quality(output_format)}
        return data

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v: Any) -> OutputFormat:
        return coerce_output_format(v)

    @field_validator("max_length", "max_width", "max_height", mode="before")
    @classmethod
    def zero_means_unbounded(cls, v: Any) -> Any:
        # 表单中的空值或 0 表示不限制
        if v in (0, "", "0"):
            return None
        return v

    @property
    def should_resize(self) -> bool:
        """是否设置了尺寸约束"""
        return any(
            limit is not None
            for limit in (self.max_length, self.max_width, self.max_height)
        )

    def with_format(self, output_format: OutputFormat | str) -> "TransformConfig":
        """切换输出格式，质量重置为新格式的默认值"""
        new_format = coerce_output_format(output_format)
        return self.model_copy(
            update={
                "output_format": new_format,
                "quality": get_default_quality(new_format),
            }
        )
