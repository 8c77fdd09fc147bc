"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TransformDefaults:
    """转换相关的默认配置"""

    DEFAULT_FORMAT: str = "webp"
    MAX_LENGTH: int | None = 2000

    # 质量设置
    WEBP_QUALITY: int = 75
    JPEG_QUALITY: int = 85
    PNG_QUALITY: int = 90
    FALLBACK_QUALITY: int = 75

    def get_format_quality(self, format_name: str) -> int:
        """获取格式特定的默认质量"""
        defaults = {
            "webp": self.WEBP_QUALITY,
            "jpeg": self.JPEG_QUALITY,
            "png": self.PNG_QUALITY,
        }
        return defaults.get(format_name.lower(), self.FALLBACK_QUALITY)


@dataclass(frozen=True)
class ArchiveDefaults:
    """归档与输出相关的默认配置"""

    ARCHIVE_NAME: str = "images.zip"
    # 服务端输出目录，相对于当前工作目录
    OUTPUT_DIR: str = os.path.join("public", "output")
    ACCEPTED_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp")

    def get_output_path(self, base_dir: Path | None = None) -> Path:
        """服务端归档的固定输出路径"""
        return (base_dir or Path.cwd()) / self.OUTPUT_DIR / self.ARCHIVE_NAME


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "image_zipper.log"
    LOG_FILE_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT: int = 5


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.transform = TransformDefaults()
        self.archive = ArchiveDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        # 转换配置
        if default_format := os.getenv("IZ_DEFAULT_FORMAT"):
            object.__setattr__(
                self.transform, "DEFAULT_FORMAT", default_format.lower()
            )

        if max_length := os.getenv("IZ_MAX_LENGTH"):
            # 0 或 none 表示不限制尺寸
            value = None if max_length.lower() in ("0", "none", "") else int(max_length)
            object.__setattr__(self.transform, "MAX_LENGTH", value)

        if webp_quality := os.getenv("IZ_WEBP_QUALITY"):
            object.__setattr__(self.transform, "WEBP_QUALITY", int(webp_quality))

        if jpeg_quality := os.getenv("IZ_JPEG_QUALITY"):
            object.__setattr__(self.transform, "JPEG_QUALITY", int(jpeg_quality))

        if png_quality := os.getenv("IZ_PNG_QUALITY"):
            object.__setattr__(self.transform, "PNG_QUALITY", int(png_quality))

        # 归档配置
        if output_dir := os.getenv("IZ_OUTPUT_DIR"):
            object.__setattr__(self.archive, "OUTPUT_DIR", output_dir)

        if archive_name := os.getenv("IZ_ARCHIVE_NAME"):
            object.__setattr__(self.archive, "ARCHIVE_NAME", archive_name)

        if extensions := os.getenv("IZ_ACCEPTED_EXTENSIONS"):
            object.__setattr__(
                self.archive,
                "ACCEPTED_EXTENSIONS",
                tuple(
                    ext if ext.startswith(".") else f".{ext}"
                    for ext in (e.strip().lower() for e in extensions.split(","))
                    if ext
                ),
            )

        # 日志配置
        if log_level := os.getenv("IZ_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("IZ_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                enable_file_log.lower() in ("true", "1", "yes"),
            )


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
