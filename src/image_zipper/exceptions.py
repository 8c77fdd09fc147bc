"""图像批量转换异常处理模块。

定义统一的异常类和异常转换装饰器。批量处理采用整批失败策略，
任何单张图片或归档阶段的异常都会中止整批处理。
"""

from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .utils.logging_helpers import get_logger


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class ImageZipperError(Exception):
    """批量转换相关错误基类"""

    error_type: str = "general"

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.file_name = file_name


class ValidationError(ImageZipperError):
    """参数验证错误"""

    error_type = "validation"


class DecodeError(ImageZipperError):
    """输入字节不是可识别的图像"""

    error_type = "decode"


class EncodeError(ImageZipperError):
    """无法按指定格式/质量编码输出"""

    error_type = "encode"


class ArchiveIOError(ImageZipperError):
    """归档写入或输出持久化失败"""

    error_type = "io"


class BatchInProgressError(ImageZipperError):
    """已有批量处理正在进行"""

    error_type = "busy"


def handle_image_errors(operation_name: str = "图像处理", stage: str = "decode"):
    """统一的图像处理异常转换装饰器

    将 Pillow 和系统异常转换为本模块的异常类型，已是 ImageZipperError
    的异常原样抛出。

    Args:
        operation_name: 操作名称，用于日志记录
        stage: 处理阶段，"decode" / "encode" / "io"，决定通用异常的归类
    """
    stage_errors: dict[str, type[ImageZipperError]] = {
        "decode": DecodeError,
        "encode": EncodeError,
        "io": ArchiveIOError,
    }
    fallback_error = stage_errors[stage]

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except ImageZipperError:
                raise
            except UnidentifiedImageError as e:
                logger.debug(f"{operation_name} - 无法识别图像格式: {e}")
                raise DecodeError(f"无法识别的图像: {e}") from e
            except DecompressionBombError as e:
                logger.debug(f"{operation_name} - 图像过大: {e}")
                raise DecodeError(f"图像文件过大，可能存在安全风险: {e}") from e
            except (OSError, KeyError, ValueError) as e:
                logger.debug(f"{operation_name} - 处理失败: {e}")
                raise fallback_error(f"{operation_name}失败: {e}") from e
            except Exception as e:
                logger.debug(f"{operation_name} - 未知错误: {e}")
                raise fallback_error(f"{operation_name}失败: {e}") from e

        return wrapper

    return decorator
