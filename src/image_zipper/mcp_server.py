"""图像批量转换 MCP 服务器。

把批量处理作为 MCP 工具暴露给程序调用方。
"""

import logging
from typing import Any

from fastmcp import FastMCP

from .exceptions import ImageZipperError
from .service import collect_paths, collect_payloads, handle_images
from .utils.logging_helpers import setup_logging
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPZipResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def from_exception(error: ImageZipperError) -> dict[str, Any]:
        """根据批量处理异常构建错误结果"""
        details = {"file_name": error.file_name} if error.file_name else None
        return MCPResponseBuilder.error(
            message=error.message,
            error_type=error.error_type,
            details=details,
        )


logger = logging.getLogger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("图像批量转换服务")


def zip_images(
    input_paths: list[str],
    format: str = "original",
    max_width: int | None = None,
    max_height: int | None = None,
    quality: int | None = None,
    recursive: bool = False,
) -> MCPZipResponse:
    """批量转换图片文件并打包为 ZIP

    Args:
        input_paths: 图片文件或目录路径列表
        format: 输出格式 original/webp/png/jpeg
        max_width: 最大宽度（像素，可选）
        max_height: 最大高度（像素，可选）
        quality: 质量 1-100（可选，默认取格式默认值）
        recursive: 目录是否递归

    Returns:
        dict: zipContent(base64)、totalOriginalSize、totalProcessedSize、
        zipSize、fileSizes
    """
    try:
        collector = collect_paths(input_paths, recursive=recursive)
        return handle_images(collector, format, max_width, max_height, quality)
    except ImageZipperError as e:
        logger.warning(MessageFormatter.operation_failed("批量转换", input_paths, e))
        return MCPResponseBuilder.from_exception(e)


def zip_image_payloads(
    images: list[dict[str, str]],
    format: str = "original",
    max_width: int | None = None,
    max_height: int | None = None,
    quality: int | None = None,
) -> MCPZipResponse:
    """批量转换上传的图片内容并打包为 ZIP

    Args:
        images: [{"name": 文件名, "content": base64 内容}, ...]
        format: 输出格式 original/webp/png/jpeg
        max_width: 最大宽度（像素，可选）
        max_height: 最大高度（像素，可选）
        quality: 质量 1-100（可选，默认取格式默认值）

    Returns:
        dict: 与 zip_images 相同的结构
    """
    names = [payload.get("name") for payload in images]
    try:
        collector = collect_payloads(images)
        return handle_images(collector, format, max_width, max_height, quality)
    except ImageZipperError as e:
        logger.warning(MessageFormatter.operation_failed("批量转换", names, e))
        return MCPResponseBuilder.from_exception(e)


# 注册 MCP 工具，模块级函数保持可直接调用
mcp.tool()(zip_images)
mcp.tool()(zip_image_payloads)


def main() -> None:
    """启动 MCP 服务器"""
    setup_logging()
    logger.info("启动图像批量转换 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
