"""命令行入口。

image-zipper zip <文件或目录...>  批量转换并保存 ZIP
image-zipper serve               启动 MCP 服务器
"""

import argparse
import sys

from .config import get_config
from .exceptions import ValidationError
from .models.constants import OutputFormat
from .reporter import ResultReporter
from .session import ZipperSession
from .utils.logging_helpers import setup_logging
from .utils.message_formatter import MessageFormatter


def _print_progress(current: int, total: int) -> None:
    print(f"\r{MessageFormatter.progress(current, total)}", end="", flush=True)
    if current == total:
        print()


def build_parser() -> argparse.ArgumentParser:
    transform_defaults = get_config().transform

    parser = argparse.ArgumentParser(
        prog="image-zipper",
        description="批量转换、缩放图片并打包为 ZIP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  # 转为 WebP，最长边 2000 像素
  image-zipper zip photos/ --format webp --max-length 2000

  # 保持原格式，不缩放
  image-zipper zip a.png b.jpg --format original --max-length 0 -o out.zip
        """,
    )
    parser.add_argument("--version", "-v", action="store_true", help="显示版本号")
    parser.add_argument("--debug", action="store_true", help="启用调试日志")

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    zip_parser = subparsers.add_parser("zip", help="批量转换并保存 ZIP")
    zip_parser.add_argument("paths", nargs="+", help="图片文件或目录")
    zip_parser.add_argument(
        "--format",
        "-f",
        default=transform_defaults.DEFAULT_FORMAT,
        choices=[f.value for f in OutputFormat],
        help="输出格式 (默认: %(default)s)",
    )
    zip_parser.add_argument(
        "--quality", "-q", type=int, default=None, help="质量 1-100 (默认取格式默认值)"
    )
    zip_parser.add_argument(
        "--max-length",
        type=int,
        default=transform_defaults.MAX_LENGTH,
        help="最长边上限，0 表示不限制 (默认: %(default)s)",
    )
    zip_parser.add_argument(
        "--output", "-o", default=None, help="ZIP 保存路径 (默认: ./images.zip)"
    )
    zip_parser.add_argument("--recursive", "-r", action="store_true", help="递归目录")

    subparsers.add_parser("serve", help="启动 MCP 服务器")

    return parser


def run_zip(args: argparse.Namespace) -> int:
    """执行 zip 子命令"""
    try:
        session = ZipperSession(
            output_format=args.format,
            max_length=args.max_length,
            progress_callback=_print_progress,
        )
        if args.quality is not None:
            session.set_quality(args.quality)
        session.add_paths(args.paths, recursive=args.recursive)
    except (ValidationError, ValueError) as e:
        print(f"错误: {e}", file=sys.stderr)
        return 2

    if not session.can_submit:
        print("没有可处理的图片", file=sys.stderr)
        return 1

    result = session.submit(args.output)
    if result is None:
        print(f"错误: {session.error}", file=sys.stderr)
        return 1

    print(ResultReporter.render_table(session.file_table()))
    print()
    print(ResultReporter.render_statistics(result))
    print(result.get_summary())
    return 0


def main() -> None:
    """主入口函数"""
    parser = build_parser()
    args = parser.parse_args()

    if args.version:
        from . import __version__

        print(f"image-zipper {__version__}")
        return

    setup_logging("DEBUG" if args.debug else None)

    if args.command == "zip":
        sys.exit(run_zip(args))

    if args.command == "serve":
        from .mcp_server import main as server_main

        server_main()
        return

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
