"""测试配置文件。

提供测试所需的fixtures和配置。
"""

from io import BytesIO

import pytest
from PIL import Image, ImageDraw

from image_zipper.config import reset_config
from image_zipper.models import ImageInput


def make_image_bytes(
    size: tuple[int, int] = (120, 80),
    format: str = "PNG",
    mode: str = "RGB",
    color: tuple[int, ...] | str = "white",
) -> bytes:
    """生成带简单图案的测试图片字节"""
    img = Image.new(mode, size, color=color)
    draw = ImageDraw.Draw(img)
    width, height = size
    for i in range(10):
        x, y = (i * width) // 10, (i * height) // 10
        fill = (i * 25 % 256, i * 40 % 256, i * 60 % 256)
        if mode == "RGBA":
            fill = (*fill, 200)
        elif mode == "L":
            fill = i * 25 % 256
        draw.rectangle([x, y, x + width // 5, y + height // 5], fill=fill)

    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def create_input(name: str = "photo.png", **kwargs) -> ImageInput:
    """创建测试用的输入图片"""
    return ImageInput(name=name, content=make_image_bytes(**kwargs))


def open_image(content: bytes) -> Image.Image:
    """打开编码后的图片字节"""
    img = Image.open(BytesIO(content))
    img.load()
    return img


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """每个测试使用不受环境变量影响的全新配置"""
    for key in (
        "IZ_DEFAULT_FORMAT",
        "IZ_MAX_LENGTH",
        "IZ_WEBP_QUALITY",
        "IZ_JPEG_QUALITY",
        "IZ_PNG_QUALITY",
        "IZ_OUTPUT_DIR",
        "IZ_ARCHIVE_NAME",
        "IZ_ACCEPTED_EXTENSIONS",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_inputs() -> list[ImageInput]:
    """三张不同格式和尺寸的输入图片"""
    return [
        create_input("landscape.png", size=(400, 200)),
        create_input("portrait.jpg", size=(150, 300), format="JPEG"),
        create_input(
            "transparent.webp",
            size=(100, 100),
            format="WEBP",
            mode="RGBA",
            color=(0, 0, 0, 0),
        ),
    ]


@pytest.fixture
def image_dir(tmp_path):
    """包含测试图片和一个非图片文件的目录"""
    directory = tmp_path / "images"
    directory.mkdir()
    (directory / "b.png").write_bytes(make_image_bytes((60, 40)))
    (directory / "a.jpg").write_bytes(make_image_bytes((80, 60), format="JPEG"))
    (directory / "notes.txt").write_text("not an image")
    return directory
