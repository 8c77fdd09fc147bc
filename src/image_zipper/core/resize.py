"""尺寸计算模块。

在保持宽高比的前提下，计算满足最长边或宽高上限的目标尺寸，不放大图片。
"""

from fractions import Fraction
from math import floor


def _round_half_up(value: Fraction) -> int:
    """四舍五入到最近整数（.5 向上取整）"""
    return floor(value + Fraction(1, 2))


def compute_target_dimensions(
    width: int,
    height: int,
    max_length: int | None = None,
    max_width: int | None = None,
    max_height: int | None = None,
) -> tuple[int, int]:
    """计算目标尺寸

    取所有约束中最严格的缩放比例；比例不小于 1 时原样返回。
    使用有理数计算，4000x2000 限制 2000 时得到精确的 2000x1000。

    Args:
        width: 原始宽度
        height: 原始高度
        max_length: 最长边上限
        max_width: 最大宽度
        max_height: 最大高度

    Returns:
        tuple[int, int]: 目标宽高
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"无效的图像尺寸: {width}x{height}")

    ratios = []
    if max_length is not None:
        ratios.append(Fraction(max_length, max(width, height)))
    if max_width is not None:
        ratios.append(Fraction(max_width, width))
    if max_height is not None:
        ratios.append(Fraction(max_height, height))

    if not ratios:
        return width, height

    ratio = min(ratios)
    if ratio >= 1:
        # 不放大
        return width, height

    return (
        max(1, _round_half_up(width * ratio)),
        max(1, _round_half_up(height * ratio)),
    )
