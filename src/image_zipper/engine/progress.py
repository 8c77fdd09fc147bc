"""进度跟踪模块。

批量处理期间的单调进度计数，通过 (current, total) 回调通知监听者。
"""

from collections.abc import Callable

from ..models.batch_result import ProgressState
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()

ProgressCallback = Callable[[int, int], None]


class ProgressTracker:
    """进度跟踪器

    每次批量处理开始时重置，处理期间只增不减；处理结束（成功或失败）
    后 state 恢复为 None。
    """

    def __init__(self, callback: ProgressCallback | None = None):
        self.callback = callback
        self.state: ProgressState | None = None

    @property
    def is_active(self) -> bool:
        return self.state is not None

    def start(self, total: int) -> None:
        """开始新一轮处理并通知 {0, total}"""
        self._update(ProgressState(current=0, total=total))

    def advance(self) -> None:
        """完成一项并通知新进度"""
        if self.state is None:
            raise RuntimeError("进度跟踪尚未开始")
        if self.state.current >= self.state.total:
            raise RuntimeError(
                f"进度超出总数: {self.state.current + 1}/{self.state.total}"
            )
        self._update(
            ProgressState(current=self.state.current + 1, total=self.state.total)
        )

    def reset(self) -> None:
        """清除进行中的进度"""
        self.state = None

    def _update(self, state: ProgressState) -> None:
        self.state = state
        logger.debug(MessageFormatter.progress(state.current, state.total))
        if self.callback is not None:
            self.callback(state.current, state.total)
