"""ResizeEventDebouncer - resize 事件防抖

拖动窗口时终端会连续发出大量 resize 通知。防抖器保证：
- 距上次处理超过 debounce_window：立即返回尺寸
- 否则只记住最新尺寸（覆盖旧值，不排队），等 poll_pending() 在窗口过后取出

使用示例:
    debouncer = ResizeEventDebouncer()

    dims = debouncer.record_resize(rows, cols)  # 事件回调里
    dims = dims or debouncer.poll_pending()      # 每个 event-loop tick
"""

import time
from typing import Callable

from . import config
from .telemetry import get_logger, metrics

logger = get_logger(__name__)


class ResizeEventDebouncer:
    """resize 事件防抖器

    首次调用视为"距上次处理无限久"，立即处理。
    """

    def __init__(
        self,
        debounce_window: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            debounce_window: 防抖窗口（秒），None 使用配置默认值
            clock: 单调时钟（测试时可注入）
        """
        if debounce_window is None:
            debounce_window = config.RESIZE_DEBOUNCE_SECONDS
        self.debounce_window = debounce_window
        self._clock = clock
        self.last_processed_time: float | None = None
        self.pending_dimensions: tuple[int, int] | None = None

    def record_resize(self, rows: int, cols: int) -> tuple[int, int] | None:
        """记录一次原始 resize 通知

        Args:
            rows: 新终端行数
            cols: 新终端列数

        Returns:
            需要立即处理的 (rows, cols)，或 None（已合并到 pending）
        """
        now = self._clock()
        if self._window_elapsed(now):
            self.last_processed_time = now
            self.pending_dimensions = None
            return rows, cols

        if self.pending_dimensions is not None and config.METRICS_ENABLED:
            metrics.inc("resize.coalesced")
        self.pending_dimensions = (rows, cols)
        logger.debug(f"[Debouncer] Deferred {rows}x{cols}")
        return None

    def poll_pending(self) -> tuple[int, int] | None:
        """取出到期的 pending 尺寸（每个 event-loop tick 调用一次）

        Returns:
            到期的 (rows, cols)，或 None
        """
        if self.pending_dimensions is None:
            return None

        now = self._clock()
        if not self._window_elapsed(now):
            return None

        dims = self.pending_dimensions
        self.pending_dimensions = None
        self.last_processed_time = now
        logger.debug(f"[Debouncer] Released pending {dims[0]}x{dims[1]}")
        return dims

    @property
    def has_pending(self) -> bool:
        """是否有等待处理的尺寸"""
        return self.pending_dimensions is not None

    def reset(self) -> None:
        """回到初始状态（下一次 record_resize 立即处理）"""
        self.last_processed_time = None
        self.pending_dimensions = None

    def _window_elapsed(self, now: float) -> bool:
        if self.last_processed_time is None:
            return True
        return now - self.last_processed_time >= self.debounce_window
