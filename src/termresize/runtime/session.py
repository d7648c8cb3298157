"""ResizeSession - resize 事件与引擎之间的 event-loop 胶水

职责：
- 原始 resize 通知经过防抖器
- 每个 tick 取出到期的 pending 尺寸
- 运行 ResizeOrchestrator，置位 layout_changed 并通知订阅者

使用示例:
    session = ResizeSession(ResizeOrchestrator(windows, 60, 115))
    session.subscribe(lambda result: renderer.request_redraw())

    # 平台事件层回调
    session.on_terminal_resize(rows, cols)

    # 启动/停止 tick 循环
    await session.run()
    session.stop()
"""

import asyncio
import inspect
from typing import Any, Callable, Coroutine

from .. import config
from ..debounce import ResizeEventDebouncer
from ..layout.orchestrator import ResizeOrchestrator
from ..layout.types import ResizeResult
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)

LayoutCallback = Callable[[ResizeResult], Any | Coroutine[Any, Any, Any]]


class ResizeSession:
    """resize 会话

    设计原则:
    1. resize pass 同步执行，一旦越过防抖器必定跑完
    2. 只有防抖器真正放行时才置位 layout_changed
    3. 订阅者异常隔离：单个回调失败不影响 pass 和其他回调
    """

    def __init__(
        self,
        orchestrator: ResizeOrchestrator,
        debouncer: ResizeEventDebouncer | None = None,
        tick_interval: float | None = None,
    ):
        """初始化 ResizeSession

        Args:
            orchestrator: 缩放引擎
            debouncer: 防抖器，None 使用默认配置创建
            tick_interval: tick 间隔（秒），None 使用配置默认值
        """
        self.orchestrator = orchestrator
        self.debouncer = debouncer or ResizeEventDebouncer()
        if tick_interval is None:
            tick_interval = config.RESIZE_POLL_INTERVAL
        self._tick_interval = tick_interval
        self._callbacks: list[LayoutCallback] = []
        self._layout_changed = False
        self._running = False
        self._pending_notifications: list[asyncio.Task] = []

    @property
    def tick_interval(self) -> float:
        return self._tick_interval

    # === 事件入口 ===

    def on_terminal_resize(self, rows: int, cols: int) -> ResizeResult | None:
        """处理一次原始 resize 通知

        Returns:
            立即执行的 pass 结果，被防抖合并时返回 None
        """
        dims = self.debouncer.record_resize(rows, cols)
        if dims is None:
            return None
        return self._process(*dims)

    def tick(self) -> ResizeResult | None:
        """执行一次 tick：取出到期的 pending 尺寸并处理"""
        dims = self.debouncer.poll_pending()
        if dims is None:
            return None
        return self._process(*dims)

    # === layout changed 信号 ===

    @property
    def layout_changed(self) -> bool:
        """自上次 consume 以来是否跑过 pass"""
        return self._layout_changed

    def consume_layout_changed(self) -> bool:
        """读取并清除 layout_changed"""
        changed = self._layout_changed
        self._layout_changed = False
        return changed

    def subscribe(self, callback: LayoutCallback) -> None:
        """注册布局变化回调（同步或异步）"""
        self._callbacks.append(callback)

    def unsubscribe(self, callback: LayoutCallback) -> bool:
        """取消注册回调

        Returns:
            是否成功取消
        """
        if callback in self._callbacks:
            self._callbacks.remove(callback)
            return True
        return False

    # === tick 循环 ===

    async def run(self) -> None:
        """启动 tick 主循环

        持续运行直到调用 stop()。
        """
        if self._running:
            logger.warning("[Session] Already running")
            return

        self._running = True
        logger.info(f"[Session] Started (tick={self._tick_interval}s)")

        try:
            while self._running:
                self.tick()
                await asyncio.sleep(self._tick_interval)
        except asyncio.CancelledError:
            logger.info("[Session] Cancelled")
        finally:
            self._running = False

    def stop(self) -> None:
        """停止 tick 循环"""
        if not self._running:
            return
        self._running = False
        logger.info("[Session] Stopping...")

    @property
    def is_running(self) -> bool:
        """是否正在运行"""
        return self._running

    # === 内部 ===

    def _process(self, rows: int, cols: int) -> ResizeResult:
        result = self.orchestrator.resize(rows, cols)
        self._layout_changed = True
        self._notify(result)
        return result

    def _notify(self, result: ResizeResult) -> None:
        for callback in list(self._callbacks):
            name = getattr(callback, "__name__", repr(callback))
            try:
                value = callback(result)
            except Exception as e:
                self._record_callback_error(name, e)
                continue
            # 协程回调交给当前 event loop 执行
            if inspect.iscoroutine(value):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    value.close()
                    logger.warning(f"[Session] No running loop for async callback '{name}'")
                    continue
                task = loop.create_task(
                    self._await_callback(name, value)
                )
                self._pending_notifications.append(task)
                task.add_done_callback(self._pending_notifications.remove)

    async def _await_callback(self, name: str, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception as e:
            self._record_callback_error(name, e)

    def _record_callback_error(self, name: str, error: Exception) -> None:
        logger.error(f"[Session] Layout callback '{name}' failed: {error}")
        if config.METRICS_ENABLED:
            metrics.inc("session.callback_errors", {"callback": name})
