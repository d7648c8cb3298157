"""Telemetry - resize 引擎的日志和计数器

日志统一走 stdlib logging，入口脚本调用 setup_logging()；
计数器只在内存里累加，测试和 demo 直接读取。

日志格式: [module:window] msg
指标示例: resize.passes, resize.coalesced, resize.clamped, session.callback_errors
"""

import logging

from . import config

# 全局日志配置
_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)
    return logger


def setup_logging(level: str | None = None) -> None:
    """配置根 logger（入口脚本调用，库代码不调用）

    Args:
        level: 日志级别名，None 使用 config.LOG_LEVEL
    """
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format=_LOG_FORMAT,
    )


def format_window_log(module: str, window_id: str, msg: str) -> str:
    """格式化带 window id 的日志消息

    Args:
        module: 模块名
        window_id: 窗口标识
        msg: 日志消息

    Returns:
        格式化的消息: [module:window_id[:16]] msg
    """
    window_short = window_id[:16] if window_id else "unknown"
    return f"[{module}:{window_short}] {msg}"


class Metrics:
    """指标收集 facade

    提供简单的计数器和 gauge 接口。
    当前实现为内存存储。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器

        Args:
            name: 指标名（如 "resize.coalesced"）
            labels: 可选标签（如 {"axis": "height"}）
            value: 递增值，默认 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """设置 gauge 值"""
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """获取计数器值（用于测试）"""
        key = self._make_key(name, labels)
        return self._counters.get(key, 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """获取 gauge 值（用于测试）"""
        key = self._make_key(name, labels)
        return self._gauges.get(key, 0.0)

    def reset(self) -> None:
        """重置所有指标（用于测试）"""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# 全局指标实例
metrics = Metrics()
