"""termresize - 终端客户端的比例窗口缩放引擎"""

from .debounce import ResizeEventDebouncer
from .layout import ResizeOrchestrator, ResizeResult, TerminalSize, Window
from .runtime import ResizeSession

__all__ = [
    "ResizeEventDebouncer",
    "ResizeOrchestrator",
    "ResizeResult",
    "ResizeSession",
    "TerminalSize",
    "Window",
]
