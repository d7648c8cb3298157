"""Runtime module - resize session and event-loop glue"""

from .session import (
    LayoutCallback,
    ResizeSession,
)

__all__ = [
    "ResizeSession",
    "LayoutCallback",
]
