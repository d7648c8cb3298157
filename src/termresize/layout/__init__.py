"""Layout 模块

比例缩放引擎的核心组件：
- types: 数据类型（Window, Geometry, TerminalSize, ResizeResult）
- calculator: 高度/宽度 delta 计算（纯函数）
- applier: 高度/宽度级联应用（修改窗口）
- orchestrator: ResizeOrchestrator
- builder: 从窗口记录构造 Window
- validator: 布局校验
"""

from .types import (
    Axis,
    Window,
    Geometry,
    TerminalSize,
    ResizeResult,
    snapshot,
)
from .calculator import calculate_height_deltas, calculate_width_deltas, distribute
from .applier import apply_height_deltas, apply_width_deltas
from .orchestrator import ResizeOrchestrator
from .builder import LayoutBuilder
from .validator import (
    IssueKind,
    LayoutIssue,
    ValidationResult,
    check_layout,
    validate_sizes,
)

__all__ = [
    # Types
    "Axis",
    "Window",
    "Geometry",
    "TerminalSize",
    "ResizeResult",
    "snapshot",
    # Calculator
    "calculate_height_deltas",
    "calculate_width_deltas",
    "distribute",
    # Applier
    "apply_height_deltas",
    "apply_width_deltas",
    # Orchestrator
    "ResizeOrchestrator",
    # Builder
    "LayoutBuilder",
    # Validator
    "IssueKind",
    "LayoutIssue",
    "ValidationResult",
    "check_layout",
    "validate_sizes",
]
