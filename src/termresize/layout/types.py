"""Layout 数据类型定义

包含：
- Window: 可变的窗口几何 + 约束
- Geometry: 基线快照中的不可变几何
- TerminalSize: 终端尺寸
- ResizeResult: 一次 resize pass 的结果
"""

from dataclasses import dataclass, field
from enum import Enum


class Axis(Enum):
    """缩放轴"""
    HEIGHT = "height"
    WIDTH = "width"


@dataclass
class Window:
    """窗口（pane）

    由外部 layout/config 子系统拥有，resize pass 期间引擎独占写权限，
    只修改 row/col/rows/cols。

    Attributes:
        id: 窗口标识
        row, col: 左上角位置
        rows, cols: 尺寸
        min_rows, min_cols, max_rows, max_cols: 可选约束
        static_height: 高度固定
        static_width: 宽度固定
        widget_type: widget 类型（决定默认约束）
    """
    id: str
    row: int
    col: int
    rows: int
    cols: int
    min_rows: int | None = None
    min_cols: int | None = None
    max_rows: int | None = None
    max_cols: int | None = None
    static_height: bool = False
    static_width: bool = False
    widget_type: str = "text"

    @property
    def is_fully_static(self) -> bool:
        """宽高都固定"""
        return self.static_height and self.static_width

    @property
    def bottom(self) -> int:
        return self.row + self.rows

    @property
    def right(self) -> int:
        return self.col + self.cols

    def is_static(self, axis: Axis) -> bool:
        """指定轴上是否固定"""
        if axis == Axis.HEIGHT:
            return self.static_height
        return self.static_width

    def geometry(self) -> "Geometry":
        """当前几何的不可变副本"""
        return Geometry(row=self.row, col=self.col, rows=self.rows, cols=self.cols)

    def restore(self, geometry: "Geometry") -> None:
        """恢复到给定几何"""
        self.row = geometry.row
        self.col = geometry.col
        self.rows = geometry.rows
        self.cols = geometry.cols


@dataclass(frozen=True)
class Geometry:
    """基线快照中的窗口几何（只读）"""
    row: int
    col: int
    rows: int
    cols: int

    def occupies_col(self, col: int) -> bool:
        return self.col <= col < self.col + self.cols

    def occupies_row(self, row: int) -> bool:
        return self.row <= row < self.row + self.rows

    def start(self, axis: Axis) -> int:
        """轴方向上的起点（HEIGHT -> row，WIDTH -> col）"""
        return self.row if axis == Axis.HEIGHT else self.col

    def extent(self, axis: Axis) -> int:
        """轴方向上的尺寸（HEIGHT -> rows，WIDTH -> cols）"""
        return self.rows if axis == Axis.HEIGHT else self.cols

    def occupies_line(self, axis: Axis, line: int) -> bool:
        """是否占据扫描线

        HEIGHT 阶段按列扫描，WIDTH 阶段按行扫描。
        """
        if axis == Axis.HEIGHT:
            return self.occupies_col(line)
        return self.occupies_row(line)


Baseline = dict[str, Geometry]
DeltaMap = dict[str, int]


def snapshot(windows: list[Window]) -> Baseline:
    """为一个计算阶段拍基线快照

    Args:
        windows: 当前窗口集合

    Returns:
        window id -> Geometry
    """
    return {w.id: w.geometry() for w in windows}


@dataclass(frozen=True)
class TerminalSize:
    """终端尺寸"""
    rows: int
    cols: int

    def delta_to(self, other: "TerminalSize") -> tuple[int, int]:
        """返回 (height_delta, width_delta)"""
        return other.rows - self.rows, other.cols - self.cols


@dataclass
class ResizeResult:
    """一次 resize pass 的结果"""
    old_size: TerminalSize
    new_size: TerminalSize
    height_deltas: DeltaMap = field(default_factory=dict)
    width_deltas: DeltaMap = field(default_factory=dict)
    clamped: set[str] = field(default_factory=set)

    @property
    def changed(self) -> bool:
        """终端尺寸是否真的变化"""
        return self.old_size != self.new_size

    def format_log(self) -> str:
        """格式化为日志字符串"""
        height_delta, width_delta = self.old_size.delta_to(self.new_size)
        return (
            f"{self.old_size.rows}x{self.old_size.cols} -> "
            f"{self.new_size.rows}x{self.new_size.cols} "
            f"(delta: {height_delta:+}x{width_delta:+}, clamped={len(self.clamped)})"
        )
