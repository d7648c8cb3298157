"""ResizeOrchestrator - 一次完整 resize pass 的编排

顺序：
1. 高度阶段：拍基线 -> 逐列计算 delta -> 逐列级联应用
2. 宽度阶段：重新拍基线（反映高度阶段后的行范围）-> 逐行计算 -> 逐行应用
3. 更新当前终端尺寸

单个窗口异常（如 min_rows 超过可用空间）只会被 clamp，不会中断 pass。
"""

from .applier import apply_height_deltas, apply_width_deltas
from .calculator import calculate_height_deltas, calculate_width_deltas
from .types import Geometry, ResizeResult, TerminalSize, Window, snapshot
from .. import config
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)


class ResizeOrchestrator:
    """比例缩放引擎入口

    持有窗口集合的引用（由调用方拥有）和当前终端尺寸。
    """

    def __init__(self, windows: list[Window], rows: int, cols: int):
        """
        Args:
            windows: 窗口集合，resize 时原地修改
            rows: 当前终端行数
            cols: 当前终端列数
        """
        self.windows = windows
        self.size = TerminalSize(rows=rows, cols=cols)
        self._design: dict[str, Geometry] | None = None
        self._design_size: TerminalSize | None = None

    @property
    def current_rows(self) -> int:
        return self.size.rows

    @property
    def current_cols(self) -> int:
        return self.size.cols

    def resize(self, new_rows: int, new_cols: int) -> ResizeResult:
        """把窗口集合从当前尺寸缩放到新尺寸

        Args:
            new_rows: 新终端行数
            new_cols: 新终端列数

        Returns:
            ResizeResult（delta map、被 clamp 的窗口）
        """
        target = TerminalSize(rows=new_rows, cols=new_cols)
        result = ResizeResult(old_size=self.size, new_size=target)
        height_delta, width_delta = self.size.delta_to(target)

        if height_delta == 0 and width_delta == 0:
            logger.debug(f"[Orchestrator] No resize needed at {new_rows}x{new_cols}")
            if config.METRICS_ENABLED:
                metrics.inc("resize.skipped")
            return result

        # 某一轴 delta 为 0 时仍走完该阶段：每个窗口拿到 0，并按约束 clamp
        baseline = snapshot(self.windows)
        result.height_deltas = calculate_height_deltas(
            self.windows, baseline, height_delta, self.size.cols
        )
        result.clamped |= apply_height_deltas(
            self.windows, baseline, result.height_deltas, self.size.cols
        )

        # 新基线：宽度计算需要高度阶段之后的行范围
        baseline = snapshot(self.windows)
        result.width_deltas = calculate_width_deltas(
            self.windows, baseline, width_delta, target.rows
        )
        result.clamped |= apply_width_deltas(
            self.windows, baseline, result.width_deltas, target.rows
        )

        self.size = target

        if config.METRICS_ENABLED:
            metrics.inc("resize.passes")
            metrics.gauge("layout.windows", len(self.windows))
        logger.info(f"[Orchestrator] Resized {result.format_log()}")
        return result

    # === 设计布局模式 ===

    def remember_design(self) -> None:
        """把当前几何和尺寸记为设计布局

        之后 rescale_from_design() 总是从这份布局出发，避免多次 resize 累积取整误差。
        """
        self._design = snapshot(self.windows)
        self._design_size = self.size
        logger.debug(
            f"[Orchestrator] Design layout recorded at "
            f"{self.size.rows}x{self.size.cols} ({len(self._design)} windows)"
        )

    @property
    def has_design(self) -> bool:
        return self._design is not None

    def rescale_from_design(self, new_rows: int, new_cols: int) -> ResizeResult:
        """先恢复设计布局，再从设计尺寸缩放到新尺寸

        没有记录设计布局时等同于 resize()。
        """
        if self._design is None or self._design_size is None:
            return self.resize(new_rows, new_cols)

        for window in self.windows:
            geometry = self._design.get(window.id)
            if geometry is not None:
                window.restore(geometry)

        previous = self.size
        self.size = self._design_size
        result = self.resize(new_rows, new_cols)
        result.old_size = previous
        return result
