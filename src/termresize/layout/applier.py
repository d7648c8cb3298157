"""Delta 应用器（修改窗口几何）

HEIGHT 阶段按列（column-major）级联，WIDTH 阶段按行（row-major）级联：
每条扫描线上的窗口按基线位置排序，依次从游标处放置，游标前进新尺寸。

约束（min/max）只在这里 clamp。clamp 之后不做重新分配，
同一扫描线上后面的窗口直接从 clamp 后的尺寸继续级联。
"""

from .calculator import scan_line_count
from .types import Axis, Baseline, DeltaMap, Window
from .. import config
from ..telemetry import format_window_log, get_logger, metrics

logger = get_logger(__name__)


def apply_height_deltas(
    windows: list[Window],
    baseline: Baseline,
    deltas: DeltaMap,
    total_cols: int,
) -> set[str]:
    """逐列应用高度 delta

    Args:
        windows: 窗口集合（原地修改 row/rows）
        baseline: 计算 delta 时使用的基线快照
        deltas: window id -> 高度 delta
        total_cols: 终端列数

    Returns:
        被 clamp 的窗口 id
    """
    return _apply_deltas(windows, baseline, deltas, Axis.HEIGHT, total_cols)


def apply_width_deltas(
    windows: list[Window],
    baseline: Baseline,
    deltas: DeltaMap,
    total_rows: int,
) -> set[str]:
    """逐行应用宽度 delta

    Args:
        windows: 窗口集合（原地修改 col/cols）
        baseline: 计算 delta 时使用的基线快照
        deltas: window id -> 宽度 delta
        total_rows: 终端行数

    Returns:
        被 clamp 的窗口 id
    """
    return _apply_deltas(windows, baseline, deltas, Axis.WIDTH, total_rows)


def clamp_extent(window: Window, axis: Axis, value: int) -> int:
    """按窗口约束 clamp 尺寸

    下限为 min_* 与 MIN_WINDOW_EXTENT 中较大者；max_* 优先于下限，
    与原始约束冲突时以 max 为准。
    """
    if axis == Axis.HEIGHT:
        lower, upper = window.min_rows, window.max_rows
    else:
        lower, upper = window.min_cols, window.max_cols

    result = max(value, lower if lower is not None else 0, config.MIN_WINDOW_EXTENT)
    if upper is not None:
        result = min(result, upper)
    return result


def _apply_deltas(
    windows: list[Window],
    baseline: Baseline,
    deltas: DeltaMap,
    axis: Axis,
    total_lines: int,
) -> set[str]:
    visited: set[str] = set()
    clamped: set[str] = set()
    tracked = [w for w in windows if w.id in baseline]
    if not tracked:
        return clamped

    line_count = scan_line_count(baseline, axis, total_lines)

    for line in range(line_count):
        # 已 visited 的窗口也要参与，用来推进游标
        present = [w for w in tracked if baseline[w.id].occupies_line(axis, line)]
        if not present:
            continue
        present.sort(key=lambda w: baseline[w.id].start(axis))

        cursor = baseline[present[0].id].start(axis)
        for window in present:
            if window.id in visited:
                cursor += _extent(window, axis)
                continue

            visited.add(window.id)
            if window.is_fully_static:
                # 完全固定的窗口不动，作为后续窗口的锚点
                cursor = _start(window, axis) + _extent(window, axis)
                continue

            base = baseline[window.id]
            if window.is_static(axis):
                # 固定轴只移动位置，尺寸保持基线值
                _place(window, axis, cursor, base.extent(axis))
                cursor += base.extent(axis)
                continue

            wanted = base.extent(axis) + deltas.get(window.id, 0)
            new_extent = clamp_extent(window, axis, wanted)
            if new_extent != wanted:
                clamped.add(window.id)
                logger.debug(format_window_log(
                    "Applier", window.id, f"{axis.value} clamped {wanted} -> {new_extent}"
                ))

            _place(window, axis, cursor, new_extent)
            cursor += new_extent

    if clamped and config.METRICS_ENABLED:
        metrics.inc("resize.clamped", {"axis": axis.value}, value=len(clamped))
    return clamped


def _start(window: Window, axis: Axis) -> int:
    return window.row if axis == Axis.HEIGHT else window.col


def _extent(window: Window, axis: Axis) -> int:
    return window.rows if axis == Axis.HEIGHT else window.cols


def _place(window: Window, axis: Axis, start: int, extent: int) -> None:
    if axis == Axis.HEIGHT:
        window.row = start
        window.rows = extent
    else:
        window.col = start
        window.cols = extent
