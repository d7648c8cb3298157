"""Delta 计算器（纯函数）

HEIGHT 阶段逐列扫描，WIDTH 阶段逐行扫描：
1. 取占据当前扫描线、本阶段尚未分配 delta 的窗口
2. 固定窗口记 0
3. 可缩放窗口按基线尺寸比例 floor 分配
4. 余数（leftover）逐个单位分给本线新分配的可缩放窗口

每个窗口在本阶段只分配一次：第一条遇到它的扫描线生效。
只读基线快照，不读正在被修改的窗口。
"""

from .types import Axis, Baseline, DeltaMap, Window
from ..telemetry import get_logger

logger = get_logger(__name__)


def calculate_height_deltas(
    windows: list[Window],
    baseline: Baseline,
    height_delta: int,
    total_cols: int,
) -> DeltaMap:
    """逐列计算每个窗口的高度 delta

    Args:
        windows: 窗口集合（只读取 id 和 static 标记）
        baseline: 本阶段开始时的基线快照
        height_delta: 终端高度变化（可为负）
        total_cols: 终端列数

    Returns:
        window id -> 高度 delta
    """
    return _calculate_deltas(windows, baseline, Axis.HEIGHT, height_delta, total_cols)


def calculate_width_deltas(
    windows: list[Window],
    baseline: Baseline,
    width_delta: int,
    total_rows: int,
) -> DeltaMap:
    """逐行计算每个窗口的宽度 delta

    Args:
        windows: 窗口集合
        baseline: 本阶段开始时的基线快照（高度阶段之后拍摄）
        width_delta: 终端宽度变化（可为负）
        total_rows: 终端行数

    Returns:
        window id -> 宽度 delta
    """
    return _calculate_deltas(windows, baseline, Axis.WIDTH, width_delta, total_rows)


def scan_line_count(baseline: Baseline, axis: Axis, total_lines: int) -> int:
    """扫描线数量

    HEIGHT 阶段扫描列，WIDTH 阶段扫描行。超出终端的窗口也要被扫描到，
    否则它们拿不到 delta。
    """
    if axis == Axis.HEIGHT:
        extents = [g.col + g.cols for g in baseline.values()]
    else:
        extents = [g.row + g.rows for g in baseline.values()]
    return max([total_lines, *extents])


def distribute(delta: int, sizes: list[int]) -> list[int]:
    """按比例分配 delta，并把余数逐个单位分给前面的条目

    Args:
        delta: 要分配的总量（可为负）
        sizes: 各条目的基线尺寸（已按分配顺序排列）

    Returns:
        与 sizes 等长的分配结果，总和恒等于 delta（sizes 总和为 0 时全 0）
    """
    total = sum(sizes)
    if total == 0:
        return [0] * len(sizes)

    # 整数 floor 除法，负数同样向下取整
    shares = [delta * size // total for size in sizes]
    leftover = delta - sum(shares)
    step = 1 if leftover > 0 else -1
    idx = 0
    while leftover != 0:
        shares[idx % len(shares)] += step
        leftover -= step
        idx += 1
    return shares


def _calculate_deltas(
    windows: list[Window],
    baseline: Baseline,
    axis: Axis,
    delta: int,
    total_lines: int,
) -> DeltaMap:
    deltas: DeltaMap = {}
    candidates = [w for w in windows if w.id in baseline]
    line_count = scan_line_count(baseline, axis, total_lines) if candidates else 0
    scan = "column" if axis == Axis.HEIGHT else "row"

    logger.debug(f"[Calculator] {axis.value} delta={delta:+}, scanning {line_count} {scan}s")

    for line in range(line_count):
        present = [
            w for w in candidates
            if w.id not in deltas and baseline[w.id].occupies_line(axis, line)
        ]
        if not present:
            continue

        scalable = []
        for w in present:
            if w.is_static(axis):
                deltas[w.id] = 0
            else:
                scalable.append(w)

        # 余数按 top-to-bottom / left-to-right 顺序分配
        scalable.sort(key=lambda w: baseline[w.id].start(axis))
        sizes = [baseline[w.id].extent(axis) for w in scalable]
        if sum(sizes) == 0:
            continue

        shares = distribute(delta, sizes)

        for w, share in zip(scalable, shares):
            deltas[w.id] = share

        logger.debug(
            f"[Calculator] {scan} {line}: "
            + ", ".join(f"{w.id}={share:+}" for w, share in zip(scalable, shares))
        )

    return deltas
