"""ResizeOrchestrator 测试"""

import pytest

from termresize.layout import ResizeOrchestrator, TerminalSize, Window
from termresize.telemetry import metrics


@pytest.fixture
def grid():
    """60x115 终端上的 2x2 布局"""
    return [
        Window(id="TL", row=0, col=0, rows=18, cols=20),
        Window(id="TR", row=0, col=20, rows=18, cols=95),
        Window(id="BL", row=18, col=0, rows=42, cols=20),
        Window(id="BR", row=18, col=20, rows=42, cols=95),
    ]


def _geometry(window: Window) -> tuple[int, int, int, int]:
    return window.row, window.col, window.rows, window.cols


def _assert_partitioned(windows: list[Window], rows: int, cols: int) -> None:
    """每一列/每一行上的窗口连续铺满，无缝隙无重叠"""
    for c in range(cols):
        column = sorted((w for w in windows if w.col <= c < w.right), key=lambda w: w.row)
        cursor = 0
        for w in column:
            assert w.row == cursor, f"column {c}: {w.id} starts at {w.row}, expected {cursor}"
            cursor = w.bottom
        assert cursor == rows
    for r in range(rows):
        line = sorted((w for w in windows if w.row <= r < w.bottom), key=lambda w: w.col)
        cursor = 0
        for w in line:
            assert w.col == cursor, f"row {r}: {w.id} starts at {w.col}, expected {cursor}"
            cursor = w.right
        assert cursor == cols


class TestResizePass:
    """完整 pass 测试"""

    def test_grow_grid(self, grid):
        """2x2 布局放大后比例分配并铺满"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        result = orchestrator.resize(65, 122)

        assert result.changed is True
        assert result.height_deltas == {"TL": 2, "TR": 2, "BL": 3, "BR": 3}
        assert result.width_deltas == {"TL": 2, "TR": 5, "BL": 2, "BR": 5}
        assert _geometry(grid[0]) == (0, 0, 20, 22)
        assert _geometry(grid[1]) == (0, 22, 20, 100)
        assert _geometry(grid[2]) == (20, 0, 45, 22)
        assert _geometry(grid[3]) == (20, 22, 45, 100)
        _assert_partitioned(grid, 65, 122)

    def test_shrink_grid(self, grid):
        """2x2 布局缩小后仍然铺满"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        orchestrator.resize(50, 100)

        assert orchestrator.size == TerminalSize(rows=50, cols=100)
        _assert_partitioned(grid, 50, 100)

    def test_every_window_assigned_once_per_axis(self, grid):
        """每个窗口恰好获得一个高度 delta 和一个宽度 delta"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        result = orchestrator.resize(70, 130)

        ids = {w.id for w in grid}
        assert set(result.height_deltas) == ids
        assert set(result.width_deltas) == ids

    def test_updates_current_size(self, grid):
        """pass 之后更新当前终端尺寸"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        orchestrator.resize(61, 114)

        assert orchestrator.current_rows == 61
        assert orchestrator.current_cols == 114
        assert metrics.get_counter("resize.passes") == 1
        assert metrics.get_gauge("layout.windows") == 4

    def test_same_size_is_noop(self, grid):
        """尺寸不变时不修改任何窗口"""
        before = [_geometry(w) for w in grid]
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        result = orchestrator.resize(60, 115)

        assert result.changed is False
        assert [_geometry(w) for w in grid] == before
        assert metrics.get_counter("resize.skipped") == 1
        assert metrics.get_counter("resize.passes") == 0

    def test_height_only_still_runs_width_phase(self, grid):
        """只有高度变化时宽度阶段照常运行，每个窗口宽度 delta 为 0"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        result = orchestrator.resize(66, 115)

        assert result.width_deltas == {"TL": 0, "TR": 0, "BL": 0, "BR": 0}
        assert [w.cols for w in grid] == [20, 95, 20, 95]

    def test_width_only_clamps_undersized_height(self):
        """只有宽度变化时高度阶段仍会把低于 min_rows 的窗口 clamp 回来"""
        windows = [
            Window(id="A", row=0, col=0, rows=2, cols=40, min_rows=5),
            Window(id="B", row=2, col=0, rows=58, cols=40),
        ]
        orchestrator = ResizeOrchestrator(windows, rows=60, cols=40)

        result = orchestrator.resize(60, 50)

        assert result.height_deltas == {"A": 0, "B": 0}
        assert "A" in result.clamped
        assert _geometry(windows[0]) == (0, 0, 5, 50)
        assert _geometry(windows[1]) == (5, 0, 58, 50)

    def test_empty_layout(self):
        """空布局 pass 直接完成"""
        orchestrator = ResizeOrchestrator([], rows=24, cols=80)

        result = orchestrator.resize(30, 100)

        assert result.changed is True
        assert result.height_deltas == {}
        assert orchestrator.size == TerminalSize(rows=30, cols=100)


class TestStaticWindows:
    """固定窗口测试"""

    def test_fully_static_window_unchanged(self):
        """单个完全固定窗口，终端放大后几何不变"""
        windows = [
            Window(id="compass", row=0, col=0, rows=5, cols=13,
                   static_height=True, static_width=True),
        ]
        orchestrator = ResizeOrchestrator(windows, rows=60, cols=115)

        orchestrator.resize(70, 125)

        assert _geometry(windows[0]) == (0, 0, 5, 13)

    def test_static_height_survives_many_passes(self):
        """static_height 窗口在多次 pass 后行数不变"""
        windows = [
            Window(id="main", row=0, col=0, rows=59, cols=115),
            Window(id="input", row=59, col=0, rows=1, cols=115, static_height=True),
        ]
        orchestrator = ResizeOrchestrator(windows, rows=60, cols=115)

        for rows, cols in [(70, 120), (40, 90), (55, 200), (61, 115)]:
            orchestrator.resize(rows, cols)
            assert windows[1].rows == 1
            assert windows[1].row == rows - 1
            assert windows[0].rows == rows - 1


class TestDegenerateLayouts:
    """异常布局不会中断 pass"""

    def test_unsatisfiable_min_rows_is_clamped(self):
        """min_rows 无法满足时只 clamp 该窗口，兄弟窗口照常处理"""
        windows = [
            Window(id="greedy", row=0, col=0, rows=30, cols=40, min_rows=100),
            Window(id="other", row=30, col=0, rows=30, cols=40),
        ]
        orchestrator = ResizeOrchestrator(windows, rows=60, cols=40)

        result = orchestrator.resize(50, 40)

        assert "greedy" in result.clamped
        assert windows[0].rows == 100
        assert windows[1].row == 100
        assert windows[1].rows == 25

    def test_min_clamp_scenario(self):
        """min_rows=5, 基线 6, delta -4 -> 5；下一个窗口游标前进 5"""
        windows = [
            Window(id="small", row=0, col=0, rows=6, cols=40, min_rows=5),
            Window(id="next", row=6, col=0, rows=0, cols=40),
        ]
        orchestrator = ResizeOrchestrator(windows, rows=6, cols=40)

        result = orchestrator.resize(2, 40)

        assert result.height_deltas["small"] == -4
        assert windows[0].rows == 5
        assert windows[1].row == 5


class TestDesignLayout:
    """设计布局模式测试"""

    def test_rescale_back_to_design_is_exact(self, grid):
        """回到设计尺寸时几何与设计完全一致"""
        design = [_geometry(w) for w in grid]
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)
        orchestrator.remember_design()

        for rows, cols in [(61, 116), (47, 93), (83, 201)]:
            orchestrator.rescale_from_design(rows, cols)
        result = orchestrator.rescale_from_design(60, 115)

        assert [_geometry(w) for w in grid] == design
        assert result.old_size == TerminalSize(rows=83, cols=201)

    def test_rescale_matches_single_resize(self, grid):
        """从设计布局缩放与一次直接 resize 结果相同"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)
        orchestrator.remember_design()
        orchestrator.resize(47, 93)

        orchestrator.rescale_from_design(65, 122)

        assert _geometry(grid[0]) == (0, 0, 20, 22)
        assert _geometry(grid[3]) == (20, 22, 45, 100)

    def test_without_design_falls_back_to_resize(self, grid):
        """没有设计布局时等同于 resize"""
        orchestrator = ResizeOrchestrator(grid, rows=60, cols=115)

        assert orchestrator.has_design is False
        orchestrator.rescale_from_design(65, 122)

        assert orchestrator.size == TerminalSize(rows=65, cols=122)
