"""Layout preview using Rich library.

把窗口轮廓画进 Rich Text，用于 demo 和调试几何。不绘制 widget 内容。
"""

import io

from rich.console import Console
from rich.text import Text

from .layout.types import Window

# 轮廓颜色轮换
OUTLINE_COLORS = ["cyan", "green", "yellow", "magenta", "blue", "red"]


class LayoutPreview:
    """布局预览器，将窗口集合转换为带颜色的轮廓图。"""

    def __init__(self, colors: list[str] | None = None):
        """
        Args:
            colors: 轮廓颜色列表（按窗口顺序轮换）
        """
        self.colors = colors or OUTLINE_COLORS

    def render(self, windows: list[Window], rows: int, cols: int) -> Text:
        """
        渲染窗口轮廓。

        Args:
            windows: 窗口集合
            rows: 终端行数
            cols: 终端列数

        Returns:
            rows 行、每行 cols 个字符的 Rich Text（超出终端的部分被裁掉）
        """
        cells = [[" "] * cols for _ in range(rows)]
        owners: list[list[int | None]] = [[None] * cols for _ in range(rows)]

        for idx, window in enumerate(windows):
            self._draw_outline(cells, owners, idx, window, rows, cols)

        text = Text()
        for r in range(rows):
            for c in range(cols):
                owner = owners[r][c]
                style = self.colors[owner % len(self.colors)] if owner is not None else None
                text.append(cells[r][c], style=style)
            if r < rows - 1:
                text.append("\n")
        return text

    def export_text(self, windows: list[Window], rows: int, cols: int) -> str:
        """渲染并导出为纯文本"""
        console = Console(
            record=True,
            width=cols,
            height=rows,
            force_terminal=True,
            color_system="truecolor",
            file=io.StringIO(),
        )
        console.print(self.render(windows, rows, cols), end="", no_wrap=True, crop=True)
        return console.export_text(styles=False)

    def _draw_outline(
        self,
        cells: list[list[str]],
        owners: list[list[int | None]],
        idx: int,
        window: Window,
        rows: int,
        cols: int,
    ) -> None:
        if window.rows <= 0 or window.cols <= 0:
            return

        top, bottom = window.row, window.bottom - 1
        left, right = window.col, window.right - 1

        def put(r: int, c: int, char: str) -> None:
            if 0 <= r < rows and 0 <= c < cols:
                cells[r][c] = char
                owners[r][c] = idx

        for c in range(left, right + 1):
            edge = "+" if c in (left, right) else "-"
            put(top, c, edge)
            put(bottom, c, edge)
        for r in range(top + 1, bottom):
            put(r, left, "|")
            put(r, right, "|")

        # 窗口 id 写在上边框
        label = window.id[: max(window.cols - 2, 0)]
        for offset, char in enumerate(label):
            put(top, left + 1 + offset, char)
