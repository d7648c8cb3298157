"""Demo: 模拟一次窗口拖拽，观察防抖和比例缩放"""

import asyncio

from rich.console import Console

from termresize.layout import LayoutBuilder, ResizeOrchestrator, ResizeResult, check_layout
from termresize.preview import LayoutPreview
from termresize.runtime import ResizeSession
from termresize.telemetry import metrics, setup_logging

# 设计尺寸 60x115 的示例布局
SAMPLE_LAYOUT = [
    {"id": "room", "row": 0, "col": 0, "rows": 18, "cols": 80},
    {"id": "compass", "widget_type": "compass", "row": 0, "col": 80, "rows": 5, "cols": 13},
    {"id": "vitals", "widget_type": "progress", "row": 0, "col": 93, "rows": 1, "cols": 22},
    {"id": "thoughts", "row": 1, "col": 93, "rows": 17, "cols": 22},
    {"id": "effects", "row": 5, "col": 80, "rows": 13, "cols": 13},
    {"id": "main", "row": 18, "col": 0, "rows": 40, "cols": 95},
    {"id": "speech", "row": 18, "col": 95, "rows": 40, "cols": 20},
    {"id": "input", "widget_type": "command_input", "row": 58, "col": 0, "rows": 2, "cols": 115},
]

# 一次拖拽产生的连续通知 (rows, cols, 间隔秒)
DRAG_EVENTS = [
    (61, 117, 0.01),
    (62, 119, 0.01),
    (63, 121, 0.01),
    (65, 122, 0.01),
    (40, 90, 0.3),
]


async def replay(console: Console) -> None:
    """回放拖拽事件并打印每次 pass 后的布局"""
    windows = LayoutBuilder().build(SAMPLE_LAYOUT)
    orchestrator = ResizeOrchestrator(windows, rows=60, cols=115)
    session = ResizeSession(orchestrator)
    preview = LayoutPreview()

    def show(result: ResizeResult) -> None:
        console.rule(f"Resized {result.format_log()}")
        size = result.new_size
        console.print(preview.render(windows, size.rows, size.cols))
        for issue in check_layout(windows, size.rows, size.cols):
            console.print(f"  [{issue.kind.value}] {issue.window}: {issue.message}")

    session.subscribe(show)
    loop_task = asyncio.create_task(session.run())

    for rows, cols, pause in DRAG_EVENTS:
        session.on_terminal_resize(rows, cols)
        await asyncio.sleep(pause)

    session.stop()
    await loop_task

    console.print(f"Coalesced events: {metrics.get_counter('resize.coalesced')}")
    console.print(f"Resize passes: {metrics.get_counter('resize.passes')}")


def main():
    """运行 demo"""
    setup_logging()
    asyncio.run(replay(Console()))


if __name__ == "__main__":
    main()
