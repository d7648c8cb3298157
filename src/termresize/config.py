"""termresize 配置

配置分为以下几类：
- 防抖配置：resize 事件合并窗口
- 几何配置：窗口最小尺寸、按 widget 类型的默认约束
- 日志/指标配置
"""

import os

# === 防抖配置 ===
RESIZE_DEBOUNCE_SECONDS = 0.1  # 两次处理 resize 之间的最小间隔（秒）
RESIZE_POLL_INTERVAL = 0.05  # Session tick 间隔（秒），用于取出 pending 尺寸

# === 几何配置 ===
MIN_WINDOW_EXTENT = 1  # 任何窗口的绝对最小行/列数（未设置 min_* 时的下限）

# widget 类型 -> (min_cols, min_rows)，记录未给出 min_* 时使用
WIDGET_MIN_SIZES: dict[str, tuple[int, int]] = {
    "progress": (10, 1),
    "countdown": (10, 1),
    "indicator": (10, 1),
    "hands": (10, 1),
    "hand": (10, 1),
    "compass": (13, 5),
    "injury_doll": (20, 10),
    "dashboard": (15, 3),
    "command_input": (20, 1),
    "text": (5, 3),  # text, room, tabbed 等
}
DEFAULT_WIDGET_TYPE = "text"

# 宽高都固定的 widget
STATIC_BOTH_WIDGETS = {"compass", "injury_doll", "dashboard", "indicator"}

# 只固定高度的 widget
STATIC_HEIGHT_WIDGETS = {
    "progress",
    "countdown",
    "hands",
    "hand",
    "lefthand",
    "righthand",
    "spellhand",
    "command_input",
}

# 必须贴底的 widget（校验用）
BOTTOM_ANCHORED_WIDGETS = {"command_input"}

# === 日志配置 ===
LOG_LEVEL = os.environ.get("TERMRESIZE_LOG_LEVEL", "INFO")  # 日志级别

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
