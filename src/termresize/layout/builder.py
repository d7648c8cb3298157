"""Layout builder.

Converts window records supplied by the layout/config subsystem into
Window objects the resize engine can mutate.
"""

from termresize import config
from termresize.layout.types import Window
from termresize.telemetry import get_logger

logger = get_logger(__name__)

_GEOMETRY_KEYS = ("row", "col", "rows", "cols")
_CONSTRAINT_KEYS = ("min_rows", "min_cols", "max_rows", "max_cols")
_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _parse_flag(value) -> bool | None:
    """Parse an optional boolean flag from a record.

    Accepts bools, 0/1 and the usual true/false strings. Anything else
    raises ValueError so the record is treated as malformed.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"invalid flag value {value!r}")


def widget_min_size(widget_type: str) -> tuple[int, int]:
    """Return the fallback (min_cols, min_rows) for a widget type."""
    return config.WIDGET_MIN_SIZES.get(
        widget_type, config.WIDGET_MIN_SIZES[config.DEFAULT_WIDGET_TYPE]
    )


class LayoutBuilder:
    """Builds a list of Window objects from plain window records.

    Record mapping:
    - "id" (or "name") -> Window.id
    - "row"/"col"/"rows"/"cols" -> geometry (required)
    - "min_*"/"max_*" -> constraints; missing minimums fall back to the
      widget type's default size
    - "static_height"/"static_width" -> static flags; missing flags are
      derived from the widget type
    """

    def __init__(self, exclude_ids: list[str] | None = None):
        """Initialize LayoutBuilder.

        Args:
            exclude_ids: List of window ids to exclude (substring match).
        """
        self._exclude_ids = exclude_ids or []

    def _should_exclude(self, window_id: str) -> bool:
        """Check if window should be excluded based on id."""
        return any(excl in window_id for excl in self._exclude_ids)

    def build(self, records: list[dict]) -> list[Window]:
        """Build Window objects from records.

        Malformed records are skipped, duplicate ids keep the first record.

        Args:
            records: List of window record dicts.

        Returns:
            List of Window objects in record order.
        """
        windows: list[Window] = []
        seen: set[str] = set()

        for record in records:
            raw_id = record.get("id")
            if raw_id is None:
                raw_id = record.get("name")
            window_id = "" if raw_id is None else str(raw_id)
            if not window_id:
                logger.warning("[LayoutBuilder] Skipping record without id")
                continue
            if self._should_exclude(window_id):
                continue
            if window_id in seen:
                logger.warning(f"[LayoutBuilder] Duplicate window id '{window_id}', keeping first")
                continue

            try:
                window = self._build_window(window_id, record)
            except (KeyError, ValueError, TypeError) as e:
                # Skip malformed window data
                logger.warning(f"[LayoutBuilder] Skipping malformed window '{window_id}': {e}")
                continue

            seen.add(window_id)
            windows.append(window)

        return windows

    def _build_window(self, window_id: str, record: dict) -> Window:
        geometry = {key: int(record[key]) for key in _GEOMETRY_KEYS}
        if geometry["rows"] < 0 or geometry["cols"] < 0:
            raise ValueError(f"negative size {geometry['rows']}x{geometry['cols']}")
        if geometry["row"] < 0 or geometry["col"] < 0:
            raise ValueError(f"negative position ({geometry['row']},{geometry['col']})")

        constraints = {
            key: int(record[key]) for key in _CONSTRAINT_KEYS if record.get(key) is not None
        }

        widget_type = str(record.get("widget_type") or config.DEFAULT_WIDGET_TYPE)
        min_cols, min_rows = widget_min_size(widget_type)
        constraints.setdefault("min_cols", min_cols)
        constraints.setdefault("min_rows", min_rows)

        static_both = widget_type in config.STATIC_BOTH_WIDGETS
        static_height = _parse_flag(record.get("static_height"))
        if static_height is None:
            static_height = static_both or widget_type in config.STATIC_HEIGHT_WIDGETS
        static_width = _parse_flag(record.get("static_width"))
        if static_width is None:
            static_width = static_both

        return Window(
            id=window_id,
            widget_type=widget_type,
            static_height=static_height,
            static_width=static_width,
            **geometry,
            **constraints,
        )
