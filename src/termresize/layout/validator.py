"""Layout validator.

Checks a window geometry against terminal bounds, size constraints,
overlaps and bottom anchoring, and dry-runs the resize engine at a list of
terminal sizes starting from a design layout.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum

from termresize import config
from termresize.layout.orchestrator import ResizeOrchestrator
from termresize.layout.types import TerminalSize, Window


class IssueKind(Enum):
    """Issue severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class LayoutIssue:
    """A single problem found in a layout."""

    window: str
    message: str
    kind: IssueKind = IssueKind.ERROR


@dataclass
class ValidationResult:
    """Issues found after resizing to one terminal size."""

    size: TerminalSize
    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(issue.kind == IssueKind.ERROR for issue in self.issues)


def rects_intersect(a: Window, b: Window) -> bool:
    """Check whether two windows overlap (touching edges do not count)."""
    return not (
        a.right <= b.col or b.right <= a.col or a.bottom <= b.row or b.bottom <= a.row
    )


def check_layout(windows: list[Window], rows: int, cols: int) -> list[LayoutIssue]:
    """Check bounds, constraints, overlaps and anchoring.

    Args:
        windows: Windows to check (not modified).
        rows: Terminal height.
        cols: Terminal width.

    Returns:
        List of issues, empty if the layout is clean.
    """
    issues: list[LayoutIssue] = []

    for w in windows:
        if w.min_rows is not None and w.rows < w.min_rows:
            issues.append(LayoutIssue(w.id, f"rows {w.rows} < min_rows {w.min_rows}"))
        if w.min_cols is not None and w.cols < w.min_cols:
            issues.append(LayoutIssue(w.id, f"cols {w.cols} < min_cols {w.min_cols}"))
        if w.max_rows is not None and w.rows > w.max_rows:
            issues.append(LayoutIssue(w.id, f"rows {w.rows} > max_rows {w.max_rows}"))
        if w.max_cols is not None and w.cols > w.max_cols:
            issues.append(LayoutIssue(w.id, f"cols {w.cols} > max_cols {w.max_cols}"))

        if w.bottom > rows:
            issues.append(LayoutIssue(w.id, f"row+rows {w.bottom} exceeds height {rows}"))
        if w.right > cols:
            issues.append(LayoutIssue(w.id, f"col+cols {w.right} exceeds width {cols}"))

        if w.widget_type in config.BOTTOM_ANCHORED_WIDGETS:
            expected_row = max(rows - w.rows, 0)
            if w.row != expected_row:
                issues.append(LayoutIssue(
                    w.id, f"{w.widget_type} row {w.row} != anchored {expected_row}"
                ))

    for i, a in enumerate(windows):
        for b in windows[i + 1:]:
            if rects_intersect(a, b):
                issues.append(LayoutIssue(a.id, f"overlaps with '{b.id}'"))

    return issues


def validate_sizes(
    windows: list[Window],
    design_size: TerminalSize,
    sizes: list[TerminalSize],
) -> list[ValidationResult]:
    """Resize a design layout to each target size and check the result.

    Every size starts again from the design geometry. The input windows
    are never modified.

    Args:
        windows: Design layout.
        design_size: Terminal size the design layout was made for.
        sizes: Target terminal sizes.

    Returns:
        One ValidationResult per target size, in order.
    """
    working = copy.deepcopy(windows)
    orchestrator = ResizeOrchestrator(working, design_size.rows, design_size.cols)
    orchestrator.remember_design()

    results = []
    for size in sizes:
        orchestrator.rescale_from_design(size.rows, size.cols)
        issues = check_layout(working, size.rows, size.cols)
        results.append(ValidationResult(size=size, issues=issues))
    return results
