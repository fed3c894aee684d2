from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .config import (
    COL_BOUNDS_DESKTOP,
    COL_BOUNDS_MOBILE,
    COL_BOUNDS_TABLET,
    ROW_BOUNDS,
)


@dataclass(frozen=True)
class BentoSpans:
    col: int
    row: int
    col_tablet: int
    row_tablet: int
    col_mobile: int
    row_mobile: int

    def style(self) -> str:
        return (
            f"--col-span:{self.col}; --row-span:{self.row}; "
            f"--col-span-tablet:{self.col_tablet}; --row-span-tablet:{self.row_tablet}; "
            f"--col-span-mobile:{self.col_mobile}; --row-span-mobile:{self.row_mobile};"
        )


def clamp_span(value: Any, default: int, bounds: Tuple[int, int]) -> int:
    """
    Missing, non-numeric and non-finite values fall back to `default`.
    Everything is floored and then clamped into `bounds`.
    """
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        value = default
    return max(lo, min(hi, math.floor(value)))


def derive_bento(project: Dict[str, Any]) -> BentoSpans:
    featured = project.get("featured") is True

    col = clamp_span(project.get("colSpan"), 6 if featured else 4, COL_BOUNDS_DESKTOP)
    row = clamp_span(project.get("rowSpan"), 2 if featured else 1, ROW_BOUNDS)
    col_tablet = clamp_span(project.get("colSpanTablet"), min(col, 4), COL_BOUNDS_TABLET)
    row_tablet = clamp_span(project.get("rowSpanTablet"), row, ROW_BOUNDS)
    col_mobile = clamp_span(project.get("colSpanMobile"), 4, COL_BOUNDS_MOBILE)
    row_mobile = clamp_span(project.get("rowSpanMobile"), 2 if row > 1 else 1, ROW_BOUNDS)

    return BentoSpans(col, row, col_tablet, row_tablet, col_mobile, row_mobile)
