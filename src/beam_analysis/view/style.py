from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class PlotStyle:
    line_lw: float = 1.4
    line_color: str = "tab:blue"

    zero_lw: float = 1.0
    zero_color: str = "black"

    support_marker_size: float = 40.0
    support_color: str = "tab:gray"

    grid_alpha: float = 0.25
    font_size: int = 8

    # margen vertical relativo al máximo |y|
    y_pad: float = 1.15
