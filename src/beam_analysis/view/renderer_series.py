from __future__ import annotations

import os
from typing import Dict, Optional, Sequence

import numpy as np
from matplotlib.figure import Figure

from beam_analysis.domain.conditions import (
    DEFLECTION, BENDING_MOMENT, SHEAR_FORCE, QUANTITY_LABELS, condition_label,
)
from beam_analysis.domain.results import Series
from beam_analysis.engine.sampling import find_extrema
from beam_analysis.view.style import PlotStyle

# Unidades de eje (las del usuario, el motor no las fija)
Y_LABELS = {
    DEFLECTION: "y",
    BENDING_MOMENT: "M",
    SHEAR_FORCE: "V",
}


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def _annotate_extrema(ax, series: Series, style: PlotStyle):
    """
    Marca máximo y mínimo globales con su valor.
    - Máximo: label arriba
    - Mínimo: label abajo
    - No etiqueta valores ≈ 0 (p.ej. corte nulo en una serie constante)
    """
    extrema = find_extrema(series)
    if not extrema:
        return

    y = np.asarray(series.y, dtype=float)
    max_abs = float(np.nanmax(np.abs(y))) if y.size else 0.0
    if max_abs <= 0.0:
        return

    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * max(1e-9, float(x_max - x_min))
    my = 0.03 * max(1e-9, float(y_max - y_min))

    seen = set()
    for kind, xi, yi in extrema:
        if abs(yi) < 0.01 * max_abs or (xi, yi) in seen:
            continue
        seen.add((xi, yi))

        ax.scatter([xi], [yi], s=18, zorder=6)
        if kind == "max":
            tx, ty, va = xi, yi + my, "bottom"
        else:
            tx, ty, va = xi, yi - my, "top"

        tx = _clamp(tx, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)
        ax.text(tx, ty, _fmt_plain(yi, 3), ha="center", va=va, fontsize=style.font_size, zorder=7)


# -------------------------
# Render
# -------------------------
def render_series(
    ax,
    series: Series,
    style: Optional[PlotStyle] = None,
    *,
    title: Optional[str] = None,
    ylabel: Optional[str] = None,
    supports: Sequence[float] = (),
):
    style = style or PlotStyle()
    ax.clear()

    x = np.asarray(series.x, dtype=float)
    y = np.asarray(series.y, dtype=float)

    ax.plot(x, y, linewidth=style.line_lw, color=style.line_color)
    ax.axhline(0.0, linewidth=style.zero_lw, color=style.zero_color)

    if supports:
        ax.scatter(list(supports), [0.0] * len(supports), marker="^",
                   s=style.support_marker_size, color=style.support_color, zorder=5)

    if x.size:
        ax.set_xlim(float(x[0]), float(x[-1]) if x[-1] > x[0] else float(x[0]) + 1.0)

    ymax = float(np.nanmax(np.abs(y))) if y.size and not np.all(np.isnan(y)) else 0.0
    if ymax <= 0.0:
        ymax = 1.0
    ax.set_ylim(-ymax * style.y_pad, ymax * style.y_pad)

    _annotate_extrema(ax, series, style)

    ax.set_ylabel(ylabel or Y_LABELS.get(series.quantity, "y"))
    ax.set_xlabel("x")
    ax.set_title(title or f"{QUANTITY_LABELS.get(series.quantity, series.quantity)} - {condition_label(series.condition)}")
    ax.grid(True, alpha=style.grid_alpha)


def render_triplet(axes, series_map: Dict[str, Series], style: Optional[PlotStyle] = None, supports: Sequence[float] = ()):
    """axes: tres ejes en orden flecha, momento, corte."""
    for ax, q in zip(axes, (DEFLECTION, BENDING_MOMENT, SHEAR_FORCE)):
        s = series_map.get(q)
        if s is None:
            ax.clear()
            continue
        render_series(ax, s, style, supports=supports)


def save_series_png(out_dir: str, series_map: Dict[str, Series], style: Optional[PlotStyle] = None,
                    supports: Sequence[float] = (), dpi: int = 150) -> Dict[str, str]:
    """
    Un PNG por serie en out_dir (para la memoria PDF).
    Devuelve {quantity: path}.
    """
    os.makedirs(out_dir, exist_ok=True)
    out: Dict[str, str] = {}
    for q, s in series_map.items():
        fig = Figure(figsize=(8.0, 3.2))
        ax = fig.add_subplot(1, 1, 1)
        render_series(ax, s, style, supports=supports)
        fig.tight_layout()
        path = os.path.join(out_dir, f"{q}.png")
        fig.savefig(path, dpi=dpi)
        out[q] = path
    return out
