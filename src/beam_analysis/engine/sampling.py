from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from beam_analysis.domain.beam import Beam
from beam_analysis.domain.conditions import DEFLECTION, BENDING_MOMENT, SHEAR_FORCE
from beam_analysis.domain.errors import PositionOutOfBounds
from beam_analysis.domain.results import Series
from beam_analysis.engine.analysis import BeamAnalysis
from beam_analysis.engine.equations import Equation

logger = logging.getLogger(__name__)


def positions(x_start: float, x_end: float, *, step: Optional[float] = None, n: Optional[int] = None) -> np.ndarray:
    """
    Posiciones equiespaciadas en [x_start, x_end], extremos incluidos.
    Si se da n se usa tal cual; si no, n sale del paso (>= 2 puntos).
    """
    a = float(x_start)
    b = float(x_end)
    if b < a:
        raise ValueError(f"Rango inválido: x_end={b:g} < x_start={a:g}")
    if b == a:
        return np.array([a], dtype=float)

    if n is None:
        if step is None or not step > 0:
            raise ValueError("Se requiere step > 0 o n.")
        n = int(math.ceil((b - a) / float(step) - 1e-9)) + 1
    n = max(2, int(n))
    return np.linspace(a, b, n, dtype=float)


def sample_equation(
    equation: Equation,
    *,
    x_start: float = 0.0,
    x_end: Optional[float] = None,
    step: Optional[float] = 0.1,
    n: Optional[int] = None,
    scale: Optional[float] = None,
) -> Series:
    """
    Muestrea la ecuación sobre [x_start, x_end] (por defecto toda la viga).
    Un rango que sale de la viga falla antes de evaluar (sin recortes).
    """
    lo, hi = equation.domain()
    if x_end is None:
        x_end = hi
    for xb in (x_start, x_end):
        if not (lo <= float(xb) <= hi):
            raise PositionOutOfBounds(float(xb), (lo, hi))

    xs = positions(x_start, x_end, step=step, n=n)
    ys = np.array([equation.evaluate(float(x), scale).y for x in xs], dtype=float)

    if ys.size and np.isnan(ys).any():
        logger.warning(
            "Serie %s (%s) con valores nan: revisar EI del material %r y luces.",
            equation.quantity, equation.condition, equation.beam.material.name,
        )

    return Series(quantity=equation.quantity, condition=equation.condition, x=xs, y=ys)


def sample_all(
    engine: BeamAnalysis,
    beam: Beam,
    load: float,
    condition: str,
    *,
    step: Optional[float] = None,
    n: Optional[int] = None,
    scale: Optional[float] = None,
) -> Dict[str, Series]:
    """Las tres series (flecha, momento, corte) sobre toda la viga."""
    if step is None and n is None:
        step = engine.options.sample_step
    if scale is None:
        scale = engine.options.deflection_scale

    results = {
        DEFLECTION: engine.get_deflection(beam, load, condition),
        BENDING_MOMENT: engine.get_bending_moment(beam, load, condition),
        SHEAR_FORCE: engine.get_shear_force(beam, load, condition),
    }
    return {
        q: sample_equation(r.equation, step=step, n=n, scale=scale)
        for q, r in results.items()
    }


def find_extrema(series: Series) -> List[Tuple[str, float, float]]:
    """
    Máximo y mínimo globales de la serie: [("max", x, y), ("min", x, y)].
    Ignora nan; serie vacía o toda nan => [].
    """
    y = np.asarray(series.y, dtype=float)
    if y.size == 0 or np.all(np.isnan(y)):
        return []
    i_max = int(np.nanargmax(y))
    i_min = int(np.nanargmin(y))
    return [
        ("max", float(series.x[i_max]), float(y[i_max])),
        ("min", float(series.x[i_min]), float(y[i_min])),
    ]
