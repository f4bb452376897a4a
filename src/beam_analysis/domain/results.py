from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Tuple

import numpy as np

from beam_analysis.domain.beam import Beam

if TYPE_CHECKING:
    from beam_analysis.engine.equations import Equation


@dataclass(frozen=True)
class Sample:
    x: float
    y: float


@dataclass(frozen=True)
class AnalysisResult:
    """Ecuación + datos de entrada (trazabilidad)."""
    beam: Beam
    load: float
    equation: "Equation"


@dataclass(frozen=True)
class SupportReactions:
    """
    Reacciones de apoyo (+ arriba) ordenadas de izquierda a derecha.
    interior_moment: magnitud del momento sobre el apoyo interior (0 si no hay).
    """
    condition: str
    positions: Tuple[float, ...]
    values: Tuple[float, ...]
    interior_moment: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {f"R{i + 1}": float(v) for i, v in enumerate(self.values)}


@dataclass(frozen=True, eq=False)
class Series:
    """Ecuación muestreada, lista para plot."""
    quantity: str
    condition: str
    x: np.ndarray
    y: np.ndarray

    def samples(self):
        return [Sample(x=float(a), y=float(b)) for a, b in zip(self.x, self.y)]
