from __future__ import annotations

from dataclasses import dataclass

from beam_analysis.domain.conditions import SIMPLY_SUPPORTED


@dataclass(frozen=True)
class AnalysisOptions:
    condition: str = SIMPLY_SUPPORTED

    # factor de ajuste de rigidez aplicado a la flecha (j2)
    deflection_scale: float = 2.0

    # paso de muestreo en x (unidades de la luz)
    sample_step: float = 0.1
