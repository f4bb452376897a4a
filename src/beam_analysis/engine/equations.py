from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from beam_analysis.domain.beam import Beam
from beam_analysis.domain.results import Sample

if TYPE_CHECKING:
    from beam_analysis.engine.analyzers import ConditionAnalyzer


@dataclass(frozen=True)
class Equation:
    """
    Ecuación de una magnitud (flecha, momento o corte) cerrada sobre (beam, load).

    No calcula nada al construirse: toda la física corre en evaluate(x).
    """
    analyzer: "ConditionAnalyzer"
    quantity: str
    beam: Beam
    load: float

    @property
    def condition(self) -> str:
        return self.analyzer.name

    def evaluate(self, x: float, scale: Optional[float] = None) -> Sample:
        y = self.analyzer.evaluate(self.quantity, self.beam, self.load, x, scale)
        return Sample(x=float(x), y=float(y))

    def __call__(self, x: float, scale: Optional[float] = None) -> Sample:
        return self.evaluate(x, scale)

    def domain(self) -> Tuple[float, float]:
        return 0.0, self.analyzer.total_length(self.beam)
