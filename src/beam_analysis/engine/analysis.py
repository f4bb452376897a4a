from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Tuple

from beam_analysis.domain.beam import Beam
from beam_analysis.domain.conditions import SIMPLY_SUPPORTED, TWO_SPAN_UNEQUAL
from beam_analysis.domain.errors import InvalidCondition
from beam_analysis.domain.results import AnalysisResult, SupportReactions
from beam_analysis.engine.analyzers import ConditionAnalyzer, SimplySupported, TwoSpanUnequal
from beam_analysis.engine.options import AnalysisOptions

logger = logging.getLogger(__name__)

# Tabla fija condición -> analizador (solo lectura)
ANALYZERS: Mapping[str, ConditionAnalyzer] = MappingProxyType({
    SIMPLY_SUPPORTED: SimplySupported(),
    TWO_SPAN_UNEQUAL: TwoSpanUnequal(),
})


class BeamAnalysis:
    """
    Despacho por nombre de condición.

    get_deflection / get_bending_moment / get_shear_force devuelven
    AnalysisResult(beam, load, equation); la ecuación no se evalúa acá.
    Una condición desconocida lanza InvalidCondition sin mirar beam ni load.
    """

    def __init__(self, options: AnalysisOptions | None = None):
        self.options = options or AnalysisOptions()
        self.analyzers: Mapping[str, ConditionAnalyzer] = ANALYZERS

    def conditions(self) -> Tuple[str, ...]:
        return tuple(self.analyzers.keys())

    def analyzer(self, condition: str) -> ConditionAnalyzer:
        analyzer = self.analyzers.get(condition) if isinstance(condition, str) else None
        if analyzer is None:
            raise InvalidCondition(condition, self.conditions())
        return analyzer

    def get_deflection(self, beam: Beam, load: float, condition: str) -> AnalysisResult:
        analyzer = self.analyzer(condition)
        logger.debug("Flecha: %s", condition)
        return AnalysisResult(beam=beam, load=load, equation=analyzer.deflection_equation(beam, load))

    def get_bending_moment(self, beam: Beam, load: float, condition: str) -> AnalysisResult:
        analyzer = self.analyzer(condition)
        logger.debug("Momento flector: %s", condition)
        return AnalysisResult(beam=beam, load=load, equation=analyzer.bending_moment_equation(beam, load))

    def get_shear_force(self, beam: Beam, load: float, condition: str) -> AnalysisResult:
        analyzer = self.analyzer(condition)
        logger.debug("Corte: %s", condition)
        return AnalysisResult(beam=beam, load=load, equation=analyzer.shear_force_equation(beam, load))

    def get_reactions(self, beam: Beam, load: float, condition: str) -> SupportReactions:
        return self.analyzer(condition).reactions(beam, load)

    def total_length(self, beam: Beam, condition: str) -> float:
        return self.analyzer(condition).total_length(beam)
