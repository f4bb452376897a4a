from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from beam_analysis.domain.beam import Beam
from beam_analysis.domain.conditions import (
    SIMPLY_SUPPORTED, TWO_SPAN_UNEQUAL,
    DEFLECTION, BENDING_MOMENT, SHEAR_FORCE,
)
from beam_analysis.domain.errors import PositionOutOfBounds
from beam_analysis.domain.results import SupportReactions
from beam_analysis.engine.equations import Equation

logger = logging.getLogger(__name__)

# EI se guarda en unidades "chicas": EI' = EI / 1000³ y la flecha se devuelve x1000
UNIT_SCALE = 1000.0
DEFAULT_DEFLECTION_SCALE = 2.0


def _div(a: float, b: float) -> float:
    """a/b con nan en lugar de ZeroDivisionError (geometría degenerada)."""
    if b == 0:
        return math.nan
    return a / b


def flexural_rigidity(beam: Beam) -> float:
    """
    EI' = EI / 1000³ desde beam.material.properties["EI"].
    Falta de clave, valor no numérico o EI <= 0 => nan (no se lanza error).
    """
    props = beam.material.properties or {}
    try:
        ei = float(props["EI"])
    except (KeyError, TypeError, ValueError):
        logger.debug("Material %r sin EI numérico: resultado nan", beam.material.name)
        return math.nan
    if not ei > 0.0:
        logger.debug("Material %r con EI=%g no positivo: resultado nan", beam.material.name, ei)
        return math.nan
    return ei / UNIT_SCALE ** 3


class ConditionAnalyzer(ABC):
    """
    Ecuaciones cerradas de una condición de apoyo para carga uniforme w (+ abajo).

    Cada método evalúa una posición; el chequeo de dominio es común:
    0 <= x <= total_length(beam), sin recortar ni extrapolar.
    """
    name: str = ""

    @abstractmethod
    def total_length(self, beam: Beam) -> float:
        ...

    @abstractmethod
    def support_positions(self, beam: Beam) -> Tuple[float, ...]:
        ...

    @abstractmethod
    def reactions(self, beam: Beam, load: float) -> SupportReactions:
        ...

    @abstractmethod
    def _deflection(self, beam: Beam, load: float, x: float, scale: float) -> float:
        ...

    @abstractmethod
    def _bending_moment(self, beam: Beam, load: float, x: float) -> float:
        ...

    @abstractmethod
    def _shear_force(self, beam: Beam, load: float, x: float) -> float:
        ...

    # -------------------------
    # Dominio
    # -------------------------
    def check_position(self, beam: Beam, x: float) -> float:
        L = float(self.total_length(beam))
        x = float(x)
        if not (x >= 0.0 and x <= L):
            raise PositionOutOfBounds(x, (0.0, L))
        return x

    # -------------------------
    # Evaluadores (con chequeo)
    # -------------------------
    def deflection(self, beam: Beam, load: float, x: float, scale: Optional[float] = None) -> float:
        x = self.check_position(beam, x)
        j2 = DEFAULT_DEFLECTION_SCALE if scale is None else float(scale)
        return self._deflection(beam, float(load), x, j2)

    def bending_moment(self, beam: Beam, load: float, x: float) -> float:
        x = self.check_position(beam, x)
        return self._bending_moment(beam, float(load), x)

    def shear_force(self, beam: Beam, load: float, x: float) -> float:
        x = self.check_position(beam, x)
        return self._shear_force(beam, float(load), x)

    def evaluate(self, quantity: str, beam: Beam, load: float, x: float, scale: Optional[float] = None) -> float:
        if quantity == DEFLECTION:
            return self.deflection(beam, load, x, scale)
        if quantity == BENDING_MOMENT:
            return self.bending_moment(beam, load, x)
        if quantity == SHEAR_FORCE:
            return self.shear_force(beam, load, x)
        raise ValueError(f"Magnitud desconocida: {quantity!r}")

    # -------------------------
    # Ecuaciones (lazy)
    # -------------------------
    def deflection_equation(self, beam: Beam, load: float) -> Equation:
        return Equation(analyzer=self, quantity=DEFLECTION, beam=beam, load=load)

    def bending_moment_equation(self, beam: Beam, load: float) -> Equation:
        return Equation(analyzer=self, quantity=BENDING_MOMENT, beam=beam, load=load)

    def shear_force_equation(self, beam: Beam, load: float) -> Equation:
        return Equation(analyzer=self, quantity=SHEAR_FORCE, beam=beam, load=load)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SimplySupported(ConditionAnalyzer):
    """Viga simplemente apoyada, un tramo L = primary_span."""
    name = SIMPLY_SUPPORTED

    def total_length(self, beam: Beam) -> float:
        return float(beam.primary_span)

    def support_positions(self, beam: Beam) -> Tuple[float, ...]:
        return 0.0, float(beam.primary_span)

    def reactions(self, beam: Beam, load: float) -> SupportReactions:
        R = float(load) * float(beam.primary_span) / 2.0
        return SupportReactions(
            condition=self.name,
            positions=self.support_positions(beam),
            values=(R, R),
        )

    def _deflection(self, beam: Beam, load: float, x: float, scale: float) -> float:
        w = load
        L = float(beam.primary_span)
        EI = flexural_rigidity(beam)
        return -((w * x) / (24.0 * EI)) * (L ** 3 - 2.0 * L * x ** 2 + x ** 3) * scale * UNIT_SCALE

    def _bending_moment(self, beam: Beam, load: float, x: float) -> float:
        L = float(beam.primary_span)
        return -((load * x / 2.0) * (L - x))

    def _shear_force(self, beam: Beam, load: float, x: float) -> float:
        L = float(beam.primary_span)
        return load * (L / 2.0 - x)


@dataclass(frozen=True)
class TwoSpanState:
    """Hiperestático resuelto: momento interior m (hogging) y reacciones (+ arriba)."""
    m: float
    R1: float
    R2: float
    R3: float


class TwoSpanUnequal(ConditionAnalyzer):
    """
    Viga continua de dos tramos desiguales L1 = primary_span, L2 = secondary_span,
    apoyos en 0, L1 y L1+L2, carga w sobre todo el largo.

    El momento sobre el apoyo interior sale de la ecuación de los tres momentos:
        2·m·(L1 + L2) = w·(L1³ + L2³)/4
    Convención de momento: sagging +, por lo que M(L1) = -m.
    """
    name = TWO_SPAN_UNEQUAL

    def total_length(self, beam: Beam) -> float:
        return float(beam.primary_span) + float(beam.secondary_span)

    def support_positions(self, beam: Beam) -> Tuple[float, ...]:
        L1 = float(beam.primary_span)
        return 0.0, L1, L1 + float(beam.secondary_span)

    @staticmethod
    def solve(beam: Beam, load: float) -> TwoSpanState:
        """Se recalcula en cada evaluación (sin cache)."""
        w = float(load)
        L1 = float(beam.primary_span)
        L2 = float(beam.secondary_span)

        m = _div(w * L2 ** 3 + w * L1 ** 3, 8.0 * (L1 + L2))
        R1 = w * L1 / 2.0 - _div(m, L1)
        R3 = w * L2 / 2.0 - _div(m, L2)
        R2 = w * (L1 + L2) - R1 - R3
        return TwoSpanState(m=m, R1=R1, R2=R2, R3=R3)

    def reactions(self, beam: Beam, load: float) -> SupportReactions:
        st = self.solve(beam, load)
        if any(math.isnan(v) for v in (st.R1, st.R2, st.R3)):
            logger.warning(
                "Geometría de dos tramos degenerada (L1=%g, L2=%g): reacciones nan",
                beam.primary_span, beam.secondary_span,
            )
        return SupportReactions(
            condition=self.name,
            positions=self.support_positions(beam),
            values=(st.R1, st.R2, st.R3),
            interior_moment=st.m,
        )

    def _deflection(self, beam: Beam, load: float, x: float, scale: float) -> float:
        w = load
        L1 = float(beam.primary_span)
        L2 = float(beam.secondary_span)
        EI = flexural_rigidity(beam)
        st = self.solve(beam, load)

        if x <= L1:
            return (x / (24.0 * EI)) * (
                4.0 * st.R1 * x ** 2 - w * x ** 3 + w * L1 ** 3 - 4.0 * st.R1 * L1 ** 2
            ) * UNIT_SCALE * scale

        # tramo 2: misma expresión medida desde el apoyo derecho
        u = L1 + L2 - x
        return (u / (24.0 * EI)) * (
            4.0 * st.R3 * u ** 2 - w * u ** 3 + w * L2 ** 3 - 4.0 * st.R3 * L2 ** 2
        ) * UNIT_SCALE * scale

    def _bending_moment(self, beam: Beam, load: float, x: float) -> float:
        w = load
        L1 = float(beam.primary_span)
        st = self.solve(beam, load)
        if x <= L1:
            return st.R1 * x - 0.5 * w * x ** 2
        return st.R1 * x + st.R2 * (x - L1) - 0.5 * w * x ** 2

    def _shear_force(self, beam: Beam, load: float, x: float) -> float:
        w = load
        L1 = float(beam.primary_span)
        st = self.solve(beam, load)
        if x <= L1:
            return st.R1 - w * x
        return (st.R1 + st.R2) - w * x
