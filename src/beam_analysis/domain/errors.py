from __future__ import annotations

from typing import Sequence, Tuple


class BeamAnalysisError(ValueError):
    """Error base del motor (subclase de ValueError para la UI)."""


class InvalidCondition(BeamAnalysisError):
    def __init__(self, name: str, supported: Sequence[str] = ()):
        self.name = name
        self.supported = tuple(supported)
        msg = f"Condición inválida: {name!r}"
        if self.supported:
            msg += f" (disponibles: {', '.join(self.supported)})"
        super().__init__(msg)


class PositionOutOfBounds(BeamAnalysisError):
    def __init__(self, x: float, valid_range: Tuple[float, float]):
        self.x = x
        self.valid_range = (float(valid_range[0]), float(valid_range[1]))
        super().__init__(
            f"x={x:g} fuera de la viga [{self.valid_range[0]:g}, {self.valid_range[1]:g}]"
        )
