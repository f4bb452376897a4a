from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from beam_analysis.domain.conditions import TWO_SPAN_UNEQUAL


@dataclass(frozen=True)
class Material:
    """
    Material de la viga.

    properties: rigideces por nombre, p.ej. {"EI": 210000.0, "GA": 0.0}.
    Se guarda una copia de solo lectura: modificar el dict original después
    no altera las ecuaciones ya construidas.
    No se valida la presencia de claves: si falta "EI" la flecha sale nan.
    El hash usa solo el nombre (properties participa en ==, no en hash).
    """
    name: str
    properties: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


@dataclass(frozen=True)
class Beam:
    """
    Geometría de la viga.
    primary_span: tramo principal (> 0)
    secondary_span: segundo tramo (>= 0), solo tiene sentido en condiciones de dos tramos
    """
    primary_span: float
    secondary_span: float = 0.0
    material: Material = field(default_factory=lambda: Material(name="No Name"))


def check_spans(beam: Beam, condition: str) -> None:
    """
    Valida las luces para una condición de apoyo.
    El motor no falla con luces nulas (devuelve nan); esto es para la entrada de datos.
    """
    if beam.primary_span <= 0.0:
        raise ValueError("La luz principal L1 debe ser > 0.")
    if condition == TWO_SPAN_UNEQUAL and beam.secondary_span <= 0.0:
        raise ValueError("Viga de dos tramos: la luz secundaria L2 debe ser > 0.")
