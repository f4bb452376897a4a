from __future__ import annotations

from typing import Tuple

SIMPLY_SUPPORTED = "simply-supported"
TWO_SPAN_UNEQUAL = "two-span-unequal"

CONDITION_NAMES: Tuple[str, ...] = (SIMPLY_SUPPORTED, TWO_SPAN_UNEQUAL)

# Textos para UI / memoria
CONDITION_LABELS = {
    SIMPLY_SUPPORTED: "Simplemente apoyada",
    TWO_SPAN_UNEQUAL: "Continua de dos tramos desiguales",
}

DEFLECTION = "deflection"
BENDING_MOMENT = "bending-moment"
SHEAR_FORCE = "shear-force"

QUANTITIES: Tuple[str, ...] = (DEFLECTION, BENDING_MOMENT, SHEAR_FORCE)

QUANTITY_LABELS = {
    DEFLECTION: "Flecha y(x)",
    BENDING_MOMENT: "Momento flector M(x)",
    SHEAR_FORCE: "Corte V(x)",
}


def condition_label(name: str) -> str:
    return CONDITION_LABELS.get((name or "").strip(), name)
