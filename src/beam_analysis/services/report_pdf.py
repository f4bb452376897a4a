# path: src/beam_analysis/services/report_pdf.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from beam_analysis.domain.beam import Beam
from beam_analysis.domain.conditions import (
    SIMPLY_SUPPORTED, TWO_SPAN_UNEQUAL, DEFLECTION, BENDING_MOMENT, SHEAR_FORCE,
    QUANTITY_LABELS, condition_label,
)
from beam_analysis.domain.results import Series
from beam_analysis.engine.analysis import BeamAnalysis
from beam_analysis.engine.sampling import find_extrema

logger = logging.getLogger(__name__)

# Nota: este módulo NO depende de Qt. Acepta paths a imágenes ya generadas
# (flecha, momento y corte) y datos pre-calculados desde el motor/UI.


@dataclass(frozen=True)
class ReportHeader:
    titulo: str
    cliente_proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


@dataclass(frozen=True)
class ReportCase:
    condition: str
    primary_span: float
    secondary_span: float
    load: float
    material_name: str
    EI: float
    deflection_scale: float = 2.0


@dataclass(frozen=True)
class ReportResults:
    reactions: Sequence[Tuple[str, float, float]]      # (label, x, R)
    interior_moment: Optional[float]
    extremos_y: Sequence[Tuple[str, float, float]]     # (max/min, x, y)
    extremos_M: Sequence[Tuple[str, float, float]]
    extremos_V: Sequence[Tuple[str, float, float]]


# Ecuaciones mostradas en la memoria
_EQUATIONS: Dict[str, List[str]] = {
    SIMPLY_SUPPORTED: [
        "EI' = EI / 1000^3",
        "y(x) = -(w·x / (24·EI')) · (L^3 - 2·L·x^2 + x^3) · j2 · 1000",
        "M(x) = -(w·x / 2) · (L - x)",
        "V(x) = w · (L/2 - x)",
        "R1 = R2 = w·L / 2",
    ],
    TWO_SPAN_UNEQUAL: [
        "m  = w·(L1^3 + L2^3) / (8·(L1 + L2))",
        "R1 = w·L1/2 - m/L1 ;  R3 = w·L2/2 - m/L2 ;  R2 = w·(L1+L2) - R1 - R3",
        "x <= L1:  M = R1·x - w·x^2/2 ;  V = R1 - w·x",
        "x >  L1:  M = R1·x + R2·(x - L1) - w·x^2/2 ;  V = R1 + R2 - w·x",
        "x <= L1:  y = x/(24·EI') · (4·R1·x^2 - w·x^3 + w·L1^3 - 4·R1·L1^2) · 1000 · j2",
        "x >  L1:  u = L1 + L2 - x ;  y = u/(24·EI') · (4·R3·u^2 - w·u^3 + w·L2^3 - 4·R3·L2^2) · 1000 · j2",
    ],
}

_ASSUMPTIONS = [
    "Hipótesis: material elástico lineal, pequeñas deformaciones (Euler-Bernoulli), viga prismática, carga estática.",
    "Carga w uniformemente distribuida sobre todo el largo, positiva hacia abajo.",
    "Reacciones positivas hacia arriba. Viga continua: momento interior por ecuación de los tres momentos.",
    "Rigidez: EI' = EI / 1000³; la flecha se informa ×1000 y afectada por el factor j2.",
]


def export_report_pdf(
    out_pdf_path: str,
    header: ReportHeader,
    case: ReportCase,
    results: ReportResults,
    imagenes: Optional[Dict[str, str]] = None,
    page_size=pagesizes.A4,
) -> None:
    """
    Genera la memoria de cálculo en PDF (A4).

    imagenes: {"deflection": path, "bending-moment": path, "shear-force": path}
    (las faltantes se reemplazan por una nota en el PDF).
    """
    imgs = {(k or "").strip().lower(): (v or "").strip() for k, v in (imagenes or {}).items()}

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    fecha = header.fecha or datetime.now()
    story: List[object] = [
        Paragraph(header.titulo, styles["H1c"]),
        Spacer(1, 4 * mm),
        _table(
            [
                ["Proyecto / Cliente:", header.cliente_proyecto or "-"],
                ["Autor:", header.autor or "-"],
                ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
                ["Revisión:", header.revision],
                ["Condición:", condition_label(case.condition)],
            ],
            [40 * mm, 140 * mm],
            header=False,
        ),
        Spacer(1, 6 * mm),
    ]

    # Base teórica
    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    for it in _ASSUMPTIONS:
        story.append(Paragraph(f"• {it}", styles["BodyText"]))
        story.append(Spacer(1, 1.2 * mm))

    story.append(Paragraph("Ecuaciones principales", styles["Heading3"]))
    for ln in _EQUATIONS.get(case.condition, []):
        story.append(Paragraph(escape(ln).replace(" ", "&nbsp;"), styles["MonoSmall"]))
    story.append(Spacer(1, 3 * mm))

    # Datos
    two_span = case.condition == TWO_SPAN_UNEQUAL
    story.append(Paragraph("Datos del caso", styles["Heading2"]))
    story.append(_table(
        [
            ["Luz principal L1", _fmt(case.primary_span, 3)],
            ["Luz secundaria L2", _fmt(case.secondary_span, 3) if two_span else "-"],
            ["Carga w (+ abajo)", _fmt(case.load, 4)],
            ["Material", case.material_name or "-"],
            ["EI", f"{case.EI:g}"],
            ["Factor j2", _fmt(case.deflection_scale, 3)],
        ],
        [55 * mm, 125 * mm],
        header=False,
    ))
    story.append(Spacer(1, 4 * mm))

    # Resultados
    story.append(Paragraph("Resultados", styles["Heading2"]))
    story.append(Paragraph("Reacciones de apoyo", styles["Heading3"]))
    rows = [["Apoyo", "x", "R (+ arriba)"]]
    rows += [[label, _fmt(x, 3), _fmt(r, 4)] for label, x, r in results.reactions]
    story.append(_table(rows, [40 * mm, 55 * mm, 85 * mm], header=True))
    if results.interior_moment is not None:
        story.append(Spacer(1, 2 * mm))
        story.append(Paragraph(f"Momento sobre apoyo interior: m = {_fmt(results.interior_moment, 4)}", styles["Small"]))
    story.append(Spacer(1, 3 * mm))

    for title, col, extremos in (
        ("Extremos de y(x)", "y", results.extremos_y),
        ("Extremos de M(x)", "M", results.extremos_M),
        ("Extremos de V(x)", "V", results.extremos_V),
    ):
        if not extremos:
            continue
        story.append(Paragraph(title, styles["Heading3"]))
        rows = [["Tipo", "x", col]] + [[kind, _fmt(x, 3), _fmt(v, 4)] for kind, x, v in extremos]
        story.append(_table(rows, [30 * mm, 55 * mm, 95 * mm], header=True))
        story.append(Spacer(1, 2 * mm))

    # Figuras
    story.append(PageBreak())
    story.append(Paragraph("Figuras", styles["Heading2"]))
    for key in (DEFLECTION, BENDING_MOMENT, SHEAR_FORCE):
        story.extend(_figure(key, QUANTITY_LABELS[key], imgs, styles, max_w=180 * mm, max_h=75 * mm))

    doc.build(story)
    logger.info("Memoria exportada: %s", out_pdf_path)


# ----------------- helpers -----------------

_BASE_TABLE = [
    ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
    ("LEFTPADDING", (0, 0), (-1, -1), 5),
    ("RIGHTPADDING", (0, 0), (-1, -1), 5),
    ("TOPPADDING", (0, 0), (-1, -1), 3),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
]


def _table(rows: List[List[str]], col_widths: List[float], *, header: bool) -> Table:
    """Tabla clave/valor (header=False) o grilla con encabezado gris (header=True)."""
    ts = list(_BASE_TABLE)
    if header:
        ts += [
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    else:
        ts += [
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
        ]
    t = Table(rows, colWidths=col_widths, repeatRows=1 if header else 0)
    t.setStyle(TableStyle(ts))
    return t


def _fmt(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _figure(key: str, title: str, imgs: Dict[str, str], styles, *, max_w: float, max_h: float) -> List[object]:
    out: List[object] = [Paragraph(title, styles["Heading3"])]
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        img = Image(path)
        iw, ih = img.imageWidth, img.imageHeight
        if iw > 0 and ih > 0:
            k = min(max_w / iw, max_h / ih, 1.0)
            img.drawWidth = iw * k
            img.drawHeight = ih * k
        out.append(img)
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        out.append(Paragraph(f"(Sin imagen: '{key}' no disponible)", styles["Small"]))
    out.append(Spacer(1, 3 * mm))
    return out


def collect_report_data(
    engine: BeamAnalysis,
    beam: Beam,
    load: float,
    condition: str,
    series: Dict[str, Series],
    deflection_scale: float = 2.0,
) -> Tuple[ReportCase, ReportResults]:
    """Arma ReportCase / ReportResults desde el motor y las series ya muestreadas."""
    reac = engine.get_reactions(beam, load, condition)
    props = beam.material.properties or {}
    try:
        ei = float(props.get("EI", float("nan")))
    except (TypeError, ValueError):
        ei = float("nan")

    case = ReportCase(
        condition=condition,
        primary_span=float(beam.primary_span),
        secondary_span=float(beam.secondary_span),
        load=float(load),
        material_name=beam.material.name,
        EI=ei,
        deflection_scale=float(deflection_scale),
    )

    reactions = [
        (label, float(x), float(r))
        for (label, r), x in zip(reac.as_dict().items(), reac.positions)
    ]

    def ext(q: str):
        s = series.get(q)
        return find_extrema(s) if s is not None else []

    results = ReportResults(
        reactions=reactions,
        interior_moment=reac.interior_moment if condition == TWO_SPAN_UNEQUAL else None,
        extremos_y=ext(DEFLECTION),
        extremos_M=ext(BENDING_MOMENT),
        extremos_V=ext(SHEAR_FORCE),
    )
    return case, results
