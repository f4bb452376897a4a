from __future__ import annotations

import logging
import shutil
import sys
import tempfile
import traceback
from typing import Dict, Optional

import matplotlib
matplotlib.use("QtAgg")
import matplotlib.pyplot as plt

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QDoubleSpinBox, QPushButton, QSplitter, QMessageBox, QFileDialog,
    QComboBox, QPlainTextEdit, QSizePolicy,
)
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from beam_analysis.domain.beam import Beam, Material, check_spans
from beam_analysis.domain.conditions import TWO_SPAN_UNEQUAL, condition_label
from beam_analysis.domain.results import Series
from beam_analysis.engine.analysis import BeamAnalysis
from beam_analysis.engine.sampling import sample_all
from beam_analysis.materials.material_db import MaterialDB, default_materials_path
from beam_analysis.services.report_pdf import ReportHeader, collect_report_data, export_report_pdf
from beam_analysis.view.renderer_series import render_triplet, save_series_png
from beam_analysis.view.style import PlotStyle

logger = logging.getLogger(__name__)

CUSTOM_MATERIAL = "(EI manual)"


def _spin(lo: float, hi: float, val: float, decimals: int = 3, step: float = 0.1) -> QDoubleSpinBox:
    sp = QDoubleSpinBox()
    sp.setRange(lo, hi)
    sp.setDecimals(decimals)
    sp.setSingleStep(step)
    sp.setValue(val)
    sp.setKeyboardTracking(False)
    return sp


def _fmt_plain(v, decimals: int = 2) -> str:
    if v is None:
        return "-"
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


class BeamAnalysisApp(QMainWindow):
    def __init__(self, engine: Optional[BeamAnalysis] = None):
        super().__init__()
        self.setWindowTitle("beam_analysis - Flecha / Momento / Corte")
        self.resize(1300, 850)

        self.engine = engine or BeamAnalysis()
        self.style_plot = PlotStyle()
        self._series: Dict[str, Series] = {}
        self._last_input = None

        self.material_db: Optional[MaterialDB] = None
        try:
            self.material_db = MaterialDB.from_txt(default_materials_path())
        except (FileNotFoundError, ValueError) as e:
            logger.warning("Catálogo de materiales no disponible: %s", e)

        root = QWidget()
        self.setCentralWidget(root)
        main = QHBoxLayout(root)
        main.setContentsMargins(8, 8, 8, 8)

        splitter = QSplitter(Qt.Horizontal)
        splitter.setChildrenCollapsible(False)
        main.addWidget(splitter)

        # LEFT: entradas
        left = QWidget()
        left_lay = QVBoxLayout(left)
        left_lay.setContentsMargins(0, 0, 0, 0)

        form = QFormLayout()
        self.cmb_condition = QComboBox()
        for name in self.engine.conditions():
            self.cmb_condition.addItem(condition_label(name), name)
        idx = self.cmb_condition.findData(self.engine.options.condition)
        if idx >= 0:
            self.cmb_condition.setCurrentIndex(idx)

        self.primary_span = _spin(0.001, 1e6, 4.0)
        self.secondary_span = _spin(0.0, 1e6, 0.0)
        self.cmb_material = QComboBox()
        self.cmb_material.addItem(CUSTOM_MATERIAL)
        if self.material_db is not None:
            for n in self.material_db.names():
                self.cmb_material.addItem(n)
        self.EI = _spin(0.0, 1e18, 210000.0, decimals=1, step=1000.0)
        self.load = _spin(-1e9, 1e9, 10.0, decimals=4, step=1.0)
        self.j2 = _spin(0.0, 1e3, self.engine.options.deflection_scale, decimals=3, step=0.5)

        form.addRow("Condición", self.cmb_condition)
        form.addRow("Luz principal L1", self.primary_span)
        form.addRow("Luz secundaria L2", self.secondary_span)
        form.addRow("Material", self.cmb_material)
        form.addRow("EI", self.EI)
        form.addRow("Carga w (+ abajo)", self.load)
        form.addRow("Factor j2 (flecha)", self.j2)
        left_lay.addLayout(form)

        self.btn_calc = QPushButton("Calcular")
        self.btn_export_memoria = QPushButton("Exportar memoria de cálculo (PDF)")
        left_lay.addWidget(self.btn_calc)
        left_lay.addWidget(self.btn_export_memoria)

        left_lay.addWidget(QLabel("Notas"))
        self.notes = QPlainTextEdit()
        self.notes.setReadOnly(True)
        left_lay.addWidget(self.notes, 1)
        left.setMinimumWidth(340)
        splitter.addWidget(left)

        # RIGHT: gráficos
        self.fig = plt.Figure()
        gs = self.fig.add_gridspec(3, 1, hspace=0.6)
        self.ax_y = self.fig.add_subplot(gs[0, 0])
        self.ax_M = self.fig.add_subplot(gs[1, 0], sharex=self.ax_y)
        self.ax_V = self.fig.add_subplot(gs[2, 0], sharex=self.ax_y)
        self.canvas = FigureCanvas(self.fig)
        self.canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        splitter.addWidget(self.canvas)
        splitter.setSizes([340, 960])

        self.cmb_condition.currentIndexChanged.connect(self._on_condition_changed)
        self.cmb_material.currentIndexChanged.connect(self._on_material_changed)
        self.btn_calc.clicked.connect(self._calculate)
        self.btn_export_memoria.clicked.connect(self._export_memoria_pdf)

        self._on_condition_changed()

    def _condition(self) -> str:
        return self.cmb_condition.currentData()

    def _on_condition_changed(self, *_):
        two_span = self._condition() == TWO_SPAN_UNEQUAL
        self.secondary_span.setEnabled(two_span)
        # L2 = 0 deja la viga como ménsula apuntalada (R2, R3 = nan)
        if two_span and self.secondary_span.value() <= 0.0:
            self.secondary_span.setValue(self.primary_span.value())

    def _on_material_changed(self, *_):
        name = self.cmb_material.currentText()
        mat = self.material_db.get(name) if self.material_db is not None else None
        self.EI.setEnabled(mat is None)
        if mat is not None:
            self.EI.setValue(float(mat.properties["EI"]))

    def parse_inputs(self):
        name = self.cmb_material.currentText()
        mat = self.material_db.get(name) if self.material_db is not None else None
        if mat is None:
            mat = Material(name="No Name", properties={"EI": float(self.EI.value())})

        condition = self._condition()
        secondary = float(self.secondary_span.value()) if condition == TWO_SPAN_UNEQUAL else 0.0
        beam = Beam(primary_span=float(self.primary_span.value()), secondary_span=secondary, material=mat)
        check_spans(beam, condition)
        return beam, float(self.load.value()), condition, float(self.j2.value())

    def _calculate(self):
        try:
            beam, load, condition, j2 = self.parse_inputs()
            series = sample_all(self.engine, beam, load, condition, scale=j2)
            supports = self.engine.analyzer(condition).support_positions(beam)

            render_triplet([self.ax_y, self.ax_M, self.ax_V], series, self.style_plot, supports=supports)
            self.canvas.draw()

            reac = self.engine.get_reactions(beam, load, condition)
            lines = [f"{condition_label(condition)}: L total = {_fmt_plain(self.engine.total_length(beam, condition), 3)}"]
            for (label, r), x in zip(reac.as_dict().items(), reac.positions):
                lines.append(f"{label} (x={_fmt_plain(x, 3)}) = {_fmt_plain(r, 4)}")
            if condition == TWO_SPAN_UNEQUAL:
                lines.append(f"m apoyo interior = {_fmt_plain(reac.interior_moment, 4)}")
            self.notes.setPlainText("\n".join(lines))

            self._series = series
            self._last_input = (beam, load, condition, j2)
            logger.info("Cálculo OK: %s, w=%g", condition, load)

        except ValueError as e:
            logger.error("Error de cálculo:\n%s", traceback.format_exc())
            QMessageBox.critical(self, "Error", f"Error al calcular: {e}")
            self._series = {}
            self._last_input = None

    def _export_memoria_pdf(self):
        if not self._series or self._last_input is None:
            QMessageBox.information(self, "Memoria de cálculo", "Primero calcular.")
            return

        out_path, _ = QFileDialog.getSaveFileName(self, "Guardar memoria", "memoria.pdf", "PDF (*.pdf)")
        if not out_path:
            return

        beam, load, condition, j2 = self._last_input
        tmpdir = tempfile.mkdtemp(prefix="beam_analysis_")
        try:
            supports = self.engine.analyzer(condition).support_positions(beam)
            imgs = save_series_png(tmpdir, self._series, self.style_plot, supports=supports)
            case, results = collect_report_data(self.engine, beam, load, condition, self._series, j2)
            export_report_pdf(out_path, ReportHeader(titulo="Memoria de cálculo - Viga"), case, results, imgs)
            QMessageBox.information(self, "Memoria de cálculo", f"Memoria exportada:\n{out_path}")
        except (OSError, ValueError) as e:
            logger.error("Error al generar la memoria (PDF).\n%s", traceback.format_exc())
            QMessageBox.critical(self, "Memoria de cálculo", f"Error al generar la memoria: {e}")
        finally:
            shutil.rmtree(tmpdir, ignore_errors=True)


def main():
    app = QApplication(sys.argv)
    w = BeamAnalysisApp()
    w.show()
    sys.exit(app.exec())
