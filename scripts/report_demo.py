import os
import sys
import tempfile

from beam_analysis.domain.beam import Beam, Material
from beam_analysis.domain.conditions import TWO_SPAN_UNEQUAL
from beam_analysis.engine.analysis import BeamAnalysis
from beam_analysis.engine.sampling import sample_all
from beam_analysis.services.logging_setup import setup_logging
from beam_analysis.services.report_pdf import ReportHeader, collect_report_data, export_report_pdf
from beam_analysis.view.renderer_series import save_series_png

logger = setup_logging()

out_pdf = sys.argv[1] if len(sys.argv) > 1 else "memoria_viga.pdf"

beam = Beam(primary_span=5.0, secondary_span=3.5, material=Material("Acero IPN 200", {"EI": 4.58e12}))
w = 12.0
condition = TWO_SPAN_UNEQUAL

engine = BeamAnalysis()
series = sample_all(engine, beam, w, condition, step=0.05)

with tempfile.TemporaryDirectory() as td:
    supports = engine.analyzer(condition).support_positions(beam)
    imgs = save_series_png(td, series, supports=supports)
    case, results = collect_report_data(engine, beam, w, condition, series, engine.options.deflection_scale)
    export_report_pdf(out_pdf, ReportHeader(titulo="Memoria de cálculo - Viga continua"), case, results, imgs)

print("PDF:", os.path.abspath(out_pdf))
