# path: tests/test_two_span_unequal.py
import math

import pytest

from beam_analysis.domain.beam import Beam, Material
from beam_analysis.domain.errors import PositionOutOfBounds
from beam_analysis.engine.analyzers import TwoSpanUnequal, UNIT_SCALE

EI = 210000.0


def _beam(L1, L2):
    return Beam(primary_span=L1, secondary_span=L2, material=Material("Test", {"EI": EI}))


@pytest.mark.parametrize("L,w", [(4.0, 10.0), (1.0, 1.0), (7.3, 2.5)])
def test_equal_spans_interior_reaction(L, w):
    st = TwoSpanUnequal.solve(_beam(L, L), w)

    assert st.R2 == pytest.approx(5.0 / 4.0 * w * L)
    assert st.R1 == pytest.approx(3.0 / 8.0 * w * L)
    assert st.R3 == pytest.approx(3.0 / 8.0 * w * L)
    assert st.m == pytest.approx(w * L ** 2 / 8.0)


def test_reactions_balance_total_load():
    w, L1, L2 = 12.0, 5.0, 3.0
    r = TwoSpanUnequal().reactions(_beam(L1, L2), w)

    assert sum(r.values) == pytest.approx(w * (L1 + L2))
    assert r.positions == (0.0, L1, L1 + L2)
    assert r.interior_moment == pytest.approx(w * (L1 ** 3 + L2 ** 3) / (8.0 * (L1 + L2)))
    assert set(r.as_dict()) == {"R1", "R2", "R3"}


def test_moment_over_interior_support_is_hogging():
    w, L1, L2 = 12.0, 5.0, 3.0
    an = TwoSpanUnequal()
    beam = _beam(L1, L2)
    st = an.solve(beam, w)
    eq = an.bending_moment_equation(beam, w)

    assert eq(0.0).y == 0.0
    assert eq(L1).y == pytest.approx(-st.m)
    assert eq(L1 + L2).y == pytest.approx(0.0, abs=1e-9)
    # ambos lados del apoyo interior dan el mismo momento
    assert eq(L1 + 1e-9).y == pytest.approx(eq(L1).y, abs=1e-6)


def test_shear_jumps_by_interior_reaction():
    w, L1, L2 = 12.0, 5.0, 3.0
    an = TwoSpanUnequal()
    beam = _beam(L1, L2)
    st = an.solve(beam, w)
    eq = an.shear_force_equation(beam, w)

    assert eq(0.0).y == pytest.approx(st.R1)
    assert eq(L1).y == pytest.approx(st.R1 - w * L1)
    h = 1e-9
    assert eq(L1 + h).y - eq(L1).y == pytest.approx(st.R2, rel=1e-6)
    assert eq(L1 + L2).y == pytest.approx(-st.R3)


@pytest.mark.parametrize("L1,L2", [(4.0, 4.0), (5.0, 3.0), (2.0, 6.5)])
def test_deflection_zero_at_all_supports(L1, L2):
    an = TwoSpanUnequal()
    eq = an.deflection_equation(_beam(L1, L2), 10.0)

    ref = abs(eq(L1 / 2).y)
    assert ref > 0.0
    for x in (0.0, L1, L1 + L2):
        assert abs(eq(x).y) <= 1e-9 * ref


def test_deflection_slope_continuous_over_interior_support():
    L1, L2, w = 5.0, 3.0, 12.0
    eq = TwoSpanUnequal().deflection_equation(_beam(L1, L2), w)
    h = 1e-4

    left = (eq(L1).y - eq(L1 - h).y) / h
    right = (eq(L1 + h).y - eq(L1).y) / h
    assert right == pytest.approx(left, rel=1e-3)


def test_equal_spans_midspan_deflection():
    L, w = 4.0, 10.0
    eq = TwoSpanUnequal().deflection_equation(_beam(L, L), w)
    EI_scaled = EI / UNIT_SCALE ** 3

    expected = -w * L ** 4 / (192.0 * EI_scaled) * UNIT_SCALE * 2.0
    assert eq(L / 2).y == pytest.approx(expected)
    # simetría entre tramos iguales
    assert eq(L + L / 2).y == pytest.approx(expected)
    assert eq(L / 2, 1).y == pytest.approx(expected / 2)


@pytest.mark.parametrize("x", [-0.5, 8.0 + 1.0])
def test_out_of_bounds(x):
    an = TwoSpanUnequal()
    beam = _beam(5.0, 3.0)
    for eq in (an.deflection_equation(beam, 1.0), an.bending_moment_equation(beam, 1.0), an.shear_force_equation(beam, 1.0)):
        with pytest.raises(PositionOutOfBounds):
            eq(x)


def test_position_on_secondary_span_is_valid():
    an = TwoSpanUnequal()
    beam = _beam(5.0, 3.0)
    # en simplemente apoyada 7.0 estaría fuera; acá es el segundo tramo
    assert an.shear_force_equation(beam, 1.0)(7.0).x == 7.0


def test_zero_secondary_span_yields_nan():
    an = TwoSpanUnequal()
    beam = _beam(4.0, 0.0)
    r = an.reactions(beam, 10.0)
    assert math.isnan(r.values[1])
    assert math.isnan(r.values[2])
    # R1 queda como el de una viga apoyada-empotrada: 3wL/8
    assert r.values[0] == pytest.approx(15.0)
    assert an.bending_moment(beam, 10.0, 2.0) == pytest.approx(10.0)
