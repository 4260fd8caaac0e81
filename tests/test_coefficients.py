import math

import numpy as np
import pytest

from rbjeq.coefficients import (
    COEFFICIENT_FUNCTIONS,
    Coefficients,
    FilterKind,
    all_pass,
    band_pass,
    band_reject,
    high_pass,
    high_shelf,
    low_pass,
    low_shelf,
    peaking,
)
from rbjeq.utils import db_to_amplitude, db_to_lin, lin_to_db

FS = 44100.0
F0 = 1000.0
Q = 0.707
WIDTH = 1.0
GAIN = 6.0


def _w0():
    return 2.0 * math.pi * F0 / FS


def _alpha_q():
    return math.sin(_w0()) / (2.0 * Q)


def _alpha_width():
    w0 = _w0()
    return math.sin(w0) * math.sinh(math.log(2.0) / 2.0 * WIDTH * w0 / math.sin(w0))


def _assert_coeffs(actual, expected):
    for name, value in zip(("a0", "a1", "a2", "b0", "b1", "b2"), expected):
        assert getattr(actual, name) == pytest.approx(value, rel=1e-9, abs=1e-15), name


class TestClosedForm:
    """Each shape against the cookbook formulas evaluated independently."""

    def test_low_pass(self):
        w0, alpha = _w0(), _alpha_q()
        c = math.cos(w0)
        _assert_coeffs(
            low_pass(FS, F0, Q),
            (1 + alpha, -2 * c, 1 - alpha, (1 - c) / 2, 1 - c, (1 - c) / 2),
        )

    def test_high_pass(self):
        w0, alpha = _w0(), _alpha_q()
        c = math.cos(w0)
        _assert_coeffs(
            high_pass(FS, F0, Q),
            (1 + alpha, -2 * c, 1 - alpha, (1 + c) / 2, -(1 + c), (1 + c) / 2),
        )

    def test_all_pass(self):
        w0, alpha = _w0(), _alpha_q()
        c = math.cos(w0)
        _assert_coeffs(
            all_pass(FS, F0, Q),
            (1 + alpha, -2 * c, 1 - alpha, 1 - alpha, -2 * c, 1 + alpha),
        )

    def test_band_pass(self):
        w0, alpha = _w0(), _alpha_width()
        c = math.cos(w0)
        _assert_coeffs(
            band_pass(FS, F0, WIDTH),
            (1 + alpha, -2 * c, 1 - alpha, alpha, 0.0, -alpha),
        )

    def test_band_reject(self):
        w0, alpha = _w0(), _alpha_width()
        c = math.cos(w0)
        _assert_coeffs(
            band_reject(FS, F0, WIDTH),
            (1 + alpha, -2 * c, 1 - alpha, 1.0, -2 * c, 1.0),
        )

    def test_low_shelf(self):
        w0 = _w0()
        A = 10 ** (GAIN / 40)
        beta = math.sqrt(A) / Q
        c, s = math.cos(w0), math.sin(w0)
        _assert_coeffs(
            low_shelf(FS, F0, Q, GAIN),
            (
                (A + 1) + (A - 1) * c + beta * s,
                -2 * ((A - 1) + (A + 1) * c),
                (A + 1) + (A - 1) * c - beta * s,
                A * ((A + 1) - (A - 1) * c + beta * s),
                2 * A * ((A - 1) - (A + 1) * c),
                A * ((A + 1) - (A - 1) * c - beta * s),
            ),
        )

    def test_high_shelf(self):
        w0 = _w0()
        A = 10 ** (GAIN / 40)
        beta = math.sqrt(A) / Q
        c, s = math.cos(w0), math.sin(w0)
        _assert_coeffs(
            high_shelf(FS, F0, Q, GAIN),
            (
                (A + 1) - (A - 1) * c + beta * s,
                2 * ((A - 1) - (A + 1) * c),
                (A + 1) - (A - 1) * c - beta * s,
                A * ((A + 1) + (A - 1) * c + beta * s),
                -2 * A * ((A - 1) + (A + 1) * c),
                A * ((A + 1) + (A - 1) * c - beta * s),
            ),
        )

    def test_peaking(self):
        w0, alpha = _w0(), _alpha_width()
        A = 10 ** (GAIN / 40)
        c = math.cos(w0)
        _assert_coeffs(
            peaking(FS, F0, WIDTH, GAIN),
            (1 + alpha / A, -2 * c, 1 - alpha / A, 1 + alpha * A, -2 * c, 1 - alpha * A),
        )

    def test_every_shape_has_a_function(self):
        assert set(COEFFICIENT_FUNCTIONS) == set(FilterKind) - {FilterKind.UNDEFINED}


class TestAllPassSymmetry:

    @pytest.mark.parametrize("fs,f0,q", [(44100, 1000, 0.707), (48000, 60, 4.0), (8000, 3999, 0.1)])
    def test_numerator_mirrors_denominator(self, fs, f0, q):
        c = all_pass(fs, f0, q)
        assert c.b0 == c.a2
        assert c.b1 == c.a1
        assert c.b2 == c.a0


class TestDegenerateInputs:
    """Out-of-range parameters give non-finite values, never exceptions."""

    def test_band_pass_at_zero_hz(self):
        c = band_pass(FS, 0.0, WIDTH)
        assert math.isnan(c.a0)
        assert not c.is_finite()

    def test_peaking_at_nyquist(self):
        c = peaking(FS, FS / 2, WIDTH, GAIN)
        assert not c.is_finite()

    def test_zero_q(self):
        c = low_pass(FS, F0, 0.0)
        assert math.isinf(c.a0)
        assert not c.is_finite()

    def test_zero_q_shelf(self):
        assert not low_shelf(FS, F0, 0.0, GAIN).is_finite()

    def test_negative_width_is_not_rejected(self):
        c = band_reject(FS, F0, -1.0)
        assert c.is_finite()
        assert c.a0 < 1.0

    def test_zero_a0_normalizes_to_nan(self):
        assert all(math.isnan(r) for r in Coefficients().normalized())


class TestCoefficients:

    def test_normalized(self):
        c = Coefficients(2.0, 4.0, 6.0, 8.0, 10.0, 12.0)
        assert c.normalized() == (4.0, 5.0, 6.0, 2.0, 3.0)

    def test_as_sos(self):
        c = Coefficients(2.0, 4.0, 6.0, 8.0, 10.0, 12.0)
        np.testing.assert_array_equal(c.as_sos(), [[4.0, 5.0, 6.0, 1.0, 2.0, 3.0]])

    def test_ba(self):
        b, a = Coefficients(2.0, 4.0, 6.0, 8.0, 10.0, 12.0).ba()
        np.testing.assert_array_equal(b, [8.0, 10.0, 12.0])
        np.testing.assert_array_equal(a, [2.0, 4.0, 6.0])

    def test_frozen(self):
        c = low_pass(FS, F0, Q)
        with pytest.raises(AttributeError):
            c.a0 = 1.0

    def test_values_are_python_floats(self):
        c = peaking(FS, F0, WIDTH, GAIN)
        assert all(type(getattr(c, n)) is float for n in ("a0", "a1", "a2", "b0", "b1", "b2"))


class TestGainHelpers:

    @pytest.mark.parametrize("gain", [-12.0, 0.0, 6.0])
    def test_amplitude_is_root_of_linear_gain(self, gain):
        assert db_to_amplitude(gain) ** 2 == pytest.approx(db_to_lin(gain), rel=1e-12)

    def test_lin_to_db_floor(self):
        assert lin_to_db(0.0) == pytest.approx(-240.0)
        assert lin_to_db(10.0) == pytest.approx(20.0)


class TestFilterKind:

    @pytest.mark.parametrize("name,kind", [
        ("low-pass", FilterKind.LOW_PASS),
        ("lowpass", FilterKind.LOW_PASS),
        ("HIGH_PASS", FilterKind.HIGH_PASS),
        ("band reject", FilterKind.BAND_REJECT),
        ("Peaking", FilterKind.PEAKING),
        ("high-shelf", FilterKind.HIGH_SHELF),
    ])
    def test_from_name(self, name, kind):
        assert FilterKind.from_name(name) is kind

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="unknown filter kind"):
            FilterKind.from_name("comb")

    def test_order(self):
        assert FilterKind.UNDEFINED == 0
        assert FilterKind.PEAKING == 8
