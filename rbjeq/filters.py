# filters.py - stateful biquad built from cookbook coefficients
# --------------------------------------------------------------
# Direct form I, processed per sample. A Filter holds its six raw
# coefficients plus the last two inputs and outputs; one instance per
# channel/stream. Nothing is clamped or guarded: inf/NaN propagate.
# --------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from scipy.signal import freqz

from .coefficients import (
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

__all__ = [
    "Filter",
    "new_low_pass",
    "new_high_pass",
    "new_all_pass",
    "new_band_pass",
    "new_band_reject",
    "new_low_shelf",
    "new_high_shelf",
    "new_peaking",
]

_FIXED_FIELDS = frozenset({"kind", "coefficients", "_taps"})


@dataclass(slots=True)
class Filter:
    """Second-order IIR section with its running history.

    A default-constructed instance is unconfigured (``kind`` is
    ``FilterKind.UNDEFINED``, every coefficient 0); use one of the
    ``new_*`` factories to get a working filter. Coefficients are fixed for
    the lifetime of the instance; build a new one to retune.

    Parameters
    ----------
    kind : FilterKind
        Cookbook shape that produced ``coefficients``.
    coefficients : Coefficients
        Raw (a0, a1, a2, b0, b1, b2), not divided by a0.
    in1, in2 : float
        Previous input and the one before it.
    out1, out2 : float
        Previous output and the one before it.
    """

    kind: FilterKind = FilterKind.UNDEFINED
    coefficients: Coefficients = field(default_factory=Coefficients)
    in1: float = 0.0
    in2: float = 0.0
    out1: float = 0.0
    out2: float = 0.0
    _taps: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._taps = self.coefficients.normalized()

    # kind / coefficients are fixed once _taps exists; only history moves
    def __setattr__(self, name, value):
        if name in _FIXED_FIELDS and hasattr(self, "_taps"):
            raise AttributeError(f"Filter.{name} is fixed after construction")
        object.__setattr__(self, name, value)

    # --------------------------------------------------------------
    # coefficient accessors
    # --------------------------------------------------------------
    @property
    def a0(self) -> float:
        return self.coefficients.a0

    @property
    def a1(self) -> float:
        return self.coefficients.a1

    @property
    def a2(self) -> float:
        return self.coefficients.a2

    @property
    def b0(self) -> float:
        return self.coefficients.b0

    @property
    def b1(self) -> float:
        return self.coefficients.b1

    @property
    def b2(self) -> float:
        return self.coefficients.b2

    def is_zero(self) -> bool:
        """True when the filter was never configured by a factory."""
        return self.kind == FilterKind.UNDEFINED

    def name(self) -> FilterKind:
        return self.kind

    # --------------------------------------------------------------
    def apply(self, x: float) -> float:
        """Filter one sample and advance the history."""
        nb0, nb1, nb2, na1, na2 = self._taps
        x = float(x)
        y = (nb0 * x
             + nb1 * self.in1
             + nb2 * self.in2
             - na1 * self.out1
             - na2 * self.out2)

        self.in2 = self.in1
        self.in1 = x

        self.out2 = self.out1
        self.out1 = y

        return y

    def process(self, x: ArrayLike) -> np.ndarray:
        """Filter a mono block in order; same result as ``apply`` per sample.

        History carries over between calls, so a long stream can be fed in
        consecutive blocks.
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1:
            raise ValueError("process expects a 1-D signal")
        y = np.empty_like(x)
        nb0, nb1, nb2, na1, na2 = self._taps
        in1, in2 = self.in1, self.in2
        out1, out2 = self.out1, self.out2
        for i, xi in enumerate(x.tolist()):
            yi = nb0 * xi + nb1 * in1 + nb2 * in2 - na1 * out1 - na2 * out2
            in2, in1 = in1, xi
            out2, out1 = out1, yi
            y[i] = yi
        self.in1, self.in2 = in1, in2
        self.out1, self.out2 = out1, out2
        return y

    # convenience for per-sample pipelines
    def __call__(self, x: float) -> float:  # noqa: D401
        return self.apply(x)

    def frequency_response(self, freqs: ArrayLike, sample_rate: float) -> np.ndarray:
        """Complex response H(e^jw) at ``freqs`` (Hz). History is untouched."""
        b, a = self.coefficients.ba()
        _, h = freqz(b, a, worN=np.atleast_1d(np.asarray(freqs, dtype=np.float64)),
                     fs=sample_rate)
        return h


# ------------------------------------------------------------------
# Factories (one per cookbook shape)
# ------------------------------------------------------------------

def new_low_pass(sample_rate: float, frequency: float, q: float, *,
                 pi: Optional[float] = None) -> Filter:
    """Low-pass filter.

    Parameters
    ----------
    sample_rate : float
        Sample rate in Hz, e.g. 44100.0.
    frequency : float
        Cut-off frequency in Hz.
    q : float
        Quality factor, must be > 0 (not checked).
    pi : float, optional
        Value of pi to use; defaults to the process-wide setting.
    """
    return Filter(FilterKind.LOW_PASS, low_pass(sample_rate, frequency, q, pi=pi))


def new_high_pass(sample_rate: float, frequency: float, q: float, *,
                  pi: Optional[float] = None) -> Filter:
    """High-pass filter; see :func:`new_low_pass` for parameters."""
    return Filter(FilterKind.HIGH_PASS, high_pass(sample_rate, frequency, q, pi=pi))


def new_all_pass(sample_rate: float, frequency: float, q: float, *,
                 pi: Optional[float] = None) -> Filter:
    """All-pass filter; see :func:`new_low_pass` for parameters."""
    return Filter(FilterKind.ALL_PASS, all_pass(sample_rate, frequency, q, pi=pi))


def new_band_pass(sample_rate: float, frequency: float, width: float, *,
                  pi: Optional[float] = None) -> Filter:
    """Band-pass filter.

    Parameters
    ----------
    sample_rate : float
        Sample rate in Hz.
    frequency : float
        Centre frequency in Hz. 0 or Nyquist gives NaN coefficients.
    width : float
        Bandwidth in octaves, must be > 0 (not checked).
    pi : float, optional
        Value of pi to use; defaults to the process-wide setting.
    """
    return Filter(FilterKind.BAND_PASS, band_pass(sample_rate, frequency, width, pi=pi))


def new_band_reject(sample_rate: float, frequency: float, width: float, *,
                    pi: Optional[float] = None) -> Filter:
    """Band-reject (notch) filter; see :func:`new_band_pass` for parameters."""
    return Filter(FilterKind.BAND_REJECT, band_reject(sample_rate, frequency, width, pi=pi))


def new_low_shelf(sample_rate: float, frequency: float, q: float, gain: float, *,
                  pi: Optional[float] = None) -> Filter:
    """Low-shelf filter, ``gain`` in dB (either sign)."""
    return Filter(FilterKind.LOW_SHELF, low_shelf(sample_rate, frequency, q, gain, pi=pi))


def new_high_shelf(sample_rate: float, frequency: float, q: float, gain: float, *,
                   pi: Optional[float] = None) -> Filter:
    """High-shelf filter, ``gain`` in dB (either sign)."""
    return Filter(FilterKind.HIGH_SHELF, high_shelf(sample_rate, frequency, q, gain, pi=pi))


def new_peaking(sample_rate: float, frequency: float, width: float, gain: float, *,
                pi: Optional[float] = None) -> Filter:
    """Peaking EQ, ``width`` in octaves and ``gain`` in dB."""
    return Filter(FilterKind.PEAKING, peaking(sample_rate, frequency, width, gain, pi=pi))
