# coefficients.py - RBJ audio EQ cookbook coefficient helpers
# ------------------------------------------------------------
# One pure function per filter shape. Each returns the six raw biquad
# coefficients exactly as the cookbook writes them (not divided by a0).
# Parameters are not validated: q/width <= 0 or a frequency of 0 / Nyquist
# give inf/NaN coefficients instead of exceptions.
# ------------------------------------------------------------
from __future__ import annotations

import enum
from dataclasses import astuple, dataclass
from typing import Callable, Final, Optional

import numpy as np

from .utils import db_to_amplitude, resolve_pi

__all__ = [
    "FilterKind",
    "Coefficients",
    "low_pass",
    "high_pass",
    "all_pass",
    "band_pass",
    "band_reject",
    "low_shelf",
    "high_shelf",
    "peaking",
    "COEFFICIENT_FUNCTIONS",
    "Q_KINDS",
    "WIDTH_KINDS",
    "GAIN_KINDS",
]

_LN2_HALF: Final = np.log(2.0) / 2.0


class FilterKind(enum.IntEnum):
    """Which cookbook formula produced a filter."""

    UNDEFINED = 0
    LOW_PASS = 1
    HIGH_PASS = 2
    ALL_PASS = 3
    BAND_PASS = 4
    BAND_REJECT = 5
    LOW_SHELF = 6
    HIGH_SHELF = 7
    PEAKING = 8

    @classmethod
    def from_name(cls, name: str) -> "FilterKind":
        """Look up a kind by a loose name ("low-pass", "lowpass", "LOW_PASS")."""
        key = "".join(ch for ch in str(name).upper() if ch.isalnum())
        for kind in cls:
            if kind.name.replace("_", "") == key:
                return kind
        raise ValueError(f"unknown filter kind: {name!r}")


@dataclass(frozen=True, slots=True)
class Coefficients:
    """Raw biquad coefficients (a: feedback, b: feedforward)."""

    a0: float = 0.0
    a1: float = 0.0
    a2: float = 0.0
    b0: float = 0.0
    b1: float = 0.0
    b2: float = 0.0

    def normalized(self) -> tuple[float, float, float, float, float]:
        """Return ``(b0/a0, b1/a0, b2/a0, a1/a0, a2/a0)``.

        Division follows IEEE rules, so a zero ``a0`` yields inf/NaN rather
        than raising.
        """
        a0 = np.float64(self.a0)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            ratios = (self.b0 / a0, self.b1 / a0, self.b2 / a0,
                      self.a1 / a0, self.a2 / a0)
        return tuple(float(r) for r in ratios)  # type: ignore[return-value]

    def ba(self) -> tuple[np.ndarray, np.ndarray]:
        """Unnormalized ``(b, a)`` arrays for ``scipy.signal.lfilter``/``freqz``."""
        b = np.array([self.b0, self.b1, self.b2], dtype=np.float64)
        a = np.array([self.a0, self.a1, self.a2], dtype=np.float64)
        return b, a

    def as_sos(self) -> np.ndarray:
        """Single second-order section ``[[b0, b1, b2, 1, a1, a2]] / a0``."""
        nb0, nb1, nb2, na1, na2 = self.normalized()
        return np.array([[nb0, nb1, nb2, 1.0, na1, na2]], dtype=np.float64)

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(astuple(self))))


# ------------------------------------------------------------------
# Shared intermediate quantities
# ------------------------------------------------------------------

def _omega(sample_rate: float, frequency: float, pi: Optional[float]) -> np.float64:
    return np.float64(2.0) * resolve_pi(pi) * frequency / np.float64(sample_rate)


def _alpha_q(w0: np.float64, q: float) -> np.float64:
    return np.sin(w0) / (np.float64(2.0) * q)


def _alpha_width(w0: np.float64, width: float) -> np.float64:
    # sin(w0) == 0 (frequency 0 or Nyquist) divides by zero here.
    return np.sin(w0) * np.sinh(_LN2_HALF * width * w0 / np.sin(w0))


def _coeffs(a0, a1, a2, b0, b1, b2) -> Coefficients:
    return Coefficients(float(a0), float(a1), float(a2),
                        float(b0), float(b1), float(b2))


_ERRSTATE: Final = dict(divide="ignore", invalid="ignore", over="ignore")

# ------------------------------------------------------------------
# Constant-Q shapes
# ------------------------------------------------------------------

def low_pass(sample_rate: float, frequency: float, q: float, *,
             pi: Optional[float] = None) -> Coefficients:
    """Low-pass with cut-off ``frequency`` (Hz) and quality factor ``q`` (> 0)."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_q(w0, q)
        cos_w0 = np.cos(w0)
        return _coeffs(
            1.0 + alpha,
            -2.0 * cos_w0,
            1.0 - alpha,
            (1.0 - cos_w0) / 2.0,
            1.0 - cos_w0,
            (1.0 - cos_w0) / 2.0,
        )


def high_pass(sample_rate: float, frequency: float, q: float, *,
              pi: Optional[float] = None) -> Coefficients:
    """High-pass with cut-off ``frequency`` (Hz) and quality factor ``q`` (> 0)."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_q(w0, q)
        cos_w0 = np.cos(w0)
        return _coeffs(
            1.0 + alpha,
            -2.0 * cos_w0,
            1.0 - alpha,
            (1.0 + cos_w0) / 2.0,
            -(1.0 + cos_w0),
            (1.0 + cos_w0) / 2.0,
        )


def all_pass(sample_rate: float, frequency: float, q: float, *,
             pi: Optional[float] = None) -> Coefficients:
    """All-pass centred on ``frequency``; the numerator mirrors the denominator."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_q(w0, q)
        a0 = 1.0 + alpha
        a1 = -2.0 * np.cos(w0)
        a2 = 1.0 - alpha
        return _coeffs(a0, a1, a2, a2, a1, a0)

# ------------------------------------------------------------------
# Bandwidth (octave) shapes
# ------------------------------------------------------------------

def band_pass(sample_rate: float, frequency: float, width: float, *,
              pi: Optional[float] = None) -> Coefficients:
    """Band-pass (constant 0 dB peak gain), ``width`` in octaves."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_width(w0, width)
        return _coeffs(
            1.0 + alpha,
            -2.0 * np.cos(w0),
            1.0 - alpha,
            alpha,
            0.0,
            -alpha,
        )


def band_reject(sample_rate: float, frequency: float, width: float, *,
                pi: Optional[float] = None) -> Coefficients:
    """Notch at ``frequency``, ``width`` in octaves."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_width(w0, width)
        a1 = -2.0 * np.cos(w0)
        return _coeffs(1.0 + alpha, a1, 1.0 - alpha, 1.0, a1, 1.0)


def peaking(sample_rate: float, frequency: float, width: float, gain: float, *,
            pi: Optional[float] = None) -> Coefficients:
    """Peaking EQ: ``gain`` dB around ``frequency``, ``width`` in octaves."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        alpha = _alpha_width(w0, width)
        A = db_to_amplitude(gain)
        a1 = -2.0 * np.cos(w0)
        return _coeffs(
            1.0 + alpha / A,
            a1,
            1.0 - alpha / A,
            1.0 + alpha * A,
            a1,
            1.0 - alpha * A,
        )

# ------------------------------------------------------------------
# Shelves
# ------------------------------------------------------------------

def low_shelf(sample_rate: float, frequency: float, q: float, gain: float, *,
              pi: Optional[float] = None) -> Coefficients:
    """Low shelf: ``gain`` dB below the corner ``frequency``."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        A = db_to_amplitude(gain)
        beta = np.sqrt(A) / q
        cos_w0, sin_w0 = np.cos(w0), np.sin(w0)
        return _coeffs(
            (A + 1.0) + (A - 1.0) * cos_w0 + beta * sin_w0,
            -2.0 * ((A - 1.0) + (A + 1.0) * cos_w0),
            (A + 1.0) + (A - 1.0) * cos_w0 - beta * sin_w0,
            A * ((A + 1.0) - (A - 1.0) * cos_w0 + beta * sin_w0),
            2.0 * A * ((A - 1.0) - (A + 1.0) * cos_w0),
            A * ((A + 1.0) - (A - 1.0) * cos_w0 - beta * sin_w0),
        )


def high_shelf(sample_rate: float, frequency: float, q: float, gain: float, *,
               pi: Optional[float] = None) -> Coefficients:
    """High shelf: ``gain`` dB above the corner ``frequency``."""
    with np.errstate(**_ERRSTATE):
        w0 = _omega(sample_rate, frequency, pi)
        A = db_to_amplitude(gain)
        beta = np.sqrt(A) / q
        cos_w0, sin_w0 = np.cos(w0), np.sin(w0)
        return _coeffs(
            (A + 1.0) - (A - 1.0) * cos_w0 + beta * sin_w0,
            2.0 * ((A - 1.0) - (A + 1.0) * cos_w0),
            (A + 1.0) - (A - 1.0) * cos_w0 - beta * sin_w0,
            A * ((A + 1.0) + (A - 1.0) * cos_w0 + beta * sin_w0),
            -2.0 * A * ((A - 1.0) + (A + 1.0) * cos_w0),
            A * ((A + 1.0) + (A - 1.0) * cos_w0 - beta * sin_w0),
        )


COEFFICIENT_FUNCTIONS: Final[dict[FilterKind, Callable[..., Coefficients]]] = {
    FilterKind.LOW_PASS: low_pass,
    FilterKind.HIGH_PASS: high_pass,
    FilterKind.ALL_PASS: all_pass,
    FilterKind.BAND_PASS: band_pass,
    FilterKind.BAND_REJECT: band_reject,
    FilterKind.LOW_SHELF: low_shelf,
    FilterKind.HIGH_SHELF: high_shelf,
    FilterKind.PEAKING: peaking,
}

Q_KINDS: Final = frozenset({FilterKind.LOW_PASS, FilterKind.HIGH_PASS, FilterKind.ALL_PASS,
                            FilterKind.LOW_SHELF, FilterKind.HIGH_SHELF})
WIDTH_KINDS: Final = frozenset({FilterKind.BAND_PASS, FilterKind.BAND_REJECT, FilterKind.PEAKING})
GAIN_KINDS: Final = frozenset({FilterKind.LOW_SHELF, FilterKind.HIGH_SHELF, FilterKind.PEAKING})
