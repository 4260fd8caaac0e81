# design.py - keyword-driven filter construction with optional checks
# --------------------------------------------------------------------
# Public function
#   design(kind, sample_rate, frequency, *, q=, width=, gain=, pi=, validate=)
# The new_* factories never validate; this entry point rejects
# physically meaningless parameters before they turn into NaN.
# --------------------------------------------------------------------
from __future__ import annotations

import logging
import math
from typing import Optional, Union

from .coefficients import (
    COEFFICIENT_FUNCTIONS,
    GAIN_KINDS,
    Q_KINDS,
    WIDTH_KINDS,
    FilterKind,
)
from .filters import Filter

__all__ = ["design", "FilterParameterError"]

logger = logging.getLogger(__name__)


class FilterParameterError(ValueError):
    """Raised by :func:`design` for missing, extra or out-of-range parameters."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(f"{parameter}: {message}")


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise FilterParameterError(name, f"must be finite, got {value!r}")


def _check_positive(name: str, value: float) -> None:
    _check_finite(name, value)
    if value <= 0.0:
        raise FilterParameterError(name, f"must be > 0, got {value!r}")


def design(
    kind: Union[FilterKind, int, str],
    sample_rate: float,
    frequency: float,
    *,
    q: Optional[float] = None,
    width: Optional[float] = None,
    gain: Optional[float] = None,
    pi: Optional[float] = None,
    validate: bool = True,
) -> Filter:
    """Build a :class:`Filter` of ``kind`` from keyword parameters.

    Parameters
    ----------
    kind : FilterKind | int | str
        Shape, its integer value, or a name such as ``"low-pass"`` / ``"peaking"``.
    sample_rate : float
        Sample rate in Hz (> 0).
    frequency : float
        Cut-off / centre frequency in Hz, strictly between 0 and Nyquist.
    q : float, optional
        Quality factor; required for low/high/all-pass and both shelves.
    width : float, optional
        Bandwidth in octaves; required for band-pass, band-reject, peaking.
    gain : float, optional
        Gain in dB; required for both shelves and peaking.
    pi : float, optional
        Value of pi; defaults to the process-wide setting.
    validate : bool, default True
        Range-check the parameters. ``False`` passes them through unchecked,
        exactly as the ``new_*`` factories do.

    Raises
    ------
    FilterParameterError
        A parameter is missing, not used by ``kind``, or (with ``validate``)
        out of range.
    """
    if not isinstance(kind, FilterKind):
        try:
            if isinstance(kind, int):
                kind = FilterKind(kind)
            else:
                kind = FilterKind.from_name(kind)
        except ValueError as exc:
            raise FilterParameterError("kind", str(exc)) from exc
    if kind == FilterKind.UNDEFINED:
        raise FilterParameterError("kind", "UNDEFINED cannot be designed")

    # ------------------ parameter set for this shape ------------------
    supplied = {"q": q, "width": width, "gain": gain}
    wanted = []
    if kind in Q_KINDS:
        wanted.append("q")
    if kind in WIDTH_KINDS:
        wanted.append("width")
    if kind in GAIN_KINDS:
        wanted.append("gain")
    for name, value in supplied.items():
        if name in wanted and value is None:
            raise FilterParameterError(name, f"required for {kind.name}")
        if name not in wanted and value is not None:
            raise FilterParameterError(name, f"not used by {kind.name}")

    # ------------------ range checks ------------------
    if validate:
        _check_positive("sample_rate", sample_rate)
        _check_finite("frequency", frequency)
        if not (0.0 < frequency < sample_rate / 2.0):
            raise FilterParameterError(
                "frequency",
                f"must be between 0 and {sample_rate / 2.0} Hz (exclusive), got {frequency!r}",
            )
        if q is not None:
            _check_positive("q", q)
        if width is not None:
            _check_positive("width", width)
        if gain is not None:
            _check_finite("gain", gain)
        if pi is not None:
            _check_positive("pi", pi)

    args = [sample_rate, frequency] + [supplied[name] for name in wanted]
    coeffs = COEFFICIENT_FUNCTIONS[kind](*args, pi=pi)
    logger.debug("designed %s fs=%s f=%s %s -> %s", kind.name, sample_rate, frequency,
                 {name: supplied[name] for name in wanted}, coeffs)
    return Filter(kind, coeffs)
