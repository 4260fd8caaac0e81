# utils.py - shared constants and helpers
# ----------------------------------------
# • pi value used by every coefficient function (overridable)
# • dB / linear helpers (cookbook amplitude uses /40)
# ----------------------------------------
from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Final, Iterator, Optional

import numpy as np

__all__ = [
    "PI",
    "DEFAULT_SAMPLE_RATE",
    "get_pi",
    "set_pi",
    "unset_pi",
    "override_pi",
    "resolve_pi",
    "db_to_lin",
    "lin_to_db",
    "db_to_amplitude",
]

# Literal kept as-is so results can be compared bit for bit against
# implementations carrying the same truncation.
PI: Final = 3.1415926535897932384626433
DEFAULT_SAMPLE_RATE: Final = 44_100

_pi: float = PI

# ------------------------------------------------------------------
# pi override
# ------------------------------------------------------------------

def get_pi() -> float:
    """Return the process-wide pi used when no explicit ``pi`` is passed."""
    return _pi


def set_pi(value: float) -> None:
    """Set the process-wide pi. Only filters built afterwards see it."""
    global _pi
    _pi = float(value)


def unset_pi() -> None:
    """Restore the process-wide pi to :data:`PI`."""
    global _pi
    _pi = PI


@contextmanager
def override_pi(value: float) -> Iterator[float]:
    """Temporarily replace the process-wide pi, restoring the previous value."""
    previous = _pi
    set_pi(value)
    try:
        yield _pi
    finally:
        set_pi(previous)


def resolve_pi(pi: Optional[float]) -> float:
    return _pi if pi is None else float(pi)

# ------------------------------------------------------------------
# dB helpers
# ------------------------------------------------------------------

def db_to_lin(db: float) -> float:
    return 10 ** (db / 20.0)


def lin_to_db(lin: float, eps: float = 1e-12) -> float:
    return 20.0 * math.log10(max(eps, lin))


def db_to_amplitude(gain_db: float) -> float:
    """Cookbook ``A``: square root of the linear peak gain, ``10**(dB/40)``."""
    return float(np.power(10.0, gain_db / 40.0))
