# io.py - raw PCM helpers for feeding filters
# -------------------------------------------
# Headerless little-endian float64 files only; channel layout is left to
# the caller. All paths and filenames are left to caller.
# -------------------------------------------
from __future__ import annotations

import logging
import pathlib

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["read_raw", "write_raw", "RAW_DTYPE"]

logger = logging.getLogger(__name__)

RAW_DTYPE = np.dtype("<f8")


def read_raw(path: str | pathlib.Path) -> np.ndarray:
    """Load little-endian float64 samples from *path*.

    A trailing partial sample (file size not a multiple of 8) is dropped.
    """
    path = pathlib.Path(path)
    data = path.read_bytes()
    extra = len(data) % RAW_DTYPE.itemsize
    if extra:
        logger.warning("%s: ignoring %d trailing byte(s)", path, extra)
        data = data[: len(data) - extra]
    return np.frombuffer(data, dtype=RAW_DTYPE).astype(np.float64)


def write_raw(path: str | pathlib.Path, data: ArrayLike) -> None:
    """Save *data* as little-endian float64 (no clipping, no header)."""
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.asarray(data, dtype=RAW_DTYPE).tofile(path)
