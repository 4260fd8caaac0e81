#!/usr/bin/env python3
"""
Band-pass an interleaved stereo raw file:
    python -m rbjeq.render_raw input.raw output.raw
    # or
    python -m rbjeq.render_raw        # input.raw -> output.raw
"""
import sys
from pathlib import Path

import numpy as np

from rbjeq.filters import new_band_pass
from rbjeq.io import read_raw, write_raw
from rbjeq.utils import DEFAULT_SAMPLE_RATE


def render(src, dst, fs=DEFAULT_SAMPLE_RATE, freq=440.0, width=0.5):
    data = read_raw(src)
    # left / right each get their own history
    channels = [new_band_pass(fs, freq, width), new_band_pass(fs, freq, width)]
    out = np.empty_like(data)
    ch = 0
    for i, x in enumerate(data):
        out[i] = channels[ch].apply(x)
        ch = (ch + 1) % 2
    write_raw(dst, out)
    print(f"✔ saved {dst}  ({len(out) // 2 / fs:.2f}s)")
    return out


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    src = Path(argv[0]) if len(argv) > 0 else Path("input.raw")
    dst = Path(argv[1]) if len(argv) > 1 else Path("output.raw")
    render(src, dst)


if __name__ == "__main__":
    main()
