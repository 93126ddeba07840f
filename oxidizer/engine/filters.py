"""Degradation filter: cascaded one-pole lowpass.

    y[n] = y[n-1] + alpha * (x[n] - y[n-1])

alpha=1: no filtering (output = input)
alpha close to 0: heavy lowpass (only very low frequencies pass)

Each pass adds another ~6 dB/oct of slope above the cutoff. The state
starts at 0.0 on every pass, so a signal that opens at a non-zero level
fades in over the first few samples instead of jumping.

The sample loop uses Numba; nogil lets channels render on parallel threads.
"""

import math

import numpy as np
from numba import njit

from oxidizer.engine.errors import ConfigurationError
from oxidizer.engine.params import LEVEL_CUTOFFS

# Cutoffs are kept below Nyquist for low sample rates
MAX_CUTOFF_RATIO = 0.45


def cutoff_alpha(cutoff_hz, sample_rate):
    """Smoothing coefficient for a one-pole lowpass at cutoff_hz."""
    if sample_rate <= 0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    fc = min(float(cutoff_hz), MAX_CUTOFF_RATIO * sample_rate)
    return 1.0 - math.exp(-2.0 * math.pi * fc / sample_rate)


def level_alpha(level, sample_rate):
    return cutoff_alpha(LEVEL_CUTOFFS[level], sample_rate)


class DegradationFilter:
    """One channel's cascaded lowpass. Not shared between channels."""

    def __init__(self, alpha: float, passes: int = 1):
        if passes < 1:
            raise ConfigurationError(f"passes must be >= 1, got {passes}")
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self.passes = passes
        self.y1 = 0.0  # previous output

    def process(self, samples: np.ndarray) -> np.ndarray:
        """Filter a whole channel, `passes` times in sequence."""
        out = np.asarray(samples, dtype=np.float64)
        for _ in range(self.passes):
            self.reset()
            out, self.y1 = _one_pole(out, self.alpha, self.y1)
        return out

    def reset(self):
        self.y1 = 0.0


@njit(cache=True, nogil=True)
def _one_pole(audio, alpha, y1):
    """One pass. Returns (output, final state)."""
    n = len(audio)
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        y1 = y1 + alpha * (audio[i] - y1)
        out[i] = y1
    return out, y1
