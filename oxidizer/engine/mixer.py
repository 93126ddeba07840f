"""Mix filtered signal with noise, then soft-saturate.

The single intensity knob drives two independent curves:

    noise gain      = intensity
    saturation knee = 1 - SATURATION_DEPTH * intensity

Below the knee samples pass untouched. Above it they are bent with tanh
into the remaining headroom, so the output never leaves [-1, 1] and the
16-bit encoder can never wrap. At intensity 0 the knee sits at full scale:
in-range audio is bit-exact and anything beyond is pinned to +-1.
"""

import numpy as np

SATURATION_DEPTH = 0.5


def saturation_knee(intensity):
    return 1.0 - SATURATION_DEPTH * float(intensity)


def saturate(audio, intensity):
    """Soft knee limiter. NaN becomes silence, +-inf becomes full scale."""
    x = np.nan_to_num(np.asarray(audio, dtype=np.float64),
                      nan=0.0, posinf=1.0, neginf=-1.0)
    knee = saturation_knee(intensity)
    headroom = 1.0 - knee
    mag = np.abs(x)
    over = mag > knee
    if not np.any(over):
        return x

    if headroom > 0.0:
        bent = knee + headroom * np.tanh((mag[over] - knee) / headroom)
    else:
        bent = np.ones(np.count_nonzero(over))
    out = x.copy()
    out[over] = np.sign(x[over]) * bent
    return out


def mix(signal, noise, intensity):
    """signal + intensity * noise, saturated. Arrays must match in length."""
    signal = np.asarray(signal, dtype=np.float64)
    noise = np.asarray(noise, dtype=np.float64)
    if signal.shape != noise.shape:
        raise ValueError(f"signal/noise shape mismatch: {signal.shape} vs {noise.shape}")
    return saturate(signal + float(intensity) * noise, intensity)
