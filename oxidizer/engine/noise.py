"""Noise textures: white (radio static) and brown (leaky random walk).

Every generator owns its own numpy Generator, so left and right channels
get uncorrelated noise and the stereo image stays wide. Successive
generate() calls continue the same stream.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from oxidizer.engine.params import NoiseTexture

DEFAULT_LEAK = 0.02
# Brown output is divided by this many stationary standard deviations
BROWN_PEAK_SIGMAS = 3.0


class NoiseGenerator:
    """Base class. seed=None draws fresh OS entropy."""

    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    def generate(self, n: int) -> np.ndarray:
        raise NotImplementedError

    def _white(self, n):
        return self.rng.uniform(-1.0, 1.0, n)


class WhiteNoise(NoiseGenerator):
    """i.i.d. uniform samples on [-1, 1)."""

    def generate(self, n: int) -> np.ndarray:
        return self._white(n)


class BrownNoise(NoiseGenerator):
    """White noise through a leaky integrator.

        b[n] = (1 - leak) * b[n-1] + white[n]

    The leak keeps the walk from drifting off; the spectrum still falls
    ~6 dB/oct above a corner of roughly leak * sr / (2 pi). The output is
    scaled by a fixed factor derived from the leak, not from the buffer,
    so levels match across runs of any length.
    """

    def __init__(self, seed=None, leak: float = DEFAULT_LEAK):
        super().__init__(seed)
        if not 0.0 < leak < 1.0:
            raise ValueError(f"leak must be in (0, 1), got {leak}")
        self.leak = leak
        self.state = 0.0
        self.scale = 1.0 / (BROWN_PEAK_SIGMAS * brown_sigma(leak))

    def generate(self, n: int) -> np.ndarray:
        walk, self.state = _leaky_integrate(self._white(n), 1.0 - self.leak, self.state)
        return np.clip(walk * self.scale, -1.0, 1.0)


def brown_sigma(leak):
    """Stationary std of the integrator fed with uniform [-1, 1) noise."""
    damping = 1.0 - leak
    return math.sqrt((1.0 / 3.0) / (1.0 - damping * damping))


@njit(cache=True, nogil=True)
def _leaky_integrate(white, damping, state):
    n = len(white)
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        state = damping * state + white[i]
        out[i] = state
    return out, state


_GENERATORS = {
    NoiseTexture.BROWN: BrownNoise,
    NoiseTexture.WHITE: WhiteNoise,
}


def make_generator(texture, seed=None) -> NoiseGenerator:
    return _GENERATORS[NoiseTexture(texture)](seed)


def make_generators(texture, n_channels, seed=None) -> list[NoiseGenerator]:
    """One independent generator per channel.

    Child seeds are spawned from a single SeedSequence, so a seeded run is
    reproducible while no two channels share a stream.
    """
    children = np.random.SeedSequence(seed).spawn(n_channels)
    return [make_generator(texture, child) for child in children]
