"""Oxidation render -- the core engine.

Signal chain (per channel):
    Input -> Degradation Filter x passes -> (+ Noise * intensity) -> Saturate -> Output

Channels never read each other's state, so each one renders as its own
task and the results are joined before the output Signal is assembled.
All callers -- CLI, presets, tests -- use render_oxidizer().
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from oxidizer.engine.filters import DegradationFilter, level_alpha
from oxidizer.engine.mixer import mix
from oxidizer.engine.noise import make_generators
from oxidizer.engine.signal import Signal

log = logging.getLogger(__name__)


def _render_channel(dry, alpha, generator, params):
    """Render one channel. Owns its filter; the generator is not shared."""
    filt = DegradationFilter(alpha, params.passes)
    wet = filt.process(dry)
    noise = generator.generate(len(wet))
    return mix(wet, noise, params.intensity)


def render_oxidizer(signal: Signal, params, generators=None) -> Signal:
    """The single entry point.

    Args:
        signal: decoded input
        params: OxidizerParams (validated, read-only)
        generators: optional list with one NoiseGenerator per channel;
            by default fresh ones are spawned from params.seed

    Returns:
        new Signal tagged with params.sample_rate (or the input rate).
        The samples are never resampled.
    """
    t0 = time.perf_counter()
    n_ch = signal.n_channels
    if generators is None:
        generators = make_generators(params.noise, n_ch, params.seed)
    elif len(generators) != n_ch:
        raise ValueError(f"need {n_ch} noise generators, got {len(generators)}")
    if len(set(map(id, generators))) != n_ch:
        raise ValueError("each channel needs its own noise generator")

    # Filter coefficients follow the rate the samples were decoded at
    alpha = level_alpha(params.level, signal.sample_rate)
    log.debug("level=%s alpha=%.5f passes=%d noise=%s intensity=%.3f",
              params.level.value, alpha, params.passes,
              params.noise.value, params.intensity)

    if n_ch == 1:
        channels = [_render_channel(signal.channel(0), alpha, generators[0], params)]
    else:
        with ThreadPoolExecutor(max_workers=n_ch) as pool:
            futures = [pool.submit(_render_channel, signal.channel(ch), alpha,
                                   generators[ch], params)
                       for ch in range(n_ch)]
            channels = [f.result() for f in futures]

    out_sr = params.sample_rate or signal.sample_rate
    if out_sr != signal.sample_rate:
        log.info("Tagging output at %d Hz (input %d Hz); no resampling",
                 out_sr, signal.sample_rate)

    result = Signal.from_channels(channels, out_sr)
    log.info("Oxidized %.2fs of %d-channel audio in %.3fs",
             signal.duration, n_ch, time.perf_counter() - t0)
    return result
