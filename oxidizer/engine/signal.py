"""Signal buffer: decoded PCM frames plus their sample rate."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

MAX_CHANNELS = 2


@dataclass(frozen=True)
class Signal:
    """Per-channel float64 samples, shaped (samples, channels).

    Amplitudes are nominally in [-1.0, 1.0]. Channels are always the same
    length because they share one 2-D array.
    """

    frames: np.ndarray
    sample_rate: int

    def __post_init__(self):
        frames = np.array(self.frames, dtype=np.float64)
        if frames.ndim == 1:
            frames = frames[:, np.newaxis]
        if frames.ndim != 2:
            raise ValueError(f"frames must be 1-D or 2-D, got {frames.ndim}-D")
        if not 1 <= frames.shape[1] <= MAX_CHANNELS:
            raise ValueError(f"expected 1 or 2 channels, got {frames.shape[1]}")
        sr = self.sample_rate
        if isinstance(sr, bool) or not float(sr).is_integer():
            raise ValueError(f"sample rate must be a whole number, got {sr!r}")
        if sr <= 0:
            raise ValueError(f"sample rate must be positive, got {sr}")
        # private read-only copy; later edits to the caller's array never leak in
        frames.flags.writeable = False
        object.__setattr__(self, "frames", frames)
        object.__setattr__(self, "sample_rate", int(sr))

    @classmethod
    def from_channels(cls, channels, sample_rate) -> Signal:
        """Assemble a Signal from a list of equal-length 1-D channel arrays."""
        lengths = {len(ch) for ch in channels}
        if len(lengths) > 1:
            raise ValueError(f"channel lengths differ: {sorted(lengths)}")
        return cls(np.column_stack(channels) if channels else np.zeros((0, 1)),
                   sample_rate)

    @property
    def n_samples(self) -> int:
        return self.frames.shape[0]

    @property
    def n_channels(self) -> int:
        return self.frames.shape[1]

    @property
    def duration(self) -> float:
        return self.n_samples / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.frames[:, index]

    def channels(self) -> list[np.ndarray]:
        return [self.frames[:, ch] for ch in range(self.n_channels)]

    def with_sample_rate(self, sample_rate: int) -> Signal:
        """Retag with a new rate. The samples are not touched."""
        return Signal(self.frames, sample_rate)

    def as_stereo(self) -> Signal:
        """Duplicate a mono channel to L/R; stereo signals are returned as-is."""
        if self.n_channels == 2:
            return self
        return Signal(np.column_stack([self.frames[:, 0], self.frames[:, 0]]),
                      self.sample_rate)

    def squeeze(self) -> np.ndarray:
        """Mono (samples,) or stereo (samples, 2), as the WAV writer expects."""
        if self.n_channels == 1:
            return self.frames[:, 0]
        return self.frames
