"""Signal buffer invariants."""

import numpy as np
import pytest

from oxidizer.engine.signal import Signal


def test_mono_array_becomes_one_column():
    sig = Signal(np.zeros(100), 44100)
    assert sig.frames.shape == (100, 1)
    assert sig.n_channels == 1
    assert sig.n_samples == 100
    assert sig.duration == pytest.approx(100 / 44100)


def test_stereo_channels():
    frames = np.column_stack([np.ones(10), -np.ones(10)])
    sig = Signal(frames, 48000)
    np.testing.assert_array_equal(sig.channel(1), -np.ones(10))
    assert len(sig.channels()) == 2


@pytest.mark.parametrize("frames, sr", [
    (np.zeros((10, 3)), 44100),
    (np.zeros((2, 2, 2)), 44100),
    (np.zeros(10), 0),
    (np.zeros(10), -44100),
    (np.zeros(10), 44100.9),
    (np.zeros(10), float("nan")),
    (np.zeros(10), True),
])
def test_invalid_signals(frames, sr):
    with pytest.raises(ValueError):
        Signal(frames, sr)


def test_whole_float_rate_is_accepted():
    assert Signal(np.zeros(4), 48000.0).sample_rate == 48000


def test_frames_are_a_private_copy():
    src = np.zeros(10)
    sig = Signal(src, 44100)
    src[:] = 1.0
    np.testing.assert_array_equal(sig.channel(0), np.zeros(10))
    with pytest.raises(ValueError):
        sig.frames[0, 0] = 1.0


def test_from_channels_requires_equal_lengths():
    with pytest.raises(ValueError):
        Signal.from_channels([np.zeros(10), np.zeros(9)], 44100)


def test_with_sample_rate_only_retags():
    sig = Signal(np.arange(5.0), 44100)
    slow = sig.with_sample_rate(22050)
    assert slow.sample_rate == 22050
    np.testing.assert_array_equal(slow.frames, sig.frames)


def test_as_stereo_duplicates_mono():
    sig = Signal(np.arange(4.0), 44100).as_stereo()
    assert sig.n_channels == 2
    np.testing.assert_array_equal(sig.channel(0), sig.channel(1))
    assert sig.as_stereo() is sig


def test_squeeze():
    assert Signal(np.zeros(8), 8000).squeeze().shape == (8,)
    assert Signal(np.zeros((8, 2)), 8000).squeeze().shape == (8, 2)
