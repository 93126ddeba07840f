"""Shared audio I/O utilities.

Provides load_audio and save_wav used by the CLI renderer. Decoding goes
through libsndfile (WAV, FLAC, OGG, and MP3 on recent builds); output is
always 16-bit PCM WAV.
"""

import logging
import os
import tempfile

import numpy as np
import soundfile as sf
from scipy.io import wavfile

log = logging.getLogger(__name__)

MAX_CHANNELS = 2


def _current_umask():
    mask = os.umask(0)
    os.umask(mask)
    return mask


# mkstemp creates 0600 files; renamed output gets the mode a plain open() would
_FILE_MODE = 0o666 & ~_current_umask()


def load_audio(path):
    """Decode an audio file at its native sample rate.

    Returns (audio_array, sample_rate).
    Audio is float64 shaped (samples, channels) with 1 or 2 channels;
    extra channels beyond the first two are dropped.
    """
    audio, sr = sf.read(path, dtype="float64", always_2d=True)
    if audio.shape[1] > MAX_CHANNELS:
        log.warning("%s has %d channels; keeping the first %d",
                    path, audio.shape[1], MAX_CHANNELS)
        audio = audio[:, :MAX_CHANNELS]
    return audio, sr


def save_wav(path, audio, sr=44100, normalize=False):
    """Save audio to a 16-bit WAV file.

    The file is written next to its destination and renamed into place, so
    an interrupted write never leaves a truncated WAV behind.

    normalize=True scales the peak to 0.95 first.
    """
    audio = np.asarray(audio, dtype=np.float64)
    if normalize:
        peak = np.max(np.abs(audio)) if audio.size else 0.0
        if peak > 0:
            audio = audio / peak * 0.95
    out = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)

    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(suffix=".wav", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            wavfile.write(f, sr, out)
        os.chmod(tmp_path, _FILE_MODE)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
