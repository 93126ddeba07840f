"""Offline rendering for the Oxidizer.

Usage:
    python -m oxidizer.audio.render input.mp3 [-o output.wav] [--preset preset.json]
        [--level deep] [--noise brown] [--intensity 0.05] [--passes 1]
        [--sample-rate 44100] [--seed 7] [--stereo] [--normalize]

Parameters are validated before the input is touched; the output file only
appears once the whole render succeeded.
"""

import argparse
import logging
import sys

from shared.audio import load_audio, save_wav
from oxidizer.engine.errors import DecodingError, EncodingError, OxidizerError
from oxidizer.engine.oxidizer import render_oxidizer
from oxidizer.engine.params import (
    LEVEL_ALIASES, LEVEL_NAMES, NOISE_NAMES, SCHEMA, OxidizerParams, default_params,
    load_preset,
)
from oxidizer.engine.signal import Signal

log = logging.getLogger("oxidizer")


def _help(key, detail):
    return f"{SCHEMA.get(key).label}: {detail}"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="oxidizer",
        description="Make everything sound like it was left out in the rain: "
                    "cascaded lowpass plus brown or white noise.")
    parser.add_argument("input", help="Input audio file (WAV, FLAC, OGG, MP3)")
    parser.add_argument("-o", "--output", default="output.wav",
                        help="Output WAV file (default output.wav)")
    parser.add_argument("--preset", help="Preset JSON file")
    parser.add_argument("-l", "--level", metavar="LEVEL",
                        help=_help("level", ", ".join(LEVEL_NAMES + list(LEVEL_ALIASES))))
    parser.add_argument("--noise", metavar="TEXTURE",
                        help=_help("noise", ", ".join(NOISE_NAMES)))
    parser.add_argument("-n", "--intensity", type=float,
                        help=_help("intensity", "0.0 to 1.0"))
    parser.add_argument("-p", "--passes", type=int,
                        help=_help("passes", "each stacks another 6 dB/oct"))
    parser.add_argument("-s", "--sample-rate", type=int, dest="sample_rate",
                        help=_help("sample_rate", "tag only, no resampling (default: input rate)"))
    parser.add_argument("--seed", type=int,
                        help=_help("seed", "fixed value for repeatable renders"))
    parser.add_argument("--stereo", action="store_true",
                        help="Duplicate mono input to two channels before processing")
    parser.add_argument("--normalize", action="store_true",
                        help="Scale the output peak to 0.95 before writing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def params_from_args(args):
    """Defaults <- preset <- explicit flags, validated into OxidizerParams."""
    params = default_params()
    if args.preset:
        params.update(load_preset(args.preset))
    for key in ("level", "noise", "intensity", "passes", "sample_rate", "seed"):
        value = getattr(args, key)
        if value is not None:
            params[key] = value
    return OxidizerParams.from_dict(params)


def run(args):
    params = params_from_args(args)

    try:
        audio, sr = load_audio(args.input)
    except (OSError, RuntimeError) as exc:
        raise DecodingError(f"Cannot decode {args.input}: {exc}") from exc
    signal = Signal(audio, sr)
    if args.stereo:
        signal = signal.as_stereo()
    ch = "stereo" if signal.n_channels == 2 else "mono"
    log.info("Loaded %s: %d samples, %d Hz, %s", args.input, signal.n_samples, sr, ch)

    output = render_oxidizer(signal, params)

    try:
        save_wav(args.output, output.squeeze(), output.sample_rate,
                 normalize=args.normalize)
    except (OSError, ValueError) as exc:
        raise EncodingError(f"Cannot write {args.output}: {exc}") from exc
    log.info("Saved %s", args.output)
    return output


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s %(levelname)s: %(message)s")
    try:
        run(args)
    except OxidizerError as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
