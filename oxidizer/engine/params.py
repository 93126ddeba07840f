"""Parameter schema for the oxidizer.

This is the shared contract between the CLI, presets and scripting.
All parameter sources produce a dict in this format; OxidizerParams is the
validated, read-only snapshot a render runs with.

Defined declaratively using ParamDef -- PARAM_RANGES and CHOICE_RANGES are
derived automatically.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from shared.params import ParamType as T, ParamDef, ParamSchema
from oxidizer.engine.errors import ConfigurationError

SR = 44100


class OxidationLevel(Enum):
    CLEAR = "clear"      # warm and clean
    DEEP = "deep"        # deep and mellow, highs clearly reduced
    MUFFLED = "muffled"  # all about that bass, no treble


class NoiseTexture(Enum):
    BROWN = "brown"  # leaky random walk, deep rumble
    WHITE = "white"  # radio static


# One-pole cutoff per level, Hz
LEVEL_CUTOFFS = {
    OxidationLevel.CLEAR: 14000.0,
    OxidationLevel.DEEP: 6000.0,
    OxidationLevel.MUFFLED: 1500.0,
}

# Older names for the levels
LEVEL_ALIASES = {"light": "clear", "brown": "deep", "heavy": "muffled"}

LEVEL_NAMES = [lv.value for lv in OxidationLevel]
NOISE_NAMES = [tx.value for tx in NoiseTexture]

# ── Schema ────────────────────────────────────────────────────────────

_PARAMS = [
    ParamDef("level", T.CHOICE, section="filter",
             default="deep", label="Oxidation level",
             choices=LEVEL_NAMES, aliases=LEVEL_ALIASES),

    ParamDef("passes", T.INT, section="filter",
             default=1, label="Filter passes",
             range=(1, None)),

    ParamDef("noise", T.CHOICE, section="noise",
             default="brown", label="Noise texture",
             choices=NOISE_NAMES),

    ParamDef("intensity", T.FLOAT, section="noise",
             default=0.05, label="Noise and saturation",
             range=(0.0, 1.0)),

    ParamDef("seed", T.INT, section="noise",
             default=None, label="Noise seed",
             range=(0, None), optional=True),

    ParamDef("sample_rate", T.INT, section="output",
             default=None, label="Output sample rate",
             range=(1, None), optional=True),
]

SCHEMA = ParamSchema(_PARAMS)

PARAM_RANGES = SCHEMA.param_ranges()
PARAM_SECTIONS = SCHEMA.param_sections()
CHOICE_RANGES = SCHEMA.choice_ranges()


def default_params():
    return SCHEMA.default_params()


def load_preset(path):
    """Read a preset JSON file into a raw params dict.

    A top-level "_meta" entry is allowed and ignored.
    """
    try:
        with open(path) as f:
            preset = json.load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read preset {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Preset {path} is not valid JSON: {exc}") from exc
    if not isinstance(preset, dict):
        raise ConfigurationError(f"Preset {path} must contain a JSON object")
    preset.pop("_meta", None)
    return preset


@dataclass(frozen=True)
class OxidizerParams:
    """Immutable configuration for one render.

    sample_rate=None keeps the input rate. A different rate only retags the
    output (no resampling), which is what gives the slowed-tape effect.
    """

    level: OxidationLevel = OxidationLevel.DEEP
    noise: NoiseTexture = NoiseTexture.BROWN
    intensity: float = 0.05
    passes: int = 1
    sample_rate: int | None = None
    seed: int | None = None

    def __post_init__(self):
        # Re-run the schema checks so direct construction is held to the
        # same contract as presets and the CLI.
        checked = _validate(self.to_dict())
        object.__setattr__(self, "level", OxidationLevel(checked["level"]))
        object.__setattr__(self, "noise", NoiseTexture(checked["noise"]))
        object.__setattr__(self, "intensity", checked["intensity"])
        object.__setattr__(self, "passes", checked["passes"])
        object.__setattr__(self, "sample_rate", checked["sample_rate"])
        object.__setattr__(self, "seed", checked["seed"])

    @classmethod
    def from_dict(cls, raw: dict) -> OxidizerParams:
        """Build params from a raw dict; missing keys take their defaults."""
        return cls(**_validate(raw))

    def to_dict(self) -> dict:
        return {
            "level": _token(self.level),
            "noise": _token(self.noise),
            "intensity": self.intensity,
            "passes": self.passes,
            "sample_rate": self.sample_rate,
            "seed": self.seed,
        }

    @property
    def cutoff_hz(self) -> float:
        return LEVEL_CUTOFFS[self.level]


def _token(value):
    return value.value if isinstance(value, Enum) else value


def _validate(raw):
    try:
        return SCHEMA.validate(raw)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
