"""Parameter schema, presets and OxidizerParams validation."""

import dataclasses
import json

import pytest

from oxidizer.engine.errors import ConfigurationError
from oxidizer.engine.params import (
    CHOICE_RANGES, PARAM_RANGES, PARAM_SECTIONS, SCHEMA,
    NoiseTexture, OxidationLevel, OxidizerParams, default_params, load_preset,
)


def test_defaults():
    params = OxidizerParams()
    assert params.level is OxidationLevel.DEEP
    assert params.noise is NoiseTexture.BROWN
    assert params.intensity == 0.05
    assert params.passes == 1
    assert params.sample_rate is None
    assert params.seed is None


def test_default_params_dict_builds_default_params():
    assert OxidizerParams.from_dict(default_params()) == OxidizerParams()


def test_derived_tables():
    assert PARAM_RANGES["intensity"] == (0.0, 1.0)
    assert CHOICE_RANGES == {"level": 3, "noise": 2}
    assert PARAM_SECTIONS["filter"] == ["level", "passes"]
    assert len(SCHEMA) == 6


@pytest.mark.parametrize("token, level", [
    ("clear", OxidationLevel.CLEAR),
    ("light", OxidationLevel.CLEAR),
    ("DEEP", OxidationLevel.DEEP),
    ("brown", OxidationLevel.DEEP),
    (" Muffled ", OxidationLevel.MUFFLED),
    ("heavy", OxidationLevel.MUFFLED),
    (OxidationLevel.MUFFLED, OxidationLevel.MUFFLED),
])
def test_level_tokens(token, level):
    assert OxidizerParams.from_dict({"level": token}).level is level


def test_noise_token():
    assert OxidizerParams(noise="White").noise is NoiseTexture.WHITE


@pytest.mark.parametrize("raw", [
    {"level": "rusty"},
    {"noise": "pink"},
    {"passes": 0},
    {"passes": -2},
    {"passes": 1.5},
    {"passes": "many"},
    {"intensity": 1.01},
    {"intensity": -0.5},
    {"intensity": float("nan")},
    {"intensity": True},
    {"intensity": None},
    {"sample_rate": 0},
    {"seed": -1},
    {"wet_dry": 0.5},
])
def test_invalid_values_are_configuration_errors(raw):
    with pytest.raises(ConfigurationError):
        OxidizerParams.from_dict(raw)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        OxidizerParams(passes=0)


def test_numeric_strings_are_accepted():
    params = OxidizerParams.from_dict({"passes": "3", "intensity": "0.25"})
    assert params.passes == 3
    assert params.intensity == 0.25


def test_params_are_read_only():
    params = OxidizerParams()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.passes = 4


def test_to_dict_round_trip():
    params = OxidizerParams(level=OxidationLevel.CLEAR, noise=NoiseTexture.WHITE,
                            intensity=0.4, passes=3, sample_rate=22050, seed=9)
    assert params.to_dict()["level"] == "clear"
    assert OxidizerParams.from_dict(params.to_dict()) == params


def test_cutoff_follows_level():
    assert OxidizerParams(level="clear").cutoff_hz > OxidizerParams(level="muffled").cutoff_hz


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

def test_load_preset_drops_meta(tmp_path):
    path = tmp_path / "rusty.json"
    path.write_text(json.dumps({"_meta": {"name": "rusty"}, "level": "heavy", "passes": 3}))
    preset = load_preset(path)
    assert preset == {"level": "heavy", "passes": 3}
    params = OxidizerParams.from_dict(preset)
    assert params.level is OxidationLevel.MUFFLED
    assert params.passes == 3


def test_load_preset_rejects_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{level: ")
    with pytest.raises(ConfigurationError):
        load_preset(path)


def test_load_preset_rejects_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigurationError):
        load_preset(path)


def test_load_preset_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_preset(tmp_path / "nope.json")
