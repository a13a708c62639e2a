"""
Difficulty engine for circle and slider beatmaps.

The package is split into data models, geometry helpers, the feature
extractor, the lookahead window and the strain skills. The calculator
composes these pieces into a single pass over a beatmap.
"""

from .beatmap_loader import BeatmapDescription, load_beatmap, parse_beatmap  # noqa: F401
from .calculator import DifficultyAttributes, DifficultyCalculator, calculate_difficulty  # noqa: F401
from .data_models import (  # noqa: F401
    LEGACY_AIM_TUNING,
    AimTuning,
    DensityTuning,
    DifficultyHitObject,
    DifficultyTuning,
    HitCircle,
    PreprocessingTuning,
    SectionTuning,
    Slider,
    SpeedTuning,
)
from .geometry import Polyline  # noqa: F401
from .preprocessing import FeatureExtractor, create_difficulty_objects  # noqa: F401
from .skills import Aim, Skill, Speed  # noqa: F401
from .telemetry import StrainCollector, StrainFrame  # noqa: F401
from .windowing import LookaheadWindow, note_density  # noqa: F401

__all__ = [
    "BeatmapDescription",
    "load_beatmap",
    "parse_beatmap",
    "DifficultyAttributes",
    "DifficultyCalculator",
    "calculate_difficulty",
    "LEGACY_AIM_TUNING",
    "AimTuning",
    "DensityTuning",
    "DifficultyHitObject",
    "DifficultyTuning",
    "HitCircle",
    "PreprocessingTuning",
    "SectionTuning",
    "Slider",
    "SpeedTuning",
    "Polyline",
    "FeatureExtractor",
    "create_difficulty_objects",
    "Aim",
    "Skill",
    "Speed",
    "StrainCollector",
    "StrainFrame",
    "LookaheadWindow",
    "note_density",
]
