from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Union

from beatmap_difficulty.config import get_config

from .constants import ANGLE_METHOD_ATAN2, ANGLE_METHODS, NORMALIZED_RADIUS
from .geometry import Polyline, Vector


@dataclass(frozen=True)
class HitCircle:
    """A point target with a resolved playfield position."""

    position: Vector
    start_time: float
    radius: float
    time_preempt: float

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"Hit object radius must be positive, got {self.radius}")


@dataclass(frozen=True)
class Slider:
    """
    A path target. ``path`` holds playfield coordinates and is travelled back
    and forth ``span_count`` times, each span lasting ``span_duration`` ms.

    ``nested_times`` lists the nested object timestamps, head first. When not
    supplied it defaults to the head followed by every span boundary.
    """

    position: Vector
    start_time: float
    radius: float
    time_preempt: float
    path: Polyline
    span_duration: float
    span_count: int = 1
    nested_times: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"Hit object radius must be positive, got {self.radius}")
        if self.span_count < 1:
            raise ValueError(f"Slider span count must be at least 1, got {self.span_count}")
        if self.span_duration <= 0:
            raise ValueError(f"Slider span duration must be positive, got {self.span_duration}")
        if not self.nested_times:
            boundaries = tuple(
                self.start_time + self.span_duration * span for span in range(self.span_count + 1)
            )
            object.__setattr__(self, "nested_times", boundaries)
        else:
            object.__setattr__(self, "nested_times", tuple(sorted(self.nested_times)))

    @property
    def end_time(self) -> float:
        return self.start_time + self.span_duration * self.span_count

    def position_at(self, time: float) -> Vector:
        """Position of the slider ball at an absolute time."""
        progress = (time - self.start_time) / self.span_duration
        progress = max(0.0, min(float(self.span_count), progress))
        span = int(progress)
        fraction = progress - span
        if span >= self.span_count:
            span = self.span_count - 1
            fraction = 1.0
        if span % 2 == 1:
            fraction = 1.0 - fraction
        return self.path.position_at_progress(fraction)


HitObject = Union[HitCircle, Slider]


@dataclass
class DifficultyHitObject:
    """Per-object features used by the skills. Window metrics are filled in later."""

    base_object: HitObject = field(repr=False)
    start_time: float
    distance: float
    delta_time: float
    jump_angle: float
    time_until_hit: float
    true_density: int = 0
    calculated_density: float = 0.0


# --------------------------------------------------------------------------- #
# Tuning


def _coerce(value: Any, fallback: Any) -> Any:
    if fallback is None or isinstance(fallback, float):
        return float(value)
    if isinstance(fallback, bool):
        return bool(value)
    return type(fallback)(value)


def _overlay(cls, section: str, config: Optional[Dict[str, Any]] = None):
    """Builds ``cls`` from its defaults, overridden by ``section`` of the tuning file."""
    defaults = cls()
    values = {}
    for item in fields(cls):
        fallback = getattr(defaults, item.name)
        value = get_config(f"{section}.{item.name}", None, config)
        values[item.name] = _coerce(value, fallback) if value is not None else fallback
    return cls(**values)


@dataclass(frozen=True)
class PreprocessingTuning:
    normalized_radius: float = NORMALIZED_RADIUS
    delta_time_floor: float = 50.0
    small_circle_threshold: float = 30.0
    small_circle_bonus_divisor: float = 30.0
    small_circle_bonus_cap: Optional[float] = None
    follow_radius_multiplier: float = 3.0
    stack_leg_ratio: float = 0.5
    angle_method: str = ANGLE_METHOD_ATAN2

    def __post_init__(self) -> None:
        if self.delta_time_floor <= 0:
            raise ValueError("delta_time_floor must be a positive number of milliseconds")
        if self.angle_method not in ANGLE_METHODS:
            raise ValueError(f"Unknown angle method: {self.angle_method}")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "PreprocessingTuning":
        return _overlay(cls, "preprocessing", config)


@dataclass(frozen=True)
class DensityTuning:
    stack_distance: float = 52.0
    max_distance: float = 208.0
    angle_threshold: float = 120.0
    spacing_offset: float = 99.0
    spacing_floor: float = 5.0
    obtuse_angle: float = 90.0
    obtuse_distance: float = 312.0
    obtuse_scale: float = 0.2
    literal_obtuse_term: bool = True
    count_pending_only: bool = False

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "DensityTuning":
        return _overlay(cls, "density", config)


@dataclass(frozen=True)
class AimTuning:
    skill_multiplier: float = 26.25
    strain_decay_base: float = 0.15
    distance_exponent: float = 0.99
    flow_angle_max: float = 90.0
    flow_distance_min: float = 39.0
    time_buff_base: float = 0.67
    time_buff_cap: float = 100.0
    time_buff_divisor: float = 300.0
    time_buff_use_max: bool = False
    wide_angle_min: float = 120.0
    wide_angle_exponent: float = 1.4
    wide_angle_divisor: float = 480.0

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "AimTuning":
        return _overlay(cls, "aim", config)


# Earlier aim calibration: only angles up to 60 degrees get the time buff and
# the buff grows with the interval instead of being capped by it.
LEGACY_AIM_TUNING = AimTuning(flow_angle_max=60.0, time_buff_use_max=True)


@dataclass(frozen=True)
class SpeedTuning:
    skill_multiplier: float = 1400.0
    strain_decay_base: float = 0.3
    single_spacing_threshold: float = 125.0
    stream_spacing_threshold: float = 110.0
    almost_diameter: float = 90.0

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "SpeedTuning":
        return _overlay(cls, "speed", config)


@dataclass(frozen=True)
class SectionTuning:
    section_length: float = 400.0
    decay_weight: float = 0.9

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "SectionTuning":
        return _overlay(cls, "sections", config)


@dataclass(frozen=True)
class DifficultyTuning:
    preprocessing: PreprocessingTuning = field(default_factory=PreprocessingTuning)
    density: DensityTuning = field(default_factory=DensityTuning)
    aim: AimTuning = field(default_factory=AimTuning)
    speed: SpeedTuning = field(default_factory=SpeedTuning)
    sections: SectionTuning = field(default_factory=SectionTuning)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "DifficultyTuning":
        return cls(
            preprocessing=PreprocessingTuning.from_config(config),
            density=DensityTuning.from_config(config),
            aim=AimTuning.from_config(config),
            speed=SpeedTuning.from_config(config),
            sections=SectionTuning.from_config(config),
        )
