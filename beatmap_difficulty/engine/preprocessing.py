from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .data_models import DifficultyHitObject, HitObject, PreprocessingTuning, Slider
from .geometry import Vector, distance, jump_angle, length, subtract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LazySliderCursor:
    """Where a lazily moved cursor ends up after following a slider."""

    end_position: Vector
    travel_distance: float


class LazySliderCache:
    """Compute-once store of lazy cursor results, keyed by slider identity."""

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Slider, LazySliderCursor]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, slider: Slider) -> bool:
        return id(slider) in self._entries

    def get(self, slider: Slider, follow_radius_multiplier: float) -> LazySliderCursor:
        entry = self._entries.get(id(slider))
        if entry is None:
            # Keep a reference to the slider so its id cannot be reused.
            entry = (slider, compute_lazy_cursor(slider, follow_radius_multiplier))
            self._entries[id(slider)] = entry
        return entry[1]


def compute_lazy_cursor(slider: Slider, follow_radius_multiplier: float = 3.0) -> LazySliderCursor:
    """
    Follows the slider with a circle that only moves when the ball leaves it.

    The path is sampled at every nested object after the head and then at the
    slider end.
    """
    follow_radius = slider.radius * follow_radius_multiplier
    centre = slider.position
    travel = 0.0

    for time in list(slider.nested_times[1:]) + [slider.end_time]:
        diff = subtract(slider.position_at(time), centre)
        dist = length(diff)
        if dist > follow_radius:
            # The cursor would be outside the follow circle, drag it along.
            step = dist - follow_radius
            centre = (centre[0] + diff[0] / dist * step, centre[1] + diff[1] / dist * step)
            travel += step

    return LazySliderCursor(end_position=centre, travel_distance=travel)


class FeatureExtractor:
    """Turns consecutive hit objects into ``DifficultyHitObject`` records."""

    def __init__(self, tuning: Optional[PreprocessingTuning] = None) -> None:
        self.tuning = tuning or PreprocessingTuning()
        self.slider_cache = LazySliderCache()

    def scaling_factor(self, radius: float) -> float:
        """Distance multiplier that makes every circle behave as the normalized size."""
        tuning = self.tuning
        factor = tuning.normalized_radius / radius
        if radius < tuning.small_circle_threshold:
            shortfall = tuning.small_circle_threshold - radius
            if tuning.small_circle_bonus_cap is not None:
                shortfall = min(shortfall, tuning.small_circle_bonus_cap)
            factor *= 1.0 + shortfall / tuning.small_circle_bonus_divisor
        return factor

    def cursor_after(self, obj: HitObject) -> Tuple[Vector, float]:
        """Cursor position left behind by ``obj`` and the distance travelled on it."""
        if isinstance(obj, Slider):
            cursor = self.slider_cache.get(obj, self.tuning.follow_radius_multiplier)
            return cursor.end_position, cursor.travel_distance
        return obj.position, 0.0

    def create(
        self,
        current: HitObject,
        previous: HitObject,
        previous_previous: HitObject,
        time_rate: float,
    ) -> DifficultyHitObject:
        tuning = self.tuning
        cursor_position, travel_distance = self.cursor_after(previous)
        scaled_distance = (travel_distance + distance(cursor_position, current.position)) * self.scaling_factor(
            current.radius
        )

        delta_time = max(tuning.delta_time_floor, (current.start_time - previous.start_time) / time_rate)

        angle = jump_angle(
            current.position,
            previous.position,
            previous_previous.position,
            min_leg_length=current.radius * tuning.stack_leg_ratio,
            method=tuning.angle_method,
        )

        return DifficultyHitObject(
            base_object=current,
            start_time=current.start_time / time_rate,
            distance=scaled_distance,
            delta_time=delta_time,
            jump_angle=angle,
            time_until_hit=current.time_preempt,
        )

    def iter_records(self, objects: Sequence[HitObject], time_rate: float) -> Iterator[DifficultyHitObject]:
        if time_rate <= 0:
            raise ValueError(f"Time rate must be positive, got {time_rate}")

        # Upstream ordering is not guaranteed; the sort is stable for equal times.
        ordered: List[HitObject] = sorted(objects, key=lambda obj: obj.start_time)
        if len(ordered) < 2:
            logger.debug("Fewer than two hit objects, no difficulty records produced")
        return self._generate(ordered, time_rate)

    def _generate(self, ordered: List[HitObject], time_rate: float) -> Iterator[DifficultyHitObject]:
        for idx in range(1, len(ordered)):
            # The first record reuses the opening object to complete its triangle.
            previous_previous = ordered[idx - 2] if idx > 1 else ordered[idx - 1]
            yield self.create(ordered[idx], ordered[idx - 1], previous_previous, time_rate)


def create_difficulty_objects(
    objects: Sequence[HitObject],
    time_rate: float = 1.0,
    tuning: Optional[PreprocessingTuning] = None,
) -> Iterator[DifficultyHitObject]:
    """Yields one record per object after the first, in start time order."""
    return FeatureExtractor(tuning).iter_records(objects, time_rate)
