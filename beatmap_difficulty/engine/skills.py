from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from .data_models import AimTuning, DifficultyHitObject, SectionTuning, SpeedTuning


class Skill:
    """
    Decaying strain accumulator for one skill.

    Strain decays exponentially with the time since the previous record and
    then grows by the record's weighted strain value. Peaks are sampled per
    fixed-length section of playback time to build the difficulty value.
    """

    name = "skill"

    def __init__(self, sections: Optional[SectionTuning] = None) -> None:
        self.sections = sections or SectionTuning()
        self.current_strain = 0.0
        self.current_section_peak = 0.0
        self.strains: List[float] = []
        self.strain_peaks: List[float] = []
        self._previous: Optional[DifficultyHitObject] = None
        self._section_end: Optional[float] = None

    @property
    def skill_multiplier(self) -> float:
        raise NotImplementedError

    @property
    def strain_decay_base(self) -> float:
        raise NotImplementedError

    def strain_value_of(self, current: DifficultyHitObject) -> float:
        raise NotImplementedError

    def strain_decay(self, ms: float) -> float:
        return math.pow(self.strain_decay_base, ms / 1000.0)

    def process(self, current: DifficultyHitObject) -> float:
        self._advance_sections(current.start_time)

        self.current_strain *= self.strain_decay(current.delta_time)
        self.current_strain += self.strain_value_of(current) * self.skill_multiplier

        self.current_section_peak = max(self.current_strain, self.current_section_peak)
        self.strains.append(self.current_strain)
        self._previous = current
        return self.current_strain

    def _advance_sections(self, time: float) -> None:
        length = self.sections.section_length
        if self._section_end is None:
            self._section_end = math.ceil(time / length) * length
            return

        while time > self._section_end:
            self.strain_peaks.append(self.current_section_peak)
            self._start_new_section_from(self._section_end)
            self._section_end += length

    def _start_new_section_from(self, offset: float) -> None:
        # The next section starts at the previous strain decayed to its boundary.
        if self._previous is not None:
            self.current_section_peak = self.current_strain * self.strain_decay(offset - self._previous.start_time)

    def peaks(self) -> List[float]:
        """Saved section peaks plus the still-open section."""
        if self._previous is None:
            return []
        return self.strain_peaks + [self.current_section_peak]

    def difficulty_value(self) -> float:
        """Weighted sum of the section peaks, strongest first."""
        peaks = np.sort(np.asarray(self.peaks(), dtype=float))[::-1]
        if peaks.size == 0:
            return 0.0
        weights = np.power(self.sections.decay_weight, np.arange(peaks.size))
        return float(np.dot(peaks, weights))


class Aim(Skill):
    """Skill required to move the cursor onto every object, with uniform circle size."""

    name = "aim"

    def __init__(self, tuning: Optional[AimTuning] = None, sections: Optional[SectionTuning] = None) -> None:
        super().__init__(sections)
        self.tuning = tuning or AimTuning()

    @property
    def skill_multiplier(self) -> float:
        return self.tuning.skill_multiplier

    @property
    def strain_decay_base(self) -> float:
        return self.tuning.strain_decay_base

    def strain_value_of(self, current: DifficultyHitObject) -> float:
        tuning = self.tuning
        distance = math.pow(current.distance, tuning.distance_exponent)
        time = current.delta_time
        angle = current.jump_angle

        # Fast jumps at tight angles are buffed by shortening their interval.
        if 0 <= angle <= tuning.flow_angle_max and distance > tuning.flow_distance_min:
            if tuning.time_buff_use_max:
                clamped = max(time, tuning.time_buff_cap)
            else:
                clamped = min(time, tuning.time_buff_cap)
            time *= tuning.time_buff_base + clamped / tuning.time_buff_divisor
        # Wide angles scale harder with distance.
        elif angle > tuning.wide_angle_min:
            distance += math.pow(current.distance, tuning.wide_angle_exponent) * (
                (angle - tuning.wide_angle_min) / tuning.wide_angle_divisor
            )

        return distance / time


class Speed(Skill):
    """Skill required to tap fast enough to keep up with the objects."""

    name = "speed"

    def __init__(self, tuning: Optional[SpeedTuning] = None, sections: Optional[SectionTuning] = None) -> None:
        super().__init__(sections)
        self.tuning = tuning or SpeedTuning()

    @property
    def skill_multiplier(self) -> float:
        return self.tuning.skill_multiplier

    @property
    def strain_decay_base(self) -> float:
        return self.tuning.strain_decay_base

    def speed_value(self, distance: float) -> float:
        single = self.tuning.single_spacing_threshold
        stream = self.tuning.stream_spacing_threshold
        diameter = self.tuning.almost_diameter

        if distance > single:
            return 1.6
        if distance > stream:
            return 1.24 + 0.36 * (distance - stream) / (single - stream)
        if distance > diameter:
            return 1.08 + 0.16 * (distance - diameter) / (stream - diameter)
        if distance > diameter / 2:
            return 1.0 + 0.08 * (distance - diameter / 2) / (diameter / 2)
        return 1.0

    def strain_value_of(self, current: DifficultyHitObject) -> float:
        return self.speed_value(current.distance) / current.delta_time
