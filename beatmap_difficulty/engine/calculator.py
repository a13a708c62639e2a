from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .data_models import DifficultyHitObject, DifficultyTuning, HitObject
from .preprocessing import FeatureExtractor
from .skills import Aim, Skill, Speed
from .telemetry import StrainCollector, StrainFrame
from .windowing import LookaheadWindow

logger = logging.getLogger(__name__)


@dataclass
class DifficultyAttributes:
    aim: float = 0.0
    speed: float = 0.0
    aim_strains: List[float] = field(default_factory=list)
    speed_strains: List[float] = field(default_factory=list)
    records: List[DifficultyHitObject] = field(default_factory=list)


class DifficultyCalculator:
    """Runs the extractor, the lookahead window and both skills over one beatmap."""

    def __init__(
        self,
        tuning: Optional[DifficultyTuning] = None,
        telemetry: Optional[StrainCollector] = None,
    ) -> None:
        self.tuning = tuning or DifficultyTuning.from_config()
        self.telemetry = telemetry

    def create_skills(self) -> List[Skill]:
        return [
            Aim(self.tuning.aim, self.tuning.sections),
            Speed(self.tuning.speed, self.tuning.sections),
        ]

    def calculate(self, objects: Sequence[HitObject], time_rate: float = 1.0) -> DifficultyAttributes:
        # A fresh extractor per run so slider caches never leak between beatmaps.
        extractor = FeatureExtractor(self.tuning.preprocessing)
        window = LookaheadWindow(extractor.iter_records(objects, time_rate), self.tuning.density)
        aim, speed = self.create_skills()

        records: List[DifficultyHitObject] = []
        for record in window:
            aim.process(record)
            speed.process(record)
            records.append(record)
            if self.telemetry is not None:
                self.telemetry.record_frame(
                    StrainFrame(
                        index=len(records) - 1,
                        time=record.start_time,
                        distance=record.distance,
                        delta_time=record.delta_time,
                        jump_angle=record.jump_angle,
                        true_density=record.true_density,
                        calculated_density=record.calculated_density,
                        strains={aim.name: aim.current_strain, speed.name: speed.current_strain},
                    )
                )

        attributes = DifficultyAttributes(
            aim=aim.difficulty_value(),
            speed=speed.difficulty_value(),
            aim_strains=list(aim.strains),
            speed_strains=list(speed.strains),
            records=records,
        )
        logger.debug(
            "Calculated %d records at rate %.2f: aim %.4f, speed %.4f, %d sliders cached",
            len(records),
            time_rate,
            attributes.aim,
            attributes.speed,
            len(extractor.slider_cache),
        )
        return attributes


def calculate_difficulty(
    objects: Sequence[HitObject],
    time_rate: float = 1.0,
    tuning: Optional[DifficultyTuning] = None,
) -> DifficultyAttributes:
    return DifficultyCalculator(tuning).calculate(objects, time_rate)
