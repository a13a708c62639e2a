from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Iterator, Optional

from .data_models import DensityTuning, DifficultyHitObject

logger = logging.getLogger(__name__)


def note_density(h: DifficultyHitObject, tuning: Optional[DensityTuning] = None) -> float:
    """Reading load contributed by an on-screen object ``h`` when a new object appears."""
    tuning = tuning or DensityTuning()

    # Stacks do not add to density.
    if h.distance <= tuning.stack_distance:
        return 0.0

    value = (min(h.distance, tuning.max_distance) / tuning.max_distance) ** 2
    if h.jump_angle < 0:
        return value

    angle_factor = max(tuning.angle_threshold - h.jump_angle, 0.0) / tuning.angle_threshold
    spacing_factor = (max(h.distance - tuning.spacing_offset, tuning.spacing_floor) / tuning.spacing_floor) ** 3
    value = min(value + angle_factor * spacing_factor, 1.0)

    if h.jump_angle > tuning.obtuse_angle and h.distance > tuning.obtuse_distance:
        if tuning.literal_obtuse_term:
            # Calibrated with this exact precedence: only the constant is divided.
            value += (h.jump_angle - tuning.obtuse_angle / tuning.obtuse_angle) * tuning.obtuse_scale
        else:
            value += (h.jump_angle - tuning.obtuse_angle) / tuning.obtuse_angle * tuning.obtuse_scale
    return value


class LookaheadWindow:
    """
    Re-emits difficulty records once they had to be hit.

    The inner loop adds records that appear on screen into a queue until the
    oldest one is due. The outer loop then releases records one at a time, in
    arrival order. While a record is being queued every record already on
    screen is visible alongside it, which is what its density is measured
    against.
    """

    def __init__(self, records: Iterable[DifficultyHitObject], tuning: Optional[DensityTuning] = None) -> None:
        self.records = records
        self.tuning = tuning or DensityTuning()
        self.max_on_screen = 0

    def __iter__(self) -> Iterator[DifficultyHitObject]:
        upcoming = iter(self.records)
        on_screen: Deque[DifficultyHitObject] = deque()
        emitted = 0

        while True:
            while True:
                latest = next(upcoming, None)
                if latest is None:
                    # Nothing left to add, but queued records still need releasing.
                    break
                self._enter(latest, on_screen)
                on_screen.append(latest)
                self.max_on_screen = max(self.max_on_screen, len(on_screen))
                if on_screen[0].time_until_hit <= 0:
                    break

            if not on_screen:
                break
            emitted += 1
            yield on_screen.popleft()

        logger.debug("Lookahead window emitted %d records, at most %d on screen", emitted, self.max_on_screen)

    def _enter(self, latest: DifficultyHitObject, on_screen: Deque[DifficultyHitObject]) -> None:
        latest.true_density = 0
        latest.calculated_density = 0.0
        for h in on_screen:
            h.time_until_hit -= latest.delta_time
            if h.time_until_hit > 0 or not self.tuning.count_pending_only:
                latest.true_density += 1
            latest.calculated_density += note_density(h, self.tuning)
