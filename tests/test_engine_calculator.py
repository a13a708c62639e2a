import math
import random

import pytest

from beatmap_difficulty.engine import (
    DifficultyCalculator,
    DifficultyTuning,
    StrainCollector,
    calculate_difficulty,
)
from tests.helpers import circle, slider


def _beatmap():
    rng = random.Random(11)
    objects = []
    time = 0.0
    for idx in range(40):
        x, y = rng.uniform(0, 512), rng.uniform(0, 384)
        if idx % 7 == 3:
            end = (min(512.0, x + 150.0), y)
            objects.append(slider([(x, y), end], time=time, span_duration=240.0, span_count=1 + idx % 2))
            time += 240.0 * (1 + idx % 2) + 120.0
        else:
            objects.append(circle(x, y, time, radius=36.48, preempt=600.0))
            time += rng.choice([75.0, 150.0, 300.0])
    return objects


def test_empty_and_single_object_maps():
    calculator = DifficultyCalculator(DifficultyTuning())
    for objects in ([], [circle(0, 0, 0)]):
        attributes = calculator.calculate(objects)
        assert attributes.records == []
        assert attributes.aim_strains == []
        assert attributes.speed_strains == []
        assert attributes.aim == 0.0
        assert attributes.speed == 0.0


def test_strains_align_with_records():
    objects = _beatmap()
    attributes = DifficultyCalculator(DifficultyTuning()).calculate(objects)
    assert len(attributes.records) == len(objects) - 1
    assert len(attributes.aim_strains) == len(attributes.records)
    assert len(attributes.speed_strains) == len(attributes.records)
    assert [r.base_object for r in attributes.records] == objects[1:]
    assert attributes.aim > 0.0
    assert attributes.speed > 0.0


def test_outputs_are_finite():
    objects = _beatmap()
    # Repeat an object on top of itself to hit the degenerate paths.
    objects.append(circle(objects[-1].position[0], objects[-1].position[1], objects[-1].start_time))
    attributes = DifficultyCalculator(DifficultyTuning()).calculate(objects)
    values = attributes.aim_strains + attributes.speed_strains
    values += [r.distance for r in attributes.records] + [r.calculated_density for r in attributes.records]
    assert all(math.isfinite(v) for v in values)


def test_calculation_is_deterministic():
    objects = _beatmap()
    first = calculate_difficulty(objects, 1.5, DifficultyTuning())
    second = calculate_difficulty(objects, 1.5, DifficultyTuning())
    assert first.aim_strains == second.aim_strains
    assert first.speed_strains == second.speed_strains
    assert first.aim == second.aim
    assert first.speed == second.speed


def test_faster_rate_is_harder():
    objects = _beatmap()
    normal = calculate_difficulty(objects, 1.0, DifficultyTuning())
    fast = calculate_difficulty(objects, 1.5, DifficultyTuning())
    assert fast.aim > normal.aim
    assert fast.speed > normal.speed


def test_telemetry_records_one_frame_per_record():
    collector = StrainCollector()
    objects = [circle(0, 0, 0), circle(100, 0, 500), circle(200, 0, 1000)]
    attributes = DifficultyCalculator(DifficultyTuning(), telemetry=collector).calculate(objects)

    frames = collector.export()
    assert len(frames) == 2
    assert frames[1].strains["aim"] == pytest.approx(attributes.aim_strains[1])
    assert frames[1].strains["speed"] == pytest.approx(attributes.speed_strains[1])
    assert frames[0].to_dict()["jump_angle"] == -1.0

    collector.clear()
    assert collector.export() == ()
