import json

import pytest

from beatmap_difficulty.engine import HitCircle, Slider, load_beatmap, parse_beatmap
from beatmap_difficulty.engine.beatmap_loader import (
    UnsupportedBeatmapError,
    preempt_from_approach_rate,
    radius_from_circle_size,
)


def test_radius_and_preempt_from_difficulty_settings():
    assert radius_from_circle_size(4.0) == pytest.approx(36.48)
    assert radius_from_circle_size(5.0) == pytest.approx(32.0)
    assert preempt_from_approach_rate(9.0) == pytest.approx(600.0)
    assert preempt_from_approach_rate(5.0) == pytest.approx(1200.0)
    assert preempt_from_approach_rate(4.0) == pytest.approx(1320.0)


def test_load_beatmap_builds_objects(tmp_path):
    document = {
        "name": "sample",
        "circle_size": 4,
        "approach_rate": 9,
        "hit_objects": [
            {"type": "circle", "x": 64, "y": 64, "time": 1000},
            {"type": "slider", "x": 128, "y": 64, "time": 1300, "path": [[328, 64]], "span_duration": 250, "repeats": 1},
            {"x": 256, "y": 192, "time": 2000, "radius": 20},
        ],
    }
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(document), encoding="utf8")

    beatmap = load_beatmap(path)
    assert beatmap.name == "sample"
    circle, slider, small = beatmap.hit_objects
    assert isinstance(circle, HitCircle)
    assert circle.radius == pytest.approx(36.48)
    assert circle.time_preempt == pytest.approx(600.0)

    assert isinstance(slider, Slider)
    assert slider.path.points[0] == (128.0, 64.0)
    assert slider.span_count == 2
    assert slider.end_time == pytest.approx(1800.0)
    assert slider.nested_times == (1300.0, 1550.0, 1800.0)

    assert small.radius == 20.0


def test_unknown_object_type_rejected():
    with pytest.raises(UnsupportedBeatmapError):
        parse_beatmap({"hit_objects": [{"type": "spinner", "x": 0, "y": 0, "time": 0}]})


def test_malformed_entry_rejected():
    with pytest.raises(UnsupportedBeatmapError):
        parse_beatmap({"hit_objects": [{"type": "circle", "x": 0}]})


def test_missing_hit_objects_rejected():
    with pytest.raises(UnsupportedBeatmapError):
        parse_beatmap({"circle_size": 4})


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_beatmap(tmp_path / "missing.json")
