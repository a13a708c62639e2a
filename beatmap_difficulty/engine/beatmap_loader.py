from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from .constants import PLAYFIELD_WIDTH
from .data_models import HitCircle, HitObject, Slider
from .geometry import Polyline, distance


class UnsupportedBeatmapError(ValueError):
    pass


@dataclass(frozen=True)
class BeatmapDescription:
    name: str
    circle_size: float
    approach_rate: float
    hit_objects: Tuple[HitObject, ...]


def radius_from_circle_size(circle_size: float) -> float:
    return (PLAYFIELD_WIDTH / 16.0) * (1.0 - 0.7 * (circle_size - 5.0) / 5.0)


def preempt_from_approach_rate(approach_rate: float) -> float:
    if approach_rate < 5:
        return 1200.0 + 600.0 * (5.0 - approach_rate) / 5.0
    return 1200.0 - 750.0 * (approach_rate - 5.0) / 5.0


def load_beatmap(path: Union[Path, str]) -> BeatmapDescription:
    """Loads a JSON description of resolved hit objects."""

    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(json_path)

    with open(json_path, "r", encoding="utf8") as f:
        document = json.load(f)
    return parse_beatmap(document, name=json_path.stem)


def parse_beatmap(document: Mapping[str, Any], name: str = "beatmap") -> BeatmapDescription:
    if not isinstance(document, Mapping):
        raise UnsupportedBeatmapError("Beatmap description must be a JSON object")

    circle_size = float(document.get("circle_size", 4.0))
    approach_rate = float(document.get("approach_rate", 9.0))
    defaults = {
        "radius": radius_from_circle_size(circle_size),
        "time_preempt": preempt_from_approach_rate(approach_rate),
    }

    entries = document.get("hit_objects")
    if not isinstance(entries, list):
        raise UnsupportedBeatmapError("Beatmap description missing hit_objects list")

    objects: List[HitObject] = [_parse_hit_object(entry, defaults) for entry in entries]
    return BeatmapDescription(
        name=str(document.get("name", name)),
        circle_size=circle_size,
        approach_rate=approach_rate,
        hit_objects=tuple(objects),
    )


def _parse_hit_object(entry: Mapping[str, Any], defaults: Dict[str, float]) -> HitObject:
    try:
        kind = entry.get("type", "circle")
        position = (float(entry["x"]), float(entry["y"]))
        start_time = float(entry["time"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise UnsupportedBeatmapError(f"Malformed hit object entry: {entry!r}") from exc

    radius = float(entry.get("radius", defaults["radius"]))
    time_preempt = float(entry.get("time_preempt", defaults["time_preempt"]))

    if kind == "circle":
        return HitCircle(position=position, start_time=start_time, radius=radius, time_preempt=time_preempt)
    if kind == "slider":
        return Slider(
            position=position,
            start_time=start_time,
            radius=radius,
            time_preempt=time_preempt,
            path=Polyline.from_points(_slider_points(position, entry.get("path", ()))),
            span_duration=float(entry.get("span_duration", 0.0)),
            span_count=int(entry.get("repeats", 0)) + 1,
            nested_times=tuple(float(t) for t in entry.get("nested_times", ())),
        )
    raise UnsupportedBeatmapError(f"Hit object type '{kind}' is not supported")


def _slider_points(head: Tuple[float, float], raw_points: Sequence[Sequence[float]]) -> List[Tuple[float, float]]:
    points = [(float(p[0]), float(p[1])) for p in raw_points]
    # Control paths may omit the head, which is always where the ball starts.
    if not points or distance(points[0], head) > 1e-6:
        points.insert(0, head)
    return points
