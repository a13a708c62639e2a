from beatmap_difficulty.engine import DifficultyHitObject, HitCircle, Polyline, Slider


def circle(x: float, y: float, time: float, radius: float = 50.0, preempt: float = 600.0) -> HitCircle:
    return HitCircle(position=(x, y), start_time=time, radius=radius, time_preempt=preempt)


def slider(points, time: float, span_duration: float, span_count: int = 1, radius: float = 40.0, preempt: float = 600.0, nested_times=()) -> Slider:
    path = Polyline.from_points(points)
    return Slider(
        position=path.points[0],
        start_time=time,
        radius=radius,
        time_preempt=preempt,
        path=path,
        span_duration=span_duration,
        span_count=span_count,
        nested_times=tuple(nested_times),
    )


def record(
    distance: float = 100.0,
    delta_time: float = 200.0,
    jump_angle: float = -1.0,
    start_time: float = 0.0,
    time_until_hit: float = 600.0,
) -> DifficultyHitObject:
    return DifficultyHitObject(
        base_object=circle(0.0, 0.0, start_time),
        start_time=start_time,
        distance=distance,
        delta_time=delta_time,
        jump_angle=jump_angle,
        time_until_hit=time_until_hit,
    )
