from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence


@dataclass
class StrainFrame:
    index: int
    time: float
    distance: float
    delta_time: float
    jump_angle: float
    true_density: int
    calculated_density: float
    strains: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class StrainCollector:
    """Keeps one frame per emitted record for dumps and inspection."""

    def __init__(self) -> None:
        self.frames: List[StrainFrame] = []

    def record_frame(self, frame: StrainFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[StrainFrame]:
        return tuple(self.frames)

    def clear(self) -> None:
        self.frames.clear()
