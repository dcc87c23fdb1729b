from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List


class TiltOrientation(IntEnum):
    LAMP_VERTICAL = 1    # base up or base down
    LAMP_HORIZONTAL = 2
    LAMP_TILTED = 3


@dataclass(frozen=True)
class TiltData:
    orientation: TiltOrientation
    num_pairs: int
    angles: List[float] = field(default_factory=list)
    mult_factors: List[float] = field(default_factory=list)

    def validate(self) -> None:
        if self.num_pairs < 0:
            raise ValueError("Tilt pair count must be >= 0")
        if len(self.angles) != self.num_pairs or len(self.mult_factors) != self.num_pairs:
            raise ValueError(
                f"Tilt angles/factors length mismatch: expected {self.num_pairs}, "
                f"got {len(self.angles)}/{len(self.mult_factors)}"
            )

    def copy(self) -> "TiltData":
        return TiltData(
            orientation=self.orientation,
            num_pairs=self.num_pairs,
            angles=list(self.angles),
            mult_factors=list(self.mult_factors),
        )
