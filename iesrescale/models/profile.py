from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import List, Optional

from iesrescale.models.tilt import TiltData


TILT_NONE = "NONE"
TILT_INCLUDE = "INCLUDE"


class FileFormat(Enum):
    LM63_1986 = "LM-63-1986"
    LM63_1991 = "LM-63-1991"
    LM63_1995 = "LM-63-1995"
    LM63_2002 = "LM-63-2002"


class Units(IntEnum):
    FEET = 1
    METERS = 2


class GoniometerType(IntEnum):
    TYPE_C = 1
    TYPE_B = 2
    TYPE_A = 3


@dataclass(frozen=True)
class FileInfo:
    format: FileFormat
    name: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class LampData:
    num_lamps: int
    lumens_per_lamp: float
    multiplier: float                 # candela multiplying factor
    tilt_file_name: str = TILT_NONE   # "NONE", "INCLUDE" or an external path
    tilt: Optional[TiltData] = None


@dataclass(frozen=True)
class Dimensions:
    width: float
    length: float
    height: float


@dataclass(frozen=True)
class ElectricalData:
    ballast_factor: float
    blp_factor: float                 # ballast-lamp photometric factor
    input_watts: float


@dataclass(frozen=True)
class PhotometricData:
    goniometer_type: GoniometerType
    num_vert_angles: int
    num_horz_angles: int
    vert_angles: List[float]
    horz_angles: List[float]
    candelas: List[List[float]]       # shape: [num_horz_angles][num_vert_angles]

    def validate(self) -> None:
        if self.num_vert_angles < 1 or self.num_horz_angles < 1:
            raise ValueError("Angle counts must be >= 1")
        if len(self.vert_angles) != self.num_vert_angles:
            raise ValueError("Vertical angle count does not match header")
        if len(self.horz_angles) != self.num_horz_angles:
            raise ValueError("Horizontal angle count does not match header")
        if len(self.candelas) != self.num_horz_angles:
            raise ValueError("Candela row count does not match horizontal angle count")
        if any(len(row) != self.num_vert_angles for row in self.candelas):
            raise ValueError("Candela row length does not match vertical angle count")


@dataclass(frozen=True)
class PhotometricProfile:
    file: FileInfo
    labels: List[str]
    lamp: LampData
    units: Units
    dim: Dimensions
    elec: ElectricalData
    photo: PhotometricData

    @property
    def has_tilt(self) -> bool:
        return self.lamp.tilt is not None

    def with_name(self, name: Optional[str]) -> "PhotometricProfile":
        return replace(self, file=replace(self.file, name=name))

    def with_photometry(self, vert_angles: List[float], candelas: List[List[float]]) -> "PhotometricProfile":
        """Copy of this profile with new vertical angles and candela values.

        Every other list is copied too, so the result shares no mutable state
        with ``self``.
        """
        photo = replace(
            self.photo,
            vert_angles=[float(a) for a in vert_angles],
            horz_angles=list(self.photo.horz_angles),
            candelas=[[float(c) for c in row] for row in candelas],
        )
        lamp = replace(self.lamp, tilt=self.lamp.tilt.copy() if self.lamp.tilt is not None else None)
        return replace(self, labels=list(self.labels), lamp=lamp, photo=photo)
