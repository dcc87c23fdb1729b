from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from iesrescale.errors import SerializeError
from iesrescale.io.files import write_bytes
from iesrescale.models.profile import TILT_INCLUDE, TILT_NONE, FileFormat, PhotometricProfile


FORMAT_LINES = {
    FileFormat.LM63_1995: "IESNA:LM-63-1995",
    FileFormat.LM63_2002: "IESNA:LM-63-2002",
    FileFormat.LM63_1991: "IESNA91",
    FileFormat.LM63_1986: "IESNA86",
}


def format_number(value: float, precision: int = 2) -> str:
    """Fixed-point with `precision` digits, trailing zeros and dot removed."""
    s = f"{float(value):.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("-0", "-"):
        s = "0"
    return s


def _join(values: Iterable[float]) -> str:
    return " ".join(format_number(v) for v in values)


def profile_to_lines(profile: PhotometricProfile) -> List[str]:
    marker = FORMAT_LINES.get(profile.file.format)
    if marker is None:
        raise SerializeError(f"Unsupported file format: {profile.file.format!r}", filename=profile.file.name)

    lines: List[str] = [marker]
    lines.extend(profile.labels)

    tilt = profile.lamp.tilt
    if tilt is None:
        lines.append(f"TILT={TILT_NONE}")
    else:
        # External TILT references are written inline.
        lines.append(f"TILT={TILT_INCLUDE}")
        lines.append(str(int(tilt.orientation)))
        lines.append(str(int(tilt.num_pairs)))
        if tilt.angles:
            lines.append(_join(tilt.angles))
        if tilt.mult_factors:
            lines.append(_join(tilt.mult_factors))

    lamp = profile.lamp
    photo = profile.photo
    dim = profile.dim
    lines.append(
        " ".join(
            [
                str(int(lamp.num_lamps)),
                format_number(lamp.lumens_per_lamp),
                format_number(lamp.multiplier),
                str(int(photo.num_vert_angles)),
                str(int(photo.num_horz_angles)),
                str(int(photo.goniometer_type)),
                str(int(profile.units)),
                format_number(dim.width),
                format_number(dim.length),
                format_number(dim.height),
            ]
        )
    )
    elec = profile.elec
    lines.append(_join([elec.ballast_factor, elec.blp_factor, elec.input_watts]))
    lines.append(_join(photo.vert_angles[: photo.num_vert_angles]))
    lines.append(_join(photo.horz_angles[: photo.num_horz_angles]))
    for row in photo.candelas[: photo.num_horz_angles]:
        lines.append(_join(row[: photo.num_vert_angles]))
    return lines


def profile_to_bytes(profile: PhotometricProfile) -> bytes:
    return "".join(f"{ln}\n" for ln in profile_to_lines(profile)).encode("latin-1", errors="replace")


def write_profile(profile: PhotometricProfile, path: Union[str, Path]) -> Path:
    return write_bytes(profile_to_bytes(profile), path)
