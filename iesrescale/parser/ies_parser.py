from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from iesrescale.errors import FailureKind, IesRescaleError, ParseError
from iesrescale.io.files import read_bytes
from iesrescale.models.profile import (
    Dimensions,
    ElectricalData,
    FileFormat,
    FileInfo,
    GoniometerType,
    LampData,
    PhotometricData,
    PhotometricProfile,
    Units,
)
from iesrescale.parser.line_cursor import LineCursor
from iesrescale.parser.tilt_file import resolve_tilt
from iesrescale.parser.tokenizer import FieldKind, read_fields, read_float_array


logger = logging.getLogger(__name__)

TILT_PREFIX = "TILT="

# Format marker lines. LM-63-1986 files carry no marker; "IESNA86" is the line
# the writer emits for that format.
FORMAT_MARKERS: Dict[str, FileFormat] = {
    "IESNA:LM-63-1995": FileFormat.LM63_1995,
    "IESNA:LM-63-2002": FileFormat.LM63_2002,
    "IESNA91": FileFormat.LM63_1991,
    "IESNA86": FileFormat.LM63_1986,
}

_LAMP_PHOTO_FIELDS = [
    FieldKind.INT,    # num_lamps
    FieldKind.FLOAT,  # lumens_per_lamp
    FieldKind.FLOAT,  # candela multiplier
    FieldKind.INT,    # num_vert_angles
    FieldKind.INT,    # num_horz_angles
    FieldKind.INT,    # goniometer type
    FieldKind.INT,    # units type
    FieldKind.FLOAT,  # width
    FieldKind.FLOAT,  # length
    FieldKind.FLOAT,  # height
]

_ELECTRICAL_FIELDS = [FieldKind.FLOAT, FieldKind.FLOAT, FieldKind.FLOAT]


def _detect_format(cursor: LineCursor) -> FileFormat:
    first = cursor.next_line()
    if first is None:
        raise ParseError("Empty file", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT)
    if not first.strip():
        raise ParseError("Blank first line", kind=FailureKind.MALFORMED_HEADER, line_no=cursor.line_no)
    fmt = FORMAT_MARKERS.get(first.strip())
    if fmt is None:
        # LM-63-1986: the first line is already a label (or the TILT line).
        cursor.rewind()
        return FileFormat.LM63_1986
    return fmt


def _read_labels(cursor: LineCursor) -> Tuple[List[str], str]:
    labels: List[str] = []
    while True:
        line = cursor.next_line()
        if line is None:
            raise ParseError(
                "Missing TILT= line",
                kind=FailureKind.MALFORMED_HEADER,
                line_no=cursor.line_no or None,
            )
        if line.startswith(TILT_PREFIX):
            return labels, line[len(TILT_PREFIX) :].strip()
        if not line.strip():
            raise ParseError(
                "Blank line in label block",
                kind=FailureKind.MALFORMED_HEADER,
                line_no=cursor.line_no,
            )
        labels.append(line)


def _lamp_and_photo_header(cursor: LineCursor) -> Tuple[List, int]:
    values = read_fields(cursor, _LAMP_PHOTO_FIELDS, what="lamp/photometric header")
    line_no = cursor.line_no
    num_lamps, _, _, num_v, num_h, gonio, units = values[:7]

    if gonio not in (1, 2, 3):
        raise ParseError(
            f"Unsupported photometric_type={gonio} (expected 1,2,3)",
            kind=FailureKind.MALFORMED_HEADER,
            line_no=line_no,
        )
    if units not in (1, 2):
        raise ParseError(
            f"Unsupported units_type={units} (expected 1=feet,2=meters)",
            kind=FailureKind.MALFORMED_HEADER,
            line_no=line_no,
        )
    if num_lamps < 0:
        raise ParseError("num_lamps must be >= 0", kind=FailureKind.MALFORMED_HEADER, line_no=line_no)
    if num_v < 1 or num_h < 1:
        raise ParseError("Angle counts must be > 0", kind=FailureKind.MALFORMED_HEADER, line_no=line_no)
    return values, line_no


def parse_ies_bytes(
    data: bytes,
    name: Optional[str] = None,
    base_dir: Union[str, Path, None] = None,
) -> PhotometricProfile:
    """Parse an LM-63 buffer into a PhotometricProfile.

    `base_dir` is where relative TILT file references are looked up; without it
    they resolve against the working directory. Raises ParseError; nothing
    partially parsed is ever returned.
    """
    cursor = LineCursor(data)
    try:
        if cursor.is_blank():
            raise ParseError("Empty file", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT)

        fmt = _detect_format(cursor)
        labels, tilt_value = _read_labels(cursor)
        logger.debug("Format %s, %d label line(s), TILT=%s", fmt.value, len(labels), tilt_value)

        tilt = resolve_tilt(tilt_value, cursor, base_dir=base_dir)

        header, header_line = _lamp_and_photo_header(cursor)
        (
            num_lamps,
            lumens_per_lamp,
            multiplier,
            num_v,
            num_h,
            gonio,
            units,
            width,
            length,
            height,
        ) = header

        ballast_factor, blp_factor, input_watts = read_fields(
            cursor, _ELECTRICAL_FIELDS, what="electrical header"
        )

        vert = read_float_array(cursor, num_v, what="vertical angles")
        horz = read_float_array(cursor, num_h, what="horizontal angles")

        candelas: List[List[float]] = []
        for i in range(num_h):
            candelas.append(read_float_array(cursor, num_v, what=f"candela row {i + 1} of {num_h}"))
        logger.debug("Read %dx%d candela matrix (header on line %d)", num_h, num_v, header_line)

        return PhotometricProfile(
            file=FileInfo(format=fmt, name=name),
            labels=labels,
            lamp=LampData(
                num_lamps=int(num_lamps),
                lumens_per_lamp=float(lumens_per_lamp),
                multiplier=float(multiplier),
                tilt_file_name=tilt_value,
                tilt=tilt,
            ),
            units=Units(units),
            dim=Dimensions(width=float(width), length=float(length), height=float(height)),
            elec=ElectricalData(
                ballast_factor=float(ballast_factor),
                blp_factor=float(blp_factor),
                input_watts=float(input_watts),
            ),
            photo=PhotometricData(
                goniometer_type=GoniometerType(gonio),
                num_vert_angles=int(num_v),
                num_horz_angles=int(num_h),
                vert_angles=vert,
                horz_angles=horz,
                candelas=candelas,
            ),
        )
    except ParseError as e:
        if e.filename is None and name is not None:
            e.filename = name
        raise


def read_profile(
    data: bytes,
    name: Optional[str] = None,
    base_dir: Union[str, Path, None] = None,
) -> Optional[PhotometricProfile]:
    try:
        return parse_ies_bytes(data, name=name, base_dir=base_dir)
    except IesRescaleError as e:
        logger.warning("Rejected photometric profile: %s", e)
        return None


def parse_ies_file(path: Union[str, Path]) -> PhotometricProfile:
    p = Path(path).expanduser()
    data = read_bytes(p)
    return parse_ies_bytes(data, name=str(path), base_dir=p.parent)


def load_profile(path: Union[str, Path]) -> Optional[PhotometricProfile]:
    try:
        return parse_ies_file(path)
    except IesRescaleError as e:
        logger.warning("Could not load photometric profile: %s", e)
        return None
