from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from iesrescale.errors import FailureKind, ParseError
from iesrescale.io.files import read_bytes
from iesrescale.models.profile import TILT_INCLUDE, TILT_NONE
from iesrescale.models.tilt import TiltData, TiltOrientation
from iesrescale.parser.line_cursor import LineCursor
from iesrescale.parser.tokenizer import FieldKind, read_fields, read_float_array


logger = logging.getLogger(__name__)


class TiltFileError(ParseError):
    pass


def read_tilt_block(cursor: LineCursor) -> TiltData:
    """
    Tilt block layout:
      <lamp-to-luminaire geometry>        one line, 1..3
      <number of angle/factor pairs>      one line
      <angles...>                         only when pairs > 0, may wrap
      <multiplying factors...>            only when pairs > 0, may wrap
    """
    (orientation_raw,) = read_fields(cursor, [FieldKind.INT], what="TILT lamp-to-luminaire geometry")
    try:
        orientation = TiltOrientation(int(orientation_raw))
    except ValueError as e:
        raise ParseError(
            f"Unsupported TILT lamp-to-luminaire geometry={orientation_raw} (expected 1,2,3)",
            kind=FailureKind.MALFORMED_HEADER,
            line_no=cursor.line_no,
        ) from e

    (num_pairs,) = read_fields(cursor, [FieldKind.INT], what="TILT pair count")
    if num_pairs < 0:
        raise ParseError("TILT pair count must be >= 0", kind=FailureKind.MALFORMED_HEADER, line_no=cursor.line_no)

    angles = []
    factors = []
    if num_pairs > 0:
        angles = read_float_array(cursor, int(num_pairs), what="TILT angles")
        factors = read_float_array(cursor, int(num_pairs), what="TILT multiplying factors")

    tilt = TiltData(orientation=orientation, num_pairs=int(num_pairs), angles=angles, mult_factors=factors)
    tilt.validate()
    return tilt


def load_tilt_file(path: Union[str, Path]) -> TiltData:
    p = Path(path)
    try:
        data = read_bytes(p)
        return read_tilt_block(LineCursor(data))
    except ParseError as e:
        raise TiltFileError(
            f"Invalid TILT file: {e.message}",
            kind=FailureKind.INVALID_TILT_REFERENCE,
            line_no=e.line_no,
            filename=str(p),
        ) from e


def resolve_tilt(value: str, cursor: LineCursor, base_dir: Optional[Union[str, Path]] = None) -> Optional[TiltData]:
    if value == TILT_NONE:
        logger.debug("TILT=NONE")
        return None
    if value == TILT_INCLUDE:
        logger.debug("TILT=INCLUDE, reading inline tilt block")
        return read_tilt_block(cursor)

    tilt_path = Path(value)
    if not tilt_path.is_absolute() and base_dir is not None:
        tilt_path = Path(base_dir) / tilt_path
    logger.debug("TILT references external file %s", tilt_path)
    return load_tilt_file(tilt_path)
