from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from iesrescale.errors import IesRescaleError, WriteError
from iesrescale.export.ies_writer import profile_to_bytes
from iesrescale.io.files import write_bytes
from iesrescale.models.profile import PhotometricProfile
from iesrescale.parser.ies_parser import parse_ies_file
from iesrescale.photometry.rescale import rescale_profile


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RescaleRun:
    source: PhotometricProfile
    result: PhotometricProfile
    output_path: Path
    bytes_written: int


def rescale_file(
    src: Union[str, Path],
    dst: Union[str, Path],
    cone_angle_deg: float,
    preserve_intensity: bool = False,
) -> RescaleRun:
    """Read `src`, rescale it onto `cone_angle_deg` and write the result to `dst`."""
    if not str(dst):
        logger.error("Rescale of %s failed: no output path given", src)
        raise WriteError("No output path given")

    stage = "read"
    try:
        source = parse_ies_file(src)
        stage = "rescale"
        result = rescale_profile(source, cone_angle_deg, preserve_intensity=preserve_intensity)
        result = result.with_name(str(dst))
        stage = "serialize"
        data = profile_to_bytes(result)
        stage = "write"
        out = write_bytes(data, dst)
    except IesRescaleError as e:
        logger.error("Rescale of %s failed at %s stage: %s", src, stage, e)
        raise
    return RescaleRun(source=source, result=result, output_path=out, bytes_written=len(data))


def rescale_ies_file(
    src: Union[str, Path],
    dst: Union[str, Path],
    cone_angle_deg: float,
    preserve_intensity: bool = False,
) -> bool:
    try:
        rescale_file(src, dst, cone_angle_deg, preserve_intensity=preserve_intensity)
    except IesRescaleError:
        return False
    return True
