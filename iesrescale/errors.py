from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    EMPTY_OR_UNREADABLE_INPUT = "empty_or_unreadable_input"
    MALFORMED_HEADER = "malformed_header"
    TRUNCATED_ARRAY = "truncated_array"
    INVALID_TILT_REFERENCE = "invalid_tilt_reference"
    INVALID_RESCALE_ANGLE = "invalid_rescale_angle"


@dataclass
class IesRescaleError(Exception):
    message: str
    kind: Optional[FailureKind] = None
    line_no: Optional[int] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.filename}: " if self.filename else ""
        if self.line_no is None:
            return f"{prefix}{self.message}"
        return f"{prefix}Line {self.line_no}: {self.message}"


class ParseError(IesRescaleError):
    pass


class RescaleError(IesRescaleError):
    pass


class SerializeError(IesRescaleError):
    pass


class WriteError(IesRescaleError):
    pass
