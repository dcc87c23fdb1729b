from __future__ import annotations

import re
from enum import Enum
from typing import List, Sequence, Union

from iesrescale.errors import FailureKind, ParseError
from iesrescale.parser.line_cursor import LineCursor


class FieldKind(Enum):
    INT = "int"
    FLOAT = "float"


Scalar = Union[int, float]

_DELIM_RE = re.compile(r"[\s,]+")
_NUM_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def _is_number(tok: str) -> bool:
    return bool(_NUM_RE.match(tok))


def _split(line: str) -> List[str]:
    return [t for t in _DELIM_RE.split(line) if t]


def _convert(tok: str, kind: FieldKind, line_no: int, what: str, index: int, failure: FailureKind) -> Scalar:
    if not _is_number(tok):
        raise ParseError(
            f"Expected numeric value #{index + 1} of {what}, got '{tok}'",
            kind=failure,
            line_no=line_no,
        )
    v = float(tok)
    if kind is FieldKind.FLOAT:
        return v
    if abs(v - round(v)) > 1e-9:
        raise ParseError(f"Expected integer for value #{index + 1} of {what}, got '{tok}'", kind=failure, line_no=line_no)
    return int(round(v))


def read_fields(
    cursor: LineCursor,
    kinds: Sequence[FieldKind],
    *,
    what: str = "field list",
    failure: FailureKind = FailureKind.MALFORMED_HEADER,
) -> List[Scalar]:
    """
    Fill `kinds` from the token stream, starting on the next line.
    Tokens are separated by whitespace and/or commas; values may wrap onto as
    many following lines as needed. Whatever is left on the last line read is
    discarded, so the next call starts on a fresh line.
    Raises ParseError(kind=failure) if input ends early or a token is not numeric.
    """
    values: List[Scalar] = []
    if not kinds:
        return values

    while len(values) < len(kinds):
        line = cursor.next_line()
        if line is None:
            raise ParseError(
                f"Expected {len(kinds)} values for {what} but found {len(values)} before end of input",
                kind=failure,
                line_no=cursor.line_no or None,
            )
        for tok in _split(line):
            if len(values) >= len(kinds):
                break
            idx = len(values)
            values.append(_convert(tok, kinds[idx], cursor.line_no, what, idx, failure))
    return values


def read_float_array(
    cursor: LineCursor,
    count: int,
    *,
    what: str = "array",
    failure: FailureKind = FailureKind.TRUNCATED_ARRAY,
) -> List[float]:
    if count < 1:
        raise ParseError(f"Invalid element count {count} for {what}", kind=failure, line_no=cursor.line_no or None)
    return [float(v) for v in read_fields(cursor, [FieldKind.FLOAT] * count, what=what, failure=failure)]
