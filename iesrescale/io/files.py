from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from iesrescale.errors import FailureKind, ParseError, WriteError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_bytes(path: PathLike) -> bytes:
    if not str(path):
        raise ParseError("No input path given", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT)
    p = Path(path)
    # stat() can raise too (ENAMETOOLONG, EACCES).
    try:
        p = p.expanduser()
        if not p.is_file():
            reason = "Not a file" if p.exists() else "File not found"
            raise ParseError(reason, kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT, filename=str(p))
        data = p.read_bytes()
    except FileNotFoundError as e:
        raise ParseError("File not found", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT, filename=str(p)) from e
    except IsADirectoryError as e:
        raise ParseError("Not a file", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT, filename=str(p)) from e
    except OSError as e:
        raise ParseError(
            f"Could not read file: {e.strerror or e}",
            kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT,
            filename=str(p),
        ) from e
    except RuntimeError as e:
        # expanduser() on an unknown "~user"
        raise ParseError(f"Could not resolve path: {e}", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT, filename=str(p)) from e
    if not data:
        raise ParseError("Empty file", kind=FailureKind.EMPTY_OR_UNREADABLE_INPUT, filename=str(p))
    logger.debug("Read %d bytes from %s", len(data), p)
    return data


def write_bytes(data: bytes, path: PathLike) -> Path:
    if not str(path):
        raise WriteError("No output path given")
    p = Path(path).expanduser()
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        raise WriteError(f"Could not write file: {e.strerror or e}", filename=str(p)) from e
    logger.debug("Wrote %d bytes to %s", len(data), p)
    return p
