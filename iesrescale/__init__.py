"""
iesrescale: read, rescale and write IESNA LM-63 photometric profiles.
"""

from __future__ import annotations

from typing import Any

__version__ = "1.1.2"

__all__ = [
    "PhotometricProfile",
    "parse_ies_bytes",
    "parse_ies_file",
    "read_profile",
    "profile_to_bytes",
    "rescale_profile",
    "try_rescale",
    "rescale_ies_file",
]


def __getattr__(name: str) -> Any:
    if name == "PhotometricProfile":
        from iesrescale.models.profile import PhotometricProfile
        return PhotometricProfile
    if name in {"parse_ies_bytes", "parse_ies_file", "read_profile"}:
        from iesrescale.parser.ies_parser import parse_ies_bytes, parse_ies_file, read_profile
        return {
            "parse_ies_bytes": parse_ies_bytes,
            "parse_ies_file": parse_ies_file,
            "read_profile": read_profile,
        }[name]
    if name == "profile_to_bytes":
        from iesrescale.export.ies_writer import profile_to_bytes
        return profile_to_bytes
    if name in {"rescale_profile", "try_rescale"}:
        from iesrescale.photometry.rescale import rescale_profile, try_rescale
        return {"rescale_profile": rescale_profile, "try_rescale": try_rescale}[name]
    if name == "rescale_ies_file":
        from iesrescale.pipeline import rescale_ies_file
        return rescale_ies_file
    raise AttributeError(name)
