"""
Byte-level file access for photometric profiles and TILT files.
"""

from iesrescale.io.files import read_bytes, write_bytes

__all__ = ["read_bytes", "write_bytes"]
