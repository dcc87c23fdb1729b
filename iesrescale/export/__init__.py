from iesrescale.export.ies_writer import format_number, profile_to_bytes, profile_to_lines, write_profile

__all__ = ["format_number", "profile_to_bytes", "profile_to_lines", "write_profile"]
