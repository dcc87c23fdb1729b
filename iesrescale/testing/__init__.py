from iesrescale.testing.compare import ProfileDelta, photometry_delta, profiles_close

__all__ = [
    "ProfileDelta",
    "photometry_delta",
    "profiles_close",
]
