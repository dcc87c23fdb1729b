from __future__ import annotations

from typing import Any

__all__ = [
    "rescale_profile",
    "rescale_arrays",
    "try_rescale",
    "projected_x_scale",
]


def __getattr__(name: str) -> Any:
    if name in __all__:
        from iesrescale.photometry.rescale import (
            projected_x_scale,
            rescale_arrays,
            rescale_profile,
            try_rescale,
        )
        return {
            "rescale_profile": rescale_profile,
            "rescale_arrays": rescale_arrays,
            "try_rescale": try_rescale,
            "projected_x_scale": projected_x_scale,
        }[name]
    raise AttributeError(name)
