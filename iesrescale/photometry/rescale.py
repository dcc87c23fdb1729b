from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from iesrescale.errors import FailureKind, IesRescaleError, RescaleError
from iesrescale.models.profile import PhotometricProfile


logger = logging.getLogger(__name__)

MIN_CONE_ANGLE_DEG = 0.0
MAX_CONE_ANGLE_DEG = 180.0

# Samples whose vertical angle lies within 1 degree of the horizon keep their angle.
HORIZONTAL_THRESHOLD_ANGLE_DEG = 90.0 + 1.0
THRESHOLD_PROJECTED_ON_Y = abs(math.cos(math.radians(HORIZONTAL_THRESHOLD_ANGLE_DEG)))


def projected_x_scale(cone_angle_deg: float) -> float:
    return math.sin(math.radians(float(cone_angle_deg) * 0.5))


def rescale_arrays(
    vert_angles_deg: np.ndarray,
    candela: np.ndarray,
    cone_angle_deg: float,
    preserve_intensity: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Remap vertical angles [V] and candela values [H, V] onto a cone of
    `cone_angle_deg` full aperture.

    Each positive sample is split into its projection on the polar axis
    (y = c cos θ) and on the equatorial plane (x = c sin θ); x is scaled by
    sin(cone / 2). Angles above 90° are mirrored into [0, 90] first and
    mirrored back afterwards.

    preserve_intensity=False keeps the shape: θ' = atan(x'/y), c' = |(x', y)|.
    preserve_intensity=True keeps c and swings the angle: θ' = asin(x'/c).

    The vertical angle array is shared by all horizontal rows, so the angle
    written for a vertical index is the one computed for the last row with a
    positive candela there. Indices with no positive sample keep their angle.
    """
    v = np.asarray(vert_angles_deg, dtype=float)
    cd = np.asarray(candela, dtype=float)
    if cd.ndim != 2 or cd.shape[1] != v.shape[0]:
        raise ValueError(f"Candela shape {cd.shape} does not match {v.shape[0]} vertical angles")

    s = projected_x_scale(cone_angle_deg)

    is_top_hemisphere = v > 90.0
    theta_deg = np.where(is_top_hemisphere, 180.0 - v, v)
    theta = np.radians(theta_deg)
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    near_horizontal = np.abs(cos_t) <= THRESHOLD_PROJECTED_ON_Y

    active = cd > 0.0
    y = cd * cos_t[None, :]
    x_scaled = cd * sin_t[None, :] * s

    with np.errstate(divide="ignore", invalid="ignore"):
        if not preserve_intensity:
            scaled_angle = np.degrees(np.arctan(x_scaled / y))
            scaled_cd = np.sqrt(y * y + x_scaled * x_scaled)
        else:
            scaled_angle = np.degrees(np.arcsin(x_scaled / cd))
            scaled_cd = np.where(near_horizontal[None, :], x_scaled, cd)

    scaled_angle = np.where(near_horizontal[None, :], theta_deg[None, :], scaled_angle)
    scaled_angle = np.where(is_top_hemisphere[None, :], 180.0 - scaled_angle, scaled_angle)

    out_cd = np.where(active, scaled_cd, cd)

    out_v = v.copy()
    has_active = active.any(axis=0)
    if has_active.any():
        h = cd.shape[0]
        last_row = h - 1 - np.argmax(active[::-1, :], axis=0)
        cols = np.arange(v.shape[0])
        out_v = np.where(has_active, scaled_angle[last_row, cols], v)

    return out_v, out_cd


def rescale_profile(
    profile: PhotometricProfile,
    cone_angle_deg: float,
    preserve_intensity: bool = False,
) -> PhotometricProfile:
    cone = float(cone_angle_deg)
    if not (MIN_CONE_ANGLE_DEG <= cone <= MAX_CONE_ANGLE_DEG):
        raise RescaleError(
            f"Cone angle {cone_angle_deg} outside [{MIN_CONE_ANGLE_DEG:g}, {MAX_CONE_ANGLE_DEG:g}] degrees",
            kind=FailureKind.INVALID_RESCALE_ANGLE,
            filename=profile.file.name,
        )

    photo = profile.photo
    try:
        photo.validate()
    except ValueError as e:
        raise RescaleError(str(e), kind=FailureKind.MALFORMED_HEADER, filename=profile.file.name) from e

    out_v, out_cd = rescale_arrays(
        np.array(photo.vert_angles, dtype=float),
        np.array(photo.candelas, dtype=float).reshape(photo.num_horz_angles, photo.num_vert_angles),
        cone,
        preserve_intensity=preserve_intensity,
    )
    logger.debug(
        "Rescaled %s to %g degree cone (%s)",
        profile.file.name or "<unnamed>",
        cone,
        "intensity-preserving" if preserve_intensity else "shape-preserving",
    )
    return profile.with_photometry(out_v.tolist(), out_cd.tolist())


def try_rescale(
    profile: PhotometricProfile,
    cone_angle_deg: float,
    preserve_intensity: bool = False,
) -> Optional[PhotometricProfile]:
    try:
        return rescale_profile(profile, cone_angle_deg, preserve_intensity=preserve_intensity)
    except IesRescaleError as e:
        logger.warning("Rescale rejected: %s", e)
        return None
