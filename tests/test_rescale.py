from __future__ import annotations

import copy
import logging
import math
from pathlib import Path

import numpy as np
import pytest

from iesrescale.errors import FailureKind, RescaleError
from iesrescale.models.profile import PhotometricProfile
from iesrescale.parser.ies_parser import parse_ies_bytes, parse_ies_file
from iesrescale.photometry.rescale import (
    THRESHOLD_PROJECTED_ON_Y,
    projected_x_scale,
    rescale_arrays,
    rescale_profile,
    try_rescale,
)
from iesrescale.testing.compare import photometry_delta, profiles_close
from iesrescale.testing.samples import ies_text


FIXTURES = Path(__file__).parent / "fixtures" / "ies"

CONE_ANGLES = [0.0, 15.0, 45.0, 90.0, 135.0, 179.0, 180.0]


def _profile(vertical, horizontal, rows) -> PhotometricProfile:
    return parse_ies_bytes(ies_text(vertical, horizontal, rows).encode("ascii"))


def _mixed_profile() -> PhotometricProfile:
    return _profile(
        [0, 30, 45, 60, 89.5, 90, 90.5, 120, 150, 180],
        [0, 90, 180],
        [
            [500, 480, 0, 300, 80, 60, 40, 20, -5, 10],
            [500, 470, 350, 290, 75, 55, 35, 0, 0, 10],
            [500, 460, 340, 0, 70, 50, 30, 15, 5, 10],
        ],
    )


def test_projected_x_scale() -> None:
    assert projected_x_scale(180.0) == pytest.approx(1.0)
    assert projected_x_scale(0.0) == 0.0
    assert projected_x_scale(90.0) == pytest.approx(math.sqrt(0.5))


def test_near_horizontal_threshold_is_one_degree() -> None:
    assert THRESHOLD_PROJECTED_ON_Y == pytest.approx(abs(math.cos(math.radians(91.0))))


def test_pole_scenario_identity_and_collapse() -> None:
    p = _profile([0, 180], [0], [[100, 100]])
    same = rescale_profile(p, 180.0)
    assert same.photo.vert_angles == pytest.approx([0.0, 180.0])
    assert same.photo.candelas[0] == pytest.approx([100.0, 100.0])

    flat = rescale_profile(p, 0.0)
    assert flat.photo.vert_angles == pytest.approx([0.0, 180.0])
    assert flat.photo.candelas[0] == pytest.approx([100.0, 100.0])


@pytest.mark.parametrize("fixture", ["type_c_01.ies", "type_b_01.ies", "lm63_1986.ies"])
def test_cone_180_is_identity(fixture: str) -> None:
    p = parse_ies_file(FIXTURES / fixture)
    out = rescale_profile(p, 180.0, preserve_intensity=False)
    assert profiles_close(p, out, rtol=1e-9, atol=1e-9)
    assert photometry_delta(p, out).max_abs < 1e-9


@pytest.mark.parametrize("cone", [-10.0, 181.0, float("nan"), float("inf")])
def test_out_of_range_cone_fails(cone: float) -> None:
    p = _mixed_profile()
    with pytest.raises(RescaleError) as exc:
        rescale_profile(p, cone)
    assert exc.value.kind is FailureKind.INVALID_RESCALE_ANGLE
    assert try_rescale(p, cone) is None


@pytest.mark.parametrize("cone", [0.0, 90.0])
@pytest.mark.parametrize("preserve", [False, True])
def test_in_range_cone_succeeds(cone: float, preserve: bool) -> None:
    assert try_rescale(_mixed_profile(), cone, preserve_intensity=preserve) is not None


def test_try_rescale_logs_rejection(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="iesrescale.photometry.rescale"):
        assert try_rescale(_mixed_profile(), 200.0) is None
    assert "200" in caplog.text


@pytest.mark.parametrize("cone", CONE_ANGLES)
@pytest.mark.parametrize("preserve", [False, True])
def test_non_positive_candela_untouched(cone: float, preserve: bool) -> None:
    p = _mixed_profile()
    out = rescale_profile(p, cone, preserve_intensity=preserve)
    for row_in, row_out in zip(p.photo.candelas, out.photo.candelas):
        for c_in, c_out in zip(row_in, row_out):
            if c_in <= 0:
                assert c_out == c_in


@pytest.mark.parametrize("cone", CONE_ANGLES)
@pytest.mark.parametrize("preserve", [False, True])
def test_near_horizontal_angles_keep_their_value(cone: float, preserve: bool) -> None:
    p = _mixed_profile()
    out = rescale_profile(p, cone, preserve_intensity=preserve)
    for j, v in enumerate(p.photo.vert_angles):
        if abs(v - 90.0) < 1.0:
            assert out.photo.vert_angles[j] == pytest.approx(v, abs=1e-9)


@pytest.mark.parametrize("cone", CONE_ANGLES[:-1])
def test_shape_preserving_never_increases_candela(cone: float) -> None:
    p = _mixed_profile()
    out = rescale_profile(p, cone)
    for row_in, row_out in zip(p.photo.candelas, out.photo.candelas):
        for c_in, c_out in zip(row_in, row_out):
            assert c_out <= c_in + 1e-9


def test_shape_preserving_known_values() -> None:
    p = _profile([45, 135], [0], [[100, 100]])
    out = rescale_profile(p, 90.0)
    expected_angle = math.degrees(math.atan(math.sqrt(0.5)))  # atan(50 / 70.71)
    assert out.photo.vert_angles == pytest.approx([expected_angle, 180.0 - expected_angle])
    assert out.photo.candelas[0] == pytest.approx([math.sqrt(7500.0), math.sqrt(7500.0)])


def test_intensity_preserving_known_values() -> None:
    p = _profile([45, 135], [0], [[100, 100]])
    out = rescale_profile(p, 90.0, preserve_intensity=True)
    assert out.photo.vert_angles == pytest.approx([30.0, 150.0])
    assert out.photo.candelas[0] == pytest.approx([100.0, 100.0])


def test_intensity_preserving_near_horizontal_uses_scaled_projection() -> None:
    p = _profile([0, 90], [0], [[100, 200]])
    out = rescale_profile(p, 90.0, preserve_intensity=True)
    assert out.photo.vert_angles == pytest.approx([0.0, 90.0])
    assert out.photo.candelas[0] == pytest.approx([100.0, 200.0 * math.sqrt(0.5)])


def test_shape_preserving_cone_zero_flattens_to_axis() -> None:
    p = _profile([0, 30, 60, 90], [0], [[100, 100, 100, 100]])
    out = rescale_profile(p, 0.0)
    assert out.photo.vert_angles == pytest.approx([0.0, 0.0, 0.0, 90.0])
    # the horizon sample keeps its angle but only its (vanishing) polar projection survives
    assert out.photo.candelas[0] == pytest.approx([100.0, 100 * math.cos(math.radians(30)), 50.0, 0.0], abs=1e-9)


def test_columns_without_positive_candela_keep_their_angle() -> None:
    p = _profile([0, 40, 80], [0, 90], [[100, 0, 10], [100, 0, 10]])
    out = rescale_profile(p, 60.0)
    assert out.photo.vert_angles[1] == 40.0
    assert out.photo.vert_angles[2] != pytest.approx(80.0)


def test_shared_angle_uses_last_row_with_positive_candela() -> None:
    v = np.array([0.0, 60.0])
    cd = np.array([[100.0, 50.0], [100.0, 0.0]])
    out_v, out_cd = rescale_arrays(v, cd, 90.0, preserve_intensity=True)
    # only row 0 is positive at 60 degrees
    assert out_v[1] == pytest.approx(math.degrees(math.asin(math.sin(math.radians(60.0)) * math.sqrt(0.5))))
    assert out_cd[1, 1] == 0.0
    assert out_cd[0, 1] == 50.0


def test_rescale_arrays_rejects_mismatched_shape() -> None:
    with pytest.raises(ValueError):
        rescale_arrays(np.array([0.0, 45.0]), np.array([[1.0, 2.0, 3.0]]), 90.0)


def test_input_profile_is_not_mutated() -> None:
    p = _mixed_profile()
    snapshot = copy.deepcopy(p)
    out = rescale_profile(p, 45.0)
    assert p == snapshot
    assert out != p
    assert out.photo.candelas is not p.photo.candelas
    assert out.photo.horz_angles is not p.photo.horz_angles
    assert out.labels is not p.labels
    assert out.photo.horz_angles == p.photo.horz_angles
    assert out.lamp == p.lamp
    assert out.elec == p.elec


def test_rescale_keeps_tilt_and_header() -> None:
    p = parse_ies_file(FIXTURES / "type_c_01.ies")
    out = rescale_profile(p, 60.0, preserve_intensity=True)
    assert out.lamp.tilt == p.lamp.tilt
    assert out.lamp.tilt is not p.lamp.tilt
    assert out.photo.num_vert_angles == p.photo.num_vert_angles
    assert out.file == p.file
