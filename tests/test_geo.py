"""Tests for distance helpers."""

import math

import pytest

from matchmaker.utils.geo import EARTH_RADIUS_KM, haversine_km, within_radius


def test_same_point_is_zero():
    assert haversine_km(52.52, 13.405, 52.52, 13.405) == 0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * math.pi / 180
    assert haversine_km(0, 0, 1, 0) == pytest.approx(expected)


def test_paris_to_london():
    assert haversine_km(48.8566, 2.3522, 51.5074, -0.1278) == pytest.approx(343.5, abs=1)


def test_symmetric():
    assert haversine_km(48.1351, 11.582, 52.52, 13.405) == pytest.approx(
        haversine_km(52.52, 13.405, 48.1351, 11.582)
    )


def test_within_radius():
    distance = within_radius(52.3906, 13.0645, 52.52, 13.405, 50)
    assert distance == pytest.approx(27, abs=3)
    assert within_radius(48.1351, 11.582, 52.52, 13.405, 50) is None


def test_within_radius_without_coordinates():
    assert within_radius(None, None, 52.52, 13.405, 50) is None
