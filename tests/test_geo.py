from types import SimpleNamespace

import pytest

from cinexplorer.services.geo import haversine_km, within_radius


pytestmark = pytest.mark.unit

PAULISTA = (-23.5639, -46.6544)
AUGUSTA = (-23.5555, -46.6666)
CAMPINAS = (-22.9056, -47.0608)


def place(name, coordinates):
    latitude, longitude = coordinates if coordinates else (None, None)
    return SimpleNamespace(name=name, latitude=latitude, longitude=longitude)


def test_distance_to_itself_is_zero():
    assert haversine_km(*PAULISTA, *PAULISTA) == 0


def test_distance_is_symmetric_and_plausible():
    there = haversine_km(*PAULISTA, *AUGUSTA)
    back = haversine_km(*AUGUSTA, *PAULISTA)

    assert there == pytest.approx(back)
    assert 1.0 < there < 2.0
    assert 75 < haversine_km(*PAULISTA, *CAMPINAS) < 90


def test_within_radius_sorts_nearest_first_and_skips_unlocated():
    items = [
        place("Campinas", CAMPINAS),
        place("Augusta", AUGUSTA),
        place("Unknown", None),
        place("Paulista", PAULISTA),
    ]

    nearby = within_radius(items, *PAULISTA, radius_km=10)

    assert [item.name for item, _ in nearby] == ["Paulista", "Augusta"]
    assert nearby[0][1] == 0
    assert nearby[1][1] < 10
