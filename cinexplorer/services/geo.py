import math
from typing import Iterable, List, Tuple

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def within_radius(items: Iterable, latitude: float, longitude: float, radius_km: float) -> List[Tuple[object, float]]:
    """Pair each located item with its distance, keep those inside the radius, nearest first.

    Items without coordinates are skipped.
    """
    located = []
    for item in items:
        if item.latitude is None or item.longitude is None:
            continue
        distance = haversine_km(latitude, longitude, item.latitude, item.longitude)
        if distance <= radius_km:
            located.append((item, distance))
    located.sort(key=lambda pair: pair[1])
    return located
