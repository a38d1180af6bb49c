"""
Route Sequencer
Orders one group of prospects into a visiting route from a starting point
"""
import math
from typing import List, Sequence

from rapiddial.domain.models.prospect import Prospect


EARTH_RADIUS_MILES = 3959
AVERAGE_SPEED_MPH = 40


def _position(prospect: Prospect) -> tuple[float, float]:
    # Prospects without coordinates sit at 0,0
    return (
        prospect.address_lat if prospect.address_lat is not None else 0.0,
        prospect.address_lng if prospect.address_lng is not None else 0.0,
    )


def sequence(prospects: Sequence[Prospect], origin_lat: float, origin_lng: float) -> List[Prospect]:
    """
    Greedy nearest-neighbour route starting at the origin.

    Distance is planar Euclidean distance on raw degrees, not geodesic
    distance. At each step the closest unvisited prospect is taken (the
    earliest one wins ties) and becomes the new current position.
    The result is always a permutation of the input.
    """
    if len(prospects) <= 1:
        return list(prospects)

    remaining = list(prospects)
    route: List[Prospect] = []
    current_lat, current_lng = origin_lat, origin_lng

    while remaining:
        nearest_index = -1
        nearest_distance = math.inf

        for index, prospect in enumerate(remaining):
            lat, lng = _position(prospect)
            distance = math.hypot(lat - current_lat, lng - current_lng)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index

        if nearest_index < 0:
            # No finite distance left; keep the leftovers in input order
            route.extend(remaining)
            break

        nearest = remaining.pop(nearest_index)
        route.append(nearest)
        current_lat, current_lng = _position(nearest)

    return route


def estimate_drive_minutes(start_lat: float, start_lng: float, end_lat: float, end_lng: float) -> int:
    """Straight-line (haversine) drive time in whole minutes at 40 mph"""
    lat1 = math.radians(start_lat)
    lat2 = math.radians(end_lat)
    delta_lat = math.radians(end_lat - start_lat)
    delta_lng = math.radians(end_lng - start_lng)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    distance_miles = EARTH_RADIUS_MILES * c

    # Half-up rounding to whole minutes
    return math.floor(distance_miles / AVERAGE_SPEED_MPH * 60 + 0.5)


def route_drive_minutes(route: Sequence[Prospect], origin_lat: float, origin_lng: float) -> int:
    """Estimated drive time along a route, starting at the origin"""
    total = 0
    current_lat, current_lng = origin_lat, origin_lng
    for prospect in route:
        lat, lng = _position(prospect)
        total += estimate_drive_minutes(current_lat, current_lng, lat, lng)
        current_lat, current_lng = lat, lng
    return total
