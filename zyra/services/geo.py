"""
Geolocation helpers for shop and delivery locations.

Builds the marker payloads the front end hands to its map widget, and the
straight-line distance between a shop and a delivery point.
"""
import math
from typing import Any, Optional
from urllib.parse import quote

from zyra.errors import ERROR_INVALID_COORDINATES

EARTH_RADIUS_KM = 6371

# Map centers used when a location is unknown
DEFAULT_DELIVERY_CENTER = (12.9716, 77.5946)  # Bangalore
DEFAULT_SHOP_CENTER = (17.3850, 78.4867)  # Hyderabad

DEFAULT_ZOOM = 15

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


def to_coordinate(value: Any) -> Optional[float]:
    """Parse a stored coordinate (number, numeric string, blank) to float or None."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def has_location(latitude: Any, longitude: Any) -> bool:
    """True when both coordinates are usable. A latitude of 0 means "never set"."""
    lat = to_coordinate(latitude)
    lon = to_coordinate(longitude)
    return lat is not None and lon is not None and lat != 0


def validate_coordinates(latitude: Any, longitude: Any) -> tuple[float, float]:
    """
    Parse and range-check a coordinate pair.

    Raises:
        ValueError: if either value is missing, not numeric, or out of range
    """
    lat = to_coordinate(latitude)
    lon = to_coordinate(longitude)
    if lat is None or lon is None:
        raise ValueError("latitude and longitude are required")
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise ValueError(ERROR_INVALID_COORDINATES)
    return lat, lon


def haversine_km(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """Great-circle distance in kilometres, rounded to 2 decimals."""
    lat1, lon1 = origin
    lat2, lon2 = destination
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def marker(
    latitude: float,
    longitude: float,
    title: str,
    description: Optional[str] = None,
    color: str = "blue",
) -> dict:
    return {
        "position": [latitude, longitude],
        "title": title,
        "description": description,
        "color": color,
    }


def maps_search_url(address: Optional[str]) -> Optional[str]:
    if not address:
        return None
    return MAPS_SEARCH_URL + quote(address, safe="")


def build_delivery_map(order: dict) -> dict:
    """
    Map payload for the shop's view of an order.

    Centers on the shop (Hyderabad when unknown), shows a blue shop marker
    and a red customer marker when each location is known, the distance when
    both are, and a maps search link when the customer location is missing.
    """
    shop = order.get("shops") or {}
    if isinstance(shop, list):
        shop = shop[0] if shop else {}
    shop_lat = to_coordinate(shop.get("latitude"))
    shop_lon = to_coordinate(shop.get("longitude"))
    customer_lat = to_coordinate(order.get("delivery_latitude"))
    customer_lon = to_coordinate(order.get("delivery_longitude"))

    has_shop = has_location(shop_lat, shop_lon)
    has_customer = has_location(customer_lat, customer_lon)

    center = (shop_lat, shop_lon) if has_shop else DEFAULT_SHOP_CENTER

    markers = []
    if has_shop:
        markers.append(
            marker(
                shop_lat,
                shop_lon,
                shop.get("name") or "Shop Location",
                shop.get("address") or "Your Shop",
                "blue",
            )
        )
    if has_customer:
        markers.append(
            marker(
                customer_lat,
                customer_lon,
                order.get("customer_name") or "Customer",
                order.get("delivery_address"),
                "red",
            )
        )

    distance_km = None
    if has_shop and has_customer:
        distance_km = haversine_km((shop_lat, shop_lon), (customer_lat, customer_lon))

    return {
        "center": list(center),
        "zoom": DEFAULT_ZOOM,
        "markers": markers,
        "distance_km": distance_km,
        "maps_url": None if has_customer else maps_search_url(order.get("delivery_address")),
    }


def customer_map(order: dict, title: str = "Delivery Location") -> dict:
    """Single red delivery marker, Bangalore when the order has no coordinates."""
    lat = to_coordinate(order.get("delivery_latitude")) or DEFAULT_DELIVERY_CENTER[0]
    lon = to_coordinate(order.get("delivery_longitude")) or DEFAULT_DELIVERY_CENTER[1]
    return {
        "center": [lat, lon],
        "zoom": DEFAULT_ZOOM,
        "markers": [marker(lat, lon, title, order.get("delivery_address"), "red")],
    }
