"""
Travel time estimates between two addresses from the Google Directions API.
"""

import logging
import math
from datetime import timedelta

import requests

logger = logging.getLogger(__name__)

DIRECTIONS_URL = 'https://maps.googleapis.com/maps/api/directions/json'


class MapsError(Exception):
    """The Directions API could not be reached or returned an error status."""


def round_up(duration: timedelta, minutes: int) -> timedelta:
    """Round ``duration`` up to the next whole multiple of ``minutes``."""
    if not minutes or minutes <= 0:
        return duration
    step = minutes * 60
    return timedelta(seconds=math.ceil(duration.total_seconds() / step) * step)


def estimated_travel_time(origin: str, destination: str, api_key: str,
                          round_up_minutes: int = None, timeout: int = 10) -> timedelta:
    """
    Driving time of the first leg of the first route from origin to destination.

    Args:
        origin: Start address
        destination: End address
        api_key: Google Maps API key
        round_up_minutes: Round the estimate up to a multiple of this many minutes
        timeout: Request timeout in seconds

    Returns:
        The estimate; zero when no route was found
    """
    if not api_key:
        raise MapsError("GOOGLE_MAPS_API_KEY is not configured")

    try:
        response = requests.get(
            DIRECTIONS_URL,
            params={'origin': origin, 'destination': destination, 'key': api_key},
            timeout=timeout
        )
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        logger.error(f"Directions request failed: {e}")
        raise MapsError(f"Directions request failed: {e}") from e

    status = data.get('status', 'UNKNOWN_ERROR')
    if status == 'ZERO_RESULTS':
        return timedelta()
    if status != 'OK':
        message = data.get('error_message', status)
        logger.error(f"Directions API returned {status}: {message}")
        raise MapsError(f"Directions API returned {status}: {message}")

    duration = timedelta()
    for route in data.get('routes', []):
        legs = route.get('legs', [])
        if legs:
            duration = timedelta(seconds=legs[0].get('duration', {}).get('value', 0))
            break

    logger.debug(f"Travel time {origin} -> {destination}: {duration}")
    return round_up(duration, round_up_minutes)
