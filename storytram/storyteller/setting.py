"""
Location/weather sanitizer.

Keeps physically incoherent pairs (snow on a beach, a heatwave in the
arctic, any sky weather in a kitchen) away from the renderer.
"""

import re
from typing import Iterable

from storytram.storyteller.randomness import RandomSource, pick

INDOOR_KEYWORDS = [
    "indoor", "indoors", "inside", "kitchen", "bedroom", "living room", "playroom",
    "barn", "workshop", "garage", "library", "classroom", "attic", "cellar", "house",
]

INDOOR_LIGHTING = [
    "Warm indoor lamp light, cozy still air",
    "Soft window daylight indoors, calm still air",
    "Gentle evening lamp glow indoors",
]

HOT_LOCATION_KEYWORDS = [
    "beach", "desert", "tropical", "jungle", "island", "savanna", "oasis", "dunes",
]
COLD_WEATHER_KEYWORDS = [
    "snow", "snowy", "snowfall", "winter", "frost", "frosty", "icy", "blizzard", "freezing", "sleet",
]
WARM_REPLACEMENT = "Sunny warm afternoon, light sea breeze"

COLD_LOCATION_KEYWORDS = [
    "snow", "snowy", "arctic", "glacier", "ice", "igloo", "tundra", "frozen", "polar",
]
HOT_WEATHER_KEYWORDS = [
    "hot", "heatwave", "scorching", "summer", "sweltering", "blazing", "tropical",
]
COLD_REPLACEMENT = "Crisp chilly morning, pale low sunlight"


def _mentions(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(k)}\b", lowered) for k in keywords)


def is_indoor(location: str) -> bool:
    return _mentions(location, INDOOR_KEYWORDS)


def sanitize_weather_for_location(location: str, weather: str, rng: RandomSource) -> str:
    """
    Return a weather phrase that fits the location.

    Rules, first match wins:
    1. Indoor locations get an indoor lighting phrase (a lighting phrase
       already in place is kept).
    2. Hot locations with cold weather get a fixed warm phrase.
    3. Cold locations with hot weather get a fixed cold phrase.
    4. Anything else passes through unchanged.
    """
    if is_indoor(location):
        if weather in INDOOR_LIGHTING:
            return weather
        return pick(rng, INDOOR_LIGHTING)
    if _mentions(location, HOT_LOCATION_KEYWORDS) and _mentions(weather, COLD_WEATHER_KEYWORDS):
        return WARM_REPLACEMENT
    if _mentions(location, COLD_LOCATION_KEYWORDS) and _mentions(weather, HOT_WEATHER_KEYWORDS):
        return COLD_REPLACEMENT
    return weather
