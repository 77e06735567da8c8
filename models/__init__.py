"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.event import EventContext, WeatherForecast
from models.outfit import OutfitCombination, PlannedOutfit
from models.requirements import OutfitRequirements, WeatherRequirements
from models.wardrobe_item import WardrobeItem, from_raw_metadata

__all__ = [
    "EventContext",
    "OutfitCombination",
    "OutfitRequirements",
    "PlannedOutfit",
    "WardrobeItem",
    "WeatherForecast",
    "WeatherRequirements",
    "from_raw_metadata",
]
