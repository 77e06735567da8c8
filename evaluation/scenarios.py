"""Evaluation scenarios exercising event types, weather and wardrobe coverage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from models.event import EventContext, WeatherForecast
from models.taxonomy import DressCode, EventType, WeatherCondition


@dataclass
class EvaluationScenario:
    name: str
    description: str
    event: EventContext
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    weather: Optional[WeatherForecast] = None
    count: int = 1


def _event(
    event_id: str,
    title: str,
    event_type: EventType,
    dress_code: DressCode,
    hour: int = 10,
    hours: float = 1.0,
) -> EventContext:
    start = datetime(2025, 11, 24, hour, 0)
    return EventContext(
        event_id=event_id,
        title=title,
        start=start,
        end=start + timedelta(hours=hours),
        event_type=event_type,
        dress_code=dress_code,
        location="Zurich",
    )


def wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "top_white_shirt",
            "name": "White Oxford Shirt",
            "category": "top",
            "subcategory": "shirt",
            "color": "white",
            "tags": ["solid", "professional", "cotton"],
            "style": "business",
            "occasions": ["work"],
            "comfort": 3,
        },
        {
            "item_id": "top_navy_knit",
            "name": "Navy Merino Sweater",
            "category": "top",
            "subcategory": "sweater",
            "color": "navy",
            "tags": ["solid", "warm", "wool"],
            "style": "business_casual",
            "occasions": ["work", "casual"],
            "comfort": 3,
        },
        {
            "item_id": "top_striped_tee",
            "name": "Striped Red Tee",
            "category": "top",
            "subcategory": "t-shirt",
            "color": "red",
            "tags": ["striped", "patterned", "cotton"],
            "style": "casual",
            "occasions": ["casual", "work"],
        },
        {
            "item_id": "top_silk_blouse",
            "name": "Silk Blouse",
            "category": "top",
            "subcategory": "blouse",
            "color": "cream",
            "tags": ["silk", "elegant", "delicate"],
            "style": "classic",
            "occasions": ["social", "work"],
        },
        {
            "item_id": "top_training_tank",
            "name": "Training Tank",
            "category": "top",
            "subcategory": "tank",
            "color": "gray",
            "tags": ["athletic", "breathable", "light", "sleeveless"],
            "style": "casual",
            "occasions": ["athletic"],
            "comfort": 4,
        },
        {
            "item_id": "bottom_black_trousers",
            "name": "Black Trousers",
            "category": "bottom",
            "subcategory": "trousers",
            "color": "black",
            "tags": ["classic", "professional"],
            "style": "business",
            "occasions": ["work", "formal"],
        },
        {
            "item_id": "bottom_wool_trousers",
            "name": "Grey Wool Trousers",
            "category": "bottom",
            "subcategory": "trousers",
            "color": "grey",
            "tags": ["warm", "wool"],
            "style": "business_casual",
            "occasions": ["work"],
        },
        {
            "item_id": "bottom_jeans",
            "name": "Blue Jeans",
            "category": "bottom",
            "subcategory": "jeans",
            "color": "blue",
            "style": "casual",
            "occasions": ["casual"],
        },
        {
            "item_id": "bottom_leggings",
            "name": "Running Leggings",
            "category": "bottom",
            "subcategory": "leggings",
            "color": "black",
            "tags": ["athletic", "breathable"],
            "style": "casual",
            "occasions": ["athletic"],
            "comfort": 4,
        },
        {
            "item_id": "dress_black_wrap",
            "name": "Black Wrap Dress",
            "category": "dress",
            "subcategory": "wrap dress",
            "color": "black",
            "tags": ["elegant", "flattering"],
            "style": "classic",
            "occasions": ["social", "formal"],
        },
        {
            "item_id": "shoes_oxfords",
            "name": "Black Dress Shoes",
            "category": "shoes",
            "subcategory": "oxfords",
            "color": "black",
            "tags": ["classic", "professional"],
            "style": "business",
            "occasions": ["work", "formal"],
        },
        {
            "item_id": "shoes_sneakers",
            "name": "White Sneakers",
            "category": "shoes",
            "subcategory": "sneakers",
            "color": "white",
            "tags": ["athletic", "breathable"],
            "style": "casual",
            "occasions": ["casual", "athletic"],
            "comfort": 4,
        },
        {
            "item_id": "shoes_boots",
            "name": "Waterproof Boots",
            "category": "shoes",
            "subcategory": "boots",
            "color": "brown",
            "tags": ["waterproof", "warm", "thick"],
            "style": "casual",
            "occasions": ["casual", "work"],
        },
        {
            "item_id": "outer_navy_blazer",
            "name": "Navy Blazer",
            "category": "outerwear",
            "subcategory": "blazer",
            "color": "navy",
            "tags": ["solid", "conservative", "professional"],
            "style": "business",
            "occasions": ["work", "formal"],
        },
        {
            "item_id": "outer_rain_coat",
            "name": "Insulated Rain Coat",
            "category": "outerwear",
            "subcategory": "rain coat",
            "color": "gray",
            "tags": ["waterproof", "warm", "insulated"],
            "style": "casual",
            "occasions": ["casual", "work"],
        },
        {
            "item_id": "acc_silver_watch",
            "name": "Silver Watch",
            "category": "accessory",
            "subcategory": "watch",
            "color": "silver",
            "tags": ["classic"],
            "style": "classic",
            "occasions": ["work", "social", "formal", "casual"],
        },
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="job_interview_business",
        description="Interview with the full business kit available; blazer and dress shoes are mandatory.",
        event=_event("evt-interview", "Interview at Acme", EventType.JOB_INTERVIEW, DressCode.BUSINESS),
        wardrobe_items=wardrobe_fixtures(),
        expectations={
            "min_outfits": 1,
            "required_item_ids": [
                "top_white_shirt",
                "bottom_black_trousers",
                "shoes_oxfords",
                "outer_navy_blazer",
            ],
            "min_confidence": 0.5,
        },
    ),
    EvaluationScenario(
        name="video_call_solids",
        description="Client call on camera; striped and white tops must never be suggested.",
        event=_event(
            "evt-call", "Client call on Zoom", EventType.VIDEO_CALL, DressCode.VIDEO_CALL_OPTIMIZED, hour=15
        ),
        wardrobe_items=wardrobe_fixtures(),
        expectations={
            "min_outfits": 2,
            "excluded_item_ids": ["top_striped_tee", "top_white_shirt"],
            "requires_outerwear": True,
        },
        count=2,
    ),
    EvaluationScenario(
        name="cold_rainy_office_day",
        description="Office day at 4C with heavy rain; only warm pieces survive and a rain coat is mandated.",
        event=_event(
            "evt-office", "Team sync at the office", EventType.WORK_MEETING, DressCode.BUSINESS_CASUAL, hour=9
        ),
        wardrobe_items=wardrobe_fixtures(),
        weather=WeatherForecast(
            condition=WeatherCondition.RAINY, temperature=4.0, precipitation_chance=80, wind_speed=10.0
        ),
        expectations={
            "min_outfits": 1,
            "required_item_ids": ["outer_rain_coat", "shoes_boots"],
            "weather_notes": ["Bundle up", "umbrella"],
        },
    ),
    EvaluationScenario(
        name="morning_workout",
        description="Gym session; only athletic pieces qualify and sneakers are mandatory.",
        event=_event("evt-gym", "Gym workout", EventType.FITNESS, DressCode.ACTIVEWEAR, hour=7),
        wardrobe_items=wardrobe_fixtures(),
        expectations={
            "min_outfits": 1,
            "required_item_ids": ["shoes_sneakers", "bottom_leggings"],
        },
    ),
    EvaluationScenario(
        name="sparse_wardrobe_fallback",
        description="A wardrobe without shoes cannot form any outfit and yields the fallback.",
        event=_event("evt-dinner", "Dinner downtown", EventType.DATE_NIGHT, DressCode.COCKTAIL, hour=19),
        wardrobe_items=[item for item in wardrobe_fixtures() if item["category"] == "dress"],
        expectations={"min_outfits": 1, "fallback": True},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS", "wardrobe_fixtures"]
