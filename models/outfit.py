"""Outfit combination and planned outfit schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from models.event import as_aware
from models.taxonomy import DressCode, EventType, parse_enum
from models.wardrobe_item import WardrobeItem, from_raw_metadata


@dataclass
class OutfitCombination:
    """Candidate outfit prior to ranking; the scorer fills in score and reasoning."""

    items: List[WardrobeItem]
    score: float = 0.0
    reasoning: List[str] = field(default_factory=list)
    breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    def is_valid(self) -> bool:
        ids = self.item_ids
        return len(ids) >= 2 and len(set(ids)) == len(ids)


@dataclass(frozen=True)
class PlannedOutfit:
    """Final recommendation for an event."""

    outfit_id: str
    event_id: str
    event_type: EventType
    dress_code: DressCode
    items: Tuple[WardrobeItem, ...]
    confidence: float
    reasoning: Tuple[str, ...] = ()
    weather_considerations: Tuple[str, ...] = ()
    alternatives: Tuple[WardrobeItem, ...] = ()
    created_at: Optional[datetime] = None
    event_date: Optional[datetime] = None
    score: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must lie in [0, 1], got {self.confidence}")
        object.__setattr__(self, "event_type", parse_enum(EventType, self.event_type))
        object.__setattr__(self, "dress_code", parse_enum(DressCode, self.dress_code))
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "reasoning", tuple(self.reasoning))
        object.__setattr__(self, "weather_considerations", tuple(self.weather_considerations))
        object.__setattr__(self, "alternatives", tuple(self.alternatives))
        if self.event_date is not None:
            object.__setattr__(self, "event_date", as_aware(self.event_date))

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    @property
    def is_fallback(self) -> bool:
        return not self.items

    def to_record(self) -> Dict[str, Any]:
        return {
            "outfit_id": self.outfit_id,
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "dress_code": self.dress_code.value,
            "items": [item.to_record() for item in self.items],
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
            "weather_considerations": list(self.weather_considerations),
            "alternatives": [item.to_record() for item in self.alternatives],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "score": self.score,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PlannedOutfit":
        def _dt(value: Any) -> Optional[datetime]:
            return datetime.fromisoformat(value) if value else None

        return cls(
            outfit_id=str(record["outfit_id"]),
            event_id=str(record["event_id"]),
            event_type=record["event_type"],
            dress_code=record["dress_code"],
            items=tuple(from_raw_metadata(raw) for raw in record.get("items", [])),
            confidence=float(record["confidence"]),
            reasoning=tuple(record.get("reasoning", [])),
            weather_considerations=tuple(record.get("weather_considerations", [])),
            alternatives=tuple(from_raw_metadata(raw) for raw in record.get("alternatives", [])),
            created_at=_dt(record.get("created_at")),
            event_date=_dt(record.get("event_date")),
            score=float(record.get("score", 0.0)),
        )


__all__ = ["OutfitCombination", "PlannedOutfit"]
