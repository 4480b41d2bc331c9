# flood_engine/models.py
"""
Data model shared by every stage of the hazard pipeline.

All records are frozen dataclasses. A new acquisition builds fresh
instances instead of mutating old ones, and every record knows how to
flatten itself into a JSON-ready dict for the Flask layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class HydrologyFlag(str, Enum):
    DETECTED = "detected"
    NONE = "none"
    UNRESOLVED = "unresolved"

    @property
    def water_present(self) -> bool:
        # UNRESOLVED behaves like NONE everywhere in the engine
        return self is HydrologyFlag.DETECTED


class TerrainCategory(str, Enum):
    VALLEY = "valley"
    PEAK = "peak"
    PLAIN = "plain"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Display label for the panel header."""
        return _TERRAIN_LABELS[self]


_TERRAIN_LABELS = {
    TerrainCategory.VALLEY: "Basin / Valley",
    TerrainCategory.PEAK: "Ridge / Hilltop",
    TerrainCategory.PLAIN: "Flat Terrain / Plains",
    TerrainCategory.UNKNOWN: "Analyzing Topography...",
}


class GroundCondition(str, Enum):
    FULLY_SATURATED = "Fully Saturated"
    WET_MUDDY = "Wet / Muddy"
    DAMP = "Damp"
    DRY_STABLE = "Dry & Stable"


class RiskLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"
    EXTREME = "extreme"


class LandslideGrade(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class SinkholeGrade(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class NewsType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


UNKNOWN_PLACE = "Unknown Location"


@dataclass(frozen=True)
class SamplePoint:
    latitude: float
    longitude: float
    elevation: float = 0.0
    precipitation_rate: float = 0.0
    hourly_precipitation: Tuple[float, ...] = ()
    weather_code: Optional[int] = None
    wind_speed: Optional[float] = None
    temperature: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "elevation": self.elevation,
            "precipitation_rate": self.precipitation_rate,
            "hourly_points": len(self.hourly_precipitation),
        }


@dataclass(frozen=True)
class LocationSampleSet:
    """Center point plus the N/S/E/W ring (or no ring in degraded mode)."""

    center: SamplePoint
    neighbors: Tuple[SamplePoint, ...] = ()

    def __post_init__(self):
        # Only a full ring of four is meaningful; anything else degrades.
        if len(self.neighbors) not in (0, 4):
            object.__setattr__(self, "neighbors", ())

    @property
    def neighbor_count(self) -> int:
        return len(self.neighbors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": self.center.to_dict(),
            "neighbor_elevations": [p.elevation for p in self.neighbors],
            "neighbor_count": self.neighbor_count,
        }


@dataclass(frozen=True)
class TerrainAssessment:
    category: TerrainCategory
    slope_meters: float
    catchment_factor: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "label": self.category.label,
            "slope_meters": round(self.slope_meters, 2),
            "catchment_factor": round(self.catchment_factor, 2),
        }


@dataclass(frozen=True)
class SoilState:
    accumulated_48h: float
    saturation_percent: float
    ground_condition: GroundCondition

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accumulated_48h": round(self.accumulated_48h, 2),
            "saturation_percent": round(self.saturation_percent, 2),
            "ground_condition": self.ground_condition.value,
        }


@dataclass(frozen=True)
class RiskAssessment:
    estimated_rise_meters: float
    risk_level: RiskLevel
    landslide_grade: LandslideGrade
    sinkhole_grade: SinkholeGrade
    excess_runoff_mm: float
    forecasted_rainfall_mm: float = 0.0
    total_wetness_mm: float = 0.0
    water_load_index: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimated_rise_meters": round(self.estimated_rise_meters, 3),
            "risk_level": self.risk_level.value,
            "landslide_grade": self.landslide_grade.value,
            "sinkhole_grade": self.sinkhole_grade.value,
            "excess_runoff_mm": round(self.excess_runoff_mm, 2),
            "forecasted_rainfall_mm": round(self.forecasted_rainfall_mm, 2),
            "total_wetness_mm": round(self.total_wetness_mm, 2),
            "water_load_index": round(self.water_load_index, 3),
        }


@dataclass(frozen=True)
class SituationRecord:
    state: str
    severity_color_tag: str

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.state, "color": self.severity_color_tag}


@dataclass(frozen=True)
class NewsItem:
    type: NewsType
    headline: str
    body: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "headline": self.headline,
            "body": self.body,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class NarrativeBundle:
    brief_lines: Tuple[str, ...] = ()
    news_items: Tuple[NewsItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brief": list(self.brief_lines),
            "news": [n.to_dict() for n in self.news_items],
        }


@dataclass(frozen=True)
class PlaceIdentity:
    city: str = UNKNOWN_PLACE
    region: str = ""

    @property
    def is_known(self) -> bool:
        return self.city != UNKNOWN_PLACE

    def to_dict(self) -> Dict[str, Any]:
        return {"city": self.city, "region": self.region}


@dataclass(frozen=True)
class HistoricalEvent:
    title: str
    snippet: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "snippet": self.snippet}


@dataclass
class LocationContext:
    """
    Everything derived for the single active location.

    Derived fields are assigned once by the acquisition pipeline. The only
    field that changes afterwards is ``risk`` (replaced on every scoring run)
    and the best-effort ``historical_events`` slot, which is filled whenever
    the historical lookup finishes, possibly after the context was committed.
    """

    latitude: float
    longitude: float
    samples: LocationSampleSet
    place: PlaceIdentity
    hydrology: HydrologyFlag
    terrain: TerrainAssessment
    soil: SoilState
    situation: SituationRecord
    narrative: NarrativeBundle
    weather: Dict[str, Any] = field(default_factory=dict)
    risk: Optional[RiskAssessment] = None
    historical_events: List[HistoricalEvent] = field(default_factory=list)

    @property
    def elevation(self) -> float:
        return self.samples.center.elevation

    @property
    def rainfall_rate(self) -> float:
        return self.samples.center.precipitation_rate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "location_name": self.place.city,
            "place": self.place.to_dict(),
            "samples": self.samples.to_dict(),
            "hydrology": self.hydrology.value,
            "terrain": self.terrain.to_dict(),
            "soil": self.soil.to_dict(),
            "situation": self.situation.to_dict(),
            "intel_brief": list(self.narrative.brief_lines),
            "news": [n.to_dict() for n in self.narrative.news_items],
            "weather": dict(self.weather),
            "risk": self.risk.to_dict() if self.risk else None,
            "historical_events": [e.to_dict() for e in list(self.historical_events)],
        }
