from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class _WireModel(BaseModel):
    # snake_case in Python, camelCase on the wire; both accepted on input.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ------- Request models -------
class TripPrefs(_WireModel):
    stopovers: int = Field(
        1,
        ge=0,
        le=3,
        validation_alias=AliasChoices("stopovers", "maxStopovers", "max_stopovers"),
    )
    allow_hostels: bool = Field(True, alias="allowHostels")


class TripRequest(_WireModel):
    origin: str
    destinations: List[str] = Field(default_factory=list)
    earliest_departure: str = Field("", alias="earliestDeparture")
    latest_return: str = Field("", alias="latestReturn")
    days: int = 0
    budget: float = 0.0
    prefs: TripPrefs = TripPrefs()


class EstimateRequest(TripRequest):
    """TripRequest as accepted over HTTP: the inputs must be plannable."""

    destinations: List[str] = Field(..., min_length=1)
    days: int = Field(..., ge=1, le=365)
    budget: float = Field(..., gt=0)

    @field_validator("origin")
    @classmethod
    def _origin_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("origin must not be blank")
        return value

    @field_validator("destinations")
    @classmethod
    def _unique_destinations(cls, value: List[str]) -> List[str]:
        seen: List[str] = []
        for city in value:
            city = city.strip()
            if city and city not in seen:
                seen.append(city)
        if not seen:
            raise ValueError("at least one destination is required")
        return seen


# ------- Plan models -------
class DateSelection(_WireModel):
    depart: str
    return_date: str = Field(..., alias="return")


class CityCostInfo(BaseModel):
    city: str
    nightly_rate: int


class FlightLeg(_WireModel):
    frm: str = Field(..., alias="from")
    to: str
    price: int
    date: str


class StayHotel(_WireModel):
    name: str
    price_per_night: int = Field(..., alias="pricePerNight")


class Stay(_WireModel):
    city: str
    nights: int
    price_per_night: int = Field(..., alias="pricePerNight")
    total: int
    hotels: List[StayHotel] = Field(default_factory=list)


class CostSummary(_WireModel):
    flights: int = 0
    accommodation: int = 0
    food: int = 0
    activities: int = 0

    @property
    def total(self) -> int:
        return self.flights + self.accommodation + self.food + self.activities


class IdeaItem(_WireModel):
    when: str
    title: str
    price: Optional[int] = None


class CityIdeas(_WireModel):
    city: str
    tags: List[str] = Field(default_factory=list)
    items: List[IdeaItem] = Field(default_factory=list)


class Plan(_WireModel):
    legs: List[FlightLeg]
    stays: List[Stay]
    summary: CostSummary
    earliest_departure: str = Field(..., alias="earliestDeparture")
    latest_return: str = Field(..., alias="latestReturn")
    days: int
    total: int
    under_budget: bool = Field(..., alias="underBudget")
    savings: float
    ideas: List[CityIdeas] = Field(default_factory=list)
    chosen: DateSelection
    prefs: TripPrefs
    route: List[str] = Field(default_factory=list)


# ------- Itinerary narrative models -------
class ItineraryFood(BaseModel):
    breakfast: str
    lunch: str
    dinner: str


class ItineraryDay(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: str
    city: str
    area: str = ""
    morning: str
    afternoon: str
    evening: str
    transit: str = ""
    food: Optional[ItineraryFood] = None


class Itinerary(BaseModel):
    days: List[ItineraryDay] = Field(default_factory=list)


class StayOutline(_WireModel):
    city: str
    nights: int


class PlanOutline(_WireModel):
    """The parts of a Plan the narrative service needs; a full Plan also fits."""

    route: List[str] = Field(default_factory=list)
    stays: List[StayOutline] = Field(default_factory=list)
    chosen: DateSelection = DateSelection(depart="", return_date="")


class ItineraryRequest(BaseModel):
    plan: PlanOutline


class DestinationSuggestions(BaseModel):
    query: str
    suggestions: List[str] = Field(default_factory=list)
