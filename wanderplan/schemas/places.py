"""Places and geocoding schemas plus the Foursquare / Mapbox payload shapes."""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class PlaceSearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius: Optional[int] = Field(None, ge=1, le=100000)

    @model_validator(mode="after")
    def check_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class Place(BaseModel):
    id: str
    name: str
    formatted_address: str = ""
    category: str = ""
    latitude: float
    longitude: float


class GeocodeResult(BaseModel):
    place_name: str
    latitude: float
    longitude: float


class MapConfig(BaseModel):
    access_token: str
    style_url: str


class FSQCategory(BaseModel):
    name: str


class FSQLocation(BaseModel):
    formatted_address: Optional[str] = None


class FSQPoint(BaseModel):
    latitude: float
    longitude: float


class FSQGeocodes(BaseModel):
    main: FSQPoint


class FSQPlace(BaseModel):
    fsq_id: str
    name: str
    location: FSQLocation = Field(default_factory=FSQLocation)
    categories: List[FSQCategory] = Field(default_factory=list)
    geocodes: FSQGeocodes

    def to_place(self) -> Place:
        return Place(
            id=self.fsq_id,
            name=self.name,
            formatted_address=self.location.formatted_address or "",
            category=self.categories[0].name if self.categories else "",
            latitude=self.geocodes.main.latitude,
            longitude=self.geocodes.main.longitude,
        )


class FSQSearchResponse(BaseModel):
    results: List[FSQPlace] = Field(default_factory=list)


class MapboxFeature(BaseModel):
    place_name: str
    center: List[float] = Field(..., min_length=2, max_length=2)  # [lng, lat]


class MapboxGeocodeResponse(BaseModel):
    features: List[MapboxFeature] = Field(default_factory=list)
