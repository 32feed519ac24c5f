"""City schemas plus the GeoDB Cities payload shapes they are parsed from."""
from pydantic import BaseModel, Field
from typing import List, Optional, Union


class City(BaseModel):
    id: str
    name: str
    region: str = ""
    country: str
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        """Canonical "{name}, {country}" text shown after selection."""
        return f"{self.name}, {self.country}"


class GeoDBCityPayload(BaseModel):
    id: Union[int, str]
    name: str
    region: Optional[str] = None
    country: str
    latitude: float
    longitude: float

    def to_city(self) -> City:
        return City(
            id=str(self.id),
            name=self.name,
            region=self.region or "",
            country=self.country,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class GeoDBCityListResponse(BaseModel):
    data: List[GeoDBCityPayload] = Field(default_factory=list)


class GeoDBCityResponse(BaseModel):
    data: GeoDBCityPayload
