"""Weather schemas plus the OpenWeatherMap payload shapes they are parsed from."""
from pydantic import BaseModel, Field
from typing import List


class CurrentWeather(BaseModel):
    temperature: int
    feels_like: int
    humidity: int
    description: str
    icon: str
    wind_speed: float
    sunrise: int  # epoch seconds
    sunset: int


class ForecastDay(BaseModel):
    date: str  # YYYY-MM-DD
    temperature: int
    description: str
    icon: str


class OWMCondition(BaseModel):
    description: str
    icon: str


class OWMMain(BaseModel):
    temp: float
    feels_like: float = 0.0
    humidity: int = 0


class OWMWind(BaseModel):
    speed: float


class OWMSys(BaseModel):
    sunrise: int
    sunset: int


class OWMCurrentResponse(BaseModel):
    main: OWMMain
    weather: List[OWMCondition] = Field(..., min_length=1)
    wind: OWMWind
    sys: OWMSys


class OWMForecastEntry(BaseModel):
    dt_txt: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")
    main: OWMMain
    weather: List[OWMCondition] = Field(..., min_length=1)

    @property
    def date(self) -> str:
        return self.dt_txt.split(" ")[0]

    @property
    def hour(self) -> int:
        return int(self.dt_txt.split(" ")[1].split(":")[0])


class OWMForecastResponse(BaseModel):
    list: List[OWMForecastEntry] = Field(default_factory=list)
