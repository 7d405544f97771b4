"""Coordinate and geocoding result models."""

from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    """A point on the map, in decimal degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LocationMatch(BaseModel):
    """A single candidate returned by the geocoding resolver."""

    id: str
    name: str
    country: str = ""
    state: str | None = None
    latitude: float
    longitude: float
    display_name: str

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class MapClick(BaseModel):
    """Raw coordinates of a click on the map widget."""

    latitude: float
    longitude: float


class GeocodeResponse(BaseModel):
    """Search results, with an informational message when nothing matched."""

    query: str
    matches: list[LocationMatch]
    message: str | None = None
