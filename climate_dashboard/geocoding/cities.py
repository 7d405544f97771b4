"""Curated city table used for fast lookups, suggestions and seeding."""

from pydantic import BaseModel

from climate_dashboard.models.location import LocationMatch


class CuratedCity(BaseModel):
    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def key(self) -> str:
        return self.name.lower()

    def to_match(self) -> LocationMatch:
        return LocationMatch(
            id=f"curated:{self.key.replace(' ', '-')}",
            name=self.name,
            country=self.country,
            latitude=self.latitude,
            longitude=self.longitude,
            display_name=f"{self.name}, {self.country}",
        )


def _city(name: str, country: str, latitude: float, longitude: float) -> CuratedCity:
    return CuratedCity(name=name, country=country, latitude=latitude, longitude=longitude)


CURATED_CITIES = [
    _city("New York", "United States", 40.7128, -74.0060),
    _city("London", "United Kingdom", 51.5074, -0.1278),
    _city("Tokyo", "Japan", 35.6762, 139.6503),
    _city("Paris", "France", 48.8566, 2.3522),
    _city("Sydney", "Australia", -33.8688, 151.2093),
    _city("Delhi", "India", 28.7041, 77.1025),
    _city("Mumbai", "India", 19.0760, 72.8777),
    _city("Pune", "India", 18.5204, 73.8567),
    _city("Bangalore", "India", 12.9716, 77.5946),
    _city("Chennai", "India", 13.0827, 80.2707),
    _city("Hyderabad", "India", 17.3850, 78.4867),
    _city("Kolkata", "India", 22.5726, 88.3639),
    _city("Ahmedabad", "India", 23.0225, 72.5714),
    _city("Beijing", "China", 39.9042, 116.4074),
    _city("Shanghai", "China", 31.2304, 121.4737),
    _city("Moscow", "Russia", 55.7558, 37.6173),
    _city("Berlin", "Germany", 52.5200, 13.4050),
    _city("Madrid", "Spain", 40.4168, -3.7038),
    _city("Rome", "Italy", 41.9028, 12.4964),
    _city("Cairo", "Egypt", 30.0444, 31.2357),
    _city("Rio de Janeiro", "Brazil", -22.9068, -43.1729),
    _city("Mexico City", "Mexico", 19.4326, -99.1332),
    _city("Los Angeles", "United States", 34.0522, -118.2437),
    _city("Chicago", "United States", 41.8781, -87.6298),
    _city("Toronto", "Canada", 43.6532, -79.3832),
]

# Seeded onto the temperature map at startup.
MAJOR_CITY_NAMES = ["New York", "London", "Tokyo", "Sydney", "Cairo", "Rio de Janeiro"]
MAJOR_CITIES = [city for city in CURATED_CITIES if city.name in MAJOR_CITY_NAMES]

MIN_SUGGESTION_CHARS = 2
MAX_SUGGESTIONS = 5


def find_curated(query: str) -> CuratedCity | None:
    """Return the first curated city whose name occurs in the query."""
    normalized = query.lower().strip()
    for city in CURATED_CITIES:
        if city.key in normalized:
            return city
    return None


def suggest(text: str) -> list[CuratedCity]:
    """Autocomplete against curated city names and countries."""
    if not text or len(text) < MIN_SUGGESTION_CHARS:
        return []
    normalized = text.lower().strip()
    matches = [
        city
        for city in CURATED_CITIES
        if normalized in city.key or normalized in city.country.lower()
    ]
    return matches[:MAX_SUGGESTIONS]
