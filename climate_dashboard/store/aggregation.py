"""In-memory marker store for the temperature map session.

Entries are kept in insertion order and are only ever appended or replaced.
All mutation happens on the event loop thread with no awaits between the
proximity scan and the write, so no locking is needed.
"""

import asyncio
from collections.abc import Iterable, Iterator

import httpx

from climate_dashboard.geocoding.cities import MAJOR_CITIES
from climate_dashboard.logging_config import logger
from climate_dashboard.models.location import Coordinate
from climate_dashboard.models.weather import WeatherSnapshot
from climate_dashboard.upstream import new_client
from climate_dashboard.weather_service.weather import annotate

PROXIMITY_DEGREES = 0.01


def is_near(a: WeatherSnapshot, b: WeatherSnapshot) -> bool:
    """True when both axes differ by less than the proximity tolerance."""
    return (
        abs(a.location.latitude - b.location.latitude) < PROXIMITY_DEGREES
        and abs(a.location.longitude - b.location.longitude) < PROXIMITY_DEGREES
    )


class AggregationStore:
    """Ordered weather snapshots plus the currently selected one."""

    def __init__(self):
        self._snapshots: list[WeatherSnapshot] = []
        self._latest_ticket = 0
        self.selected: WeatherSnapshot | None = None

    def __iter__(self) -> Iterator[WeatherSnapshot]:
        return iter(list(self._snapshots))

    def __len__(self) -> int:
        return len(self._snapshots)

    def snapshots(self) -> list[WeatherSnapshot]:
        return list(self._snapshots)

    def seed_initial(self, snapshots: Iterable[WeatherSnapshot | None]):
        """Replace the contents with the non-null startup snapshots."""
        self._snapshots = [snapshot for snapshot in snapshots if snapshot is not None]
        logger.info("STORE_SEEDED", markers=len(self._snapshots))

    def upsert_by_proximity(self, snapshot: WeatherSnapshot) -> int:
        """Replace a nearby entry in place, or append.

        Args:
            snapshot: Snapshot to store.

        Returns:
            The position the snapshot now occupies.
        """
        for index, existing in enumerate(self._snapshots):
            if is_near(existing, snapshot):
                self._snapshots[index] = snapshot
                logger.info(
                    "STORE_REPLACED", index=index, name=snapshot.location.name
                )
                return index
        return self.append(snapshot)

    def append(self, snapshot: WeatherSnapshot) -> int:
        """Add a snapshot unconditionally and return its position."""
        self._snapshots.append(snapshot)
        logger.info("STORE_APPENDED", name=snapshot.location.name)
        return len(self._snapshots) - 1

    def next_ticket(self) -> int:
        """Stamp a new interactive request; newer tickets supersede older ones."""
        self._latest_ticket += 1
        return self._latest_ticket

    def select(self, snapshot: WeatherSnapshot, ticket: int) -> bool:
        """Make a snapshot the selected one unless a newer request was issued.

        Returns:
            Whether the selection was applied.
        """
        if ticket != self._latest_ticket:
            logger.info(
                "STALE_SELECTION_DISCARDED", ticket=ticket, latest=self._latest_ticket
            )
            return False
        self.selected = snapshot
        return True


async def seed_major_cities(
    store: AggregationStore, client: httpx.AsyncClient | None = None
) -> list[WeatherSnapshot]:
    """Annotate every major city concurrently and seed the store with them."""

    async def run(active: httpx.AsyncClient) -> list[WeatherSnapshot]:
        return await asyncio.gather(
            *(
                annotate(
                    Coordinate(latitude=city.latitude, longitude=city.longitude),
                    city.name,
                    client=active,
                )
                for city in MAJOR_CITIES
            )
        )

    if client is None:
        async with new_client() as owned:
            snapshots = await run(owned)
    else:
        snapshots = await run(client)
    store.seed_initial(snapshots)
    return store.snapshots()
