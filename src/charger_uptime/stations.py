import logging
from typing import Dict, Iterable, List, Tuple

from .errors import (
    DuplicateCharger,
    DuplicateStation,
    UnknownCharger,
    UnknownStation,
    UptimeError,
)
from .intervals import IntervalStore

logger = logging.getLogger(__name__)


class StationRegistry:
    """Interval stores keyed by station id, plus the charger -> station map."""

    def __init__(self) -> None:
        self._stores: Dict[int, IntervalStore] = {}
        self._charger_station: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._stores

    @property
    def station_ids(self) -> List[int]:
        return sorted(self._stores)

    def store(self, station_id: int) -> IntervalStore:
        try:
            return self._stores[station_id]
        except KeyError:
            raise UnknownStation(station_id) from None

    def register_station(self, station_id: int, charger_ids: Iterable[int] = ()) -> IntervalStore:
        if station_id in self._stores:
            raise DuplicateStation(station_id)
        store = IntervalStore()
        self._stores[station_id] = store
        for charger_id in charger_ids:
            self.register_charger(station_id, charger_id)
        logger.debug("Registered station %s", station_id)
        return store

    def register_charger(self, station_id: int, charger_id: int) -> None:
        if station_id not in self._stores:
            raise UnknownStation(station_id)
        if charger_id in self._charger_station:
            raise DuplicateCharger(charger_id)
        self._charger_station[charger_id] = station_id

    def station_for_charger(self, charger_id: int) -> int:
        try:
            return self._charger_station[charger_id]
        except KeyError:
            raise UnknownCharger(charger_id) from None

    def route_report(self, station_id: int, start: int, end: int, up: bool) -> None:
        self.store(station_id).resolve(start, end, up)

    def route_charger_report(self, charger_id: int, start: int, end: int, up: bool) -> None:
        """Resolve a report against the station that owns ``charger_id``."""
        self.route_report(self.station_for_charger(charger_id), start, end, up)

    def render(self) -> List[Tuple[int, int]]:
        """Return ``(station_id, percent_uptime)`` pairs by ascending id.

        Any store that cannot produce a percentage aborts the whole render.
        """
        rows: List[Tuple[int, int]] = []
        for station_id in self.station_ids:
            try:
                percent = self._stores[station_id].percent_uptime()
            except UptimeError:
                logger.error("Cannot compute uptime for station %s", station_id)
                raise
            rows.append((station_id, percent))
        logger.debug("Rendered %d stations", len(rows))
        return rows
