from typing import Iterable, List, Tuple
import logging

from .data import Record, StationDeclaration, iter_records
from .stations import StationRegistry

logger = logging.getLogger(__name__)


def build_registry(records: Iterable[Record]) -> StationRegistry:
    """Register declared stations and route every report in input order."""
    registry = StationRegistry()
    reports = 0
    for record in records:
        if isinstance(record, StationDeclaration):
            registry.register_station(record.station_id, record.charger_ids)
        else:
            registry.route_charger_report(
                record.charger_id, record.start, record.end, record.up
            )
            reports += 1
    logger.debug("Routed %d reports to %d stations", reports, len(registry))
    return registry


def analyze(text: str) -> List[Tuple[int, int]]:
    """Return ``(station_id, percent_uptime)`` rows for a report text."""
    return build_registry(iter_records(text)).render()
