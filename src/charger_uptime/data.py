import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple, Union

import requests

from .errors import ReportParseError, ReportUnavailable

logger = logging.getLogger(__name__)

STATION_HEADER = "[Stations]"
AVAILABILITY_REPORT_HEADER = "[Charger Availability Reports]"

_URL_PREFIXES = ("http://", "https://")
_UP_VALUES = {"true": True, "false": False}


@dataclass(frozen=True)
class StationDeclaration:
    station_id: int
    charger_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AvailabilityReport:
    charger_id: int
    start: int
    end: int
    up: bool


@dataclass
class ParsedReport:
    stations: List[StationDeclaration] = field(default_factory=list)
    reports: List[AvailabilityReport] = field(default_factory=list)


Record = Union[StationDeclaration, AvailabilityReport]


def fetch_report(source: Union[str, Path]) -> str:
    """Read report text from a local file or an http(s) URL."""
    if isinstance(source, str) and source.startswith(_URL_PREFIXES):
        logger.debug("Fetching report from %s", source)
        try:
            resp = requests.get(source, timeout=30)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ReportUnavailable(f"Could not fetch {source}: {exc}") from exc
        logger.debug("Fetched %d bytes from remote", len(resp.content))
        return resp.text
    path = Path(source)
    logger.debug("Loading report from %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportUnavailable(f"Could not read {path}: {exc}") from exc


def _parse_int(token: str, what: str, lineno: int) -> int:
    # int() would also accept signs, underscores and surrounding spaces
    if not token.isascii() or not token.isdigit():
        raise ReportParseError(f"invalid {what} {token!r}", line=lineno)
    return int(token)


def _parse_station(line: str, lineno: int) -> StationDeclaration:
    tokens = line.split()
    ids = [_parse_int(t, "id", lineno) for t in tokens]
    return StationDeclaration(ids[0], tuple(ids[1:]))


def _parse_availability(line: str, lineno: int) -> AvailabilityReport:
    tokens = line.split()
    if len(tokens) != 4:
        raise ReportParseError(
            f"expected 4 fields, got {len(tokens)}", line=lineno
        )
    charger_id = _parse_int(tokens[0], "charger id", lineno)
    start = _parse_int(tokens[1], "start time", lineno)
    end = _parse_int(tokens[2], "end time", lineno)
    try:
        up = _UP_VALUES[tokens[3]]
    except KeyError:
        raise ReportParseError(
            f"invalid availability flag {tokens[3]!r}", line=lineno
        ) from None
    return AvailabilityReport(charger_id, start, end, up)


def _skip_to_header(lines: Iterator[Tuple[int, str]], header: str) -> None:
    for _, line in lines:
        if line.strip() == header:
            return
    raise ReportParseError(f"missing {header} section")


def iter_records(text: str) -> Iterator[Record]:
    """Yield station declarations, then availability reports, from ``text``.

    Each section runs until the first blank line or the end of the text, and
    the station section also stops at the reports header. Anything before a
    section header is ignored.
    """
    lines = enumerate(text.splitlines(), start=1)

    _skip_to_header(lines, STATION_HEADER)
    at_reports = False
    for lineno, line in lines:
        stripped = line.strip()
        if stripped == AVAILABILITY_REPORT_HEADER:
            at_reports = True
            break
        if not stripped:
            break
        yield _parse_station(line, lineno)

    if not at_reports:
        _skip_to_header(lines, AVAILABILITY_REPORT_HEADER)
    for lineno, line in lines:
        if not line.strip():
            break
        yield _parse_availability(line, lineno)


def parse_report(text: str) -> ParsedReport:
    """Parse the whole report eagerly."""
    result = ParsedReport()
    for record in iter_records(text):
        if isinstance(record, StationDeclaration):
            result.stations.append(record)
        else:
            result.reports.append(record)
    logger.debug(
        "Parsed %d stations and %d availability reports",
        len(result.stations),
        len(result.reports),
    )
    return result
