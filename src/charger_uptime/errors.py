"""Errors raised while computing station uptime."""

from __future__ import annotations


class UptimeError(Exception):
    """Base exception for every failure that aborts an uptime run."""


class InvalidRange(UptimeError):
    """A report ends before it starts."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Report range ends before it starts: [{start}, {end}]")


class NoData(UptimeError):
    """Uptime was requested for a station that never received a report."""


class DegenerateSpan(UptimeError):
    """Every report for a station covers the same single instant."""


class UnknownStation(UptimeError):
    """A station id was referenced before being declared."""

    def __init__(self, station_id: int) -> None:
        self.station_id = station_id
        super().__init__(f"Unknown station {station_id}")


class DuplicateStation(UptimeError):
    """A station id was declared more than once."""

    def __init__(self, station_id: int) -> None:
        self.station_id = station_id
        super().__init__(f"Station {station_id} declared twice")


class UnknownCharger(UptimeError):
    """An availability report names a charger no station declared."""

    def __init__(self, charger_id: int) -> None:
        self.charger_id = charger_id
        super().__init__(f"Unknown charger {charger_id}")


class DuplicateCharger(UptimeError):
    """A charger id was declared more than once."""

    def __init__(self, charger_id: int) -> None:
        self.charger_id = charger_id
        super().__init__(f"Charger {charger_id} declared twice")


class ReportParseError(UptimeError):
    """The report text is malformed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ReportUnavailable(UptimeError):
    """The report file or URL could not be read."""
