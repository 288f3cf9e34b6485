import pytest

from charger_uptime.errors import (
    DuplicateCharger,
    DuplicateStation,
    NoData,
    UnknownCharger,
    UnknownStation,
)
from charger_uptime.stations import StationRegistry


def test_render_orders_by_station_id():
    registry = StationRegistry()
    registry.register_station(7)
    registry.register_station(2)
    registry.route_report(7, 0, 100, True)
    registry.route_report(2, 0, 100, True)
    registry.route_report(2, 100, 200, False)
    assert registry.render() == [(2, 50), (7, 100)]


def test_station_uptime_folds_chargers():
    registry = StationRegistry()
    registry.register_station(1, [1, 2])
    registry.register_station(2, [3, 4])
    registry.route_charger_report(1, 25000, 50000, True)
    registry.route_charger_report(2, 27000, 90900, True)
    registry.route_charger_report(3, 25000, 50000, False)
    registry.route_charger_report(4, 27000, 90900, False)
    assert registry.render() == [(1, 100), (2, 0)]
    assert registry.store(1).as_tuples() == [(25000, 90900)]


def test_duplicate_station_rejected():
    registry = StationRegistry()
    registry.register_station(1)
    with pytest.raises(DuplicateStation) as excinfo:
        registry.register_station(1)
    assert excinfo.value.station_id == 1


def test_duplicate_charger_rejected_across_stations():
    registry = StationRegistry()
    registry.register_station(1, [10])
    with pytest.raises(DuplicateCharger):
        registry.register_station(2, [10])


def test_charger_for_unknown_station_rejected():
    with pytest.raises(UnknownStation):
        StationRegistry().register_charger(5, 10)


def test_unknown_station_report_rejected():
    registry = StationRegistry()
    registry.register_station(1)
    with pytest.raises(UnknownStation) as excinfo:
        registry.route_report(2, 0, 10, True)
    assert excinfo.value.station_id == 2


def test_unknown_charger_report_rejected():
    registry = StationRegistry()
    registry.register_station(1, [10])
    with pytest.raises(UnknownCharger) as excinfo:
        registry.route_charger_report(11, 0, 10, True)
    assert excinfo.value.charger_id == 11


def test_render_fails_fast_on_station_without_reports():
    registry = StationRegistry()
    registry.register_station(1)
    registry.register_station(2)
    registry.route_report(1, 0, 10, True)
    with pytest.raises(NoData):
        registry.render()


def test_inspection_helpers():
    registry = StationRegistry()
    registry.register_station(3, [30])
    registry.register_station(1)
    assert len(registry) == 2
    assert 3 in registry
    assert 4 not in registry
    assert registry.station_ids == [1, 3]
    assert registry.station_for_charger(30) == 3
