from datetime import datetime, timedelta
from itertools import count

from flight_operations.flight_status import FlightStatus, OperationalStatus

DEPARTURE = datetime(2026, 11, 2, 9, 30)
ARRIVAL = datetime(2026, 11, 2, 15, 0)


def make_status():
    ticks = count()
    return FlightStatus(
        DEPARTURE,
        ARRIVAL,
        clock=lambda: DEPARTURE - timedelta(hours=3) + timedelta(minutes=next(ticks)),
    )


def test_new_tracker_starts_on_time_with_one_entry():
    status = make_status()

    assert status.current_status is OperationalStatus.ON_TIME
    assert len(status.history) == 1
    assert status.history[0].reason == "Flight created, on time."
    assert status.estimated_departure == DEPARTURE
    assert status.estimated_arrival == ARRIVAL


def test_delay_shifts_estimated_times_and_is_logged():
    status = make_status()
    status.set_gate("B12")

    status.set_delay(45, "Late inbound aircraft")

    assert status.current_status is OperationalStatus.DELAYED
    assert status.estimated_departure == DEPARTURE + timedelta(minutes=45)
    assert status.estimated_arrival == ARRIVAL + timedelta(minutes=45)
    last = status.history[-1]
    assert last.status is OperationalStatus.DELAYED
    assert last.gate == "B12"
    assert last.reason == "Late inbound aircraft"


def test_clearing_delay_reverts_only_from_delayed():
    status = make_status()
    status.set_delay(30)
    status.set_delay(0)
    assert status.current_status is OperationalStatus.ON_TIME
    assert status.estimated_departure == DEPARTURE

    status.update_status(OperationalStatus.BOARDING, "Boarding started")
    status.set_delay(-5)
    assert status.current_status is OperationalStatus.BOARDING
    assert status.delay_minutes == 0
    assert [entry.status for entry in status.history] == [
        OperationalStatus.ON_TIME,
        OperationalStatus.DELAYED,
        OperationalStatus.ON_TIME,
        OperationalStatus.BOARDING,
        OperationalStatus.BOARDING,
    ]


def test_history_is_append_only_and_captures_gate():
    status = make_status()
    status.set_gate("A1")
    status.update_status(OperationalStatus.BOARDING)
    status.set_gate("A7")
    status.divert("BOS", "Weather")
    status.cancel("Crew timeout")

    history = status.history
    assert [entry.gate for entry in history] == ["", "A1", "A7", "A7"]
    assert status.diverted_to == "BOS"
    assert status.current_status is OperationalStatus.CANCELLED
    timestamps = [entry.timestamp for entry in history]
    assert timestamps == sorted(timestamps)

    history.clear()
    assert len(status.history) == 4


def test_schedule_change_recomputes_estimates():
    status = make_status()
    status.set_delay(20)

    status.set_scheduled_departure(DEPARTURE + timedelta(hours=1))

    assert status.estimated_departure == DEPARTURE + timedelta(hours=1, minutes=20)
    assert len(status.history) == 2


def test_tracker_without_schedule_has_no_estimates():
    status = FlightStatus()
    status.set_delay(10)
    assert status.estimated_departure is None
    status.set_scheduled_arrival(ARRIVAL)
    assert status.estimated_arrival == ARRIVAL + timedelta(minutes=10)
