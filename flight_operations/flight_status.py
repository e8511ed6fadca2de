"""Operational status tracking for a flight."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional


class OperationalStatus(enum.Enum):
    ON_TIME = "on_time"
    DELAYED = "delayed"
    BOARDING = "boarding"
    DEPARTED = "departed"
    ARRIVED = "arrived"
    CANCELLED = "cancelled"
    DIVERTED = "diverted"


@dataclass(frozen=True)
class StatusUpdate:
    status: OperationalStatus
    reason: str
    timestamp: datetime
    gate: str


class FlightStatus:
    """Tracks delays, gate, cancellation and diversion of one flight.

    Every status change is appended to :attr:`history`; entries are never
    rewritten. Estimated times always equal the scheduled times plus the
    current delay.
    """

    def __init__(
        self,
        scheduled_departure: Optional[datetime] = None,
        scheduled_arrival: Optional[datetime] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._clock = clock
        self._history: List[StatusUpdate] = []
        self.current_status = OperationalStatus.ON_TIME
        self.gate = ""
        self.delay_minutes = 0
        self.diverted_to = ""
        self.scheduled_departure = scheduled_departure
        self.scheduled_arrival = scheduled_arrival
        self.estimated_departure: Optional[datetime] = None
        self.estimated_arrival: Optional[datetime] = None
        self._update_estimated_times()
        self._append(OperationalStatus.ON_TIME, "Flight created, on time.")

    @property
    def history(self) -> List[StatusUpdate]:
        return list(self._history)

    def _append(self, status: OperationalStatus, reason: str) -> None:
        self._history.append(StatusUpdate(status, reason, self._clock(), self.gate))
        self.current_status = status

    def _update_estimated_times(self) -> None:
        offset = timedelta(minutes=self.delay_minutes)
        if self.scheduled_departure is not None:
            self.estimated_departure = self.scheduled_departure + offset
        if self.scheduled_arrival is not None:
            self.estimated_arrival = self.scheduled_arrival + offset

    def update_status(self, status: OperationalStatus, reason: str = "") -> None:
        self._append(status, reason)
        self._update_estimated_times()

    def set_delay(self, minutes: int, reason: str = "") -> None:
        """Set the delay; zero or a negative value clears it."""

        self.delay_minutes = max(minutes, 0)
        if self.delay_minutes > 0:
            self._append(OperationalStatus.DELAYED, reason)
        elif self.current_status is OperationalStatus.DELAYED:
            self._append(OperationalStatus.ON_TIME, reason or "Delay cleared.")
        else:
            self._append(self.current_status, reason or "Delay cleared.")
        self._update_estimated_times()

    def set_gate(self, gate: str) -> None:
        self.gate = gate

    def cancel(self, reason: str = "") -> None:
        self._append(OperationalStatus.CANCELLED, reason)

    def divert(self, destination: str, reason: str = "") -> None:
        self.diverted_to = destination
        self._append(OperationalStatus.DIVERTED, reason)

    def set_scheduled_departure(self, departure: Optional[datetime]) -> None:
        self.scheduled_departure = departure
        self._update_estimated_times()

    def set_scheduled_arrival(self, arrival: Optional[datetime]) -> None:
        self.scheduled_arrival = arrival
        self._update_estimated_times()
