"""Tickets: fare contracts between a passenger and a flight."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict


class TicketStatus(enum.Enum):
    RESERVED = "reserved"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    CHECKED_IN = "checked_in"


class TicketClass(enum.IntEnum):
    ECONOMY = 1
    BUSINESS = 2
    FIRST_CLASS = 3


FARE_TABLE: Dict[TicketClass, float] = {
    TicketClass.ECONOMY: 200.0,
    TicketClass.BUSINESS: 500.0,
    TicketClass.FIRST_CLASS: 1000.0,
}

_UPGRADABLE = (TicketStatus.RESERVED, TicketStatus.CONFIRMED)


@dataclass
class Ticket:
    """A ticket refers to its flight and passenger by key only."""

    ticket_number: str
    flight_number: str
    passenger_id: str
    ticket_class: TicketClass = TicketClass.ECONOMY
    status: TicketStatus = TicketStatus.RESERVED
    booked_at: datetime = field(default_factory=datetime.now)
    bags: int = 0
    fare: float = field(init=False)

    def __post_init__(self) -> None:
        self.fare = FARE_TABLE[self.ticket_class]

    @property
    def is_checked_in(self) -> bool:
        return self.status is TicketStatus.CHECKED_IN

    def confirm(self) -> bool:
        if self.status is not TicketStatus.RESERVED:
            return False
        self.status = TicketStatus.CONFIRMED
        return True

    def check_in(self) -> bool:
        if self.status is not TicketStatus.CONFIRMED:
            return False
        self.status = TicketStatus.CHECKED_IN
        return True

    def cancel(self) -> bool:
        if self.status is TicketStatus.CHECKED_IN:
            return False
        self.status = TicketStatus.CANCELLED
        return True

    def upgrade(self, new_class: TicketClass) -> bool:
        if self.status not in _UPGRADABLE or new_class <= self.ticket_class:
            return False
        self.ticket_class = new_class
        self.fare = FARE_TABLE[new_class]
        return True

    def add_bag(self) -> bool:
        if self.status is TicketStatus.CANCELLED:
            return False
        self.bags += 1
        return True
