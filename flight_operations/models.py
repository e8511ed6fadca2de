"""In-memory models for flights, seats and passengers."""
from __future__ import annotations

import enum
import logging
import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional

from .seating import (
    DEFAULT_AIRCRAFT,
    AircraftTemplate,
    SeatClass,
    build_seat_inventory,
    seat_letters_for_row,
)

logger = logging.getLogger(__name__)


class SeatedPassengerCopyError(TypeError):
    """Raised when a passenger holding a seat is copied directly."""


class SeatStatus(enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    BLOCKED = "blocked"


@dataclass
class Seat:
    number: str
    row: int
    col: int
    seat_class: SeatClass
    price: float
    status: SeatStatus = SeatStatus.AVAILABLE
    passenger_id: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status is SeatStatus.AVAILABLE

    @property
    def is_occupied(self) -> bool:
        return self.status is SeatStatus.OCCUPIED

    @property
    def is_reserved(self) -> bool:
        return self.status is SeatStatus.RESERVED

    @property
    def is_blocked(self) -> bool:
        return self.status is SeatStatus.BLOCKED

    def assign(self, passenger_id: Optional[str]) -> bool:
        if not passenger_id or not self.is_available:
            return False
        self.passenger_id = passenger_id
        self.status = SeatStatus.OCCUPIED
        return True

    def clear(self) -> Optional[str]:
        """Free the seat and return the id of the passenger that held it."""

        released = self.passenger_id
        self.passenger_id = None
        self.status = SeatStatus.AVAILABLE
        return released

    def reserve(self) -> bool:
        if not self.is_available:
            return False
        self.status = SeatStatus.RESERVED
        return True

    def unreserve(self) -> bool:
        if not self.is_reserved:
            return False
        self.status = SeatStatus.AVAILABLE
        return True

    def block(self) -> bool:
        if not (self.is_available or self.is_reserved):
            return False
        self.status = SeatStatus.BLOCKED
        return True

    def unblock(self) -> bool:
        if not self.is_blocked:
            return False
        self.status = SeatStatus.AVAILABLE
        return True


def _new_passenger_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class Passenger:
    first_name: str
    last_name: str
    phone: str
    email: str = ""
    seat_number: str = ""
    passenger_id: str = field(default_factory=_new_passenger_id)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_seat(self) -> bool:
        return bool(self.seat_number)

    def detached_copy(self) -> "Passenger":
        """Return an unseated copy of this passenger under a fresh id."""

        return replace(self, seat_number="", passenger_id=_new_passenger_id())

    def __copy__(self) -> "Passenger":
        if self.has_seat:
            raise SeatedPassengerCopyError(
                f"Passenger {self.passenger_id} holds seat {self.seat_number}; use detached_copy()"
            )
        return replace(self)

    def __deepcopy__(self, memo: dict) -> "Passenger":
        return self.__copy__()


class Flight:
    """A scheduled flight that owns its seat map and passenger roster."""

    def __init__(
        self,
        flight_number: str,
        origin: str,
        destination: str,
        departure_time: datetime,
        base_price: float = 500.0,
        *,
        template: AircraftTemplate = DEFAULT_AIRCRAFT,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.flight_number = flight_number
        self.origin = origin
        self.destination = destination
        self.departure_time = departure_time
        self.base_price = base_price
        self.template = template
        self._seats: Dict[str, Seat] = {
            number: Seat(entry.number, entry.row, entry.col, entry.seat_class, entry.price)
            for number, entry in build_seat_inventory(base_price, template, rng=rng).items()
        }
        self._passengers: Dict[str, Passenger] = {}

    def __repr__(self) -> str:
        return (
            f"Flight({self.flight_number!r}, {self.origin!r}->{self.destination!r}, "
            f"{self.departure_time:%Y-%m-%d %H:%M})"
        )

    @property
    def rows(self) -> int:
        return self.template.rows

    @property
    def cols(self) -> int:
        return self.template.cols

    # -- seat lookups -----------------------------------------------------

    @property
    def seats(self) -> Dict[str, Seat]:
        return dict(self._seats)

    def get_seat(self, seat_number: str) -> Optional[Seat]:
        return self._seats.get(seat_number)

    def is_seat_valid(self, seat_number: str) -> bool:
        return seat_number in self._seats

    def is_seat_available(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.is_available

    def is_seat_occupied(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.is_occupied

    def get_available_seats(self) -> List[str]:
        return [number for number, seat in self._seats.items() if seat.is_available]

    def occupied_seat_count(self) -> int:
        return sum(1 for seat in self._seats.values() if seat.is_occupied)

    # -- roster -------------------------------------------------------------

    @property
    def passengers(self) -> List[Passenger]:
        return list(self._passengers.values())

    def get_passenger(self, passenger_id: str) -> Optional[Passenger]:
        return self._passengers.get(passenger_id)

    def passenger_at(self, seat_number: str) -> Optional[Passenger]:
        seat = self._seats.get(seat_number)
        if seat is None or seat.passenger_id is None:
            return None
        return self._passengers.get(seat.passenger_id)

    def passenger_seats(self) -> Dict[str, str]:
        return {p.seat_number: p.full_name for p in self._passengers.values() if p.has_seat}

    # -- booking ------------------------------------------------------------

    def assign_seat(self, passenger: Optional[Passenger], seat_number: str) -> bool:
        """Seat a rostered, unseated passenger on an available seat."""

        if passenger is None or self._passengers.get(passenger.passenger_id) is not passenger:
            return False
        if passenger.has_seat:
            return False
        seat = self._seats.get(seat_number)
        if seat is None or not seat.assign(passenger.passenger_id):
            return False
        passenger.seat_number = seat_number
        logger.debug("Seat %s on %s assigned to %s", seat_number, self.flight_number, passenger.passenger_id)
        return True

    def unassign_seat(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        if seat is None:
            return False
        released = seat.clear()
        occupant = self._passengers.get(released) if released else None
        if occupant is not None and occupant.seat_number == seat_number:
            occupant.seat_number = ""
        return True

    def add_passenger(self, passenger: Optional[Passenger]) -> bool:
        """Put ``passenger`` on the roster, seating them if they carry a seat number."""

        if passenger is None or passenger.passenger_id in self._passengers:
            return False
        requested = passenger.seat_number
        if requested and not self.is_seat_available(requested):
            return False
        passenger.seat_number = ""
        self._passengers[passenger.passenger_id] = passenger
        if requested and not self.assign_seat(passenger, requested):
            del self._passengers[passenger.passenger_id]
            passenger.seat_number = requested
            return False
        return True

    def remove_passenger(self, seat_number: str) -> bool:
        """Free ``seat_number`` and drop its occupant from the roster."""

        if not seat_number:
            return False
        passenger = self.passenger_at(seat_number)
        if passenger is None or not self.unassign_seat(seat_number):
            return False
        del self._passengers[passenger.passenger_id]
        return True

    def discard_passenger(self, passenger_id: str) -> bool:
        passenger = self._passengers.get(passenger_id)
        if passenger is None:
            return False
        if passenger.has_seat:
            return self.remove_passenger(passenger.seat_number)
        del self._passengers[passenger_id]
        return True

    def reserve_seat(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.reserve()

    def cancel_reservation(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.unreserve()

    def block_seat(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.block()

    def unblock_seat(self, seat_number: str) -> bool:
        seat = self._seats.get(seat_number)
        return seat is not None and seat.unblock()

    # -- reporting ----------------------------------------------------------

    def calculate_revenue(self, flat_fare: Optional[float] = None) -> float:
        """Sum the price of every occupied seat.

        With ``flat_fare`` each occupied seat counts for that amount instead.
        """

        occupied = [seat for seat in self._seats.values() if seat.is_occupied]
        if flat_fare is not None:
            return flat_fare * len(occupied)
        return sum(seat.price for seat in occupied)

    def generate_seat_map(self) -> str:
        symbols = {
            SeatStatus.AVAILABLE: "[ ]",
            SeatStatus.OCCUPIED: "[X]",
            SeatStatus.RESERVED: "[R]",
            SeatStatus.BLOCKED: "[#]",
        }
        lines = ["   " + "".join(f"{col:>3}" for col in range(1, self.cols + 1))]
        for row in range(1, self.rows + 1):
            cells = []
            for letter in seat_letters_for_row(row, self.template):
                seat = self._seats.get(f"{row}{letter}")
                cells.append(symbols[seat.status] if seat else "   ")
            lines.append(f"{row:>2} " + "".join(cells))
        return "\n".join(lines)
